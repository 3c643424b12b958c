"""
Tests for the section renderers — one class per document.
"""

from framewright.core.models.project import ConventionDecision, Feature, ProjectState, Task
from framewright.core.services.generators.ai_configs import (
    render_claude_md,
    render_copilot_instructions,
    render_cursor_rules,
)
from framewright.core.services.generators.architecture import render_architecture
from framewright.core.services.generators.context_starters import (
    domain_doc,
    reading_list,
    render_context_starters,
)
from framewright.core.services.generators.conventions import (
    render_conventions,
    render_conventions_quickref,
)
from framewright.core.services.generators.features import render_feature, render_features_index
from framewright.core.services.generators.prime import render_prime, short_purpose
from framewright.core.services.generators.project import render_project
from framewright.core.services.generators.schema import render_schema
from framewright.core.services.generators.styling import render_styling
from framewright.core.services.generators.tasks import render_task, render_tasks_master


class TestPrime:
    """Tests for PRIME.md."""

    def test_orientation(self, rich_state: ProjectState):
        md = render_prime(rich_state)
        assert md.startswith("# PRIME — Clinic Portal\n")
        assert "**Purpose:** Patients book appointments online." in md
        assert "Staff manage" not in md
        assert "Next.js" in md
        assert "**Wizard step:** Project Identity" in md
        assert "1/3 tasks done" in md
        assert "task-000: Skeleton Deployment" in md

    def test_never_lists_features(self, rich_state: ProjectState):
        md = render_prime(rich_state)
        assert "Appointment Booking" not in md
        assert "Patient Profile" not in md

    def test_size_does_not_grow_with_entities(self, rich_state: ProjectState):
        before = len(render_prime(rich_state).splitlines())
        for i in range(20):
            rich_state.features.append(Feature(name=f"Feature {i}"))
        assert len(render_prime(rich_state).splitlines()) == before

    def test_empty(self, empty_state: ProjectState):
        md = render_prime(empty_state)
        assert "_No open tasks._" in md
        assert "_Not specified._" in md

    def test_short_purpose_truncates(self):
        text = "x" * 500
        result = short_purpose(text)
        assert len(result) == 200
        assert result.endswith("…")

    def test_short_purpose_first_sentence(self):
        assert short_purpose("One thing. Another thing.") == "One thing."


class TestProject:
    """Tests for PROJECT.md."""

    def test_sections(self, rich_state: ProjectState):
        md = render_project(rich_state)
        assert md.startswith("# Clinic Portal\n")
        for heading in ("## Purpose", "## Tech Stack", "## Architecture", "## Core Principles",
                        "## Target Users", "## Features", "## Document Map"):
            assert heading in md
        assert "| Framework | Next.js |" in md
        assert "**Layers:** Frontend, Backend / API" in md
        assert "[Appointment Booking](features/appointment-booking.md)" in md
        assert "(docs/SCHEMA.md)" in md

    def test_schema_left_out_of_map_when_skipped(self, acme_state: ProjectState):
        assert "SCHEMA.md" not in render_project(acme_state)

    def test_existing_project_tree(self, acme_state: ProjectState):
        acme_state.identity.project_mode = "existing"
        acme_state.identity.existing_folder_tree = "src/\n  app.py"
        md = render_project(acme_state)
        assert "## Existing Project Structure" in md
        assert "  app.py" in md

    def test_empty(self, empty_state: ProjectState):
        md = render_project(empty_state)
        assert md.startswith("# Untitled Project\n")
        assert "_No purpose defined._" in md
        assert "_No tech stack selected._" in md
        assert "_No features defined._" in md


class TestConventions:
    """Tests for CONVENTIONS.md and the quick reference."""

    def test_grouped_in_catalog_order(self, rich_state: ProjectState):
        md = render_conventions(rich_state)
        organization = md.index("## Code Organization")
        fetching = md.index("## Data Fetching")
        commits = md.index("## Version Control")
        assert organization < fetching < commits
        assert "Group components by feature" in md

    def test_custom_conventions_appended(self, rich_state: ProjectState):
        md = render_conventions(rich_state)
        assert "## Additional Conventions" in md
        assert "Never commit secrets" in md

    def test_unknown_ids_dropped(self, rich_state: ProjectState):
        rich_state.conventions.decisions.append(
            ConventionDecision(question_id="removed-question", selected_option_id="x")
        )
        rich_state.conventions.decisions.append(
            ConventionDecision(question_id="state-management", selected_option_id="gone")
        )
        md = render_conventions(rich_state)
        assert "removed-question" not in md
        assert "## State Management" not in md

    def test_custom_answer(self, empty_state: ProjectState):
        empty_state.conventions.decisions = [
            ConventionDecision(question_id="git-commits", custom_answer="Squash merge only")
        ]
        md = render_conventions(empty_state)
        assert "## Version Control" in md
        assert "Squash merge only" in md

    def test_quickref_rules(self, rich_state: ProjectState):
        md = render_conventions_quickref(rich_state)
        assert "- **Code Organization:** Component Organization: Group components by feature" in md
        assert "**Additional:**" in md
        assert "- Use pnpm" in md

    def test_quickref_custom_capped(self, empty_state: ProjectState):
        empty_state.conventions.custom_conventions = "\n".join(f"rule {i}" for i in range(9))
        md = render_conventions_quickref(empty_state)
        assert "- rule 4" in md
        assert "rule 5" not in md

    def test_empty(self, empty_state: ProjectState):
        assert "_No conventions configured._" in render_conventions(empty_state)
        assert "_No conventions configured._" in render_conventions_quickref(empty_state)


class TestArchitecture:
    """Tests for ARCHITECTURE.md."""

    def test_enabled_layers_only(self, rich_state: ProjectState):
        md = render_architecture(rich_state)
        assert "Web Application" in md
        assert "### Frontend" in md
        assert "**Technologies:** Next.js, Tailwind CSS" in md
        assert "Server Actions" in md
        assert "Real-time" not in md

    def test_no_enabled_layers(self, rich_state: ProjectState):
        for layer in rich_state.architecture.layers:
            layer.enabled = False
        assert "_No layers defined._" in render_architecture(rich_state)


class TestStyling:
    """Tests for STYLING.md."""

    def test_default_colors(self, empty_state: ProjectState):
        md = render_styling(empty_state)
        assert "| Primary | `#18181B` |" in md
        assert "_No fonts specified._" in md
        assert "_None selected._" in md

    def test_fonts_and_library(self, empty_state: ProjectState):
        empty_state.styling.fonts.heading = "Inter"
        empty_state.styling.component_library = "shadcn"
        md = render_styling(empty_state)
        assert "- **Headings:** Inter" in md
        assert "shadcn/ui" in md

    def test_no_colors(self, empty_state: ProjectState):
        empty_state.styling.colors = []
        assert "_No colors defined._" in render_styling(empty_state)


class TestSchema:
    """Tests for SCHEMA.md."""

    def test_plain_english_and_tables(self, rich_state: ProjectState):
        md = render_schema(rich_state)
        assert "Patients have many appointments." in md
        assert "### patients" in md
        assert "id, name, email" in md

    def test_paste_sql_fenced(self, empty_state: ProjectState):
        empty_state.database.approach = "paste-sql"
        empty_state.database.pasted_schema = "CREATE TABLE t (id int);"
        md = render_schema(empty_state)
        assert "```sql\nCREATE TABLE t (id int);\n```" in md

    def test_skip_placeholder(self, empty_state: ProjectState):
        md = render_schema(empty_state)
        assert md.startswith("# Database Schema")
        assert "skipped" in md

    def test_nothing_provided(self, empty_state: ProjectState):
        empty_state.database.approach = "plain-english"
        assert "_No schema details provided._" in render_schema(empty_state)


class TestFeatures:
    """Tests for the features index and feature files."""

    def test_index_row_with_task_count(self, acme_state: ProjectState):
        md = render_features_index(acme_state)
        assert "| [Login](login.md) | Users can log in | 1 |" in md

    def test_feature_file(self, rich_state: ProjectState):
        booking = rich_state.features[0]
        md = render_feature(booking, rich_state)
        assert md.startswith("# Feature: Appointment Booking\n")
        assert "- No double booking" in md
        assert "- Patient sees confirmation" in md
        assert "- appointments" in md
        assert "[task-001: Booking form](../tasks/task-001-booking-form.md)" in md
        assert "[Features Index](FEATURES-INDEX.md)" in md

    def test_feature_placeholders(self, empty_state: ProjectState):
        feature = Feature(name="Bare")
        empty_state.features.append(feature)
        md = render_feature(feature, empty_state)
        assert "_No acceptance criteria defined._" in md
        assert "_No business rules defined._" in md
        assert "_No related tables._" in md
        assert "_No tasks linked to this feature._" in md

    def test_empty_index(self, empty_state: ProjectState):
        assert "_No features defined._" in render_features_index(empty_state)


class TestTasks:
    """Tests for the tasks master and task files."""

    def test_master_rows(self, rich_state: ProjectState):
        md = render_tasks_master(rich_state)
        assert "| [task-000](task-000-skeleton-deployment.md) | Skeleton Deployment | — | Not started |" in md
        assert "| Booking form | Appointment Booking | In progress |" in md

    def test_dangling_feature_ids_dropped(self, rich_state: ProjectState):
        rich_state.tasks[1].feature_ids.append("deleted-feature")
        md = render_tasks_master(rich_state)
        assert "deleted-feature" not in md
        assert "| Booking form | Appointment Booking | In progress |" in md

    def test_task_file(self, rich_state: ProjectState):
        md = render_task(rich_state.tasks[1], rich_state)
        assert md.startswith("# task-001: Booking form\n")
        assert "**Status:** In progress" in md
        assert "[Appointment Booking](../features/appointment-booking.md)" in md
        assert "Form saves an appointment" in md
        assert "app/booking/**" in md
        assert "Payments" in md

    def test_task_placeholders(self, empty_state: ProjectState):
        task = Task(task_number=4)
        empty_state.tasks.append(task)
        md = render_task(task, empty_state)
        assert "# task-004: Unnamed Task" in md
        assert "_Not linked to any feature._" in md
        assert md.count("_Not specified._") == 3

    def test_empty_master(self, empty_state: ProjectState):
        assert "_No tasks defined._" in render_tasks_master(empty_state)


class TestContextStarters:
    """Tests for CONTEXT-WINDOW-STARTERS.md."""

    def test_reading_order(self, rich_state: ProjectState):
        booking_task = rich_state.tasks[1]
        assert reading_list(booking_task, rich_state) == [
            "PROJECT.md",
            "docs/CONVENTIONS.md",
            "docs/SCHEMA.md",
            "features/appointment-booking.md",
            "tasks/task-001-booking-form.md",
        ]

    def test_domain_doc_rules(self, rich_state: ProjectState):
        skeleton, booking_task, profile_task = rich_state.tasks
        assert domain_doc(skeleton, rich_state) == "docs/ARCHITECTURE.md"
        assert domain_doc(booking_task, rich_state) == "docs/SCHEMA.md"
        assert domain_doc(profile_task, rich_state) == "docs/ARCHITECTURE.md"
        rich_state.database.approach = "skip"
        assert domain_doc(booking_task, rich_state) == "docs/ARCHITECTURE.md"

    def test_sorted_by_task_number(self, rich_state: ProjectState):
        rich_state.tasks.reverse()
        md = render_context_starters(rich_state)
        assert md.index("## task-000") < md.index("## task-001") < md.index("## task-002")

    def test_empty(self, empty_state: ProjectState):
        assert "_No tasks defined._" in render_context_starters(empty_state)


class TestAIConfigs:
    """Tests for the AI tool configuration files."""

    def test_claude_md(self, rich_state: ProjectState):
        md = render_claude_md(rich_state)
        assert md.startswith("# Clinic Portal\n")
        assert "PRIME.md" in md
        assert "- **Code Organization:**" in md

    def test_cursor_rules_plain_text(self, rich_state: ProjectState):
        text = render_cursor_rules(rich_state)
        assert text.startswith("Project: Clinic Portal\n")
        assert "**" not in text
        assert "`" not in text.split("Rules:")[0]

    def test_copilot(self, rich_state: ProjectState):
        md = render_copilot_instructions(rich_state)
        assert md.startswith("# Copilot Instructions — Clinic Portal\n")
        assert "## Coding Rules" in md

    def test_markdown_configs_link_back_to_project(self, rich_state: ProjectState):
        claude = render_claude_md(rich_state).rstrip().splitlines()[-1]
        assert claude == "*See [PRIME](PRIME.md) | [PROJECT.md](PROJECT.md)*"
        copilot = render_copilot_instructions(rich_state).rstrip().splitlines()[-1]
        assert copilot == "*See [Tasks Master](../tasks/TASKS-MASTER.md) | [PROJECT.md](../PROJECT.md)*"

    def test_empty(self, empty_state: ProjectState):
        for render in (render_claude_md, render_cursor_rules, render_copilot_instructions):
            text = render(empty_state)
            assert "No conventions configured" in text
