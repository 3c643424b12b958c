"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from framewright.core.models.project import (
    ArchitectureLayer,
    ConventionDecision,
    DatabaseTable,
    Feature,
    ProjectState,
    Task,
)


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def tmp_state_dir(tmp_path: Path) -> Path:
    """Return a temporary directory for state files."""
    state_dir = tmp_path / "state"
    state_dir.mkdir()
    return state_dir


@pytest.fixture
def empty_state() -> ProjectState:
    """No features, no tasks, no conventions, database skipped."""
    return ProjectState()


@pytest.fixture
def acme_state() -> ProjectState:
    """One feature, one task linked to it, nothing else."""
    state = ProjectState()
    state.identity.name = "Acme"
    login = Feature(name="Login", description="Users can log in")
    state.features.append(login)
    state.tasks.append(
        Task(
            task_number=1,
            name="Build login",
            feature_ids=[login.id],
            definition_of_done="User can authenticate",
        )
    )
    return state


@pytest.fixture
def rich_state() -> ProjectState:
    """A Next.js project with conventions, a schema and several entities."""
    state = ProjectState()
    state.identity.name = "Clinic Portal"
    state.identity.purpose = (
        "Patients book appointments online. Staff manage schedules and records."
    )
    stack = state.identity.tech_stack
    stack.framework = "nextjs"
    stack.styling = "tailwind"
    stack.database = "supabase"
    stack.auth = "supabase-auth"

    state.architecture.app_type = "web-app"
    state.architecture.layers = [
        ArchitectureLayer(id="frontend", name="Frontend", technologies=["Next.js", "Tailwind CSS"]),
        ArchitectureLayer(id="backend", name="Backend / API", notes="Server Actions"),
        ArchitectureLayer(id="realtime", name="Real-time / WebSockets", enabled=False),
    ]

    state.conventions.decisions = [
        ConventionDecision(question_id="git-commits", selected_option_id="conventional-commits"),
        ConventionDecision(question_id="component-organization", selected_option_id="by-feature"),
        ConventionDecision(question_id="data-fetching", selected_option_id="server-components"),
    ]
    state.conventions.custom_conventions = "Never commit secrets\nUse pnpm"

    state.database.approach = "plain-english"
    state.database.plain_english_description = "Patients have many appointments."
    state.database.tables = [
        DatabaseTable(name="patients", description="People who book", columns="id, name, email"),
        DatabaseTable(name="appointments", columns="id, patient_id, starts_at"),
    ]

    booking = Feature(
        name="Appointment Booking",
        description="Patients pick a free slot",
        business_rules=["No double booking"],
        acceptance_criteria=["Patient sees confirmation"],
        related_tables=["appointments", "patients"],
        sort_order=0,
    )
    profile = Feature(name="Patient Profile", description="Edit contact details", sort_order=1)
    state.features = [booking, profile]

    state.tasks = [
        Task(task_number=0, name="Skeleton Deployment", definition_of_done="App deploys"),
        Task(
            task_number=1,
            name="Booking form",
            feature_ids=[booking.id],
            definition_of_done="Form saves an appointment",
            file_boundaries="app/booking/**",
            out_of_scope="Payments",
            status="in-progress",
        ),
        Task(task_number=2, name="Profile page", feature_ids=[profile.id], status="done"),
    ]
    return state
