"""
Prompt builders — copy-paste prompts that ask an AI assistant to draft
the documents a user chose not to write by hand.

Each builder returns plain text; nothing here is sent anywhere.
"""

from __future__ import annotations

from framewright.core.models.project import ProjectState
from framewright.core.services.convention_catalog import (
    find_question,
    get_all_convention_questions,
)
from framewright.core.services.generators.common import stack_summary

_INTRO = "I'm setting up a project framework for AI-assisted development."


def _name(state: ProjectState) -> str:
    return state.identity.name.strip() or "My Project"


def _decision_summary(state: ProjectState) -> list[str]:
    questions = get_all_convention_questions()
    lines = []
    for decision in state.conventions.decisions:
        question = find_question(questions, decision.question_id)
        option = question.get_option(decision.selected_option_id) if question else None
        if question and option:
            lines.append(f"- {question.question}: {option.label}")
    return lines


def conventions_prompt(state: ProjectState) -> str:
    """Ask for a CONVENTIONS.md tailored to the stack and prior decisions."""
    layers = ", ".join(
        layer.name.lower() for layer in state.architecture.layers if layer.enabled
    )
    decisions = _decision_summary(state)

    lines = [
        _INTRO,
        "",
        f"Project: {_name(state)}",
        f"Tech Stack: {stack_summary(state)}",
        f"Architecture: {state.architecture.app_type or 'Web application'} with {layers}",
        "",
        "I need you to write a CONVENTIONS.md file covering code patterns and standards "
        "for this project. Format it as markdown with clear sections. Keep it under 1500 words.",
        "",
    ]
    if decisions:
        lines += [
            "I've already made these convention decisions:",
            *decisions,
            "",
            "Expand on these choices and cover:",
        ]
    else:
        lines.append("Cover:")
    lines += [
        "- Component organization",
        "- Data fetching patterns",
        "- Error handling",
        "- Naming conventions for files, components, database tables, API routes",
        "- Any other conventions relevant to this specific tech stack",
        "",
        "The audience is an AI assistant that will read this file at the start of every "
        "coding session. Write it so that an AI can follow these conventions without ambiguity.",
    ]
    return "\n".join(lines)


def schema_prompt(state: ProjectState) -> str:
    """Ask for a SCHEMA.md from the plain-English description and sketched tables."""
    tables = []
    for table in state.database.tables:
        if not table.name:
            continue
        entry = f"- {table.name}"
        if table.description:
            entry += f": {table.description}"
        if table.columns:
            entry += f"\n  Columns: {table.columns}"
        tables.append(entry)

    lines = [
        _INTRO,
        "",
        f"Project: {_name(state)}",
        f"Tech Stack: {stack_summary(state)}",
        "",
    ]
    description = state.database.plain_english_description.strip()
    if description:
        lines += ["Here's what I need the database to do:", description, ""]
    if tables:
        lines += ["I've sketched out these tables:", *tables, ""]
    lines += [
        "Please write a SCHEMA.md file containing:",
        "1. A complete database schema with all tables, columns, types, and relationships",
        "2. Any indexes or constraints that would be important",
        "3. Notes on any RLS (Row Level Security) policies if applicable",
        "",
        "Format as markdown. Use SQL code blocks for the actual schema definitions. "
        "Include explanatory notes for complex relationships.",
    ]
    return "\n".join(lines)


def skeleton_prompt(state: ProjectState) -> str:
    """Ask for the initial folder structure (task 000)."""
    layers = [
        f"- {layer.name}" + (f": {layer.notes}" if layer.notes else "")
        for layer in state.architecture.layers
        if layer.enabled
    ]
    features = [
        f"- {f.name}: {f.description or 'No description'}" for f in state.features
    ]

    lines = [
        "I'm setting up a new project and need you to create the initial file/folder "
        "structure (skeleton deployment).",
        "",
        f"Project: {_name(state)}",
        f"Tech Stack: {stack_summary(state)}",
        f"App Type: {state.architecture.app_type or 'web-app'}",
        "",
        "Architecture layers:",
        *(layers or ["- Standard web application layers"]),
        "",
        "Features planned:",
        *(features or ["- No features defined yet"]),
        "",
    ]

    guide = state.deployment
    if guide.enabled:
        if guide.skeleton_structure.strip():
            lines += ["Structure I have in mind:", guide.skeleton_structure.strip(), ""]
        if guide.notes.strip():
            lines += ["Deployment notes:", guide.notes.strip(), ""]

    lines += [
        "Please create:",
        "1. The complete folder structure with placeholder files",
        "2. Configuration files appropriate for the tech stack",
        "3. A basic layout/shell that the feature work can build upon",
        "4. Any authentication scaffolding if auth was selected",
        "5. Database connection setup if applicable",
        "",
        "Do NOT implement any features — just create the skeleton that features will be "
        "built into. Each file should have a clear comment indicating what will go there.",
        "",
        "After creating the skeleton, verify:",
        "- [ ] The project builds and runs without errors",
        "- [ ] All configuration files are correct",
        "- [ ] The folder structure matches the architecture layers",
        '- [ ] A basic "hello world" page renders',
    ]
    return "\n".join(lines)


def feature_prompt(state: ProjectState, feature_id: str) -> str:
    """Implementation prompt for one feature; ``""`` for an unknown id."""
    feature = state.get_feature(feature_id)
    if feature is None:
        return ""

    tasks = []
    for task in state.tasks_for_feature(feature):
        entry = f"- {task.name}"
        if task.definition_of_done:
            entry += f"\n  Done when: {task.definition_of_done}"
        tasks.append(entry)
    rules = [f"- {r}" for r in feature.business_rules if r.strip()]

    lines = [
        "Read PROJECT.md, then read docs/CONVENTIONS.md.",
        "",
        f'I\'m implementing the "{feature.name}" feature.',
        "",
        f"Description: {feature.description or 'No description provided.'}",
        "",
    ]
    if rules:
        lines += ["Business Rules:", *rules, ""]
    if feature.related_tables:
        lines += [f"Related Tables: {', '.join(feature.related_tables)}", ""]
    if tasks:
        lines += ["Tasks for this feature:", *tasks, ""]
    lines.append(
        "Please implement this feature following all conventions in CONVENTIONS.md. "
        "After completion, review your work against each business rule listed above."
    )
    return "\n".join(lines)
