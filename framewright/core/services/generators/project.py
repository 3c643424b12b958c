"""
PROJECT.md generator — the project summary.

This is the document the review step word-count gates, so listings are
kept to one line per feature and everything detailed is linked instead
of inlined.
"""

from __future__ import annotations

from framewright.core.data import get_registry
from framewright.core.models.project import ProjectState
from framewright.core.services.generators.common import (
    ARCHITECTURE_PATH,
    CONTEXT_STARTERS_PATH,
    CONVENTIONS_PATH,
    CONVENTIONS_QUICKREF_PATH,
    FEATURES_INDEX_PATH,
    PRIME_PATH,
    PROJECT_PATH,
    SCHEMA_PATH,
    STYLING_PATH,
    TASKS_MASTER_PATH,
    feature_path,
    finish,
    relative_link,
    table,
    tech_stack_entries,
)

_PRINCIPLES = [
    "**Follow the conventions**: every file follows `docs/CONVENTIONS.md`. When a pattern is missing, ask instead of inventing one.",
    "**One task per session**: work inside the current task's file boundaries and stop at its Definition of Done.",
    "**Keep memory current**: update the task file (status, notes) before ending a session.",
]


def _document_map(state: ProjectState) -> list[str]:
    entries = [
        (PRIME_PATH, "navigator, read first"),
        (CONVENTIONS_QUICKREF_PATH, "critical rules"),
        (CONVENTIONS_PATH, "full conventions"),
        (ARCHITECTURE_PATH, "layers and stack"),
        (STYLING_PATH, "colors, fonts, components"),
    ]
    if not state.schema_skipped:
        entries.append((SCHEMA_PATH, "database schema"))
    entries += [
        (FEATURES_INDEX_PATH, "all features"),
        (TASKS_MASTER_PATH, "all tasks"),
        (CONTEXT_STARTERS_PATH, "per-task reading lists"),
    ]
    return [
        f"- [{path}]({relative_link(PROJECT_PATH, path)}) — {description}"
        for path, description in entries
    ]


def render_project(state: ProjectState) -> str:
    """Render PROJECT.md."""
    identity = state.identity
    registry = get_registry()

    stack_rows = [[category, label] for category, label in tech_stack_entries(state)]

    enabled_layers = [layer.name for layer in state.architecture.layers if layer.enabled and layer.name]
    app_type = registry.app_type_label(state.architecture.app_type) if state.architecture.app_type else ""

    feature_lines = [
        f"- [{f.name or 'Unnamed'}]({relative_link(PROJECT_PATH, feature_path(f))})"
        + (f" — {f.description.strip()}" if f.description.strip() else "")
        for f in state.features
    ]

    lines = [
        f"# {identity.name.strip() or 'Untitled Project'}",
        "",
        "## Purpose",
        "",
        identity.purpose.strip() or "_No purpose defined._",
        "",
        "## Tech Stack",
        "",
        *(table(["Layer", "Technology"], stack_rows) if stack_rows else ["_No tech stack selected._"]),
        "",
        "## Architecture",
        "",
        f"**Application type:** {app_type or '_Not specified._'}",
        "",
        f"**Layers:** {', '.join(enabled_layers) if enabled_layers else '_No layers defined._'}",
        "",
        "## Core Principles",
        "",
        *[f"- {p}" for p in _PRINCIPLES],
        "",
        "## Target Users",
        "",
        *table(["Role", "Description"], [["_Define your primary users._", "_What they need from the product._"]]),
        "",
        "## Features",
        "",
        *(feature_lines or ["_No features defined._"]),
        "",
    ]

    if identity.project_mode == "existing" and identity.existing_folder_tree.strip():
        lines += [
            "## Existing Project Structure",
            "",
            "```",
            identity.existing_folder_tree.strip(),
            "```",
            "",
        ]

    lines += [
        "## Document Map",
        "",
        *_document_map(state),
        "",
        "---",
        "",
        f"*Start every session with [PRIME.md]({PRIME_PATH}) | "
        f"[Features Index]({FEATURES_INDEX_PATH}) | [Tasks Master]({TASKS_MASTER_PATH})*",
    ]
    return finish(lines)
