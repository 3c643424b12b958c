"""
CONTEXT-WINDOW-STARTERS.md generator — one reading list per task.

Each list tells a fresh AI session exactly which files to load before
starting the task, in a fixed order: project summary, conventions, the
domain doc, the linked feature files, then the task file itself.
"""

from __future__ import annotations

from framewright.core.models.project import ProjectState, Task
from framewright.core.services.generators.common import (
    ARCHITECTURE_PATH,
    CONTEXT_STARTERS_PATH,
    CONVENTIONS_PATH,
    PROJECT_PATH,
    SCHEMA_PATH,
    feature_path,
    finish,
    footer,
    format_task_number,
    task_path,
)


def domain_doc(task: Task, state: ProjectState) -> str:
    """SCHEMA.md when a linked feature names a table, else ARCHITECTURE.md.

    Task 0 (skeleton deployment) and projects without a schema always
    get ARCHITECTURE.md.
    """
    if task.task_number == 0 or state.schema_skipped:
        return ARCHITECTURE_PATH
    if any(f.related_tables for f in state.features_for_task(task)):
        return SCHEMA_PATH
    return ARCHITECTURE_PATH


def reading_list(task: Task, state: ProjectState) -> list[str]:
    """Ordered file paths a session should read for ``task``."""
    return [
        PROJECT_PATH,
        CONVENTIONS_PATH,
        domain_doc(task, state),
        *(feature_path(f) for f in state.features_for_task(task)),
        task_path(task),
    ]


def render_context_starters(state: ProjectState) -> str:
    """Render CONTEXT-WINDOW-STARTERS.md."""
    lines = [
        "# Context Window Starters",
        "",
        "> Paste the reading list for your task at the start of a new AI session.",
        "",
        "---",
        "",
    ]

    # sorted() is stable, so equal task numbers keep their stored order
    ordered = sorted(state.tasks, key=lambda t: t.task_number)
    if not ordered:
        lines += ["_No tasks defined._", ""]

    for task in ordered:
        lines += [
            f"## {format_task_number(task.task_number)}: {task.name or 'Unnamed Task'}",
            "",
            "```",
            "Read these files before starting:",
            *(f"{n}. {path}" for n, path in enumerate(reading_list(task, state), start=1)),
            "```",
            "",
        ]

    lines += ["---", "", footer(CONTEXT_STARTERS_PATH)]
    return finish(lines)
