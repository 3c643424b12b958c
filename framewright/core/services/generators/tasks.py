"""
Task generators — TASKS-MASTER.md and one file per task.
"""

from __future__ import annotations

from framewright.core.models.project import ProjectState, Task
from framewright.core.services.generators.common import (
    TASKS_MASTER_PATH,
    feature_path,
    finish,
    footer,
    format_task_number,
    relative_link,
    table,
    task_path,
)

STATUS_LABELS = {
    "not-started": "Not started",
    "in-progress": "In progress",
    "done": "Done",
    "blocked": "Blocked",
}


def render_tasks_master(state: ProjectState) -> str:
    """Render tasks/TASKS-MASTER.md."""
    rows = []
    for task in state.tasks:
        names = [f.name or "Unnamed" for f in state.features_for_task(task)]
        rows.append([
            f"[{format_task_number(task.task_number)}]"
            f"({relative_link(TASKS_MASTER_PATH, task_path(task))})",
            task.name or "Unnamed",
            ", ".join(names) or "—",
            STATUS_LABELS.get(task.status, task.status),
        ])

    count = len(state.tasks)
    lines = [
        "# Tasks Master",
        "",
        f"> {count} task{'' if count == 1 else 's'} defined.",
        "",
        "---",
        "",
        *(table(["ID", "Name", "Feature(s)", "Status"], rows) if rows else ["_No tasks defined._"]),
        "",
        "---",
        "",
        footer(TASKS_MASTER_PATH),
    ]
    return finish(lines)


def render_task(task: Task, state: ProjectState) -> str:
    """Render tasks/<task-slug>.md for one task."""
    path = task_path(task)
    feature_links = [
        f"- [{f.name or 'Unnamed'}]({relative_link(path, feature_path(f))})"
        for f in state.features_for_task(task)
    ]

    lines = [
        f"# {format_task_number(task.task_number)}: {task.name or 'Unnamed Task'}",
        "",
        f"**Status:** {STATUS_LABELS.get(task.status, task.status)}",
        "",
        "---",
        "",
        "## Related Features",
        "",
        *(feature_links or ["_Not linked to any feature._"]),
        "",
        "## Definition of Done",
        "",
        task.definition_of_done.strip() or "_Not specified._",
        "",
        "## File Boundaries",
        "",
        task.file_boundaries.strip() or "_Not specified._",
        "",
        "## Out of Scope",
        "",
        task.out_of_scope.strip() or "_Not specified._",
        "",
        "---",
        "",
        footer(path, ("Tasks Master", TASKS_MASTER_PATH)),
    ]
    return finish(lines)
