"""
PRIME.md generator — the navigator every AI session reads first.

Its size is bounded on purpose: it carries counts and one "next task"
line, never per-feature or per-task listings, so it stays small no
matter how large the project grows.
"""

from __future__ import annotations

import re

from framewright.core.data import get_registry
from framewright.core.models.project import ProjectState, Task
from framewright.core.services.generators.common import (
    CONTEXT_STARTERS_PATH,
    CONVENTIONS_QUICKREF_PATH,
    PRIME_PATH,
    PROJECT_PATH,
    TASKS_MASTER_PATH,
    finish,
    footer,
    format_task_number,
    project_name,
    stack_summary,
)

PURPOSE_LIMIT = 200

_SENTENCE_END = re.compile(r"(?<=[.!?])\s")


def short_purpose(purpose: str) -> str:
    """First sentence of the purpose, capped at ``PURPOSE_LIMIT`` characters."""
    text = " ".join(purpose.split())
    if not text:
        return ""
    first = _SENTENCE_END.split(text, maxsplit=1)[0]
    if len(first) > PURPOSE_LIMIT:
        first = first[: PURPOSE_LIMIT - 1].rstrip() + "…"
    return first


def next_open_task(state: ProjectState) -> Task | None:
    """Lowest-numbered task that is not done."""
    open_tasks = [t for t in state.tasks if t.status != "done"]
    if not open_tasks:
        return None
    return min(open_tasks, key=lambda t: t.task_number)


def render_prime(state: ProjectState) -> str:
    """Render PRIME.md."""
    registry = get_registry()
    done = sum(1 for t in state.tasks if t.status == "done")
    blocked = sum(1 for t in state.tasks if t.status == "blocked")
    upcoming = next_open_task(state)

    if upcoming is None:
        next_line = "_No open tasks._"
    else:
        next_line = f"{format_task_number(upcoming.task_number)}: {upcoming.name or 'Unnamed Task'}"

    lines = [
        f"# PRIME — {project_name(state)}",
        "",
        "> Read this file first, every session. It tells you where everything else is.",
        "",
        f"**Purpose:** {short_purpose(state.identity.purpose) or '_Not specified._'}",
        "",
        f"**Stack:** {stack_summary(state) or '_Not selected._'}",
        "",
        f"**Wizard step:** {registry.step_title(state.meta.current_step)}",
        "",
        f"**Progress:** {done}/{len(state.tasks)} tasks done, {blocked} blocked, "
        f"{len(state.features)} features",
        "",
        f"**Next task:** {next_line}",
        "",
        "## Reading Order",
        "",
        f"1. `{PROJECT_PATH}` — what the project is",
        f"2. `{CONVENTIONS_QUICKREF_PATH}` — rules that always apply",
        f"3. `{CONTEXT_STARTERS_PATH}` — which files to read for your task",
        f"4. `{TASKS_MASTER_PATH}` — task status",
        "",
        "Update the task file before ending the session.",
        "",
        "---",
        "",
        footer(PRIME_PATH),
    ]
    return finish(lines)
