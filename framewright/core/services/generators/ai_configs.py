"""
AI tool configuration files — CLAUDE.md, .cursorrules and
.github/copilot-instructions.md.

All three carry the same facts (name, purpose, stack, critical rules)
shaped for the tool that reads them.
"""

from __future__ import annotations

from framewright.core.models.project import ProjectState
from framewright.core.services.convention_catalog import resolve_decisions
from framewright.core.services.generators.common import (
    CLAUDE_MD_PATH,
    CONTEXT_STARTERS_PATH,
    CONVENTIONS_PATH,
    CONVENTIONS_QUICKREF_PATH,
    COPILOT_PATH,
    PRIME_PATH,
    PROJECT_PATH,
    TASKS_MASTER_PATH,
    finish,
    footer,
    project_name,
    stack_summary,
)
from framewright.core.services.generators.conventions import quick_rule
from framewright.core.services.generators.prime import short_purpose


def _rules(state: ProjectState) -> list[str]:
    return [quick_rule(r) for r in resolve_decisions(state)]


def _workflow() -> list[str]:
    return [
        f"1. Read `{PRIME_PATH}` first.",
        f"2. Find your task's reading list in `{CONTEXT_STARTERS_PATH}` and read those files.",
        "3. Stay inside the task's file boundaries.",
        f"4. Update the task file and `{TASKS_MASTER_PATH}` before you finish.",
    ]


def render_claude_md(state: ProjectState) -> str:
    """Render CLAUDE.md."""
    lines = [
        f"# {project_name(state)}",
        "",
        short_purpose(state.identity.purpose) or "_No purpose defined._",
        "",
        f"**Stack:** {stack_summary(state) or '_Not selected._'}",
        "",
        "## Workflow",
        "",
        *_workflow(),
        "",
        "## Critical Rules",
        "",
        *(_rules(state) or ["_No conventions configured._"]),
        "",
        f"Full conventions: `{CONVENTIONS_PATH}`. Project summary: `{PROJECT_PATH}`.",
        "",
        footer(CLAUDE_MD_PATH, ("PRIME", PRIME_PATH)),
    ]
    return finish(lines)


def render_cursor_rules(state: ProjectState) -> str:
    """Render .cursorrules (plain text, no markdown headings)."""
    rules = [r.replace("**", "") for r in _rules(state)]
    lines = [
        f"Project: {project_name(state)}",
        f"Purpose: {short_purpose(state.identity.purpose) or 'Not specified.'}",
        f"Stack: {stack_summary(state) or 'Not selected.'}",
        "",
        "Before writing code:",
        *(line.replace("`", "") for line in _workflow()),
        "",
        "Rules:",
        *(rules or ["- No conventions configured."]),
        "",
        f"Full conventions: {CONVENTIONS_PATH}",
        f"Quick reference: {CONVENTIONS_QUICKREF_PATH}",
    ]
    return finish(lines)


def render_copilot_instructions(state: ProjectState) -> str:
    """Render .github/copilot-instructions.md."""
    lines = [
        f"# Copilot Instructions — {project_name(state)}",
        "",
        short_purpose(state.identity.purpose) or "_No purpose defined._",
        "",
        "## Tech Stack",
        "",
        stack_summary(state) or "_Not selected._",
        "",
        "## Coding Rules",
        "",
        *(_rules(state) or ["_No conventions configured._"]),
        "",
        "## Reference",
        "",
        f"- `{PROJECT_PATH}` — project summary",
        f"- `{CONVENTIONS_PATH}` — full conventions",
        f"- `{TASKS_MASTER_PATH}` — current tasks",
        "",
        footer(COPILOT_PATH, ("Tasks Master", TASKS_MASTER_PATH)),
    ]
    return finish(lines)
