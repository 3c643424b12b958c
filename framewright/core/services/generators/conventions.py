"""
CONVENTIONS.md and CONVENTIONS-QUICKREF.md generators.

Both documents are built from the same resolved decision list
(``convention_catalog.resolve_decisions``), so a decision that drops
out of one drops out of the other.
"""

from __future__ import annotations

import re

from framewright.core.models.conventions import ResolvedConvention
from framewright.core.models.project import ProjectState
from framewright.core.services.convention_catalog import group_by_category, resolve_decisions
from framewright.core.services.generators.common import (
    CONVENTIONS_PATH,
    CONVENTIONS_QUICKREF_PATH,
    finish,
    footer,
)

_HEADING_PREFIX = re.compile(r"^#+\s*")
_BULLET_PREFIX = re.compile(r"^[-•*]\s*")

# Custom convention lines carried into the quick reference
_QUICKREF_CUSTOM_LIMIT = 5


def quick_rule(resolved: ResolvedConvention) -> str:
    """One-line summary: first non-blank line, emphasis stripped, category prefix."""
    first = next(
        (line.strip() for line in resolved.generated_text.splitlines() if line.strip()),
        resolved.label,
    )
    cleaned = _HEADING_PREFIX.sub("", first).replace("**", "").strip()
    return f"- **{resolved.category}:** {cleaned}"


def render_conventions_quickref(state: ProjectState) -> str:
    """Render docs/CONVENTIONS-QUICKREF.md."""
    rules = [quick_rule(r) for r in resolve_decisions(state)]

    lines = [
        "# Conventions — Quick Reference",
        "",
        "> The most critical rules for this project. Read this at the start of every session.",
        "> For full detail, see `CONVENTIONS.md`.",
        "",
        "---",
        "",
        *(rules or ["_No conventions configured._"]),
        "",
    ]

    custom = state.conventions.custom_conventions.strip()
    if custom:
        custom_lines = [line for line in custom.splitlines() if line.strip()]
        lines += ["**Additional:**", ""]
        lines += [
            f"- {_BULLET_PREFIX.sub('', line.strip())}"
            for line in custom_lines[:_QUICKREF_CUSTOM_LIMIT]
        ]
        lines.append("")

    lines += [
        "---",
        "",
        footer(CONVENTIONS_QUICKREF_PATH, ("CONVENTIONS.md", CONVENTIONS_PATH)),
    ]
    return finish(lines)


def render_conventions(state: ProjectState) -> str:
    """Render docs/CONVENTIONS.md, grouped by category in catalog order."""
    grouped = group_by_category(resolve_decisions(state))

    lines = [
        "# Conventions",
        "",
        "> These conventions must be followed in all code written for this project.",
        "> Read this file at the start of every coding session.",
        "",
        "---",
        "",
    ]

    if grouped:
        for category, entries in grouped.items():
            rules = "\n\n".join(e.generated_text.strip() for e in entries)
            lines += [f"## {category}", "", rules, "", "---", ""]
    else:
        lines += ["_No conventions configured._", ""]

    custom = state.conventions.custom_conventions.strip()
    if custom:
        lines += ["## Additional Conventions", "", custom, ""]

    lines += [
        footer(CONVENTIONS_PATH, ("Quick Reference", CONVENTIONS_QUICKREF_PATH)),
    ]
    return finish(lines)
