"""
Shared helpers for the document generators.

Every path the assembler emits and every link a renderer writes comes
from the helpers in this module, so a link target can never drift from
the file it points at.
"""

from __future__ import annotations

import posixpath
import re

from framewright.core.data import get_registry
from framewright.core.models.project import Feature, ProjectState, Task, slugify

# ── Fixed layout ────────────────────────────────────────────────

PRIME_PATH = "PRIME.md"
PROJECT_PATH = "PROJECT.md"
CONVENTIONS_QUICKREF_PATH = "docs/CONVENTIONS-QUICKREF.md"
CONVENTIONS_PATH = "docs/CONVENTIONS.md"
ARCHITECTURE_PATH = "docs/ARCHITECTURE.md"
STYLING_PATH = "docs/STYLING.md"
SCHEMA_PATH = "docs/SCHEMA.md"
FEATURES_INDEX_PATH = "features/FEATURES-INDEX.md"
TASKS_MASTER_PATH = "tasks/TASKS-MASTER.md"
CONTEXT_STARTERS_PATH = "CONTEXT-WINDOW-STARTERS.md"
CLAUDE_MD_PATH = "CLAUDE.md"
CURSOR_RULES_PATH = ".cursorrules"
COPILOT_PATH = ".github/copilot-instructions.md"

# ── Slugs & paths ───────────────────────────────────────────────


def feature_slug(feature: Feature) -> str:
    return slugify(feature.name) or "unnamed"


def feature_path(feature: Feature) -> str:
    return f"features/{feature_slug(feature)}.md"


def format_task_number(number: int) -> str:
    """``7`` → ``task-007``."""
    return f"task-{number:03d}"


def task_slug(task: Task) -> str:
    """``task-007-build-login-page``; the name suffix is dropped when it slugs to nothing."""
    suffix = slugify(task.name)
    base = format_task_number(task.task_number)
    return f"{base}-{suffix}" if suffix else base


def task_path(task: Task) -> str:
    return f"tasks/{task_slug(task)}.md"


def relative_link(from_path: str, to_path: str) -> str:
    """Relative link from one framework file to another.

    >>> relative_link("features/login.md", "tasks/task-001.md")
    '../tasks/task-001.md'
    """
    start = posixpath.dirname(from_path) or "."
    return posixpath.relpath(to_path, start)


# ── Word counting ───────────────────────────────────────────────

_MARKDOWN_PUNCT = re.compile(r"[#|`\-*<>_\[\]()]")


def count_words(markdown: str) -> int:
    """Whitespace token count after stripping markdown punctuation.

    A stable proxy for document size, not a linguistic word count.
    """
    return len(_MARKDOWN_PUNCT.sub(" ", markdown).split())


# ── Overrides ───────────────────────────────────────────────────


def resolve_override(path: str, fresh: str, overrides: dict[str, str]) -> str:
    """User-edited content for ``path`` if present, else the fresh render."""
    if path in overrides:
        return overrides[path]
    return fresh


# ── Markdown building blocks ────────────────────────────────────


def table(headers: list[str], rows: list[list[str]]) -> list[str]:
    """GFM pipe table lines."""
    lines = ["| " + " | ".join(headers) + " |"]
    lines.append("|" + "|".join("-" * (len(h) + 2) for h in headers) + "|")
    for row in rows:
        lines.append("| " + " | ".join(row) + " |")
    return lines


def bullet_list(items: list[str], placeholder: str) -> list[str]:
    """``- item`` lines for the non-blank items, or a single placeholder line."""
    lines = [f"- {item.strip()}" for item in items if item.strip()]
    return lines or [placeholder]


def footer(from_path: str, *extra: tuple[str, str]) -> str:
    """Closing line linking back to extra targets and PROJECT.md.

    ``extra`` entries are ``(label, target_path)`` pairs rendered before
    the PROJECT.md link.
    """
    links = [f"[{label}]({relative_link(from_path, target)})" for label, target in extra]
    links.append(f"[PROJECT.md]({relative_link(from_path, PROJECT_PATH)})")
    return f"*See {' | '.join(links)}*"


def finish(lines: list[str]) -> str:
    """Join lines and normalise to exactly one trailing newline."""
    return "\n".join(lines).rstrip() + "\n"


def tech_stack_entries(state: ProjectState) -> list[tuple[str, str]]:
    """``(category label, option label)`` for every stack category that is set."""
    registry = get_registry()
    stack = state.identity.tech_stack
    entries: list[tuple[str, str]] = []
    for category in registry.tech_categories:
        option_id = getattr(stack, category.id, "")
        if option_id:
            entries.append((category.label, category.label_for(option_id)))
    for extra in stack.additional:
        if extra.strip():
            entries.append(("Additional", extra.strip()))
    return entries


def stack_summary(state: ProjectState) -> str:
    """Comma-joined stack labels on one line."""
    return ", ".join(label for _, label in tech_stack_entries(state))


def project_name(state: ProjectState, fallback: str = "Project") -> str:
    return state.identity.name.strip() or fallback
