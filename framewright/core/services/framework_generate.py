"""
Framework assembly — turn a ProjectState into the full document set.

``generate_all`` is the only entry point the CLI, the export and the
review check use. It renders every document, applies user overrides,
counts words, and returns the files in a fixed order.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from framewright.core.models.project import ProjectState
from framewright.core.models.template import FileCategory, GeneratedFile
from framewright.core.services.generators.ai_configs import (
    render_claude_md,
    render_copilot_instructions,
    render_cursor_rules,
)
from framewright.core.services.generators.architecture import render_architecture
from framewright.core.services.generators.common import (
    ARCHITECTURE_PATH,
    CLAUDE_MD_PATH,
    CONTEXT_STARTERS_PATH,
    CONVENTIONS_PATH,
    CONVENTIONS_QUICKREF_PATH,
    COPILOT_PATH,
    CURSOR_RULES_PATH,
    FEATURES_INDEX_PATH,
    PRIME_PATH,
    PROJECT_PATH,
    SCHEMA_PATH,
    STYLING_PATH,
    TASKS_MASTER_PATH,
    count_words,
    feature_path,
    resolve_override,
    task_path,
)
from framewright.core.services.generators.context_starters import render_context_starters
from framewright.core.services.generators.conventions import (
    render_conventions,
    render_conventions_quickref,
)
from framewright.core.services.generators.features import render_feature, render_features_index
from framewright.core.services.generators.prime import render_prime
from framewright.core.services.generators.project import render_project
from framewright.core.services.generators.schema import render_schema
from framewright.core.services.generators.styling import render_styling
from framewright.core.services.generators.tasks import render_task, render_tasks_master

logger = logging.getLogger(__name__)

# Documents emitted for every project, whatever its content
FIXED_FILE_COUNT = 12

PROJECT_MD_WORD_WARNING = 2500
PROJECT_MD_WORD_DANGER = 3000


class InvalidStateError(TypeError):
    """The project state does not have the shape generation relies on."""


# ── Input shape ─────────────────────────────────────────────────


def _coerce_state(state: ProjectState | Mapping[str, Any]) -> ProjectState:
    if isinstance(state, Mapping):
        try:
            return ProjectState.model_validate(dict(state))
        except ValidationError as e:
            raise InvalidStateError(f"Invalid project state: {e}") from e

    if not isinstance(state, ProjectState):
        raise InvalidStateError(
            f"Expected ProjectState or mapping, got {type(state).__name__}"
        )

    # model_construct() skips validation; re-validate a plain dump of it
    try:
        return ProjectState.model_validate(state.model_dump(warnings=False))
    except ValidationError as e:
        raise InvalidStateError(f"Invalid project state: {e}") from e


# ── Assembly ────────────────────────────────────────────────────


def _category(path: str) -> FileCategory:
    if path in (CLAUDE_MD_PATH, CURSOR_RULES_PATH, COPILOT_PATH):
        return "ai-configs"
    top = path.split("/", 1)[0]
    if top in ("docs", "features", "tasks") and "/" in path:
        return top  # type: ignore[return-value]
    return "root"


def _make_file(path: str, fresh: str, overrides: Mapping[str, str]) -> GeneratedFile:
    content = resolve_override(path, fresh, dict(overrides))
    return GeneratedFile(
        path=path,
        filename=posixpath.basename(path),
        content=content,
        word_count=count_words(content),
        category=_category(path),
    )


def generate_all(state: ProjectState | Mapping[str, Any]) -> list[GeneratedFile]:
    """Render the complete framework for a project.

    Order: PRIME, PROJECT, the docs/ set (SCHEMA only when the database
    step was not skipped), the features index then one file per feature,
    the tasks master then one file per task, context starters, and the
    three AI tool configs. Feature and task files follow state order.

    Raises:
        InvalidStateError: the input is not a well-formed project state.
    """
    project = _coerce_state(state)
    overrides = project.markdown_overrides

    rendered: list[tuple[str, str]] = [
        (PRIME_PATH, render_prime(project)),
        (PROJECT_PATH, render_project(project)),
        (CONVENTIONS_QUICKREF_PATH, render_conventions_quickref(project)),
        (CONVENTIONS_PATH, render_conventions(project)),
        (ARCHITECTURE_PATH, render_architecture(project)),
        (STYLING_PATH, render_styling(project)),
    ]
    if not project.schema_skipped:
        rendered.append((SCHEMA_PATH, render_schema(project)))

    rendered.append((FEATURES_INDEX_PATH, render_features_index(project)))
    rendered += [(feature_path(f), render_feature(f, project)) for f in project.features]

    rendered.append((TASKS_MASTER_PATH, render_tasks_master(project)))
    rendered += [(task_path(t), render_task(t, project)) for t in project.tasks]

    rendered += [
        (CONTEXT_STARTERS_PATH, render_context_starters(project)),
        (CLAUDE_MD_PATH, render_claude_md(project)),
        (CURSOR_RULES_PATH, render_cursor_rules(project)),
        (COPILOT_PATH, render_copilot_instructions(project)),
    ]

    files = [_make_file(path, content, overrides) for path, content in rendered]
    logger.debug(
        "Generated %d files (%d features, %d tasks, %d overrides)",
        len(files),
        len(project.features),
        len(project.tasks),
        sum(1 for f in files if f.path in overrides),
    )
    return files


# ── Lookups & reports ───────────────────────────────────────────


def find_file(files: list[GeneratedFile], path: str) -> GeneratedFile | None:
    """Look up a generated file by path."""
    for f in files:
        if f.path == path:
            return f
    return None


def word_level(
    count: int,
    warning: int = PROJECT_MD_WORD_WARNING,
    danger: int = PROJECT_MD_WORD_DANGER,
) -> str:
    """``ok`` / ``warning`` / ``danger`` for a word count."""
    if count >= danger:
        return "danger"
    if count >= warning:
        return "warning"
    return "ok"


def project_word_report(
    files: list[GeneratedFile],
    warning: int = PROJECT_MD_WORD_WARNING,
    danger: int = PROJECT_MD_WORD_DANGER,
) -> dict:
    """Word count and threshold level of PROJECT.md.

    Returns:
        {"path": "PROJECT.md", "word_count": int, "level": "ok|warning|danger"}
    """
    project = find_file(files, PROJECT_PATH)
    count = project.word_count if project else 0
    return {
        "path": PROJECT_PATH,
        "word_count": count,
        "level": word_level(count, warning, danger),
    }
