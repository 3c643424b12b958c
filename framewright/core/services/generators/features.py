"""
Feature generators — FEATURES-INDEX.md and one file per feature.

Task counts and related-task links are derived from ``Task.feature_ids``
at render time; nothing is stored back on the feature.
"""

from __future__ import annotations

from framewright.core.models.project import Feature, ProjectState
from framewright.core.services.generators.common import (
    FEATURES_INDEX_PATH,
    bullet_list,
    feature_path,
    finish,
    footer,
    format_task_number,
    relative_link,
    table,
    task_path,
)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def render_features_index(state: ProjectState) -> str:
    """Render features/FEATURES-INDEX.md."""
    rows = []
    for feature in state.features:
        link = relative_link(FEATURES_INDEX_PATH, feature_path(feature))
        task_count = len(state.tasks_for_feature(feature))
        rows.append([
            f"[{feature.name or 'Unnamed'}]({link})",
            feature.description.strip() or "—",
            str(task_count),
        ])

    lines = [
        "# Features Index",
        "",
        f"> {_plural(len(state.features), 'feature')} defined.",
        "",
        "---",
        "",
        *(table(["Feature", "Description", "Tasks"], rows) if rows else ["_No features defined._"]),
        "",
        "---",
        "",
        footer(FEATURES_INDEX_PATH),
    ]
    return finish(lines)


def render_feature(feature: Feature, state: ProjectState) -> str:
    """Render features/<slug>.md for one feature."""
    path = feature_path(feature)

    task_lines = [
        f"- [{format_task_number(t.task_number)}: {t.name or 'Unnamed'}]"
        f"({relative_link(path, task_path(t))})"
        for t in state.tasks_for_feature(feature)
    ]

    lines = [
        f"# Feature: {feature.name or 'Unnamed Feature'}",
        "",
        feature.description.strip() or "_No description._",
        "",
        "---",
        "",
        "## Acceptance Criteria",
        "",
        "> What does success look like from the user's perspective?",
        "",
        *bullet_list(feature.acceptance_criteria, "_No acceptance criteria defined._"),
        "",
        "## Business Rules",
        "",
        "> Technical constraints and system requirements.",
        "",
        *bullet_list(feature.business_rules, "_No business rules defined._"),
        "",
        "## Related Tables",
        "",
        *bullet_list(feature.related_tables, "_No related tables._"),
        "",
        "## Related Tasks",
        "",
        *(task_lines or ["_No tasks linked to this feature._"]),
        "",
        "---",
        "",
        footer(path, ("Features Index", FEATURES_INDEX_PATH)),
    ]
    return finish(lines)
