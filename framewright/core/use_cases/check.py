"""
Project check use case — review a project before export and report issues.

Errors are things that make the generated framework misleading (broken
references, colliding output paths). Warnings are gaps a user will
probably want to fill (unlinked features, missing definitions of done,
an oversized PROJECT.md).
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

from framewright.core.config.loader import Settings
from framewright.core.models.project import ProjectState
from framewright.core.persistence.state_file import StateFileError, load_state
from framewright.core.services.convention_catalog import (
    get_all_convention_questions,
    missing_required_questions,
)
from framewright.core.services.framework_generate import generate_all, project_word_report
from framewright.core.services.generators.common import format_task_number


@dataclass
class CheckResult:
    """Result of a project review."""

    valid: bool = False
    state_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    file_count: int = 0
    word_count: int = 0
    word_level: str = "ok"

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "state_path": str(self.state_path) if self.state_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "file_count": self.file_count,
            "word_count": self.word_count,
            "word_level": self.word_level,
        }


def review_state(state: ProjectState, settings: Settings | None = None) -> CheckResult:
    """Run every check against an in-memory state."""
    settings = settings or Settings()
    result = CheckResult()

    # ── Identity ────────────────────────────────────────────────
    if not state.identity.name.strip():
        result.warnings.append("Project has no name.")
    if not state.identity.tech_stack.framework:
        result.warnings.append("No framework selected.")

    # ── Features ────────────────────────────────────────────────
    if not state.features:
        result.warnings.append("No features defined.")
    for idx, feature in enumerate(state.features, start=1):
        if not feature.name.strip():
            result.warnings.append(f"Feature #{idx} has no name.")
        elif not state.tasks_for_feature(feature):
            result.warnings.append(f"Feature '{feature.name}' has no tasks.")
        for table in feature.related_tables:
            if state.database.tables and state.get_table(table) is None:
                result.warnings.append(
                    f"Feature '{feature.name}' references unknown table '{table}'."
                )

    # ── Tasks ───────────────────────────────────────────────────
    feature_ids = {f.id for f in state.features}
    for task in state.tasks:
        label = format_task_number(task.task_number)
        if not task.definition_of_done.strip():
            result.warnings.append(f"{label} has no definition of done.")
        dangling = [fid for fid in task.feature_ids if fid not in feature_ids]
        if dangling:
            result.errors.append(
                f"{label} references {len(dangling)} missing feature(s): {', '.join(dangling)}"
            )
        elif not task.feature_ids and task.task_number != 0:
            result.warnings.append(f"{label} is not linked to any feature.")

    numbers = Counter(t.task_number for t in state.tasks)
    dupes = sorted(n for n, count in numbers.items() if count > 1)
    if dupes:
        result.warnings.append(
            f"Duplicate task numbers: {', '.join(format_task_number(n) for n in dupes)}"
        )

    # ── Conventions ─────────────────────────────────────────────
    known = {q.id for q in get_all_convention_questions()}
    for decision in state.conventions.decisions:
        if decision.question_id not in known:
            result.warnings.append(
                f"Convention decision for unknown question '{decision.question_id}' is ignored."
            )
        elif decision.selected_option_id is None and not (decision.custom_answer or "").strip():
            result.warnings.append(f"Convention '{decision.question_id}' is unanswered.")
    for question in missing_required_questions(state):
        result.warnings.append(f"Required convention not decided: {question.question}")

    # ── Generated output ────────────────────────────────────────
    files = generate_all(state)
    result.file_count = len(files)

    paths = Counter(f.path for f in files)
    collisions = sorted(p for p, count in paths.items() if count > 1)
    if collisions:
        result.errors.append(f"Duplicate output paths: {', '.join(collisions)}")

    report = project_word_report(files, settings.word_warning, settings.word_danger)
    result.word_count = report["word_count"]
    result.word_level = report["level"]
    if report["level"] == "danger":
        result.warnings.append(
            f"PROJECT.md is {report['word_count']} words (limit {settings.word_danger}). "
            "Move detail into feature files."
        )
    elif report["level"] == "warning":
        result.warnings.append(
            f"PROJECT.md is {report['word_count']} words (aim for under {settings.word_warning})."
        )

    result.valid = len(result.errors) == 0
    return result


def check_project(state_path: Path, settings: Settings | None = None) -> CheckResult:
    """Load the state file and review it.

    Args:
        state_path: Path to the project state file.
        settings: Thresholds; defaults when omitted.

    Returns:
        CheckResult with validation status and any issues.
    """
    if not state_path.is_file():
        result = CheckResult(state_path=state_path)
        result.errors.append(f"No project state at {state_path}. Run 'framewright init'.")
        return result

    try:
        state = load_state(state_path)
    except StateFileError as e:
        result = CheckResult(state_path=state_path)
        result.errors.append(str(e))
        return result

    result = review_state(state, settings)
    result.state_path = state_path
    return result
