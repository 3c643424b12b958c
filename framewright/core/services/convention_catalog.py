"""
Convention catalog lookup — which questions apply to a stack, and how a
stored decision resolves against the catalog.

The framework → question-set mapping lives here and nowhere else. The
generators only ever see the resolved list.
"""

from __future__ import annotations

import logging

from framewright.core.data import get_registry
from framewright.core.models.conventions import (
    ConventionOption,
    ConventionQuestion,
    ResolvedConvention,
)
from framewright.core.models.project import ConventionDecision, ProjectState

logger = logging.getLogger(__name__)


def _applicable(questions: list[ConventionQuestion], framework_id: str) -> list[ConventionQuestion]:
    return [q for q in questions if q.applies_to(framework_id)]


def _dedupe(questions: list[ConventionQuestion]) -> list[ConventionQuestion]:
    """Keep the first question per id, preserving order."""
    seen: set[str] = set()
    result: list[ConventionQuestion] = []
    for q in questions:
        if q.id in seen:
            continue
        seen.add(q.id)
        result.append(q)
    return result


def _stack_specific(framework_id: str) -> list[ConventionQuestion]:
    sets = get_registry().convention_sets
    nextjs = sets.get("nextjs", [])
    fastapi = sets.get("python-fastapi", [])

    if framework_id == "nextjs":
        return list(nextjs)
    if framework_id == "react-vite":
        return _applicable(nextjs, "react-vite")
    if framework_id == "python-fastapi":
        return list(fastapi)
    if framework_id == "python-django":
        return _applicable(fastapi, "python-django")
    if framework_id == "express":
        return _applicable(nextjs, "express") + _applicable(fastapi, "express")
    return []


def get_conventions_for_stack(framework_id: str) -> list[ConventionQuestion]:
    """Questions that apply to a framework, in catalog order.

    Stack-specific questions come first; general questions applicable
    to the framework follow. Duplicated ids resolve in favour of the
    stack-specific entry.
    """
    stack_specific = _stack_specific(framework_id)
    general = _applicable(get_registry().convention_sets.get("general", []), framework_id)
    return _dedupe(stack_specific + general)


def get_all_convention_questions() -> list[ConventionQuestion]:
    """Every question in the catalog, first occurrence per id wins."""
    sets = get_registry().convention_sets
    return _dedupe(
        sets.get("nextjs", []) + sets.get("python-fastapi", []) + sets.get("general", [])
    )


def find_question(
    questions: list[ConventionQuestion],
    question_id: str,
) -> ConventionQuestion | None:
    """Look up a question by id."""
    for q in questions:
        if q.id == question_id:
            return q
    return None


def find_option(
    question: ConventionQuestion,
    option_id: str | None,
) -> ConventionOption | None:
    """Look up an option on a question; ``None`` id or unknown id gives ``None``."""
    return question.get_option(option_id)


def resolve_decision(
    decision: ConventionDecision,
    questions: list[ConventionQuestion],
) -> ResolvedConvention | None:
    """Join a decision with its catalog entry.

    Policy: a decision whose question is not in the catalog, or whose
    selected option is not one of the question's options, resolves to
    ``None`` and is left out of the output. A decision with no selected
    option but a custom answer resolves to that answer.
    """
    question = find_question(questions, decision.question_id)
    if question is None:
        logger.debug("Dropping decision for unknown question '%s'", decision.question_id)
        return None

    if decision.selected_option_id is None:
        custom = (decision.custom_answer or "").strip()
        if not custom:
            return None
        return ResolvedConvention(
            question_id=question.id,
            category=question.category,
            question=question.question,
            label="Custom",
            generated_text=custom,
        )

    option = find_option(question, decision.selected_option_id)
    if option is None:
        logger.debug(
            "Dropping decision '%s': unknown option '%s'",
            decision.question_id,
            decision.selected_option_id,
        )
        return None

    return ResolvedConvention(
        question_id=question.id,
        category=question.category,
        question=question.question,
        label=option.label,
        generated_text=option.generated_text,
    )


def resolve_decisions(state: ProjectState) -> list[ResolvedConvention]:
    """Resolve every stored decision, ordered by catalog position."""
    questions = get_all_convention_questions()
    order = {q.id: idx for idx, q in enumerate(questions)}

    resolved = [
        r
        for r in (resolve_decision(d, questions) for d in state.conventions.decisions)
        if r is not None
    ]
    # sorted() is stable: duplicates keep their stored order
    return sorted(resolved, key=lambda r: order[r.question_id])


def group_by_category(resolved: list[ResolvedConvention]) -> dict[str, list[ResolvedConvention]]:
    """Group resolved conventions by category, first-appearance order."""
    grouped: dict[str, list[ResolvedConvention]] = {}
    for r in resolved:
        grouped.setdefault(r.category, []).append(r)
    return grouped


def missing_required_questions(state: ProjectState) -> list[ConventionQuestion]:
    """Required questions for the chosen framework without a usable decision."""
    framework = state.identity.tech_stack.framework
    if not framework:
        return []
    answered = {r.question_id for r in resolve_decisions(state)}
    return [
        q for q in get_conventions_for_stack(framework)
        if q.is_required and q.id not in answered
    ]
