"""
Project state operations — every edit the wizard or the CLI makes.

Each operation takes a ProjectState and returns a new one (deep copy,
``meta.updated_at`` touched). The input is never mutated, so callers
can keep the previous state for undo or diffing.

Reference policies:
    remove_feature   null-out: the id is stripped from every task.
    rename_table     cascade: features referencing the old name follow.
    remove_table     the name is stripped from every feature.
"""

from __future__ import annotations

import logging
from typing import Any

from framewright.core.data import get_registry
from framewright.core.models.project import (
    ArchitectureLayer,
    ConventionDecision,
    DatabaseTable,
    Feature,
    ProjectState,
    Task,
)

logger = logging.getLogger(__name__)

MAX_FEATURES = 50
MAX_TASKS = 100

SKELETON_TASK_NAME = "Skeleton Deployment"


class ProjectOpError(ValueError):
    """An operation referenced something that does not exist or is out of range."""


def _next(state: ProjectState) -> ProjectState:
    new = state.model_copy(deep=True)
    new.touch()
    return new


def _update_fields(model: Any, fields: dict[str, Any]) -> None:
    for name, value in fields.items():
        if name not in type(model).model_fields:
            raise ProjectOpError(f"Unknown field for {type(model).__name__}: {name}")
        setattr(model, name, value)


# ═══════════════════════════════════════════════════════════════════
#  Wizard position & identity
# ═══════════════════════════════════════════════════════════════════


def set_step(state: ProjectState, step: int) -> ProjectState:
    """Move to a wizard step; ``highest_step_reached`` never decreases."""
    total = len(get_registry().wizard_steps)
    if not 1 <= step <= total:
        raise ProjectOpError(f"Step must be between 1 and {total}, got {step}")
    new = _next(state)
    new.meta.current_step = step
    new.meta.highest_step_reached = max(new.meta.highest_step_reached, step)
    return new


def set_identity(state: ProjectState, **fields: Any) -> ProjectState:
    new = _next(state)
    _update_fields(new.identity, fields)
    return new


def set_tech_stack(state: ProjectState, **fields: Any) -> ProjectState:
    new = _next(state)
    _update_fields(new.identity.tech_stack, fields)
    return new


def set_database(state: ProjectState, **fields: Any) -> ProjectState:
    new = _next(state)
    _update_fields(new.database, fields)
    return new


def set_deployment(state: ProjectState, **fields: Any) -> ProjectState:
    new = _next(state)
    _update_fields(new.deployment, fields)
    return new


# ═══════════════════════════════════════════════════════════════════
#  Smart defaults
# ═══════════════════════════════════════════════════════════════════

# (id, name) in display order; only "frontend" starts enabled
DEFAULT_LAYERS = [
    ("frontend", "Frontend"),
    ("backend", "Backend / API"),
    ("database", "Database"),
    ("auth", "Authentication"),
    ("external", "External Services"),
    ("storage", "File Storage"),
    ("realtime", "Real-time / WebSockets"),
]

_SUGGESTED_FEATURES: dict[str, list[str]] = {
    "nextjs": [
        "Authentication & user management",
        "Dashboard / home page",
        "Settings page",
        "CRUD operations",
    ],
    "react-vite": ["Authentication", "Dashboard", "Settings"],
    "python-fastapi": [
        "User API endpoints",
        "Authentication",
        "CRUD endpoints",
        "Health check & monitoring",
    ],
    "static": ["Landing page", "About page", "Contact form"],
}

_APP_TYPES = {
    "nextjs": "web-app",
    "react-vite": "web-app",
    "python-fastapi": "api",
    "static": "static-site",
}


def _is_set(value: str) -> bool:
    return bool(value) and value != "none"


def default_layers(state: ProjectState) -> list[ArchitectureLayer]:
    """Architecture layers seeded from the selected stack."""
    registry = get_registry()
    stack = state.identity.tech_stack
    framework = stack.framework
    has_db = _is_set(stack.database)
    has_auth = _is_set(stack.auth)

    layers = [
        ArchitectureLayer(id=layer_id, name=name, enabled=layer_id == "frontend")
        for layer_id, name in DEFAULT_LAYERS
    ]
    by_id = {layer.id: layer for layer in layers}

    if framework not in _APP_TYPES:
        return layers

    frontend, backend = by_id["frontend"], by_id["backend"]
    if framework == "nextjs":
        frontend.technologies = ["Next.js"]
        if stack.styling == "tailwind":
            frontend.technologies.append("Tailwind CSS")
        backend.enabled = True
        backend.notes = "Next.js API routes / Server Actions"
        backend.technologies = ["Next.js Route Handlers"]
    elif framework == "react-vite":
        frontend.technologies = ["React", "Vite"]
    elif framework == "python-fastapi":
        frontend.enabled = False
        backend.enabled = True
        backend.technologies = ["FastAPI", "Python"]
    elif framework == "static":
        frontend.technologies = ["HTML", "CSS", "JavaScript"]
        return layers

    if has_db:
        by_id["database"].enabled = True
        if framework == "nextjs":
            by_id["database"].technologies = [registry.tech_label("database", stack.database)]
    if has_auth:
        by_id["auth"].enabled = True
        if framework == "nextjs":
            by_id["auth"].technologies = [registry.tech_label("auth", stack.auth)]
    return layers


def suggested_features(framework_id: str) -> list[str]:
    """Starter feature names for a framework; empty for unknown ones."""
    return list(_SUGGESTED_FEATURES.get(framework_id, []))


def apply_smart_defaults(state: ProjectState) -> ProjectState:
    """Seed app type and layers from the stack, once.

    Does nothing when layers already exist, so user edits survive a
    later stack change.
    """
    if state.architecture.layers:
        return state
    new = _next(state)
    new.architecture.app_type = new.architecture.app_type or _APP_TYPES.get(
        new.identity.tech_stack.framework, "web-app"
    )
    new.architecture.layers = default_layers(new)
    logger.debug(
        "Seeded %d architecture layers for framework '%s'",
        len(new.architecture.layers),
        new.identity.tech_stack.framework,
    )
    return new


# ═══════════════════════════════════════════════════════════════════
#  Conventions
# ═══════════════════════════════════════════════════════════════════


def set_decision(
    state: ProjectState,
    question_id: str,
    option_id: str | None,
    custom_answer: str | None = None,
) -> ProjectState:
    """Record the answer to a question, replacing any earlier one."""
    new = _next(state)
    decisions = [d for d in new.conventions.decisions if d.question_id != question_id]
    decisions.append(
        ConventionDecision(
            question_id=question_id,
            selected_option_id=option_id,
            custom_answer=custom_answer,
        )
    )
    new.conventions.decisions = decisions
    return new


def set_custom_conventions(state: ProjectState, text: str) -> ProjectState:
    new = _next(state)
    new.conventions.custom_conventions = text
    return new


# ═══════════════════════════════════════════════════════════════════
#  Features
# ═══════════════════════════════════════════════════════════════════


def _require_feature(state: ProjectState, feature_id: str) -> Feature:
    feature = state.get_feature(feature_id)
    if feature is None:
        raise ProjectOpError(f"Feature not found: {feature_id}")
    return feature


def add_feature(state: ProjectState, name: str, **fields: Any) -> tuple[ProjectState, Feature]:
    """Append a feature; returns the new state and the created feature."""
    if len(state.features) >= MAX_FEATURES:
        raise ProjectOpError(f"A project can have at most {MAX_FEATURES} features")
    new = _next(state)
    feature = Feature(name=name, sort_order=len(new.features))
    _update_fields(feature, fields)
    new.features.append(feature)
    return new, feature


def update_feature(state: ProjectState, feature_id: str, **fields: Any) -> ProjectState:
    new = _next(state)
    _update_fields(_require_feature(new, feature_id), fields)
    return new


def remove_feature(state: ProjectState, feature_id: str) -> ProjectState:
    """Delete a feature and strip its id from every task."""
    _require_feature(state, feature_id)
    new = _next(state)
    new.features = [f for f in new.features if f.id != feature_id]
    for task in new.tasks:
        if feature_id in task.feature_ids:
            task.feature_ids = [fid for fid in task.feature_ids if fid != feature_id]
    return new


def reorder_features(state: ProjectState, feature_ids: list[str]) -> ProjectState:
    """Reorder features to match ``feature_ids`` and rewrite ``sort_order``."""
    if sorted(feature_ids) != sorted(f.id for f in state.features):
        raise ProjectOpError("Reorder must list every feature id exactly once")
    new = _next(state)
    by_id = {f.id: f for f in new.features}
    new.features = [by_id[fid] for fid in feature_ids]
    for idx, feature in enumerate(new.features):
        feature.sort_order = idx
    return new


# ═══════════════════════════════════════════════════════════════════
#  Tasks
# ═══════════════════════════════════════════════════════════════════


def _require_task(state: ProjectState, task_id: str) -> Task:
    task = state.get_task(task_id)
    if task is None:
        raise ProjectOpError(f"Task not found: {task_id}")
    return task


def next_task_number(state: ProjectState) -> int:
    """One past the highest task number, or 1 for an empty list."""
    if not state.tasks:
        return 1
    return max(t.task_number for t in state.tasks) + 1


def find_task_by_number(state: ProjectState, number: int) -> Task | None:
    for task in state.tasks:
        if task.task_number == number:
            return task
    return None


def add_task(state: ProjectState, name: str, **fields: Any) -> tuple[ProjectState, Task]:
    """Append a task numbered ``next_task_number``."""
    if len(state.tasks) >= MAX_TASKS:
        raise ProjectOpError(f"A project can have at most {MAX_TASKS} tasks")
    new = _next(state)
    task = Task(name=name, task_number=next_task_number(new), sort_order=len(new.tasks))
    _update_fields(task, fields)
    new.tasks.append(task)
    return new, task


def update_task(state: ProjectState, task_id: str, **fields: Any) -> ProjectState:
    new = _next(state)
    _update_fields(_require_task(new, task_id), fields)
    return new


def remove_task(state: ProjectState, task_id: str) -> ProjectState:
    _require_task(state, task_id)
    new = _next(state)
    new.tasks = [t for t in new.tasks if t.id != task_id]
    return new


def reorder_tasks(state: ProjectState, task_ids: list[str]) -> ProjectState:
    if sorted(task_ids) != sorted(t.id for t in state.tasks):
        raise ProjectOpError("Reorder must list every task id exactly once")
    new = _next(state)
    by_id = {t.id: t for t in new.tasks}
    new.tasks = [by_id[tid] for tid in task_ids]
    for idx, task in enumerate(new.tasks):
        task.sort_order = idx
    return new


def ensure_skeleton_task(state: ProjectState) -> ProjectState:
    """Insert task 000 "Skeleton Deployment" the first time features exist.

    No-op when there are no features, when a task numbered 0 already
    exists, or when the skeleton was seeded before (even if the user
    deleted it since).
    """
    if (
        not state.features
        or state.meta.skeleton_task_seeded
        or find_task_by_number(state, 0) is not None
    ):
        return state

    new = _next(state)
    skeleton = Task(
        task_number=0,
        name=SKELETON_TASK_NAME,
        definition_of_done=(
            "The empty application builds and is deployed to its hosting target; "
            "the deployed URL loads."
        ),
        file_boundaries="Project scaffolding, configuration and deployment files only.",
        out_of_scope="Any feature work.",
    )
    new.tasks.insert(0, skeleton)
    for idx, task in enumerate(new.tasks):
        task.sort_order = idx
    new.meta.skeleton_task_seeded = True
    logger.debug("Seeded skeleton task 000")
    return new


# ═══════════════════════════════════════════════════════════════════
#  Database tables
# ═══════════════════════════════════════════════════════════════════


def add_table(state: ProjectState, name: str, description: str = "", columns: str = "") -> ProjectState:
    if state.get_table(name) is not None:
        raise ProjectOpError(f"Table already exists: {name}")
    new = _next(state)
    new.database.tables.append(DatabaseTable(name=name, description=description, columns=columns))
    return new


def rename_table(state: ProjectState, old_name: str, new_name: str) -> ProjectState:
    """Rename a table and every feature reference to it."""
    if state.get_table(old_name) is None:
        raise ProjectOpError(f"Table not found: {old_name}")
    if old_name != new_name and state.get_table(new_name) is not None:
        raise ProjectOpError(f"Table already exists: {new_name}")
    new = _next(state)
    new.get_table(old_name).name = new_name  # type: ignore[union-attr]
    for feature in new.features:
        feature.related_tables = [new_name if t == old_name else t for t in feature.related_tables]
    return new


def remove_table(state: ProjectState, name: str) -> ProjectState:
    if state.get_table(name) is None:
        raise ProjectOpError(f"Table not found: {name}")
    new = _next(state)
    new.database.tables = [t for t in new.database.tables if t.name != name]
    for feature in new.features:
        feature.related_tables = [t for t in feature.related_tables if t != name]
    return new


# ═══════════════════════════════════════════════════════════════════
#  Markdown overrides
# ═══════════════════════════════════════════════════════════════════


def set_override(state: ProjectState, path: str, content: str) -> ProjectState:
    """Replace a generated document's content with user-edited markdown."""
    new = _next(state)
    new.markdown_overrides[path] = content
    return new


def clear_override(state: ProjectState, path: str) -> ProjectState:
    if path not in state.markdown_overrides:
        return state
    new = _next(state)
    del new.markdown_overrides[path]
    return new
