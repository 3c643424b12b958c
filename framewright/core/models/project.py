"""
ProjectState — the root state model.

This is the single document that captures everything the wizard has
collected about a project. It's serialized to .framewright/project.json
by the persistence layer and handed, read-only, to the generators.

The generators never mutate it. State transitions live in
``framewright.core.services.project_ops``.
"""

from __future__ import annotations

import re
import uuid
from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, computed_field, model_validator

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


def _new_id() -> str:
    return uuid.uuid4().hex


def slugify(text: str) -> str:
    """Lowercase, collapse every non-alphanumeric run into one hyphen, trim hyphens.

    Idempotent: ``slugify(slugify(x)) == slugify(x)``. Empty or
    all-symbol input yields ``""``; callers pick their own fallback.
    """
    return _NON_SLUG.sub("-", text.lower()).strip("-")


# ── Meta ─────────────────────────────────────────────────────────


class ProjectMeta(BaseModel):
    """Bookkeeping: identity, timestamps, wizard position."""

    id: str = Field(default_factory=_new_id)
    created_at: str = Field(default_factory=_now_iso)
    updated_at: str = Field(default_factory=_now_iso)
    current_step: int = 1
    highest_step_reached: int = 1
    version: int = 1
    skeleton_task_seeded: bool = False

    @model_validator(mode="after")
    def _highest_covers_current(self) -> ProjectMeta:
        if self.highest_step_reached < self.current_step:
            self.highest_step_reached = self.current_step
        return self


# ── Identity ─────────────────────────────────────────────────────


class TechStackSelection(BaseModel):
    """Catalog ids per stack category. ``""`` means unset."""

    framework: str = ""
    styling: str = ""
    database: str = ""
    auth: str = ""
    deployment: str = ""
    component_library: str = ""
    additional: list[str] = Field(default_factory=list)


class ProjectIdentity(BaseModel):
    name: str = ""
    purpose: str = ""
    tech_stack: TechStackSelection = Field(default_factory=TechStackSelection)
    project_mode: Literal["new", "existing"] = "new"
    existing_folder_tree: str = ""
    existing_schema: str = ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def slug(self) -> str:
        return slugify(self.name)


# ── Architecture ─────────────────────────────────────────────────


class ArchitectureLayer(BaseModel):
    """One architectural layer (frontend, backend, …)."""

    id: str = Field(default_factory=_new_id)
    name: str = ""
    enabled: bool = True
    notes: str = ""
    technologies: list[str] = Field(default_factory=list)


class ProjectArchitecture(BaseModel):
    app_type: str = ""
    layers: list[ArchitectureLayer] = Field(default_factory=list)


# ── Styling ──────────────────────────────────────────────────────


class BrandColor(BaseModel):
    id: str = Field(default_factory=_new_id)
    name: str = ""
    hex: str = ""


class FontSelection(BaseModel):
    heading: str = ""
    body: str = ""
    mono: str = ""


def _default_colors() -> list[BrandColor]:
    return [
        BrandColor(name="Primary", hex="#18181B"),
        BrandColor(name="Secondary", hex="#F4F4F5"),
        BrandColor(name="Accent", hex="#3B82F6"),
        BrandColor(name="Background", hex="#FFFFFF"),
        BrandColor(name="Text", hex="#09090B"),
    ]


class ProjectStyling(BaseModel):
    colors: list[BrandColor] = Field(default_factory=_default_colors)
    fonts: FontSelection = Field(default_factory=FontSelection)
    component_library: str = ""
    additional_notes: str = ""


# ── Conventions ──────────────────────────────────────────────────


class ConventionDecision(BaseModel):
    """The answer to one catalog question.

    At most one decision per ``question_id`` — enforced by
    ``project_ops.set_decision`` (filter, then append).
    """

    question_id: str
    selected_option_id: str | None = None
    custom_answer: str | None = None


class ProjectConventions(BaseModel):
    decisions: list[ConventionDecision] = Field(default_factory=list)
    custom_conventions: str = ""


# ── Database ─────────────────────────────────────────────────────

DatabaseApproach = Literal["plain-english", "paste-sql", "import-csv", "skip"]


class DatabaseTable(BaseModel):
    id: str = Field(default_factory=_new_id)
    name: str = ""
    description: str = ""
    columns: str = ""


class ProjectDatabase(BaseModel):
    approach: DatabaseApproach = "skip"
    plain_english_description: str = ""
    pasted_schema: str = ""  # SQL for paste-sql, CSV text for import-csv
    tables: list[DatabaseTable] = Field(default_factory=list)


# ── Features & tasks ─────────────────────────────────────────────


class Feature(BaseModel):
    """A user-facing capability.

    ``related_tables`` holds table *names* (weak references). Renames
    are cascaded by ``project_ops.rename_table``.
    """

    id: str = Field(default_factory=_new_id)
    name: str = ""
    description: str = ""
    business_rules: list[str] = Field(default_factory=list)
    acceptance_criteria: list[str] = Field(default_factory=list)
    related_tables: list[str] = Field(default_factory=list)
    sort_order: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def slug(self) -> str:
        return slugify(self.name)


TaskStatus = Literal["not-started", "in-progress", "done", "blocked"]


class Task(BaseModel):
    """A unit of work sized for one AI session.

    ``task_number`` is the user-facing identity (rendered as ``task-007``).
    ``feature_ids`` are weak references into ``ProjectState.features``.
    """

    id: str = Field(default_factory=_new_id)
    task_number: int = 0
    name: str = ""
    feature_ids: list[str] = Field(default_factory=list)
    definition_of_done: str = ""
    file_boundaries: str = ""
    out_of_scope: str = ""
    status: TaskStatus = "not-started"
    sort_order: int = 0


class DeploymentGuide(BaseModel):
    enabled: bool = False
    skeleton_structure: str = ""
    notes: str = ""


# ── Root ─────────────────────────────────────────────────────────


class ProjectState(BaseModel):
    """Root state model — serialized to .framewright/project.json.

    Every field has a default, so ``ProjectState()`` is a valid empty
    project: no features, no tasks, no conventions, database skipped.
    """

    meta: ProjectMeta = Field(default_factory=ProjectMeta)
    identity: ProjectIdentity = Field(default_factory=ProjectIdentity)
    architecture: ProjectArchitecture = Field(default_factory=ProjectArchitecture)
    styling: ProjectStyling = Field(default_factory=ProjectStyling)
    conventions: ProjectConventions = Field(default_factory=ProjectConventions)
    database: ProjectDatabase = Field(default_factory=ProjectDatabase)
    features: list[Feature] = Field(default_factory=list)
    tasks: list[Task] = Field(default_factory=list)
    markdown_overrides: dict[str, str] = Field(default_factory=dict)
    deployment: DeploymentGuide = Field(default_factory=DeploymentGuide)

    def touch(self) -> None:
        """Update the updated_at timestamp."""
        self.meta.updated_at = _now_iso()

    def get_feature(self, feature_id: str) -> Feature | None:
        """Look up a feature by id."""
        for feature in self.features:
            if feature.id == feature_id:
                return feature
        return None

    def get_task(self, task_id: str) -> Task | None:
        """Look up a task by id."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def get_table(self, name: str) -> DatabaseTable | None:
        """Look up a structured table by name."""
        for table in self.database.tables:
            if table.name == name:
                return table
        return None

    def features_for_task(self, task: Task) -> list[Feature]:
        """Resolve a task's feature ids, in feature order, dropping stale ids."""
        return [f for f in self.features if f.id in task.feature_ids]

    def tasks_for_feature(self, feature: Feature) -> list[Task]:
        """All tasks that reference the feature, in task order."""
        return [t for t in self.tasks if feature.id in t.feature_ids]

    @property
    def schema_skipped(self) -> bool:
        return self.database.approach == "skip"

    def summary(self) -> dict[str, Any]:
        """Small dict used by CLI status output."""
        return {
            "name": self.identity.name,
            "slug": self.identity.slug,
            "framework": self.identity.tech_stack.framework,
            "features": len(self.features),
            "tasks": len(self.tasks),
            "overrides": len(self.markdown_overrides),
            "current_step": self.meta.current_step,
        }
