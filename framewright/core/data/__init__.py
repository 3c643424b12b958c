"""
Central data registry for static catalogs.

Loads catalogs from ``framewright/core/data/catalogs/`` once at first
access and caches them for the process lifetime.  Generators, the CLI
and the state operations all read from this single source of truth.

Usage::

    from framewright.core.data import get_registry

    registry = get_registry()
    registry.tech_label("framework", "nextjs")   # → "Next.js"
    registry.convention_sets["nextjs"]           # list[ConventionQuestion]
"""

from __future__ import annotations

import json
import logging
from functools import cached_property
from pathlib import Path

from framewright.core.models.conventions import (
    AppType,
    ConventionQuestion,
    TechCategory,
)

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent

# Convention catalog files, keyed by the set name used in lookups
_CONVENTION_FILES = {
    "nextjs": "catalogs/conventions/nextjs.json",
    "python-fastapi": "catalogs/conventions/python_fastapi.json",
    "general": "catalogs/conventions/general.json",
}


def _load_json(relative_path: str) -> list | dict:
    """Load a JSON file relative to the data directory."""
    path = _DATA_DIR / relative_path
    if not path.exists():
        logger.warning("Data file not found: %s", path)
        return []
    with open(path, encoding="utf-8") as f:
        return json.load(f)


class DataRegistry:
    """Central registry for all static data catalogs.

    Each property lazily loads its JSON file on first access and caches
    the result for the lifetime of the instance.
    """

    # ── Tech stack ───────────────────────────────────────────────

    @cached_property
    def tech_categories(self) -> list[TechCategory]:
        """Stack categories (framework, styling, …) with their options."""
        data = [TechCategory.model_validate(c) for c in _load_json("catalogs/tech_stacks.json")]
        logger.debug("Loaded %d tech stack categories", len(data))
        return data

    def tech_label(self, category_id: str, option_id: str) -> str:
        """Display label for a stack option; unknown ids fall back to the id."""
        for category in self.tech_categories:
            if category.id == category_id:
                return category.label_for(option_id)
        return option_id

    # ── Architecture ─────────────────────────────────────────────

    @cached_property
    def app_types(self) -> list[AppType]:
        data = [AppType.model_validate(a) for a in _load_json("catalogs/app_types.json")]
        logger.debug("Loaded %d app types", len(data))
        return data

    def app_type_label(self, app_type_id: str) -> str:
        for app_type in self.app_types:
            if app_type.id == app_type_id:
                return app_type.label
        return app_type_id

    # ── Wizard ───────────────────────────────────────────────────

    @cached_property
    def wizard_steps(self) -> list[dict]:
        """Wizard step number → id/title."""
        data = _load_json("catalogs/wizard_steps.json")
        logger.debug("Loaded %d wizard steps", len(data))
        return data

    def step_title(self, number: int) -> str:
        for step in self.wizard_steps:
            if step["number"] == number:
                return step["title"]
        return f"Step {number}"

    # ── Conventions ──────────────────────────────────────────────

    @cached_property
    def convention_sets(self) -> dict[str, list[ConventionQuestion]]:
        """Convention question sets in catalog order, keyed by set name."""
        sets: dict[str, list[ConventionQuestion]] = {}
        for name, relative_path in _CONVENTION_FILES.items():
            sets[name] = [
                ConventionQuestion.model_validate(q) for q in _load_json(relative_path)
            ]
            logger.debug("Loaded %d convention questions for '%s'", len(sets[name]), name)
        return sets


# ── Module-level singleton ───────────────────────────────────────

_registry: DataRegistry | None = None


def get_registry() -> DataRegistry:
    """Return the process-level DataRegistry singleton.

    Creates the instance on first call; subsequent calls return the
    same object.
    """
    global _registry  # noqa: PLW0603
    if _registry is None:
        _registry = DataRegistry()
    return _registry
