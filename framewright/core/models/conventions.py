"""
Catalog models — convention questions and tech stack options.

Catalogs are static data loaded from ``framewright/core/data/catalogs/``.
They can be swapped without touching the generators; state only ever
stores catalog ids.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ConventionOption(BaseModel):
    """One possible answer to a convention question.

    ``generated_text`` is the pre-written markdown fragment that lands in
    CONVENTIONS.md when this option is chosen.
    """

    id: str
    label: str
    description: str = ""
    is_recommended: bool = False
    generated_text: str = ""


class ConventionQuestion(BaseModel):
    """A convention question the wizard asks for some frameworks."""

    id: str
    category: str
    question: str
    description: str = ""
    options: list[ConventionOption] = Field(default_factory=list)
    applicable_to: list[str] = Field(default_factory=list)
    is_required: bool = False

    def get_option(self, option_id: str | None) -> ConventionOption | None:
        """Look up an option by id."""
        if option_id is None:
            return None
        for option in self.options:
            if option.id == option_id:
                return option
        return None

    def applies_to(self, framework_id: str) -> bool:
        return framework_id in self.applicable_to


class ResolvedConvention(BaseModel):
    """A decision joined with its catalog question (and option)."""

    question_id: str
    category: str
    question: str
    label: str
    generated_text: str


class TechOption(BaseModel):
    id: str
    label: str
    description: str = ""


class TechCategory(BaseModel):
    """A stack category (framework, styling, …) and its options."""

    id: str
    label: str
    options: list[TechOption] = Field(default_factory=list)

    def label_for(self, option_id: str) -> str:
        """Display label for an option id, or the id itself when unknown."""
        for option in self.options:
            if option.id == option_id:
                return option.label
        return option_id


class AppType(BaseModel):
    id: str
    label: str
    description: str = ""
