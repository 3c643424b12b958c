"""
Domain models — Pydantic types for the framework generator.

All models are re-exported here for convenient access:

    from framewright.core.models import ProjectState, Feature, Task, GeneratedFile
"""

from framewright.core.models.conventions import (
    AppType,
    ConventionOption,
    ConventionQuestion,
    ResolvedConvention,
    TechCategory,
    TechOption,
)
from framewright.core.models.project import (
    ArchitectureLayer,
    BrandColor,
    ConventionDecision,
    DatabaseTable,
    DeploymentGuide,
    Feature,
    FontSelection,
    ProjectArchitecture,
    ProjectConventions,
    ProjectDatabase,
    ProjectIdentity,
    ProjectMeta,
    ProjectState,
    ProjectStyling,
    Task,
    TechStackSelection,
    slugify,
)
from framewright.core.models.template import FileTreeNode, GeneratedFile

__all__ = [
    # conventions.py
    "AppType",
    "ArchitectureLayer",
    "BrandColor",
    "ConventionDecision",
    "ConventionOption",
    "ConventionQuestion",
    "DatabaseTable",
    "DeploymentGuide",
    "Feature",
    # template.py
    "FileTreeNode",
    "FontSelection",
    "GeneratedFile",
    "ProjectArchitecture",
    "ProjectConventions",
    "ProjectDatabase",
    "ProjectIdentity",
    "ProjectMeta",
    # project.py
    "ProjectState",
    "ProjectStyling",
    "ResolvedConvention",
    "Task",
    "TechCategory",
    "TechOption",
    "TechStackSelection",
    "slugify",
]
