"""
ARCHITECTURE.md generator — app type, stack overview, enabled layers.
"""

from __future__ import annotations

from framewright.core.data import get_registry
from framewright.core.models.project import ArchitectureLayer, ProjectState
from framewright.core.services.generators.common import (
    ARCHITECTURE_PATH,
    finish,
    footer,
    project_name,
    tech_stack_entries,
)


def _layer_section(layer: ArchitectureLayer) -> list[str]:
    lines = [f"### {layer.name or 'Unnamed Layer'}"]
    technologies = [t for t in layer.technologies if t.strip()]
    if technologies:
        lines += ["", f"**Technologies:** {', '.join(technologies)}"]
    if layer.notes.strip():
        lines += ["", layer.notes.strip()]
    return lines


def render_architecture(state: ProjectState) -> str:
    """Render docs/ARCHITECTURE.md.

    Disabled layers are left out entirely, the rest keep their stored
    order. The placeholder only appears when no layer is enabled.
    """
    architecture = state.architecture
    app_type = get_registry().app_type_label(architecture.app_type) if architecture.app_type else ""

    stack_lines = [f"- **{category}:** {label}" for category, label in tech_stack_entries(state)]

    lines = [
        f"# Architecture — {project_name(state)}",
        "",
        "---",
        "",
        "## Application Type",
        "",
        app_type or "_Not specified._",
        "",
        "## Tech Stack Overview",
        "",
        *(stack_lines or ["_No tech stack selected._"]),
        "",
        "## Architecture Layers",
        "",
    ]

    enabled = [layer for layer in architecture.layers if layer.enabled]
    if enabled:
        for layer in enabled:
            lines += _layer_section(layer)
            lines.append("")
    else:
        lines += ["_No layers defined._", ""]

    lines += ["---", "", footer(ARCHITECTURE_PATH)]
    return finish(lines)
