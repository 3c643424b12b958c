"""
STYLING.md generator — brand colors, typography, component library.
"""

from __future__ import annotations

from framewright.core.data import get_registry
from framewright.core.models.project import ProjectState
from framewright.core.services.generators.common import (
    STYLING_PATH,
    finish,
    footer,
    project_name,
    table,
)


def render_styling(state: ProjectState) -> str:
    """Render docs/STYLING.md."""
    styling = state.styling

    color_rows = [[c.name or "Unnamed", f"`{c.hex}`"] for c in styling.colors if c.hex]

    font_lines = []
    if styling.fonts.heading:
        font_lines.append(f"- **Headings:** {styling.fonts.heading}")
    if styling.fonts.body:
        font_lines.append(f"- **Body:** {styling.fonts.body}")
    if styling.fonts.mono:
        font_lines.append(f"- **Monospace:** {styling.fonts.mono}")

    library = styling.component_library or state.identity.tech_stack.component_library
    library_label = get_registry().tech_label("component_library", library) if library else ""

    lines = [
        f"# Styling Guide — {project_name(state)}",
        "",
        "---",
        "",
        "## Brand Colors",
        "",
        *(table(["Name", "Hex"], color_rows) if color_rows else ["_No colors defined._"]),
        "",
        "## Typography",
        "",
        *(font_lines or ["_No fonts specified._"]),
        "",
        "## Component Library",
        "",
        library_label or "_None selected._",
        "",
    ]

    if styling.additional_notes.strip():
        lines += ["## Additional Styling Notes", "", styling.additional_notes.strip(), ""]

    lines += ["---", "", footer(STYLING_PATH)]
    return finish(lines)
