"""
SCHEMA.md generator — database description, SQL/CSV, structured tables.

The free-text blocks and the structured tables are independent: when
both are populated, both render.
"""

from __future__ import annotations

from framewright.core.models.project import DatabaseTable, ProjectState
from framewright.core.services.generators.common import (
    SCHEMA_PATH,
    finish,
    footer,
    project_name,
)


def _fenced(language: str, body: str) -> list[str]:
    return [f"```{language}", body.strip(), "```", ""]


def _table_section(table: DatabaseTable) -> list[str]:
    lines = [f"### {table.name or 'Unnamed Table'}", ""]
    if table.description.strip():
        lines += [table.description.strip(), ""]
    if table.columns.strip():
        lines += ["**Columns:**", "", table.columns.strip(), ""]
    return lines


def render_schema(state: ProjectState) -> str:
    """Render docs/SCHEMA.md.

    ``skip`` yields a one-line placeholder document. The assembler does
    not emit this file at all in that case, but the renderer still
    answers so previews of a skipped schema work.
    """
    database = state.database
    title = f"# Database Schema — {project_name(state)}"

    if database.approach == "skip":
        return finish([
            title,
            "",
            "_Database schema has been skipped. Define it later when ready._",
            "",
            footer(SCHEMA_PATH),
        ])

    body: list[str] = []

    if database.approach == "plain-english" and database.plain_english_description.strip():
        body += ["## Description", "", database.plain_english_description.strip(), ""]

    if database.approach == "paste-sql" and database.pasted_schema.strip():
        body += ["## SQL Schema", "", *_fenced("sql", database.pasted_schema)]

    if database.approach == "import-csv" and database.pasted_schema.strip():
        body += ["## Imported CSV", "", *_fenced("csv", database.pasted_schema)]

    if state.identity.existing_schema.strip():
        body += ["## Existing Schema (Imported)", "", *_fenced("sql", state.identity.existing_schema)]

    if database.tables:
        body += ["## Tables", ""]
        for table in database.tables:
            body += _table_section(table)

    lines = [title, "", "---", ""]
    lines += body or ["_No schema details provided._", ""]
    lines += ["---", "", footer(SCHEMA_PATH)]
    return finish(lines)
