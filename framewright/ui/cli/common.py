"""
Shared helpers for the CLI command groups — state loading and saving,
error output.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import NoReturn

import click

from framewright.core.models.project import ProjectState


def fail(message: str) -> NoReturn:
    """Print a red error line and exit 1."""
    click.secho(f"❌ {message}", fg="red")
    sys.exit(1)


def state_path(ctx: click.Context) -> Path:
    return ctx.obj["state_path"]


def load_project(ctx: click.Context, *, must_exist: bool = True) -> ProjectState:
    """Load the project state named by ``--state`` / settings."""
    from framewright.core.persistence.state_file import StateFileError, load_state

    path = state_path(ctx)
    if must_exist and not path.is_file():
        fail(f"No project state at {path}. Run 'framewright init' first.")
    try:
        return load_state(path)
    except StateFileError as e:
        fail(str(e))


def save_project(ctx: click.Context, state: ProjectState) -> None:
    from framewright.core.persistence.state_file import save_state

    try:
        save_state(state, state_path(ctx))
    except OSError as e:
        fail(f"Could not save {state_path(ctx)}: {e}")
