"""
State file persistence — atomic read/write for ProjectState.

State is stored in .framewright/project.json by default; a ``.yml`` or
``.yaml`` path stores YAML instead. Writes are atomic (write to temp
file, then rename) so a crash mid-write never leaves a half-written
state behind.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

import yaml
from pydantic import ValidationError

from framewright.core.models.project import ProjectState

logger = logging.getLogger(__name__)

# Default state file path (relative to project root)
DEFAULT_STATE_DIR = ".framewright"
DEFAULT_STATE_FILE = "project.json"

_YAML_SUFFIXES = (".yml", ".yaml")


class StateFileError(Exception):
    """Raised when a state file exists but cannot be read as a project."""


def default_state_path(project_root: Path) -> Path:
    """Get the default state file path for a project."""
    return project_root / DEFAULT_STATE_DIR / DEFAULT_STATE_FILE


def _is_yaml(path: Path) -> bool:
    return path.suffix.lower() in _YAML_SUFFIXES


def load_state(path: Path) -> ProjectState:
    """Load project state from a JSON or YAML file.

    Returns:
        ProjectState model. If the file doesn't exist, returns a fresh state.

    Raises:
        StateFileError: The file exists but is corrupt or not a project.
    """
    if not path.is_file():
        logger.info("No state file at %s — starting fresh", path)
        return ProjectState()

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise StateFileError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw) if _is_yaml(path) else json.loads(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise StateFileError(f"Corrupt state file {path}: {e}") from e

    if not isinstance(data, dict):
        raise StateFileError(
            f"Expected a mapping in {path}, got {type(data).__name__}"
        )

    try:
        state = ProjectState.model_validate(data)
    except ValidationError as e:
        raise StateFileError(f"Invalid project state in {path}: {e}") from e

    logger.debug("Loaded state from %s (updated_at=%s)", path, state.meta.updated_at)
    return state


def save_state(state: ProjectState, path: Path) -> None:
    """Save project state (atomic write), JSON or YAML by file suffix.

    Uses write-to-temp-then-rename to prevent corruption.
    """
    state.touch()

    # Ensure parent directory exists
    path.parent.mkdir(parents=True, exist_ok=True)

    data = state.model_dump(mode="json")
    if _is_yaml(path):
        content = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    else:
        content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    # Atomic write: temp file in same directory, then rename
    try:
        fd, tmp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=".state_",
            suffix=".tmp",
        )
        os.close(fd)
        tmp = Path(tmp_path)
        try:
            tmp.write_text(content, encoding="utf-8")
            tmp.replace(path)
            logger.debug("State saved to %s", path)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
    except Exception as e:
        logger.error("Failed to save state to %s: %s", path, e)
        raise
