"""
Settings loader — reads framewright.yml into a Settings model.

The file is optional: with no file anywhere above the working
directory, every setting takes its default. When a file exists it
must be a YAML mapping that validates against ``Settings``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from framewright.core.persistence.state_file import DEFAULT_STATE_DIR, DEFAULT_STATE_FILE

logger = logging.getLogger(__name__)

# Default config filename
SETTINGS_FILE = "framewright.yml"


class ConfigError(Exception):
    """Raised when framewright.yml is unreadable or invalid."""


class Settings(BaseModel):
    """Tool settings. Relative paths resolve against ``root``."""

    model_config = ConfigDict(extra="forbid")

    state_file: str = f"{DEFAULT_STATE_DIR}/{DEFAULT_STATE_FILE}"
    output_dir: str = "framework"
    archive_root: str = ""
    word_warning: int = 2500
    word_danger: int = 3000

    # Directory holding framewright.yml (or cwd when there is none)
    root: Path = Path(".")

    @model_validator(mode="after")
    def _thresholds_ordered(self) -> Settings:
        if self.word_warning > self.word_danger:
            raise ValueError(
                f"word_warning ({self.word_warning}) must not exceed "
                f"word_danger ({self.word_danger})"
            )
        return self

    def state_path(self) -> Path:
        return self.root / self.state_file

    def output_path(self) -> Path:
        return self.root / self.output_dir


def find_settings_file(start_dir: Path | None = None) -> Path | None:
    """Search for framewright.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to framewright.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / SETTINGS_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(path: Path | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Explicit path to framewright.yml. If None, searches upward
            and falls back to defaults when nothing is found.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    explicit = path is not None
    if path is None:
        path = find_settings_file()

    if path is None:
        logger.debug("No %s found, using defaults", SETTINGS_FILE)
        return Settings(root=Path.cwd())

    if not path.is_file():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        return Settings(root=Path.cwd())

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = Settings.model_validate({**data, "root": path.parent.resolve()})
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e

    logger.info("Loaded settings from %s", path)
    return settings
