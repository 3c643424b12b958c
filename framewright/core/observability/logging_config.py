"""
Logging setup for the framewright CLI.

``setup_logging`` runs once from the root click group. Console output
goes to stderr so generated documents on stdout stay clean; an optional
log file (``FRAMEWRIGHT_LOG_FILE``) always gets timestamps and line numbers.
"""

from __future__ import annotations

import logging
import os
import sys

_DETAILED = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"

# Console format by level; anything above INFO prints the bare message
_CONSOLE_FORMATS = {
    logging.DEBUG: (_DETAILED, "%H:%M:%S"),
    logging.INFO: ("%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
}


def _level(name: str | None, default: int = logging.WARNING) -> int:
    value = logging.getLevelName(name.upper()) if name else default
    return value if isinstance(value, int) else default


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Replace the root logger's handlers with a stderr handler and an optional file."""
    console_level = _level(level)
    if console_level > logging.INFO:
        fmt, datefmt = "%(message)s", None
    else:
        fmt, datefmt = _CONSOLE_FORMATS[logging.DEBUG if console_level <= logging.DEBUG else logging.INFO]

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root.setLevel(console_level)

    if log_file:
        file_level = _level(log_file_level, console_level)
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_DETAILED, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(handler)
        root.setLevel(min(console_level, file_level))


def level_from_flags(*, debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Console level: --debug, --verbose, --quiet, then FRAMEWRIGHT_LOG_LEVEL, then WARNING."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get("FRAMEWRIGHT_LOG_LEVEL", "WARNING")
