"""Framework export — write the generated files to disk or into a zip archive."""

from __future__ import annotations

import logging
import zipfile
from datetime import datetime, timezone
from pathlib import Path

from framewright.core.models.template import GeneratedFile

logger = logging.getLogger(__name__)


def folder_name(project_slug: str) -> str:
    """Top-level folder inside the archive: ``<slug>-framework``."""
    return f"{project_slug or 'project'}-framework"


def archive_name(project_slug: str) -> str:
    return f"{folder_name(project_slug)}.zip"


def _safe_relative(path: str) -> bool:
    parts = Path(path).parts
    return bool(parts) and not Path(path).is_absolute() and ".." not in parts


# ═══════════════════════════════════════════════════════════════════
#  Directory export
# ═══════════════════════════════════════════════════════════════════


def write_files(files: list[GeneratedFile], out_dir: Path) -> dict:
    """Write every generated file under ``out_dir``, creating folders.

    Existing files are overwritten.

    Returns:
        {"success": True, "out_dir": str, "written": [path, ...]}
        or {"error": str}
    """
    bad = [f.path for f in files if not _safe_relative(f.path)]
    if bad:
        return {"error": f"Refusing to write outside the output folder: {', '.join(bad)}"}

    written: list[str] = []
    for f in files:
        target = out_dir / f.path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(f.content, encoding="utf-8")
        written.append(f.path)

    logger.info("Wrote %d files to %s", len(written), out_dir)
    return {"success": True, "out_dir": str(out_dir), "written": written}


# ═══════════════════════════════════════════════════════════════════
#  Archive export
# ═══════════════════════════════════════════════════════════════════


def create_archive(
    files: list[GeneratedFile],
    project_slug: str,
    out_path: Path | None = None,
) -> dict:
    """Create a zip holding every file under ``<slug>-framework/``.

    ``out_path`` defaults to ``archive_name(project_slug)`` in the
    current directory; a directory ``out_path`` gets that name inside it.

    Returns:
        {"success": True, "filename", "full_path", "size_bytes", "files"}
        or {"error": str}
    """
    if not files:
        return {"error": "Nothing to export"}

    root = folder_name(project_slug)
    if out_path is None:
        out_path = Path(archive_name(project_slug))
    elif out_path.is_dir():
        out_path = out_path / archive_name(project_slug)

    out_path.parent.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(timezone.utc).timetuple()[:6]

    try:
        with zipfile.ZipFile(out_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for f in files:
                info = zipfile.ZipInfo(f"{root}/{f.path}", date_time=timestamp)
                info.compress_type = zipfile.ZIP_DEFLATED
                zf.writestr(info, f.content.encode("utf-8"))
    except OSError as e:
        logger.error("Archive creation failed: %s", e)
        return {"error": f"Could not write archive: {e}"}

    size = out_path.stat().st_size
    logger.info("Archive created: %s (%d files, %d bytes)", out_path, len(files), size)
    return {
        "success": True,
        "filename": out_path.name,
        "full_path": str(out_path),
        "size_bytes": size,
        "files": [f"{root}/{f.path}" for f in files],
    }
