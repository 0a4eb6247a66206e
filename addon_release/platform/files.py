"""Filesystem helpers."""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path

from addon_release.core.result import Err, Ok, Result

__all__ = ["atomic_write_text", "copy_directory", "make_temp_dir", "sorted_file_names"]


def atomic_write_text(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Write text to path atomically using temp file + replace."""
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.",
        suffix=".tmp",
        dir=str(path.parent),
    )
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink(missing_ok=True)


def copy_directory(source: Path, destination: Path) -> Result[None, str]:
    """Recursively copy source into destination, merging with existing content.

    A failure part-way leaves whatever was already copied in place.
    """
    if not source.is_dir():
        return Err(f"source directory does not exist: {source}")
    try:
        shutil.copytree(source, destination, dirs_exist_ok=True)
    except shutil.Error as e:
        return Err(f"copy failed: {e}")
    except OSError as e:
        return Err(str(e))
    return Ok(None)


def make_temp_dir(prefix: str) -> Path:
    """Create a process-unique temporary directory."""
    return Path(tempfile.mkdtemp(prefix=prefix))


def sorted_file_names(directory: Path) -> Result[list[str], str]:
    """List the regular files of a directory, sorted by name (plain string order)."""
    try:
        names = [p.name for p in directory.iterdir() if p.is_file()]
    except FileNotFoundError:
        return Err(f"directory not found: {directory}")
    except NotADirectoryError:
        return Err(f"not a directory: {directory}")
    except PermissionError:
        return Err(f"permission denied: {directory}")
    return Ok(sorted(names))
