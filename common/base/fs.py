"""Filesystem helper utilities shared across common modules."""

from __future__ import annotations

import os
from pathlib import Path

from .errors import WorkingDirectoryError


def resolve_path(path: Path | str) -> Path:
    """
    Return ``path`` as an absolute path.

    Absolute input is returned unchanged. Relative input is joined onto the
    current working directory without collapsing ``..`` segments.

    Raises:
        WorkingDirectoryError: If the current working directory is unavailable.
    """
    candidate = Path(path)
    if candidate.is_absolute():
        return candidate

    try:
        cwd = os.getcwd()
    except OSError as exc:
        raise WorkingDirectoryError(f"Failed to get current directory: {exc}") from exc
    return Path(cwd) / candidate


def is_directory(path: Path | str) -> bool:
    try:
        return Path(path).is_dir()
    except (OSError, ValueError):
        return False


def path_exists(path: Path | str) -> bool:
    """True for any existing entry, including dangling symlinks."""
    return os.path.lexists(path)


def display_name(name: str) -> str:
    """Convert a filesystem name into text that is safe to write as UTF-8."""
    try:
        name.encode("utf-8")
        return name
    except UnicodeEncodeError:
        raw = os.fsencode(name)
        return raw.decode("utf-8", errors="replace")
