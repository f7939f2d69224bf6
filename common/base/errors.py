"""Fatal error types raised by rename_tool commands.

Library code raises these; only the command-line layer turns them into exit
codes. Row-level import problems are never raised, they are reported and the
batch continues.
"""

from __future__ import annotations

from typing import Any


class RenameToolError(Exception):
    """Base exception for conditions that abort a whole command."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = details or {}


class WorkingDirectoryError(RenameToolError):
    """The process working directory could not be determined."""


class InvalidDirectoryError(RenameToolError):
    """The target directory is missing, not a directory, or unreadable."""

    def __init__(self, path: Any, reason: str = "Not a valid directory") -> None:
        super().__init__(f"{reason}: {path}", {"path": str(path)})
        self.path = path


class InvalidCsvError(RenameToolError):
    """The input CSV is missing, unreadable, or has no parsable header."""


class CsvHeaderError(InvalidCsvError):
    """The input CSV header is not ``old_name,new_name``."""

    def __init__(self, path: Any, found: list[str] | None = None) -> None:
        super().__init__(
            f"Invalid CSV headers in {path}. Expected: old_name,new_name",
            {"path": str(path), "found": list(found or [])},
        )
        self.path = path
        self.found = list(found or [])


class OutputWriteError(RenameToolError):
    """The export CSV could not be created, written, or flushed."""


class PlanConflictError(RenameToolError):
    """The rename batch is not internally consistent."""

    def __init__(self, conflicts: list[Any]) -> None:
        lines = "\n".join(f"  - {conflict}" for conflict in conflicts)
        super().__init__(
            f"Rename plan has {len(conflicts)} conflict(s); nothing was renamed:\n{lines}",
            {"conflicts": [str(conflict) for conflict in conflicts]},
        )
        self.conflicts = list(conflicts)


class ConfigError(RenameToolError):
    """The YAML configuration file is missing or invalid."""


__all__ = [
    "RenameToolError",
    "WorkingDirectoryError",
    "InvalidDirectoryError",
    "InvalidCsvError",
    "CsvHeaderError",
    "OutputWriteError",
    "PlanConflictError",
    "ConfigError",
]
