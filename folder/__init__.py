"""Folder rename round-trip: export folder names to CSV, import edited names."""

from .exporter import export_folders  # noqa: F401
from .importer import import_renames  # noqa: F401
from .plan import find_conflicts  # noqa: F401

__all__ = ["export_folders", "import_renames", "find_conflicts"]
