"""Low-level shared utilities for rename_tool."""

from .logging import get_logger, setup_logging, reset_logging, ToolLogger
from .fs import resolve_path

__all__ = [
    "get_logger",
    "setup_logging",
    "reset_logging",
    "ToolLogger",
    "resolve_path",
]
