"""
common.base.logging

Typed logging for rename_tool.

Features:
 - Custom ToolLogger subclass with Rich detection flag
 - Unified setup for Rich + standard logging
 - stdout for progress, stderr for warnings and errors
 - Optional file logging (per run)
 - Colorized, emoji-enhanced level output
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, cast

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

BASE_LOGGER_NAME = "rename_tool"

# ----------------------------------------------------------------------
# LEVEL STYLE METADATA
# ----------------------------------------------------------------------

ANSI_RESET = "\033[0m"

LEVEL_STYLES: Dict[int, Dict[str, str]] = {
    logging.DEBUG: {"emoji": "🐛", "ansi": "\033[36m", "rich": "bright_cyan"},
    logging.INFO: {"emoji": "ℹ️", "ansi": "\033[32m", "rich": "green"},
    logging.WARNING: {"emoji": "⚠️", "ansi": "\033[33m", "rich": "yellow"},
    logging.ERROR: {"emoji": "❌", "ansi": "\033[31m", "rich": "red"},
    logging.CRITICAL: {"emoji": "💥", "ansi": "\033[95m", "rich": "bold magenta"},
}
DEFAULT_STYLE = LEVEL_STYLES[logging.INFO]


def _level_style(record: logging.LogRecord) -> Dict[str, str]:
    return LEVEL_STYLES.get(record.levelno, DEFAULT_STYLE)


# ----------------------------------------------------------------------
# FILTERS & FORMATTERS
# ----------------------------------------------------------------------

class BelowLevelFilter(logging.Filter):
    """Pass only records strictly below ``level`` (stdout side of the split)."""

    def __init__(self, level: int) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


class ColorEmojiFormatter(logging.Formatter):
    """Console formatter that injects colored level names and emojis."""

    def format(self, record: logging.LogRecord) -> str:
        style = _level_style(record)
        emoji = style.get("emoji", "")
        ansi_color = style.get("ansi", "")

        display = f"{emoji} {record.levelname}" if emoji else record.levelname
        if ansi_color:
            display = f"{ansi_color}{display}{ANSI_RESET}"

        record.level_display = display  # type: ignore[attr-defined]
        try:
            return super().format(record)
        finally:
            delattr(record, "level_display")


class EmojiFormatter(logging.Formatter):
    """File formatter that prefixes log lines with the level emoji."""

    def format(self, record: logging.LogRecord) -> str:
        record.level_emoji = _level_style(record).get("emoji", "")  # type: ignore[attr-defined]
        return super().format(record)


class ToolRichHandler(RichHandler):
    """Rich console handler with emoji-enhanced level column."""

    def get_level_text(self, record: logging.LogRecord) -> Text:
        style = _level_style(record)
        style_name = style.get("rich", "")

        text = Text()
        text.append(f"{style.get('emoji', '')} ", style=style_name or None)
        text.append(record.levelname, style=style_name or None)
        return text


# ----------------------------------------------------------------------
# LOGGER CLASS
# ----------------------------------------------------------------------

class ToolLogger(logging.Logger):
    """Logger with Rich support flag and optional log file."""

    rich_enabled: bool = False
    log_file: Optional[Path] = None


# ----------------------------------------------------------------------
# SETTINGS NORMALIZATION
# ----------------------------------------------------------------------

def _normalize_level(value: Any) -> str:
    if isinstance(value, str):
        candidate = value.strip().upper()
        if candidate in logging._nameToLevel:  # type: ignore[attr-defined]
            return candidate
    elif isinstance(value, int) and not isinstance(value, bool):
        label = logging.getLevelName(value)
        if isinstance(label, str) and not label.startswith("Level "):
            return label
    return "INFO"


def normalize_use_rich(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"auto", "default", ""}:
            return None
        if lowered in {"true", "yes", "1", "on"}:
            return True
        if lowered in {"false", "no", "0", "off"}:
            return False
    return None


def _resolve_use_rich(value: Optional[bool]) -> bool:
    if value is None:
        return sys.stdout.isatty()
    return bool(value)


def _build_console_handlers(use_rich: bool) -> list[logging.Handler]:
    if use_rich:
        options: Dict[str, Any] = dict(
            rich_tracebacks=True,
            markup=False,
            show_time=True,
            show_level=True,
            show_path=False,
            log_time_format="[%X]",
        )
        out_handler: logging.Handler = ToolRichHandler(console=Console(), **options)
        err_handler: logging.Handler = ToolRichHandler(console=Console(stderr=True), **options)
    else:
        formatter = ColorEmojiFormatter(
            fmt="%(asctime)s %(level_display)s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
        out_handler = logging.StreamHandler(sys.stdout)
        err_handler = logging.StreamHandler(sys.stderr)
        out_handler.setFormatter(formatter)
        err_handler.setFormatter(formatter)

    out_handler.setLevel(logging.NOTSET)
    out_handler.addFilter(BelowLevelFilter(logging.WARNING))
    err_handler.setLevel(logging.WARNING)
    return [out_handler, err_handler]


# ----------------------------------------------------------------------
# BASE LOGGER SETUP
# ----------------------------------------------------------------------

def setup_logging(
    level: str | int | None = None,
    use_rich: Optional[bool] = None,
    log_dir: Optional[Path | str] = None,
    file_prefix: Optional[str] = None,
) -> ToolLogger:
    """
    Configure and return the global rename_tool logger.

    Args:
        level: Desired logging level (INFO if unset or unknown).
        use_rich: Force-enable or disable the Rich handler. None enables it
            only when stdout is a terminal.
        log_dir: Directory for a per-run log file. No file is written when unset.
        file_prefix: Prefix for generated log filenames.
    """
    resolved_level = _normalize_level(level)
    resolved_use_rich = _resolve_use_rich(use_rich)

    logging.setLoggerClass(ToolLogger)
    logger = cast(ToolLogger, logging.getLogger(BASE_LOGGER_NAME))
    # Rebuild from scratch so repeated setup calls do not stack handlers.
    reset_logging()
    logger.setLevel(resolved_level)

    for handler in _build_console_handlers(resolved_use_rich):
        logger.addHandler(handler)
    logger.rich_enabled = resolved_use_rich

    if log_dir:
        resolved_log_dir = Path(log_dir).expanduser()
        resolved_log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        log_file_path = resolved_log_dir / f"{file_prefix or BASE_LOGGER_NAME}_{timestamp}.log"

        file_handler = logging.FileHandler(log_file_path, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            EmojiFormatter(
                fmt="%(asctime)s %(level_emoji)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        file_handler.setLevel(logging.NOTSET)
        logger.addHandler(file_handler)
        logger.log_file = log_file_path

    logger.propagate = False
    logger._initialized = True  # type: ignore[attr-defined]
    logger.debug(
        "Logger initialized at level %s (Rich=%s)",
        resolved_level,
        "ON" if logger.rich_enabled else "OFF",
    )
    if logger.log_file:
        logger.debug("📄 Log file created at: %s", logger.log_file.resolve())

    return logger


def reset_logging() -> None:
    """Detach every handler and return the base logger to its unconfigured state."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    logger._initialized = False  # type: ignore[attr-defined]
    logger.log_file = None  # type: ignore[attr-defined]
    logger.rich_enabled = False  # type: ignore[attr-defined]


# ----------------------------------------------------------------------
# UTILITY ACCESSOR
# ----------------------------------------------------------------------

def get_logger(name: str = BASE_LOGGER_NAME) -> ToolLogger:
    """Retrieve a namespaced logger (configured later via setup_logging)."""

    logging.setLoggerClass(ToolLogger)
    base = cast(ToolLogger, logging.getLogger(BASE_LOGGER_NAME))

    if not getattr(base, "_initialized", False) and not base.handlers:
        base.addHandler(logging.NullHandler())

    if not name or name == BASE_LOGGER_NAME:
        return base

    return cast(ToolLogger, base.getChild(name))
