"""Command-line entry point for rename_tool.

Two commands share one dispatcher:

    rename_tool export <directory_path> [output_csv]
    rename_tool import <directory_path> <input_csv>

Installed as a ``console_scripts`` entry, with shell auto-completion via
``argcomplete`` once registered (``eval "$(register-python-argcomplete rename_tool)"``).
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Callable, Dict, Iterable, NoReturn, Optional

import argcomplete

from common.base.errors import RenameToolError
from common.base.logging import get_logger, normalize_use_rich, setup_logging
from common.shared.loader import load_task_config
from folder.exporter import DEFAULT_OUTPUT_CSV, export_folders
from folder.importer import import_renames

PROG = "rename_tool"
EXPORT_USAGE = f"Usage: {PROG} export <directory_path> [output_csv]"
IMPORT_USAGE = f"Usage: {PROG} import <directory_path> <input_csv>"

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

log = get_logger(__name__)


class UsageError(Exception):
    """Raised instead of argparse's own exit so bad invocations exit with status 1."""


class UsageParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def print_usage(message: Optional[str] = None) -> None:
    print(EXPORT_USAGE, file=sys.stderr)
    print(IMPORT_USAGE, file=sys.stderr)
    if message:
        print(f"{PROG}: error: {message}", file=sys.stderr)


# ----------------------------------------------------------------------
# PARSER
# ----------------------------------------------------------------------

def build_parser() -> UsageParser:
    parser = UsageParser(
        prog=PROG,
        description="Bulk-rename the top-level folders of a directory through an editable CSV.",
    )
    parser.add_argument("--config", "-c", help="Path to configuration YAML.")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging verbosity (default: config value or INFO).",
    )

    commands = parser.add_subparsers(dest="command", metavar="{export,import}")
    commands.required = True

    export = commands.add_parser("export", help="Write top-level folder names to a CSV.")
    export.add_argument("directory_path", help="Directory whose immediate subfolders are listed.")
    export.add_argument(
        "output_csv",
        nargs="?",
        help=f"CSV file to write (default: config value or ./{DEFAULT_OUTPUT_CSV}).",
    )
    export.set_defaults(handler=run_export, task="folder_export")

    imp = commands.add_parser("import", help="Rename folders from an old_name,new_name CSV.")
    imp.add_argument("directory_path", help="Directory containing the folders to rename.")
    imp.add_argument("input_csv", help="Edited CSV with old_name,new_name columns.")
    imp.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate every row and report what would happen without renaming.",
    )
    imp.add_argument(
        "--check-plan",
        action="store_true",
        help="Refuse to rename anything if rows conflict (duplicate or chained names).",
    )
    imp.set_defaults(handler=run_import, task="folder_import")

    return parser


# ----------------------------------------------------------------------
# COMMANDS
# ----------------------------------------------------------------------

def run_export(args: argparse.Namespace, cfg: Dict[str, Any]) -> int:
    output_csv = args.output_csv or cfg.get("output_csv") or DEFAULT_OUTPUT_CSV
    export_folders(args.directory_path, output_csv)
    return EXIT_OK


def run_import(args: argparse.Namespace, cfg: Dict[str, Any]) -> int:
    import_renames(
        args.directory_path,
        args.input_csv,
        dry_run=args.dry_run or bool(cfg.get("dry_run", False)),
        check_plan=args.check_plan or bool(cfg.get("check_plan", False)),
    )
    # Row-level failures are reported but do not affect the exit status.
    return EXIT_OK


def _configure_logging(args: argparse.Namespace, logging_cfg: Dict[str, Any]) -> None:
    setup_logging(
        level=args.log_level or logging_cfg.get("level"),
        use_rich=normalize_use_rich(logging_cfg.get("use_rich")),
        log_dir=logging_cfg.get("log_dir"),
        file_prefix=logging_cfg.get("file_prefix"),
    )


def _execute(args: argparse.Namespace) -> int:
    handler: Callable[[argparse.Namespace, Dict[str, Any]], int] = args.handler
    cfg = dict(load_task_config(args.task, args.config))
    logging_cfg = cfg.pop("__logging__", {}) or {}
    if logging_cfg:
        _configure_logging(args, logging_cfg)
    log.debug(f"Arguments: {args}")
    return handler(args, cfg)


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    try:
        args = parser.parse_args(list(argv) if argv is not None else None)
    except UsageError as exc:
        print_usage(str(exc))
        return EXIT_FAILURE

    _configure_logging(args, {})

    try:
        return _execute(args)
    except RenameToolError as exc:
        log.error(f"❌ {exc}")
        return EXIT_FAILURE
    except KeyboardInterrupt:
        log.warning("⚠️ Operation cancelled by user.")
        return EXIT_INTERRUPTED
    except Exception as exc:
        log.error(f"❌ Unexpected error: {exc}", exc_info=True)
        return EXIT_FAILURE


if __name__ == "__main__":
    raise SystemExit(main())
