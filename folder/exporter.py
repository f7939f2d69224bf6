"""
folder.exporter

Write the names of the top-level subdirectories of a directory to a CSV
(single ``old_name`` column) so they can be edited and re-imported.
"""

from __future__ import annotations

import csv
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from common.base.errors import InvalidDirectoryError, OutputWriteError
from common.base.file_io import open_csv_writer_file
from common.base.fs import display_name, is_directory, resolve_path
from common.base.logging import get_logger

log = get_logger(__name__)

DEFAULT_OUTPUT_CSV = "folders.csv"
EXPORT_HEADER = ["old_name"]


@dataclass(frozen=True)
class ExportResult:
    output_path: Path
    folder_count: int


def iter_folder_names(entries: Iterator[os.DirEntry]) -> Iterator[str]:
    """Yield the names of entries that are directories, in iteration order."""
    try:
        for entry in entries:
            try:
                if not entry.is_dir():
                    continue
            except OSError as exc:
                log.debug(f"Skipping unreadable entry {entry.path}: {exc}")
                continue
            if entry.name:
                yield display_name(entry.name)
    except OSError as exc:
        log.debug(f"Directory listing ended early: {exc}")


def export_folders(
    directory: Path | str,
    output_csv: Optional[Path | str] = None,
) -> ExportResult:
    """
    Export the immediate subdirectory names of ``directory`` to ``output_csv``.

    The directory is validated before the output file is created, so a bad
    directory never leaves an empty CSV behind.

    Raises:
        InvalidDirectoryError: ``directory`` is missing, not a directory, or unreadable.
        OutputWriteError: The CSV could not be created or written.
    """
    resolved_dir = resolve_path(directory)
    output_path = resolve_path(output_csv or DEFAULT_OUTPUT_CSV)

    if not is_directory(resolved_dir):
        raise InvalidDirectoryError(resolved_dir)

    try:
        scanner = os.scandir(resolved_dir)
    except OSError as exc:
        raise InvalidDirectoryError(resolved_dir, f"Failed to read directory ({exc})") from exc

    count = 0
    with scanner:
        try:
            with open_csv_writer_file(output_path) as handle:
                writer = csv.writer(handle, lineterminator="\n")
                writer.writerow(EXPORT_HEADER)
                for name in iter_folder_names(scanner):
                    writer.writerow([name])
                    count += 1
                    log.debug(f"Listed folder: {name}")
                handle.flush()
        except OSError as exc:
            raise OutputWriteError(
                f"Failed to write CSV {output_path}: {exc}",
                {"path": str(output_path)},
            ) from exc

    log.info(f"✅ Wrote CSV: {output_path} ({count} folder(s))")
    return ExportResult(output_path=output_path, folder_count=count)
