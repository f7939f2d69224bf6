"""
folder.importer

Rename top-level folders from an edited ``old_name,new_name`` CSV.

Rows are applied one at a time in file order. A bad row is reported and
skipped; it never stops the rows after it, and nothing is rolled back.
"""

from __future__ import annotations

import csv
import os
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from common.base.errors import (
    CsvHeaderError,
    InvalidCsvError,
    InvalidDirectoryError,
    PlanConflictError,
)
from common.base.file_io import open_csv_reader_file
from common.base.fs import is_directory, path_exists, resolve_path
from common.base.logging import get_logger

from .plan import find_conflicts
from .types import (
    STATUS_FAILED,
    STATUS_INVALID,
    STATUS_RENAMED,
    STATUS_SKIPPED,
    ImportSummary,
    RenameRecord,
    RowOutcome,
    RowParseError,
)

log = get_logger(__name__)

IMPORT_HEADER = ("old_name", "new_name")
FIRST_DATA_LINE = 2

ParsedRow = Union[RenameRecord, RowParseError]


# ---------------------------------------------------------------------------
# CSV parsing
# ---------------------------------------------------------------------------

def _next_non_blank(reader: Iterator[List[str]]) -> List[str]:
    for row in reader:
        if row:
            return row
    return []


def read_header(reader: Iterator[List[str]], csv_path: Path) -> List[str]:
    """Read and validate the header row; columns past ``new_name`` are ignored."""
    try:
        header = _next_non_blank(reader)
    except csv.Error as exc:
        raise InvalidCsvError(f"Failed to read CSV headers {csv_path}: {exc}") from exc

    if tuple(header[: len(IMPORT_HEADER)]) != IMPORT_HEADER:
        raise CsvHeaderError(csv_path, header)
    return header


def iter_rows(reader: Iterator[List[str]]) -> Iterator[ParsedRow]:
    """
    Yield one parsed item per data row.

    Blank lines are not rows and do not advance the line counter. A row the
    reader rejects is yielded as ``RowParseError`` and parsing resumes on the
    next line.
    """
    index = 0
    while True:
        line = index + FIRST_DATA_LINE
        try:
            row = next(reader)
        except StopIteration:
            return
        except csv.Error as exc:
            index += 1
            yield RowParseError(line, str(exc))
            continue

        if not row:
            continue
        index += 1

        old_name = row[0].strip() if len(row) > 0 else ""
        new_name = row[1].strip() if len(row) > 1 else ""
        yield RenameRecord(line, old_name, new_name)


# ---------------------------------------------------------------------------
# Rename application
# ---------------------------------------------------------------------------

class _Namespace:
    """Existence checks against disk, replayed through the moves a dry run pretends to make."""

    def __init__(self) -> None:
        self._moves: List[Tuple[Path, Path]] = []

    def _on_disk(self, path: Path) -> Optional[Path]:
        """Map ``path`` back to where it currently lives on disk, or None if it was moved away."""
        for src, dst in reversed(self._moves):
            if path.is_relative_to(dst):
                path = src / path.relative_to(dst)
            elif path.is_relative_to(src):
                return None
        return path

    def is_dir(self, path: Path) -> bool:
        actual = self._on_disk(path)
        return actual is not None and is_directory(actual)

    def exists(self, path: Path) -> bool:
        actual = self._on_disk(path)
        return actual is not None and path_exists(actual)

    def record_move(self, src: Path, dst: Path) -> None:
        self._moves.append((src, dst))


def _outcome(record: RenameRecord, status: str, message: str) -> RowOutcome:
    return RowOutcome(record.line, record.old_name, record.new_name, status, message)


def apply_record(
    record: RenameRecord,
    directory: Path,
    namespace: _Namespace,
    *,
    dry_run: bool = False,
) -> RowOutcome:
    if not record.is_actionable:
        message = f"Skipping row {record.line}: empty old_name or new_name"
        log.warning(message)
        return _outcome(record, STATUS_SKIPPED, message)

    old_path = directory / record.old_name
    new_path = directory / record.new_name

    if not namespace.is_dir(old_path):
        message = f"Skipping row {record.line}: source folder does not exist: {old_path}"
        log.warning(message)
        return _outcome(record, STATUS_SKIPPED, message)

    if namespace.exists(new_path):
        message = f"Skipping row {record.line}: target already exists: {new_path}"
        log.warning(message)
        return _outcome(record, STATUS_SKIPPED, message)

    if dry_run:
        namespace.record_move(old_path, new_path)
        message = f"[DRY-RUN] Would rename: {record.old_name} -> {record.new_name}"
        log.info(message)
        return _outcome(record, STATUS_RENAMED, message)

    try:
        os.rename(old_path, new_path)
    except (OSError, ValueError) as exc:
        message = (
            f"Failed to rename row {record.line} "
            f"({record.old_name} -> {record.new_name}): {exc}"
        )
        log.error(message)
        return _outcome(record, STATUS_FAILED, message)

    message = f"Renamed: {record.old_name} -> {record.new_name}"
    log.info(message)
    return _outcome(record, STATUS_RENAMED, message)


def _parse_failure(item: RowParseError) -> RowOutcome:
    message = f"Failed to read CSV row {item.line}: {item.error}"
    log.error(message)
    return RowOutcome(item.line, "", "", STATUS_INVALID, message)


def import_renames(
    directory: Path | str,
    input_csv: Path | str,
    *,
    dry_run: bool = False,
    check_plan: bool = False,
) -> ImportSummary:
    """
    Apply the renames listed in ``input_csv`` to folders under ``directory``.

    Args:
        directory: Folder whose immediate children are renamed.
        input_csv: CSV with an ``old_name,new_name`` header.
        dry_run: Validate every row without touching the disk.
        check_plan: Reject the whole batch before any rename when rows
            conflict with each other (see ``folder.plan``).

    Returns:
        ImportSummary with one outcome per data row. Row failures never raise.

    Raises:
        InvalidDirectoryError: ``directory`` is not an existing directory.
        InvalidCsvError: The CSV is missing, unreadable, or its header is wrong.
        PlanConflictError: ``check_plan`` found conflicting rows.
    """
    resolved_dir = resolve_path(directory)
    if not is_directory(resolved_dir):
        raise InvalidDirectoryError(resolved_dir)

    resolved_csv = resolve_path(input_csv)
    if not resolved_csv.is_file():
        raise InvalidCsvError(f"Not a valid CSV file: {resolved_csv}", {"path": str(resolved_csv)})

    summary = ImportSummary(directory=resolved_dir, csv_path=resolved_csv, dry_run=dry_run)
    namespace = _Namespace()

    try:
        with open_csv_reader_file(resolved_csv) as handle:
            reader = csv.reader(handle, strict=True)
            read_header(reader, resolved_csv)
            log.debug(f"Header OK for {resolved_csv}")

            rows: Iterator[ParsedRow] = iter_rows(reader)
            if check_plan:
                buffered = list(rows)
                conflicts = find_conflicts([r for r in buffered if isinstance(r, RenameRecord)])
                if conflicts:
                    raise PlanConflictError(conflicts)
                rows = iter(buffered)

            for item in rows:
                if isinstance(item, RowParseError):
                    summary.add(_parse_failure(item))
                else:
                    summary.add(apply_record(item, resolved_dir, namespace, dry_run=dry_run))
    except OSError as exc:
        raise InvalidCsvError(f"Failed to read CSV {resolved_csv}: {exc}") from exc

    log.info(summary.format())
    return summary
