"""Record and result types shared by the folder import workflow."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

STATUS_RENAMED = "renamed"
STATUS_SKIPPED = "skipped"
STATUS_FAILED = "failed"
STATUS_INVALID = "invalid"

STATUS_ORDER = (STATUS_RENAMED, STATUS_SKIPPED, STATUS_FAILED, STATUS_INVALID)


@dataclass(frozen=True)
class RenameRecord:
    """One parsed data row. ``line`` is the 1-indexed CSV line (header is line 1)."""

    line: int
    old_name: str
    new_name: str

    @property
    def is_actionable(self) -> bool:
        return bool(self.old_name) and bool(self.new_name)


@dataclass(frozen=True)
class RowParseError:
    """A data row the CSV reader could not parse."""

    line: int
    error: str


@dataclass(frozen=True)
class RowOutcome:
    line: int
    old_name: str
    new_name: str
    status: str
    message: str


@dataclass
class ImportSummary:
    directory: Path
    csv_path: Path
    dry_run: bool = False
    outcomes: List[RowOutcome] = field(default_factory=list)

    def add(self, outcome: RowOutcome) -> None:
        self.outcomes.append(outcome)

    def with_status(self, status: str) -> List[RowOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def counts(self) -> Dict[str, int]:
        totals = {status: 0 for status in STATUS_ORDER}
        for outcome in self.outcomes:
            totals[outcome.status] = totals.get(outcome.status, 0) + 1
        return totals

    def format(self) -> str:
        title = "DRY-RUN IMPORT SUMMARY" if self.dry_run else "IMPORT SUMMARY"
        lines = [f"===== {title} ====="]
        for status, total in self.counts.items():
            lines.append(f"{status.capitalize():<8}: {total}")
        lines.append("=" * (len(title) + 12))
        return "\n".join(lines)
