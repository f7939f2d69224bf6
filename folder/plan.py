"""
folder.plan

Whole-batch consistency check for a rename CSV.

The importer applies rows greedily in file order. Running this check first
rejects batches whose outcome would depend on that order.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence

from .types import RenameRecord


@dataclass(frozen=True)
class PlanConflict:
    kind: str
    name: str
    lines: tuple[int, ...]

    def __str__(self) -> str:
        rows = ", ".join(str(line) for line in self.lines)
        return f"{self.kind}: '{self.name}' (rows {rows})"


def _duplicates(pairs: Iterable[tuple[str, int]], kind: str) -> List[PlanConflict]:
    seen: Dict[str, List[int]] = defaultdict(list)
    for name, line in pairs:
        seen[name].append(line)
    return [
        PlanConflict(kind, name, tuple(lines))
        for name, lines in seen.items()
        if len(lines) > 1
    ]


def find_conflicts(records: Sequence[RenameRecord]) -> List[PlanConflict]:
    """
    Return every conflict in ``records``.

    Only actionable records (both names present) are considered. Rows that
    rename a folder to its own name are ignored; they are harmless skips.
    """
    actionable = [r for r in records if r.is_actionable and r.old_name != r.new_name]

    conflicts: List[PlanConflict] = []
    conflicts.extend(_duplicates(((r.old_name, r.line) for r in actionable), "duplicate old_name"))
    conflicts.extend(_duplicates(((r.new_name, r.line) for r in actionable), "duplicate new_name"))

    sources: Dict[str, List[int]] = defaultdict(list)
    for record in actionable:
        sources[record.old_name].append(record.line)
    for record in actionable:
        if record.new_name in sources:
            lines = tuple(sorted({record.line, *sources[record.new_name]}))
            conflicts.append(PlanConflict("chained rename", record.new_name, lines))

    return conflicts
