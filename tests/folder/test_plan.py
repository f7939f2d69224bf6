from __future__ import annotations

from folder.plan import PlanConflict, find_conflicts
from folder.types import RenameRecord


def _records(*pairs: tuple[str, str]) -> list[RenameRecord]:
    return [RenameRecord(line, old, new) for line, (old, new) in enumerate(pairs, start=2)]


def test_consistent_batch_has_no_conflicts() -> None:
    assert find_conflicts(_records(("a", "A"), ("b", "B"), ("c", "C"))) == []


def test_duplicate_targets_are_reported() -> None:
    conflicts = find_conflicts(_records(("a", "x"), ("b", "y"), ("c", "x")))
    assert conflicts == [PlanConflict("duplicate new_name", "x", (2, 4))]


def test_duplicate_sources_are_reported() -> None:
    conflicts = find_conflicts(_records(("a", "x"), ("a", "y")))
    assert conflicts == [PlanConflict("duplicate old_name", "a", (2, 3))]


def test_chained_renames_are_reported() -> None:
    conflicts = find_conflicts(_records(("a", "b"), ("b", "c")))
    assert conflicts == [PlanConflict("chained rename", "b", (2, 3))]


def test_swap_reports_both_links() -> None:
    conflicts = find_conflicts(_records(("a", "b"), ("b", "a")))
    assert {str(c) for c in conflicts} == {
        "chained rename: 'b' (rows 2, 3)",
        "chained rename: 'a' (rows 2, 3)",
    }


def test_identity_and_incomplete_rows_are_ignored() -> None:
    records = _records(("a", "a"), ("", "x"), ("b", ""), ("c", "x"))
    assert find_conflicts(records) == []
