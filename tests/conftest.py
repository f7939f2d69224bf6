from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pytest

from common.base.logging import reset_logging


@pytest.fixture(autouse=True)
def _reset_tool_logger() -> Iterable[None]:
    yield
    reset_logging()


@pytest.fixture
def make_dirs(tmp_path: Path):
    def _make(*names: str, base: Path | None = None) -> Path:
        root = base or tmp_path / "root"
        root.mkdir(parents=True, exist_ok=True)
        for name in names:
            (root / name).mkdir()
        return root

    return _make


@pytest.fixture
def write_csv(tmp_path: Path):
    def _write(content: str, name: str = "renames.csv") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8", newline="")
        return path

    return _write
