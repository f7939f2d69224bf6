from __future__ import annotations

import logging
from pathlib import Path

import pytest

from common.base.logging import BASE_LOGGER_NAME, get_logger, normalize_use_rich, setup_logging


def test_get_logger_namespaces_under_base() -> None:
    log = get_logger("folder.importer")
    assert log.name == f"{BASE_LOGGER_NAME}.folder.importer"
    assert get_logger().name == BASE_LOGGER_NAME


def test_console_split_between_stdout_and_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging("INFO", use_rich=False)
    log = get_logger("split")

    log.info("progress line")
    log.warning("skipped line")

    captured = capsys.readouterr()
    assert "progress line" in captured.out
    assert "skipped line" not in captured.out
    assert "skipped line" in captured.err
    assert "progress line" not in captured.err


def test_setup_logging_is_idempotent() -> None:
    first = setup_logging("DEBUG", use_rich=False)
    count = len(first.handlers)
    second = setup_logging("INFO", use_rich=False)

    assert first is second
    assert len(second.handlers) == count
    assert second.level == logging.INFO
    assert second.propagate is False


def test_file_logging_only_when_log_dir_given(tmp_path: Path) -> None:
    log = setup_logging("INFO", use_rich=False)
    assert log.log_file is None

    log_dir = tmp_path / "logs"
    log = setup_logging("INFO", use_rich=False, log_dir=log_dir, file_prefix="run")
    get_logger("file").info("written to disk")
    for handler in log.handlers:
        handler.flush()

    assert log.log_file is not None
    assert log.log_file.parent == log_dir
    assert log.log_file.name.startswith("run_")
    assert "written to disk" in log.log_file.read_text(encoding="utf-8")


def test_unknown_level_falls_back_to_info() -> None:
    log = setup_logging("chatty", use_rich=False)
    assert log.level == logging.INFO


@pytest.mark.parametrize(
    ("value", "expected"),
    [(True, True), ("yes", True), ("off", False), ("auto", None), (None, None), (3, None)],
)
def test_normalize_use_rich(value: object, expected: object) -> None:
    assert normalize_use_rich(value) is expected
