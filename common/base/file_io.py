"""Utility helpers for performing file I/O with consistent defaults."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional

import yaml


DEFAULT_ENCODING = "utf-8"
# Reading accepts the BOM spreadsheet tools prepend to exported CSVs.
CSV_READ_ENCODING = "utf-8-sig"


def _to_path(path: Path | str) -> Path:
    return Path(path).expanduser()


@contextmanager
def open_file(
    path: Path | str,
    mode: str = "r",
    *,
    encoding: str = DEFAULT_ENCODING,
    newline: Optional[str] = None,
    errors: Optional[str] = None,
) -> Iterator[Any]:
    path_obj = _to_path(path)
    kwargs: dict[str, Any] = {}
    is_binary = "b" in mode
    if is_binary:
        if newline is not None:
            raise ValueError("newline is not supported in binary mode")
    else:
        kwargs["encoding"] = encoding
        kwargs["newline"] = newline
        kwargs["errors"] = errors
    with open(path_obj, mode, **kwargs) as handle:
        yield handle


@contextmanager
def open_csv_reader_file(path: Path | str) -> Iterator[Any]:
    """Open a CSV for reading; undecodable bytes become U+FFFD instead of raising."""
    with open_file(path, "r", encoding=CSV_READ_ENCODING, newline="", errors="replace") as handle:
        yield handle


@contextmanager
def open_csv_writer_file(path: Path | str) -> Iterator[Any]:
    with open_file(path, "w", newline="") as handle:
        yield handle


def read_yaml(path: Path | str) -> Mapping[str, Any] | list[Any]:
    with open_file(path, "r") as handle:
        data = yaml.safe_load(handle)
    return data if data is not None else {}

