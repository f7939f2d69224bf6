from __future__ import annotations

from pathlib import Path
import textwrap

import pytest

from common.base.errors import ConfigError
from common.shared.loader import load_logging_config, load_task_config


def _write_config(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.write_text(content, encoding="utf-8")
    return path


def _wrap_task_config(
    task: str,
    body: str,
    logging_body: str | None = None,
) -> str:
    logging_block = (logging_body or "level: INFO").strip()
    parts: list[str] = []
    parts.append("logging:\n")
    parts.append(textwrap.indent(logging_block, "  "))
    parts.append("\ntasks:\n")
    parts.append(f"  {task}:\n")
    parts.append(textwrap.indent(body.strip(), "    "))
    parts.append("\n")
    return "".join(parts)


def test_load_task_config_without_file_uses_defaults() -> None:
    config = load_task_config("folder_import", None)
    assert config == {"__task__": "folder_import"}


def test_load_task_config_export(tmp_path: Path) -> None:
    cfg_path = _write_config(
        tmp_path,
        "export.yaml",
        _wrap_task_config("folder_export", "output_csv: '~/listing.csv'\n"),
    )

    config = load_task_config("folder_export", cfg_path)
    assert config["output_csv"] == str(Path("~/listing.csv").expanduser())
    assert config["__config_path__"] == str(cfg_path)
    assert config["__logging__"] == {"level": "INFO"}


def test_load_task_config_import_coerces_booleans(tmp_path: Path) -> None:
    cfg_path = _write_config(
        tmp_path,
        "import.yaml",
        _wrap_task_config("folder_import", "dry_run: 'yes'\ncheck_plan: off\n"),
    )

    config = load_task_config("folder_import", cfg_path)
    assert config["dry_run"] is True
    assert config["check_plan"] is False


def test_load_task_config_applies_aliases(tmp_path: Path) -> None:
    cfg_path = _write_config(
        tmp_path,
        "alias.yaml",
        _wrap_task_config("folder_export", "output: names.csv\n"),
    )

    config = load_task_config("folder_export", cfg_path)
    assert config["output_csv"] == "names.csv"


def test_task_logging_overrides_global(tmp_path: Path) -> None:
    body = "dry_run: true\nlogging:\n  level: DEBUG\n  log_dir: ./logs\n"
    cfg_path = _write_config(
        tmp_path,
        "override.yaml",
        _wrap_task_config("folder_import", body, logging_body="level: WARNING\nuse_rich: false"),
    )

    config = load_task_config("folder_import", cfg_path)
    assert config["__logging__"] == {"level": "DEBUG", "use_rich": False, "log_dir": "./logs"}


def test_missing_task_section_falls_back_to_defaults(tmp_path: Path) -> None:
    cfg_path = _write_config(
        tmp_path,
        "export_only.yaml",
        _wrap_task_config("folder_export", "output_csv: x.csv\n"),
    )

    config = load_task_config("folder_import", cfg_path)
    assert "dry_run" not in config
    assert config["__task__"] == "folder_import"


def test_unsupported_task_key_is_rejected(tmp_path: Path) -> None:
    cfg_path = _write_config(
        tmp_path,
        "bad.yaml",
        _wrap_task_config("folder_import", "recursive: true\n"),
    )

    with pytest.raises(ConfigError, match="unsupported keys for task 'folder_import': recursive"):
        load_task_config("folder_import", cfg_path)


def test_unknown_task_in_file_is_rejected(tmp_path: Path) -> None:
    cfg_path = _write_config(tmp_path, "tasks.yaml", "tasks:\n  folder_sync:\n    dry_run: true\n")

    with pytest.raises(ConfigError, match="Unknown task"):
        load_task_config("folder_import", cfg_path)


def test_unknown_task_name_is_rejected() -> None:
    with pytest.raises(ConfigError, match="Expected one of: folder_export, folder_import"):
        load_task_config("vid_rename", None)


def test_invalid_boolean_is_rejected(tmp_path: Path) -> None:
    cfg_path = _write_config(
        tmp_path,
        "bool.yaml",
        _wrap_task_config("folder_import", "dry_run: maybe\n"),
    )

    with pytest.raises(ConfigError, match="'dry_run' must be a boolean"):
        load_task_config("folder_import", cfg_path)


def test_unsupported_logging_key_is_rejected(tmp_path: Path) -> None:
    cfg_path = _write_config(
        tmp_path,
        "logging.yaml",
        _wrap_task_config("folder_export", "output_csv: x.csv\n", logging_body="colour: loud"),
    )

    with pytest.raises(ConfigError, match="unsupported keys"):
        load_task_config("folder_export", cfg_path)


def test_missing_file_and_bad_yaml(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_task_config("folder_export", tmp_path / "absent.yaml")

    broken = _write_config(tmp_path, "broken.yaml", "tasks: [unclosed\n")
    with pytest.raises(ConfigError, match="not valid YAML"):
        load_task_config("folder_export", broken)

    scalar = _write_config(tmp_path, "scalar.yaml", "just a string\n")
    with pytest.raises(ConfigError, match="must be a mapping"):
        load_task_config("folder_export", scalar)


def test_load_logging_config(tmp_path: Path) -> None:
    cfg_path = _write_config(
        tmp_path,
        "log.yaml",
        "logging:\n  level: ERROR\n  file_prefix: batch\n",
    )
    assert load_logging_config(cfg_path) == {"level": "ERROR", "file_prefix": "batch"}
    assert load_logging_config(None) == {}
