"""
Shared configuration loading and validation helpers.

Provides:
 - `load_config`: basic YAML loader
 - `load_logging_config`: the top-level ``logging`` section
 - `load_task_config`: validated configuration for a given task
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, Mapping

import yaml

from common.base.errors import ConfigError
from common.base.file_io import read_yaml


ConfigDict = Dict[str, Any]

LOGGING_SECTION_KEY = "logging"
TASKS_SECTION_KEY = "tasks"

TASK_SCHEMAS: Dict[str, Dict[str, Iterable[str]]] = {
    "folder_export": {
        "required": [],
        "optional": ["output_csv"],
    },
    "folder_import": {
        "required": [],
        "optional": ["dry_run", "check_plan"],
    },
}

FIELD_ALIASES = {
    "output": "output_csv",
    "csv": "output_csv",
}

SINGLE_PATH_FIELDS = {"output_csv"}
BOOLEAN_FIELDS = {"dry_run", "check_plan"}
LOGGING_ALLOWED_KEYS = {"level", "use_rich", "log_dir", "file_prefix"}

YES_VALUES = {"1", "true", "yes", "y", "on"}
NO_VALUES = {"0", "false", "no", "n", "off"}


def load_config(path: str | Path | None) -> Mapping[str, Any] | Dict[str, Any]:
    if not path:
        return {}

    cfg_path = Path(path).expanduser()
    if not cfg_path.exists():
        raise ConfigError(f"Configuration file not found: {cfg_path}")

    try:
        data = read_yaml(cfg_path)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Configuration file is not valid YAML: {cfg_path}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ConfigError(f"Configuration root must be a mapping in {cfg_path}")

    return data


def load_logging_config(config_path: str | Path | None = None) -> Dict[str, Any]:
    root = load_config(config_path)
    return _extract_logging_settings(root, config_path)


def load_task_config(task: str, config_path: str | Path | None = None) -> ConfigDict:
    """
    Load and validate the section for ``task``.

    Without a config path every task resolves to an empty mapping, so callers
    fall back to their built-in defaults. The merged logging section is
    attached under ``__logging__``.
    """
    if task not in TASK_SCHEMAS:
        raise ConfigError(f"Unknown task '{task}'. Expected one of: {', '.join(sorted(TASK_SCHEMAS))}")

    root_config = dict(load_config(config_path))
    task_config_raw = _extract_task_config(root_config, task, config_path)

    task_logging_override: Dict[str, Any] = {}
    if "logging" in task_config_raw:
        logging_payload = task_config_raw.pop("logging")
        if not isinstance(logging_payload, Mapping):
            raise ConfigError(f"Task '{task}' logging section must be a mapping in {config_path}")
        task_logging_override = _validate_logging_keys(dict(logging_payload), config_path)

    config = _apply_aliases(task_config_raw)

    schema = TASK_SCHEMAS[task]
    required = set(schema.get("required", []))
    optional = set(schema.get("optional", []))
    allowed_keys = required | optional

    missing = [key for key in required if not config.get(key)]
    if missing:
        raise ConfigError(
            f"Configuration '{config_path}' missing required fields for task '{task}': {', '.join(missing)}"
        )

    unexpected = [key for key in config if key not in allowed_keys]
    if unexpected:
        raise ConfigError(
            f"Configuration '{config_path}' contains unsupported keys for task '{task}': "
            f"{', '.join(sorted(unexpected))}"
        )

    normalized: ConfigDict = {}
    for key, value in config.items():
        if key in SINGLE_PATH_FIELDS:
            normalized[key] = _normalize_single_path(value, key, config_path)
        elif key in BOOLEAN_FIELDS:
            normalized[key] = _coerce_bool(value, key, config_path)
        else:
            normalized[key] = value

    normalized["__task__"] = task
    if config_path:
        normalized["__config_path__"] = str(Path(config_path).expanduser())

    merged_logging = _extract_logging_settings(root_config, config_path)
    merged_logging.update(task_logging_override)
    if merged_logging:
        normalized["__logging__"] = merged_logging
    return normalized


def _apply_aliases(config: Mapping[str, Any]) -> ConfigDict:
    result: ConfigDict = {}
    for key, value in config.items():
        canonical = FIELD_ALIASES.get(key, key)
        result[canonical] = value
    return result


def _normalize_single_path(value: Any, field: str, config_path: str | Path | None) -> str:
    if value is None or str(value).strip() == "":
        raise ConfigError(f"Configuration '{config_path}' field '{field}' must be a path")
    return str(Path(str(value)).expanduser())


def _coerce_bool(value: Any, field: str, config_path: str | Path | None) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    text = str(value).strip().lower()
    if text in YES_VALUES:
        return True
    if text in NO_VALUES:
        return False
    raise ConfigError(
        f"Configuration '{config_path}' field '{field}' must be a boolean (true/false, yes/no)."
    )


def _extract_task_config(
    root: Mapping[str, Any],
    task: str,
    config_path: str | Path | None,
) -> ConfigDict:
    tasks_section = root.get(TASKS_SECTION_KEY) or {}
    if not isinstance(tasks_section, Mapping):
        raise ConfigError(f"'{TASKS_SECTION_KEY}' section must be a mapping in {config_path}")

    unknown = [name for name in tasks_section if name not in TASK_SCHEMAS]
    if unknown:
        raise ConfigError(f"Unknown task(s) in {config_path}: {', '.join(sorted(map(str, unknown)))}")

    task_payload = tasks_section.get(task) or {}
    if not isinstance(task_payload, Mapping):
        raise ConfigError(f"Task '{task}' entry must be a mapping in {config_path}")
    return dict(task_payload)


def _validate_logging_keys(section: Dict[str, Any], config_path: str | Path | None) -> Dict[str, Any]:
    invalid = [key for key in section if key not in LOGGING_ALLOWED_KEYS]
    if invalid:
        raise ConfigError(
            f"Logging section contains unsupported keys in {config_path}: {', '.join(sorted(invalid))}"
        )
    return section


def _extract_logging_settings(root: Mapping[str, Any], config_path: str | Path | None) -> Dict[str, Any]:
    section = root.get(LOGGING_SECTION_KEY, {})
    if not section:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"'{LOGGING_SECTION_KEY}' section must be a mapping in {config_path}")
    return _validate_logging_keys(dict(section), config_path)
