from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    DEFAULT_OUTPUT_PATH,
    EnumerationConfig,
    FillConfig,
    OutputScope,
    OutputTarget,
    PathSpec,
    ReaderConfig,
    ReadMode,
    SourceKind,
    parse_merged_columns,
)

"""Reader config loader.

Responsibilities:
- Load the YAML reader config (default ``config/reader.yml``)
- Validate it against the packaged JSON schema (unknown keys rejected)
- Apply defaults (path_type=str, mode=file, output_target_type=msg,
  output_target_path=data)
"""

__all__ = [
    "ConfigError",
    "SCHEMA_PATH",
    "build_config",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or invalid, or the data fails
            validation (missing ``path``, wrong types, unknown keys, ...)
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def build_config(data: dict[str, Any]) -> ReaderConfig:
    """Build a ReaderConfig from already validated raw settings."""
    output_path = data.get("output_target_path")
    return ReaderConfig(
        path=PathSpec(
            expression=data["path"],
            source_kind=SourceKind(data.get("path_type", SourceKind.LITERAL.value)),
        ),
        enumeration=EnumerationConfig(
            mode=ReadMode(data.get("mode", ReadMode.SINGLE_FILE.value)),
            exclude_pattern=data.get("exclude_regex") or None,
            include_hidden=bool(data.get("include_hidden", False)),
        ),
        fill=FillConfig(
            enabled=bool(data.get("fill_merged", False)),
            columns=parse_merged_columns(data.get("merged_columns")),
        ),
        output=OutputTarget(
            scope=OutputScope(data.get("output_target_type", OutputScope.MESSAGE.value)),
            deep_path=DEFAULT_OUTPUT_PATH if output_path is None else output_path,
        ),
    )


def load_config(path: Path) -> ReaderConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)
    return build_config(data)
