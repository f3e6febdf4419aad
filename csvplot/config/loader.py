from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from csvplot.models.config_models import DEFAULT_CONFIG, PipelineConfig

"""Config loader.

Responsibilities:
- Load YAML (config/csvplot.yml by default)
- Validate against config_schema.json (shipped next to this module)
- Apply defaults for every missing key
- Apply CSVPLOT_* environment overrides on top
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "load_config",
    "load_config_or_default",
    "apply_env_overrides",
]

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/csvplot.yml")

# env var -> PipelineConfig field
ENV_OVERRIDES = {
    "CSVPLOT_MAX_FILE_SIZE": "max_file_size",
    "CSVPLOT_MAX_ROWS": "max_rows",
    "CSVPLOT_MAX_COLUMNS": "max_columns",
    "CSVPLOT_SAMPLE_SIZE": "sample_size",
    "CSVPLOT_CHART_SAMPLING_THRESHOLD": "chart_sampling_threshold",
    "CSVPLOT_PREVIEW_ROWS": "preview_rows",
}


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or unreadable, or the
            data fails validation (unknown keys, wrong types, values < 1).
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


def load_config(path: Path) -> PipelineConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config validation failed: top level must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    d = DEFAULT_CONFIG
    limits = data.get("limits", {})
    inference = data.get("inference", {})
    charts = data.get("charts", {})
    parser = data.get("parser", {})
    storage = data.get("storage", {})
    return PipelineConfig(
        max_file_size=limits.get("max_file_size", d.max_file_size),
        warn_file_size=limits.get("warn_file_size", d.warn_file_size),
        max_rows=limits.get("max_rows", d.max_rows),
        recommended_rows=limits.get("recommended_rows", d.recommended_rows),
        max_columns=limits.get("max_columns", d.max_columns),
        sample_size=inference.get("sample_size", d.sample_size),
        chart_sampling_threshold=charts.get("sampling_threshold", d.chart_sampling_threshold),
        preview_rows=charts.get("preview_rows", d.preview_rows),
        delimiter=parser.get("delimiter", d.delimiter),
        recents_limit=storage.get("recents_limit", d.recents_limit),
        storage_directory=storage.get("directory", d.storage_directory),
    )


def load_config_or_default(path: Path | None = None) -> PipelineConfig:
    """Load `path` if given, else the default path when it exists, else defaults."""
    if path is not None:
        return load_config(path)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return DEFAULT_CONFIG


def apply_env_overrides(config: PipelineConfig, environ: Mapping[str, str] | None = None) -> PipelineConfig:
    """Return a copy of `config` with CSVPLOT_* integer overrides applied."""
    env = os.environ if environ is None else environ
    changes: dict[str, int] = {}
    for var, field_name in ENV_OVERRIDES.items():
        raw = env.get(var)
        if raw is None or raw.strip() == "":
            continue
        try:
            value = int(raw.strip())
        except ValueError as e:
            raise ConfigError(f"{var} must be an integer, got {raw!r}") from e
        if value < 1:
            raise ConfigError(f"{var} must be >= 1, got {value}")
        changes[field_name] = value
    if not changes:
        return config
    return replace(config, **changes)
