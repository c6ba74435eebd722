from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    DEFAULT_FIELD_OFFSETS,
    DEFAULT_OBSERVATION_ALIASES,
    AnalysisConfig,
    ObservationSchema,
    TrackerSchema,
)

"""Config loader.

Responsibilities:
- Load the YAML config (``config/fellowscope.yml`` by default)
- Validate it against the packaged JSON schema
- Overlay the given keys on the built-in source schemas
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
    "build_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/fellowscope.yml")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: the schema file is missing or invalid, or the config
            data violates it
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


def build_config(data: dict[str, Any]) -> AnalysisConfig:
    """Overlay validated config data on the default schemas."""
    base_tracker = TrackerSchema()
    t = data.get("tracker", {})
    fields = dict(DEFAULT_FIELD_OFFSETS)
    if "fields" in t:
        fields = dict(t["fields"])
    tracker = TrackerSchema(
        sheet_name=t.get("sheet", base_tracker.sheet_name),
        header_rows=t.get("header_rows", base_tracker.header_rows),
        tracking_start=t.get("tracking_start", base_tracker.tracking_start),
        weeks_per_period=t.get("weeks_per_period", base_tracker.weeks_per_period),
        period_names=tuple(t.get("periods", base_tracker.period_names)),
        field_offsets=fields,
    )

    base_obs = ObservationSchema()
    o = data.get("observation", {})
    aliases = dict(DEFAULT_OBSERVATION_ALIASES)
    for name, names in o.get("aliases", {}).items():
        aliases[name] = tuple(names)
    observation = ObservationSchema(
        rubric_areas=tuple(o.get("rubric_areas", base_obs.rubric_areas)),
        stakeholder_areas=tuple(o.get("stakeholder_areas", base_obs.stakeholder_areas)),
        aliases=aliases,
    )
    return AnalysisConfig(tracker=tracker, observation=observation)


def load_config(path: Path | None) -> AnalysisConfig:
    """Load the config file; None means built-in defaults."""
    if path is None:
        return AnalysisConfig()
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
