from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    ApiConfig,
    DatabaseConfig,
    GeocoderConfig,
    ImportConfig,
    StorageConfig,
)

"""Config loader.

Responsibilities:
- Load YAML config (default config/import.yml)
- Validate against the packaged JSON schema (additionalProperties: false)
- Apply defaults for absent sections / keys
- Apply environment overrides (ORDER_API_URL, ORDER_API_TOKEN, ORDER_STORAGE_BACKEND)
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/import.yml")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against JSON schema.

    Raises:
        ConfigError: schema file missing/unreadable or config violates it
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


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    return data.get(key) or {}


def build_config(data: dict[str, Any]) -> ImportConfig:
    """Build ImportConfig from already-validated raw data plus environment."""
    api_raw = _section(data, "api")
    geo_raw = _section(data, "geocoder")
    storage_raw = _section(data, "storage")
    db_raw = _section(data, "database")

    api_defaults = ApiConfig()
    api = ApiConfig(
        base_url=os.getenv("ORDER_API_URL") or api_raw.get("base_url", api_defaults.base_url),
        token=os.getenv("ORDER_API_TOKEN") or api_raw.get("token"),
        timeout_seconds=float(api_raw.get("timeout_seconds", api_defaults.timeout_seconds)),
    )
    geo_defaults = GeocoderConfig()
    geocoder = GeocoderConfig(
        base_url=geo_raw.get("base_url", geo_defaults.base_url),
        user_agent=geo_raw.get("user_agent", geo_defaults.user_agent),
        target_state=geo_raw.get("target_state", geo_defaults.target_state),
        timeout_seconds=float(geo_raw.get("timeout_seconds", geo_defaults.timeout_seconds)),
    )
    storage_defaults = StorageConfig()
    storage = StorageConfig(
        backend=os.getenv("ORDER_STORAGE_BACKEND") or storage_raw.get("backend", storage_defaults.backend),
        table=storage_raw.get("table", storage_defaults.table),
    )
    if storage.backend not in ("api", "database"):
        raise ConfigError(f"unknown storage backend: {storage.backend}")
    database = DatabaseConfig(
        host=db_raw.get("host"),
        port=db_raw.get("port"),
        user=db_raw.get("user"),
        password=db_raw.get("password"),
        database=db_raw.get("database"),
        dsn=db_raw.get("dsn"),
    )
    return ImportConfig(
        api=api,
        geocoder=geocoder,
        storage=storage,
        database=database,
        page_size=data.get("page_size", 50),
        error_log_dir=data.get("error_log_dir", "./logs"),
    )


def load_config(path: Path, required: bool = True) -> ImportConfig:
    """Load and validate ``path``.

    With ``required=False`` a missing file yields the defaults (env overrides
    still apply).
    """
    if not path.exists():
        if required:
            raise ConfigError(f"config file not found: {path}")
        return build_config({})
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config root must be a mapping")

    _validate_config_schema(data)
    return build_config(data)
