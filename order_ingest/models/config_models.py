from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the order CSV import tool.

Separate from the loader implementation in order_ingest/config/loader.py so
services can depend on the typed shape without pulling in YAML/jsonschema.
"""

__all__ = [
    "ApiConfig",
    "GeocoderConfig",
    "StorageConfig",
    "DatabaseConfig",
    "ImportConfig",
]


@dataclass(frozen=True)
class ApiConfig:
    """Order-storage service endpoint.

    ORDER_API_URL / ORDER_API_TOKEN environment variables take precedence.
    """
    base_url: str = "http://localhost:8080"
    token: str | None = None
    timeout_seconds: float = 30.0


@dataclass(frozen=True)
class GeocoderConfig:
    """Reverse geocoder used by the single-order path only."""
    base_url: str = "https://nominatim.openstreetmap.org"
    user_agent: str = "order-ingest/0.1"
    target_state: str = "New York"
    timeout_seconds: float = 10.0


@dataclass(frozen=True)
class DatabaseConfig:
    """Database connection configuration.

    Used as fallback when environment variables are not set.
    """
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str | None = None
    dsn: str | None = None


@dataclass(frozen=True)
class StorageConfig:
    backend: str = "api"  # api | database
    table: str = "orders"  # database backend のみ使用


@dataclass(frozen=True)
class ImportConfig:
    """Root configuration object for the import tool."""
    api: ApiConfig = field(default_factory=ApiConfig)
    geocoder: GeocoderConfig = field(default_factory=GeocoderConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    page_size: int = 50
    error_log_dir: str = "./logs"
