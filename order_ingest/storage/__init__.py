"""Order-storage collaborators and the factory that picks one from config."""

from __future__ import annotations

from ..models.config_models import ImportConfig
from .api_store import ApiOrderStore
from .base import OrderStore, StorageError, SubmitOutcome, UploadPayload
from .db_store import DatabaseOrderStore

__all__ = [
    "ApiOrderStore",
    "DatabaseOrderStore",
    "OrderStore",
    "StorageError",
    "SubmitOutcome",
    "UploadPayload",
    "build_store",
]


def build_store(config: ImportConfig) -> OrderStore:
    if config.storage.backend == "database":
        return DatabaseOrderStore(config.database, table=config.storage.table)
    return ApiOrderStore(config.api)
