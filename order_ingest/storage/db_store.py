from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from psycopg2.extensions import AsIs

from ..db.batch_insert import BatchInsertError, BatchMetrics, batch_insert
from ..db.connection import db_connection
from ..models.config_models import DatabaseConfig
from ..models.dataset import OrderRow
from ..models.order import OrderRecord
from .base import StorageError, SubmitOutcome, UploadPayload

"""Database order store: writes orders straight into PostgreSQL.

One transaction per upload; any failing row rolls the whole batch back.
"""

__all__ = [
    "ORDER_COLUMNS",
    "COLUMN_DEFAULT",
    "DatabaseOrderStore",
    "row_values",
]

ORDER_COLUMNS: tuple[str, ...] = ("id", "latitude", "longitude", "subtotal", "timestamp")
# SQL DEFAULT キーワード (NULL ではなく列の既定値/シーケンスを使う)
COLUMN_DEFAULT = AsIs("DEFAULT")

logger = logging.getLogger(__name__)


def _log_metrics(metrics: BatchMetrics) -> None:
    logger.debug(f"inserted batch rows={metrics.batch_size} elapsed={metrics.elapsed_seconds:.3f}s")


def _number(record: OrderRow, column: str) -> float:
    raw = record.fields.get(column, "")
    try:
        return float(raw)
    except ValueError as e:
        raise StorageError(f"Row {record.line_number}: invalid {column} '{raw}'") from e


def _optional(record: OrderRow, column: str) -> Any:
    # 空セル・列なし -> DEFAULT
    value = record.fields.get(column, "")
    return value or COLUMN_DEFAULT


def row_values(record: OrderRow) -> tuple[Any, ...]:
    """Map one validated row onto ORDER_COLUMNS."""
    return (
        _optional(record, "id"),
        _number(record, "latitude"),
        _number(record, "longitude"),
        _number(record, "subtotal"),
        _optional(record, "timestamp"),
    )


class DatabaseOrderStore:
    def __init__(self, config: DatabaseConfig, table: str = "orders", connect=db_connection) -> None:
        self.config = config
        self.table = table
        self._connect = connect

    def _insert(self, rows: Iterable[tuple[Any, ...]], returning: str | None = None):
        with self._connect(self.config) as conn:
            with conn.cursor() as cur:
                return batch_insert(cur, self.table, ORDER_COLUMNS, rows, returning=returning,
                                    metrics_callback=_log_metrics)

    def submit_batch(self, payload: UploadPayload) -> SubmitOutcome:
        try:
            rows = [row_values(r) for r in payload.dataset.records]
            result = self._insert(rows)
        except (StorageError, BatchInsertError) as e:
            return SubmitOutcome.failure(str(e))
        except Exception as e:
            # 接続失敗等もそのまま表示
            logger.error(f"database submit failed: {e}")
            return SubmitOutcome.failure(str(e))
        return SubmitOutcome.success({"inserted": result.inserted_rows})

    def create_order(self, record: OrderRecord) -> SubmitOutcome:
        values = (record.id, record.latitude, record.longitude, record.subtotal, record.timestamp)
        try:
            result = self._insert([values], returning="id")
        except Exception as e:
            logger.error(f"database create failed: {e}")
            return SubmitOutcome.failure(f"Failed to create order: {e}")
        returned = result.returned_values or []
        return SubmitOutcome.success({"id": returned[0][0] if returned else record.id})
