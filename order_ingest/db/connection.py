from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import psycopg2

from ..models.config_models import DatabaseConfig

"""PostgreSQL connection helper for the database order store.

接続情報の解決優先順位:
    1. DATABASE_URL / PGDSN (DSN 全体)
    2. 個別 PGHOST / PGPORT / PGUSER / PGPASSWORD / PGDATABASE
    3. config の database セクション (不足分のフォールバック)
"""

__all__ = [
    "resolve_dsn",
    "db_connection",
]


def resolve_dsn(db_cfg: DatabaseConfig) -> str:
    dsn = os.getenv("DATABASE_URL") or os.getenv("PGDSN") or db_cfg.dsn
    if dsn:
        return dsn
    host = os.getenv("PGHOST", db_cfg.host or "localhost")
    port = os.getenv("PGPORT", str(db_cfg.port) if db_cfg.port else "5432")
    user = os.getenv("PGUSER", db_cfg.user or "postgres")
    password = os.getenv("PGPASSWORD", db_cfg.password or "")
    database = os.getenv("PGDATABASE", db_cfg.database or "postgres")
    dsn = f"host={host} port={port} user={user} dbname={database}"
    if password:
        dsn += f" password={password}"
    return dsn


@contextmanager
def db_connection(db_cfg: DatabaseConfig) -> Iterator[Any]:
    """Yield a connection in an explicit transaction.

    Commits when the block exits normally, rolls back when it raises.
    """
    conn = psycopg2.connect(resolve_dsn(db_cfg))
    conn.autocommit = False
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
