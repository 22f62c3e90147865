# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pytest

from order_ingest.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("ORDER_API_URL", "ORDER_API_TOKEN", "ORDER_STORAGE_BACKEND",
                "DATABASE_URL", "PGDSN", "PGHOST", "PGPORT", "PGUSER", "PGPASSWORD", "PGDATABASE"):
        monkeypatch.delenv(key, raising=False)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """api:
  base_url: http://orders.test/api
  timeout_seconds: 5
geocoder:
  base_url: http://geo.test
  user_agent: test-agent
storage:
  backend: api
database:
  host: localhost
  port: 5432
  user: appuser
  password: secret
  database: appdb
page_size: 2
error_log_dir: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def write_csv(temp_workdir: Path):
    def _write(name: str, text: str) -> Path:
        p = temp_workdir / "data" / name
        p.write_text(text, encoding="utf-8")
        return p
    return _write


@pytest.fixture()
def mixed_csv_text() -> str:
    # 2 valid, 2 invalid (one out of bounds, one unparseable), 1 shape error
    return (
        "id,latitude,longitude,subtotal\n"
        "1,40.7580,-73.9855,120\n"
        "2,91.0,-73.9855,50\n"
        "3,42.6526,-73.7562,250\n"
        "4,abc,-73.9,10\n"
        "5,40.7,-73.9,10,extra\n"
    )
