from __future__ import annotations
import pytest
from pathlib import Path
from order_ingest.config.loader import load_config, ConfigError


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.api.base_url == "http://orders.test/api"
    assert cfg.api.timeout_seconds == 5.0
    assert cfg.geocoder.user_agent == "test-agent"
    assert cfg.geocoder.target_state == "New York"  # default
    assert cfg.storage.backend == "api"
    assert cfg.storage.table == "orders"
    assert cfg.database.port == 5432
    assert cfg.page_size == 2


def test_load_config_missing_file(temp_workdir: Path):
    missing = temp_workdir / "config" / "not_exists.yml"
    with pytest.raises(ConfigError):
        load_config(missing)


def test_load_config_missing_file_optional_gives_defaults(temp_workdir: Path):
    cfg = load_config(temp_workdir / "config" / "not_exists.yml", required=False)
    assert cfg.page_size == 50
    assert cfg.storage.backend == "api"


def test_load_config_extra_field(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_bad_backend(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("backend: api", "backend: ftp")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_invalid_yaml(write_config: Path):
    write_config.write_text("api: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "invalid yaml" in str(e.value)


def test_env_overrides(write_config: Path, monkeypatch):
    monkeypatch.setenv("ORDER_API_URL", "http://env.test")
    monkeypatch.setenv("ORDER_API_TOKEN", "tok")
    monkeypatch.setenv("ORDER_STORAGE_BACKEND", "database")
    cfg = load_config(write_config)
    assert cfg.api.base_url == "http://env.test"
    assert cfg.api.token == "tok"
    assert cfg.storage.backend == "database"
