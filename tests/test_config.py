"""Configuration tests."""

from __future__ import annotations

from sqlalchemy.pool import StaticPool

from worthbook.config import BaseConfig, DevConfig, TestConfig


def test_defaults_use_sqlite_in_data_dir(tmp_path):
    config = BaseConfig()

    assert config.DATA_DIR == (tmp_path / "data").resolve()
    assert config.DATA_DIR.exists()
    assert config.DATABASE_URL == f"sqlite:///{config.DATA_DIR / 'worthbook.db'}"
    assert config.DEV_MODE is True
    assert config.DEFAULT_CURRENCY == "USD"
    assert config.sqlalchemy_engine_options()["connect_args"] == {"check_same_thread": False}


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("WORTHBOOK_DATABASE_URL", "postgresql://localhost/worthbook")
    monkeypatch.setenv("WORTHBOOK_DEV_MODE", "off")
    monkeypatch.setenv("WORTHBOOK_DEFAULT_CURRENCY", "EUR")
    monkeypatch.setenv("WORTHBOOK_SQL_ECHO", "yes")

    config = DevConfig()

    assert config.DEBUG is True
    assert config.DATABASE_URL == "postgresql://localhost/worthbook"
    assert config.DEV_MODE is False
    assert config.DEFAULT_CURRENCY == "EUR"
    assert config.sqlalchemy_engine_options() == {"echo": True}


def test_test_config_shares_one_in_memory_database():
    config = TestConfig()

    options = config.sqlalchemy_engine_options()

    assert config.TESTING is True
    assert config.DATABASE_URL == "sqlite://"
    assert options["poolclass"] is StaticPool
