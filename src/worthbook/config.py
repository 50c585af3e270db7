"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from sqlalchemy.pool import StaticPool

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "WorthBook"
    DB_FILENAME = "worthbook.db"
    DEBUG = False
    TESTING = False

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("WORTHBOOK_DEV_MODE", default=True)
        self.SQL_ECHO = _env_bool("WORTHBOOK_SQL_ECHO", default=False)
        self.DEFAULT_CURRENCY = os.getenv("WORTHBOOK_DEFAULT_CURRENCY", "USD").strip() or "USD"
        self.DATABASE_URL = os.getenv("WORTHBOOK_DATABASE_URL", self._build_sqlite_url())

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("WORTHBOOK_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        engine_options: dict[str, Any] = {"echo": self.SQL_ECHO}
        if self.DATABASE_URL.startswith("sqlite"):
            engine_options["connect_args"] = {"check_same_thread": False}
        if self.DATABASE_URL in {"sqlite://", "sqlite:///:memory:"}:
            # Every session must see the same in-memory database.
            engine_options["poolclass"] = StaticPool
        return engine_options


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration for tests; keeps the database in memory unless overridden."""

    TESTING = True
    __test__ = False  # not a pytest test class

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = True
        self.DATABASE_URL = os.getenv("WORTHBOOK_TEST_DATABASE_URL", "sqlite://")


__all__ = ["BaseConfig", "DevConfig", "TestConfig"]
