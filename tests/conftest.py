"""Pytest configuration and shared fixtures for WorthBook tests.

Every test gets its own SQLite file, a session factory matching the
repository ``Callable[[], Session]`` contract, and a bootstrapped owner.
"""

from __future__ import annotations

import logging

import pytest

from worthbook.config import TestConfig
from worthbook.infra.database import create_db_engine, create_session_factory, init_database
from worthbook.infra.repositories import (
    SQLModelAssetRepository,
    SQLModelLiabilityRepository,
    SQLModelNetWorthRepository,
    SQLModelNotificationSettingsRepository,
)
from worthbook.models import User
from worthbook.services.users import ensure_user


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep config, data dir and log handlers away from the developer's environment."""

    monkeypatch.setenv("WORTHBOOK_DATA_DIR", str(tmp_path / "data"))
    for name in (
        "WORTHBOOK_DATABASE_URL",
        "WORTHBOOK_DEFAULT_CURRENCY",
        "WORTHBOOK_DEV_MODE",
        "WORTHBOOK_SQL_ECHO",
        "WORTHBOOK_TEST_DATABASE_URL",
    ):
        monkeypatch.delenv(name, raising=False)

    yield

    package_logger = logging.getLogger("worthbook")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def db_engine(tmp_path):
    """Create an isolated SQLite database file with the full schema."""

    config = TestConfig()
    config.DATABASE_URL = f"sqlite:///{tmp_path / 'test.db'}"
    engine = create_db_engine(config)
    init_database(engine)

    yield engine

    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest.fixture
def user(session_factory) -> User:
    """Default owner for scoping data."""

    return ensure_user("tester", session_factory=session_factory)


@pytest.fixture
def other_user(session_factory) -> User:
    return ensure_user("someone-else", session_factory=session_factory)


# =============================================================================
# Repositories
# =============================================================================


@pytest.fixture
def asset_repo(session_factory):
    return SQLModelAssetRepository(session_factory)


@pytest.fixture
def liability_repo(session_factory):
    return SQLModelLiabilityRepository(session_factory)


@pytest.fixture
def net_worth_repo(session_factory):
    return SQLModelNetWorthRepository(session_factory)


@pytest.fixture
def settings_repo(session_factory):
    return SQLModelNotificationSettingsRepository(session_factory)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def asset_factory(asset_repo, user):
    """Create assets with sensible defaults; keyword overrides win."""

    def _create_asset(owner: User | None = None, **overrides):
        values = {"name": "Checking", "type": "cash", "value": 1000.0}
        values.update(overrides)
        return asset_repo.create(values, user_id=(owner or user).id)

    return _create_asset


@pytest.fixture
def liability_factory(liability_repo, user):
    """Create liabilities (debts) with sensible defaults."""

    def _create_liability(owner: User | None = None, **overrides):
        values = {
            "name": "Visa",
            "type": "credit_card",
            "amount": 1000.0,
            "interest_rate": 19.99,
            "minimum_payment": 35.0,
            "start_date": "2023-06-01",
        }
        values.update(overrides)
        return liability_repo.create(values, user_id=(owner or user).id)

    return _create_liability

