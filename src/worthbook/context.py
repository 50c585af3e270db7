"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from sqlmodel import Session

from .config import BaseConfig
from .infra.database import create_db_engine, create_session_factory, init_database
from .infra.repositories import (
    SQLModelAssetRepository,
    SQLModelLiabilityRepository,
    SQLModelNetWorthRepository,
    SQLModelNotificationSettingsRepository,
)


@dataclass
class AppContext:
    """Engine, session factory and the four record stores."""

    config: BaseConfig
    engine: Any
    session_factory: Callable[[], Session]

    asset_repo: SQLModelAssetRepository
    liability_repo: SQLModelLiabilityRepository
    net_worth_repo: SQLModelNetWorthRepository
    notification_settings_repo: SQLModelNotificationSettingsRepository

    def dispose(self) -> None:
        self.engine.dispose()


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create and initialize the application context."""

    if config is None:
        config = BaseConfig()

    engine = create_db_engine(config)
    init_database(engine)
    session_factory = create_session_factory(engine)
    currency = config.DEFAULT_CURRENCY

    return AppContext(
        config=config,
        engine=engine,
        session_factory=session_factory,
        asset_repo=SQLModelAssetRepository(session_factory, default_currency=currency),
        liability_repo=SQLModelLiabilityRepository(session_factory, default_currency=currency),
        net_worth_repo=SQLModelNetWorthRepository(session_factory, default_currency=currency),
        notification_settings_repo=SQLModelNotificationSettingsRepository(session_factory),
    )
