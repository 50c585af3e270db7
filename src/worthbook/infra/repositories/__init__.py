"""Concrete repository implementations using SQLModel."""

from .asset import SQLModelAssetRepository
from .liability import SQLModelLiabilityRepository
from .net_worth import SQLModelNetWorthRepository
from .notification_settings import SQLModelNotificationSettingsRepository

__all__ = [
    "SQLModelAssetRepository",
    "SQLModelLiabilityRepository",
    "SQLModelNetWorthRepository",
    "SQLModelNotificationSettingsRepository",
]
