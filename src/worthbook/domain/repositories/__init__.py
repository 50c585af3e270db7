"""Repository protocol definitions for domain layer."""

from .asset import AssetRepository
from .liability import LiabilityRepository
from .net_worth import NetWorthRepository
from .notification_settings import NotificationSettingsRepository

__all__ = [
    "AssetRepository",
    "LiabilityRepository",
    "NetWorthRepository",
    "NotificationSettingsRepository",
]
