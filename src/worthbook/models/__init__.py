"""SQLModel table exports."""

from .asset import ASSET_TYPES, Asset, ValuationEntry
from .liability import LIABILITY_TYPES, Liability, PaymentEntry
from .net_worth import BreakdownEntry, NetWorthSnapshot
from .notification_settings import NOTIFICATION_DEFAULTS, CustomAlert, NotificationSettings
from .user import User

__all__ = [
    "ASSET_TYPES",
    "Asset",
    "ValuationEntry",
    "LIABILITY_TYPES",
    "Liability",
    "PaymentEntry",
    "BreakdownEntry",
    "NetWorthSnapshot",
    "NOTIFICATION_DEFAULTS",
    "CustomAlert",
    "NotificationSettings",
    "User",
]
