"""Per-user notification preferences."""

from __future__ import annotations

from typing import Any, ClassVar, Optional

from sqlmodel import Field, SQLModel

from .base import TimestampedModel, embedded_list_field

CHANNEL_TOGGLES: dict[str, bool] = {
    "email": True,
    "push": True,
    "sms": False,
}

ALERT_TOGGLES: dict[str, bool] = {
    "budget_alerts": True,
    "bill_reminders": True,
    "goal_updates": True,
    "debt_reminders": True,
    "tax_deadlines": True,
    "investment_updates": True,
}

NOTIFICATION_DEFAULTS: dict[str, bool] = {**CHANNEL_TOGGLES, **ALERT_TOGGLES}


class CustomAlert(SQLModel):
    """User-defined alert rule beyond the fixed toggles."""

    type: str
    threshold: float
    enabled: bool = True


class NotificationSettings(TimestampedModel, table=True):
    """Channel and alert-category toggles; exactly one row per user."""

    __tablename__: ClassVar[str] = "notification_settings"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, unique=True, index=True)

    email: bool = Field(default=True, nullable=False)
    push: bool = Field(default=True, nullable=False)
    sms: bool = Field(default=False, nullable=False)

    budget_alerts: bool = Field(default=True, nullable=False)
    bill_reminders: bool = Field(default=True, nullable=False)
    goal_updates: bool = Field(default=True, nullable=False)
    debt_reminders: bool = Field(default=True, nullable=False)
    tax_deadlines: bool = Field(default=True, nullable=False)
    investment_updates: bool = Field(default=True, nullable=False)

    custom_alerts: list[dict[str, Any]] = embedded_list_field()

    def alerts(self) -> list[CustomAlert]:
        return [CustomAlert.model_validate(item) for item in self.custom_alerts or []]

    def enabled_channels(self) -> list[str]:
        """Channels the user still wants to hear on, in a stable order."""
        return [name for name in CHANNEL_TOGGLES if getattr(self, name)]
