"""Notification settings repository protocol."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from ...models.notification_settings import NotificationSettings


class NotificationSettingsRepository(Protocol):
    """One settings record per user, materialised on first read."""

    def get_by_user(self, *, user_id: int) -> Optional[NotificationSettings]:
        """Return the stored record without creating one."""
        ...

    def get_or_create(self, *, user_id: int) -> NotificationSettings:
        """Return the user's settings, inserting defaults when absent."""
        ...

    def create(
        self, values: Optional[Mapping[str, Any]] = None, *, user_id: int
    ) -> NotificationSettings:
        """Insert the user's settings; a second record is a conflict."""
        ...

    def update(self, changes: Mapping[str, Any], *, user_id: int) -> NotificationSettings:
        """Apply toggle changes, creating the record if needed."""
        ...

    def add_custom_alert(
        self, alert: Mapping[str, Any], *, user_id: int
    ) -> NotificationSettings:
        ...

    def delete(self, *, user_id: int) -> None:
        ...
