"""SQLModel implementation of the notification settings repository."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ...errors import ConflictError, NotFoundError
from ...logging_config import get_logger
from ...models.notification_settings import NotificationSettings
from ...validation import validate_custom_alert, validate_notification_settings
from ._common import append_embedded, apply_changes, raise_for_errors

logger = get_logger("repositories.notification_settings")

KIND = "notification settings"


def _for_user(session: Session, user_id: int) -> Optional[NotificationSettings]:
    return session.exec(
        select(NotificationSettings).where(NotificationSettings.user_id == user_id)
    ).first()


class SQLModelNotificationSettingsRepository:
    """Keeps exactly one settings row per user.

    Uniqueness is checked before every insert; the unique index on ``user_id``
    backs it up when two writers race.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get_by_user(self, *, user_id: int) -> Optional[NotificationSettings]:
        with self.session_factory() as session:
            return _for_user(session, user_id)

    def get_or_create(self, *, user_id: int) -> NotificationSettings:
        """Return the user's settings, materialising the defaults on first use."""
        existing = self.get_by_user(user_id=user_id)
        if existing is not None:
            return existing
        try:
            return self.create(user_id=user_id)
        except ConflictError:
            # Another writer inserted first; theirs is the record.
            settings = self.get_by_user(user_id=user_id)
            if settings is None:
                raise
            return settings

    def create(
        self, values: Optional[Mapping[str, Any]] = None, *, user_id: int
    ) -> NotificationSettings:
        """Insert settings for a user that has none."""
        cleaned, errors = validate_notification_settings(values or {})
        raise_for_errors(errors, kind=KIND, logger=logger, user_id=user_id)
        with self.session_factory() as session:
            if _for_user(session, user_id) is not None:
                raise ConflictError(KIND, f"Notification settings already exist for user {user_id}")
            settings = NotificationSettings(user_id=user_id, **cleaned)
            session.add(settings)
            self._commit_insert(session, user_id)
            session.refresh(settings)
            logger.info("Created notification settings", extra={"user_id": user_id})
            return settings

    def update(self, changes: Mapping[str, Any], *, user_id: int) -> NotificationSettings:
        """Apply toggle changes; a missing record is created with the changes over defaults."""
        cleaned, errors = validate_notification_settings(changes, partial=True)
        raise_for_errors(errors, kind=KIND, logger=logger, user_id=user_id)
        with self.session_factory() as session:
            settings = _for_user(session, user_id)
            if settings is None:
                settings = NotificationSettings(user_id=user_id, **cleaned)
                session.add(settings)
                self._commit_insert(session, user_id)
            else:
                apply_changes(settings, cleaned)
                session.add(settings)
                session.commit()
            session.refresh(settings)
            return settings

    def add_custom_alert(
        self, alert: Mapping[str, Any], *, user_id: int
    ) -> NotificationSettings:
        """Append a user-defined alert rule."""
        cleaned, errors = validate_custom_alert(alert, prefix="custom_alerts.")
        raise_for_errors(errors, kind=KIND, logger=logger, user_id=user_id)
        self.get_or_create(user_id=user_id)
        with self.session_factory() as session:
            settings = _for_user(session, user_id)
            if settings is None:
                raise NotFoundError(KIND, user_id)
            append_embedded(settings, "custom_alerts", cleaned)
            apply_changes(settings, {})
            session.add(settings)
            session.commit()
            session.refresh(settings)
            logger.info(
                "Added custom alert",
                extra={"user_id": user_id, "alert_type": cleaned["type"]},
            )
            return settings

    def delete(self, *, user_id: int) -> None:
        with self.session_factory() as session:
            settings = _for_user(session, user_id)
            if settings is None:
                raise NotFoundError(KIND, user_id)
            session.delete(settings)
            session.commit()
        logger.info("Deleted notification settings", extra={"user_id": user_id})

    @staticmethod
    def _commit_insert(session: Session, user_id: int) -> None:
        try:
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            if _for_user(session, user_id) is not None:
                raise ConflictError(
                    KIND, f"Notification settings already exist for user {user_id}"
                ) from exc
            raise
