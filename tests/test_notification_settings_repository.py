"""Notification settings store tests."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from worthbook.errors import ConflictError, NotFoundError, ValidationError
from worthbook.infra.repositories import notification_settings as settings_module
from worthbook.models import NOTIFICATION_DEFAULTS, NotificationSettings


def test_get_by_user_does_not_create(settings_repo, user):
    assert settings_repo.get_by_user(user_id=user.id) is None


def test_get_or_create_materialises_defaults(settings_repo, user):
    settings = settings_repo.get_or_create(user_id=user.id)

    assert settings.id is not None
    assert settings.user_id == user.id
    for name, default in NOTIFICATION_DEFAULTS.items():
        assert getattr(settings, name) is default, name
    assert settings.custom_alerts == []
    assert settings.enabled_channels() == ["email", "push"]


def test_get_or_create_returns_existing_record(settings_repo, user):
    first = settings_repo.get_or_create(user_id=user.id)
    second = settings_repo.get_or_create(user_id=user.id)

    assert first.id == second.id


def test_second_create_conflicts(settings_repo, user):
    settings_repo.create({"sms": True}, user_id=user.id)

    with pytest.raises(ConflictError):
        settings_repo.create(user_id=user.id)

    assert settings_repo.get_by_user(user_id=user.id).sms is True


def test_unique_violation_under_race_becomes_conflict(settings_repo, user, monkeypatch):
    settings_repo.create(user_id=user.id)
    real_lookup = settings_module._for_user
    calls = {"count": 0}

    def stale_first_lookup(session, user_id):
        calls["count"] += 1
        if calls["count"] == 1:
            return None
        return real_lookup(session, user_id)

    monkeypatch.setattr(settings_module, "_for_user", stale_first_lookup)

    with pytest.raises(ConflictError):
        settings_repo.create(user_id=user.id)


def test_database_enforces_one_row_per_user(session_factory, settings_repo, user):
    settings_repo.create(user_id=user.id)

    with pytest.raises(IntegrityError):
        with session_factory() as session:
            session.add(NotificationSettings(user_id=user.id))
            session.commit()


def test_update_upserts_missing_record(settings_repo, user):
    settings = settings_repo.update({"push": False, "tax_deadlines": False}, user_id=user.id)

    assert settings.push is False
    assert settings.tax_deadlines is False
    assert settings.email is True
    assert settings_repo.get_by_user(user_id=user.id).id == settings.id


def test_update_changes_existing_record(settings_repo, user):
    created = settings_repo.get_or_create(user_id=user.id)

    updated = settings_repo.update({"sms": True}, user_id=user.id)

    assert updated.id == created.id
    assert updated.sms is True
    assert updated.enabled_channels() == ["email", "push", "sms"]


@pytest.mark.parametrize("changes", [{"theme": "dark"}, {"email": "no"}, {"custom_alerts": []}])
def test_update_rejects_invalid_changes(settings_repo, user, changes):
    with pytest.raises(ValidationError):
        settings_repo.update(changes, user_id=user.id)

    assert settings_repo.get_by_user(user_id=user.id) is None


def test_add_custom_alert(settings_repo, user):
    settings_repo.add_custom_alert({"type": "low_balance", "threshold": 100}, user_id=user.id)
    settings = settings_repo.add_custom_alert(
        {"type": "large_purchase", "threshold": 500, "enabled": False}, user_id=user.id
    )

    assert settings.custom_alerts == [
        {"type": "low_balance", "threshold": 100.0, "enabled": True},
        {"type": "large_purchase", "threshold": 500.0, "enabled": False},
    ]
    assert [alert.enabled for alert in settings.alerts()] == [True, False]


def test_add_custom_alert_requires_threshold(settings_repo, user):
    with pytest.raises(ValidationError) as excinfo:
        settings_repo.add_custom_alert({"type": "low_balance"}, user_id=user.id)

    assert "custom_alerts.threshold" in excinfo.value.errors


def test_delete(settings_repo, user):
    settings_repo.get_or_create(user_id=user.id)

    settings_repo.delete(user_id=user.id)

    assert settings_repo.get_by_user(user_id=user.id) is None
    with pytest.raises(NotFoundError):
        settings_repo.delete(user_id=user.id)
