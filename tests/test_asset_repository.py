"""Asset store tests."""

from __future__ import annotations

import pytest

from worthbook.errors import NotFoundError, ValidationError
from worthbook.models import Asset


def test_create_fills_defaults(asset_repo, user):
    """Concrete scenario: a bare cash asset gets the documented defaults."""
    asset = asset_repo.create(
        {"name": "Checking", "type": "cash", "value": 1000}, user_id=user.id
    )

    assert asset.id is not None
    assert asset.user_id == user.id
    assert asset.name == "Checking"
    assert asset.type == "cash"
    assert asset.value == 1000
    assert asset.currency == "USD"
    assert asset.appreciation_rate == 0
    assert asset.is_liquid is False
    assert asset.history == []
    assert asset.created_at is not None
    assert asset.updated_at is not None


def test_create_round_trips_optional_fields(asset_repo, user):
    values = {
        "name": "Brokerage",
        "type": "investment",
        "value": 25000.5,
        "currency": "EUR",
        "description": "Index funds",
        "purchase_date": "2019-04-01",
        "purchase_price": 18000,
        "appreciation_rate": 6.5,
        "is_liquid": True,
    }
    created = asset_repo.create(values, user_id=user.id)
    fetched = asset_repo.get_by_id(created.id, user_id=user.id)

    assert fetched is not None
    assert fetched.currency == "EUR"
    assert fetched.description == "Index funds"
    assert fetched.purchase_date.isoformat() == "2019-04-01"
    assert fetched.purchase_price == 18000
    assert fetched.appreciation_rate == 6.5
    assert fetched.is_liquid is True


def test_create_with_unknown_type_persists_nothing(asset_repo, user):
    with pytest.raises(ValidationError) as excinfo:
        asset_repo.create({"name": "Coins", "type": "crypto", "value": 10}, user_id=user.id)

    assert "type" in excinfo.value.errors
    assert asset_repo.list_for_user(user_id=user.id) == []


def test_create_rejects_negative_value(asset_repo, user):
    with pytest.raises(ValidationError) as excinfo:
        asset_repo.create({"name": "Cash", "type": "cash", "value": -5}, user_id=user.id)

    assert excinfo.value.fields == ["value"]


def test_append_history_keeps_value_unless_changed(asset_factory, asset_repo, user):
    asset = asset_factory()

    updated = asset_repo.append_history(
        asset.id, {"date": "2024-01-01", "value": 1200}, user_id=user.id
    )
    fetched = asset_repo.get_by_id(asset.id, user_id=user.id)

    assert updated.history == fetched.history
    assert len(fetched.history) == 1
    assert fetched.history[0] == {"date": "2024-01-01", "value": 1200.0}
    assert fetched.value == 1000


def test_append_history_adds_to_end(asset_factory, asset_repo, user):
    asset = asset_factory()
    asset_repo.append_history(asset.id, {"date": "2024-02-01", "value": 1100}, user_id=user.id)
    asset_repo.append_history(
        asset.id, {"date": "2024-01-01", "value": 900, "notes": "backdated"}, user_id=user.id
    )

    fetched = asset_repo.get_by_id(asset.id, user_id=user.id)

    assert [entry["value"] for entry in fetched.history] == [1100.0, 900.0]
    assert fetched.history[0] == {"date": "2024-02-01", "value": 1100.0}
    valuations = fetched.valuations()
    assert valuations[1].notes == "backdated"
    assert valuations[1].date.isoformat() == "2024-01-01"


def test_append_history_with_changes_is_one_write(asset_factory, asset_repo, user):
    asset = asset_factory()

    updated = asset_repo.append_history(
        asset.id, {"date": "2024-03-01", "value": 1500}, user_id=user.id, changes={"value": 1500}
    )

    assert updated.value == 1500
    assert len(updated.history) == 1


def test_append_history_rejects_invalid_entry(asset_factory, asset_repo, user):
    asset = asset_factory()

    with pytest.raises(ValidationError) as excinfo:
        asset_repo.append_history(asset.id, {"value": 1}, user_id=user.id)

    assert "history.date" in excinfo.value.errors
    assert asset_repo.get_by_id(asset.id, user_id=user.id).history == []


def test_update_changes_type_within_enum(asset_factory, asset_repo, user):
    asset = asset_factory()

    updated = asset_repo.update(asset.id, {"type": "investment", "is_liquid": True}, user_id=user.id)

    assert updated.type == "investment"
    assert updated.is_liquid is True
    assert updated.updated_at >= updated.created_at

    with pytest.raises(ValidationError):
        asset_repo.update(asset.id, {"type": "art"}, user_id=user.id)
    assert asset_repo.get_by_id(asset.id, user_id=user.id).type == "investment"


def test_update_cannot_replace_history(asset_factory, asset_repo, user):
    asset = asset_factory()

    with pytest.raises(ValidationError) as excinfo:
        asset_repo.update(asset.id, {"history": []}, user_id=user.id)

    assert "history" in excinfo.value.errors


def test_records_are_scoped_to_their_owner(asset_factory, asset_repo, user, other_user):
    asset = asset_factory()

    assert asset_repo.get_by_id(asset.id, user_id=other_user.id) is None
    with pytest.raises(NotFoundError):
        asset_repo.update(asset.id, {"value": 1}, user_id=other_user.id)
    with pytest.raises(NotFoundError):
        asset_repo.delete(asset.id, user_id=other_user.id)
    assert asset_repo.get_by_id(asset.id, user_id=user.id) is not None


def test_delete_removes_asset_and_history(asset_factory, asset_repo, session_factory, user):
    asset = asset_factory()
    asset_repo.append_history(asset.id, {"date": "2024-01-01", "value": 1}, user_id=user.id)

    asset_repo.delete(asset.id, user_id=user.id)

    assert asset_repo.get_by_id(asset.id, user_id=user.id) is None
    with session_factory() as session:
        assert session.get(Asset, asset.id) is None
    with pytest.raises(NotFoundError):
        asset_repo.delete(asset.id, user_id=user.id)
    with pytest.raises(NotFoundError):
        asset_repo.append_history(asset.id, {"date": "2024-01-02", "value": 2}, user_id=user.id)


def test_list_filters_by_type_and_liquidity(asset_factory, asset_repo, user, other_user):
    asset_factory(name="Checking", type="cash", value=500, is_liquid=True)
    asset_factory(name="House", type="property", value=300000)
    asset_factory(name="Car", type="vehicle", value=12000)
    asset_factory(owner=other_user, name="Savings", type="cash", value=999, is_liquid=True)

    assert [a.name for a in asset_repo.list_for_user(user_id=user.id)] == ["Car", "Checking", "House"]
    assert [a.name for a in asset_repo.list_for_user(user_id=user.id, type="cash")] == ["Checking"]
    assert [a.name for a in asset_repo.list_for_user(user_id=user.id, is_liquid=False)] == [
        "Car",
        "House",
    ]
    assert asset_repo.list_for_user(user_id=user.id, type="other") == []


def test_total_value(asset_factory, asset_repo, user):
    asset_factory(name="Checking", value=500, is_liquid=True)
    asset_factory(name="House", type="property", value=300000)

    assert asset_repo.get_total_value(user_id=user.id) == pytest.approx(300500)
    assert asset_repo.get_total_value(user_id=user.id, is_liquid=True) == pytest.approx(500)


def test_create_rejects_null_for_defaulted_field(asset_factory, asset_repo, user):
    with pytest.raises(ValidationError) as excinfo:
        asset_factory(appreciation_rate=None)

    assert excinfo.value.fields == ["appreciation_rate"]
    assert asset_repo.list_for_user(user_id=user.id) == []


def test_update_rejects_null_for_defaulted_field(asset_factory, asset_repo, user):
    asset = asset_factory(appreciation_rate=2.5)

    with pytest.raises(ValidationError) as excinfo:
        asset_repo.update(asset.id, {"appreciation_rate": None}, user_id=user.id)

    assert excinfo.value.fields == ["appreciation_rate"]
    stored = asset_repo.get_by_id(asset.id, user_id=user.id)
    assert stored.appreciation_rate == 2.5
    assert stored.updated_at == asset.updated_at.replace(tzinfo=None)


def test_update_clears_nullable_field(asset_factory, asset_repo, user):
    asset = asset_factory(description="Joint account")

    updated = asset_repo.update(asset.id, {"description": None}, user_id=user.id)

    assert updated.description is None
