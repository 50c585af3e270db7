"""SQLModel implementation of the asset repository."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from sqlmodel import Session, select

from ...logging_config import get_logger
from ...models.asset import Asset
from ...validation import validate_asset, validate_valuation_entry
from ._common import (
    append_embedded,
    apply_changes,
    fetch_owned,
    merge_errors,
    raise_for_errors,
    require_owned,
)

logger = get_logger("repositories.asset")

KIND = "asset"


class SQLModelAssetRepository:
    """SQLModel-based asset repository implementation."""

    def __init__(self, session_factory: Callable[[], Session], *, default_currency: str = "USD"):
        """Initialize with a session factory."""
        self.session_factory = session_factory
        self.default_currency = default_currency

    def get_by_id(self, asset_id: int, *, user_id: int) -> Optional[Asset]:
        """Retrieve an asset by ID."""
        with self.session_factory() as session:
            return fetch_owned(session, Asset, asset_id, user_id)

    def list_for_user(
        self, *, user_id: int, type: Optional[str] = None, is_liquid: Optional[bool] = None
    ) -> list[Asset]:
        """List the user's assets; filters use the (user, type) and (user, is_liquid) indexes."""
        with self.session_factory() as session:
            statement = select(Asset).where(Asset.user_id == user_id)
            if type is not None:
                statement = statement.where(Asset.type == type)
            if is_liquid is not None:
                statement = statement.where(Asset.is_liquid == is_liquid)
            statement = statement.order_by(Asset.name, Asset.id)  # type: ignore[arg-type]
            return list(session.exec(statement).all())

    def create(self, values: Mapping[str, Any], *, user_id: int) -> Asset:
        """Validate and persist a new asset."""
        cleaned, errors = validate_asset(values, currency=self.default_currency)
        raise_for_errors(errors, kind=KIND, logger=logger, user_id=user_id)
        with self.session_factory() as session:
            asset = Asset(user_id=user_id, **cleaned)
            session.add(asset)
            session.commit()
            session.refresh(asset)
            logger.info("Created asset", extra={"asset_id": asset.id, "user_id": user_id})
            return asset

    def update(self, asset_id: int, changes: Mapping[str, Any], *, user_id: int) -> Asset:
        """Update fields on an existing asset."""
        cleaned, errors = validate_asset(changes, partial=True)
        raise_for_errors(errors, kind=KIND, logger=logger, user_id=user_id)
        with self.session_factory() as session:
            asset = require_owned(session, Asset, asset_id, user_id, kind=KIND)
            apply_changes(asset, cleaned)
            session.add(asset)
            session.commit()
            session.refresh(asset)
            return asset

    def append_history(
        self,
        asset_id: int,
        entry: Mapping[str, Any],
        *,
        user_id: int,
        changes: Optional[Mapping[str, Any]] = None,
    ) -> Asset:
        """Append a valuation entry; ``changes`` are applied in the same write."""
        cleaned_entry, entry_errors = validate_valuation_entry(entry, prefix="history.")
        cleaned_changes, change_errors = validate_asset(changes or {}, partial=True)
        raise_for_errors(
            merge_errors(entry_errors, change_errors), kind=KIND, logger=logger, user_id=user_id
        )
        with self.session_factory() as session:
            asset = require_owned(session, Asset, asset_id, user_id, kind=KIND)
            append_embedded(asset, "history", cleaned_entry)
            apply_changes(asset, cleaned_changes)
            session.add(asset)
            session.commit()
            session.refresh(asset)
            logger.info(
                "Appended asset valuation",
                extra={"asset_id": asset_id, "user_id": user_id, "entries": len(asset.history)},
            )
            return asset

    def delete(self, asset_id: int, *, user_id: int) -> None:
        """Delete an asset; its inline history goes with the row."""
        with self.session_factory() as session:
            asset = require_owned(session, Asset, asset_id, user_id, kind=KIND)
            session.delete(asset)
            session.commit()
        logger.info("Deleted asset", extra={"asset_id": asset_id, "user_id": user_id})

    def get_total_value(self, *, user_id: int, is_liquid: Optional[bool] = None) -> float:
        """Sum current values across the user's assets."""
        return sum(asset.value for asset in self.list_for_user(user_id=user_id, is_liquid=is_liquid))
