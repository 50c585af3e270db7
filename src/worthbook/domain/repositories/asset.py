"""Asset repository protocol."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from ...models.asset import Asset


class AssetRepository(Protocol):
    """Repository for managing asset records."""

    def get_by_id(self, asset_id: int, *, user_id: int) -> Optional[Asset]:
        """Retrieve an asset owned by the user."""
        ...

    def list_for_user(
        self, *, user_id: int, type: Optional[str] = None, is_liquid: Optional[bool] = None
    ) -> list[Asset]:
        """List the user's assets, optionally filtered by type and liquidity."""
        ...

    def create(self, values: Mapping[str, Any], *, user_id: int) -> Asset:
        """Validate and persist a new asset."""
        ...

    def update(self, asset_id: int, changes: Mapping[str, Any], *, user_id: int) -> Asset:
        """Apply a validated partial change set."""
        ...

    def append_history(
        self,
        asset_id: int,
        entry: Mapping[str, Any],
        *,
        user_id: int,
        changes: Optional[Mapping[str, Any]] = None,
    ) -> Asset:
        """Append a valuation entry, optionally applying changes in the same write."""
        ...

    def delete(self, asset_id: int, *, user_id: int) -> None:
        """Delete an asset together with its history."""
        ...

    def get_total_value(self, *, user_id: int, is_liquid: Optional[bool] = None) -> float:
        """Sum current asset values."""
        ...
