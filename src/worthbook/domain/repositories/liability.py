"""Liability repository protocol."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Protocol, Tuple

from ...models.liability import Liability


class LiabilityRepository(Protocol):
    """Repository for managing liability entities."""

    def get_by_id(self, liability_id: int, *, user_id: int) -> Optional[Liability]:
        """Retrieve a liability by ID."""
        ...

    def list_for_user(
        self, *, user_id: int, type: Optional[str] = None, is_active: Optional[bool] = None
    ) -> list[Liability]:
        """List liabilities, optionally filtered by type and active flag."""
        ...

    def create(self, values: Mapping[str, Any], *, user_id: int) -> Liability:
        """Create a new liability."""
        ...

    def update(self, liability_id: int, changes: Mapping[str, Any], *, user_id: int) -> Liability:
        """Update an existing liability."""
        ...

    def append_history(
        self,
        liability_id: int,
        entry: Mapping[str, Any],
        *,
        user_id: int,
        changes: Optional[Mapping[str, Any]] = None,
    ) -> Liability:
        """Append a payment entry."""
        ...

    def append_computed_history(
        self,
        liability_id: int,
        compute: Callable[[Liability], Tuple[Mapping[str, Any], Mapping[str, Any]]],
        *,
        user_id: int,
    ) -> Liability:
        """Append an entry computed from the current row without losing concurrent writes."""
        ...

    def delete(self, liability_id: int, *, user_id: int) -> None:
        """Delete a liability by ID."""
        ...

    def get_total_outstanding(self, *, user_id: int, active_only: bool = True) -> float:
        """Calculate total outstanding debt."""
        ...
