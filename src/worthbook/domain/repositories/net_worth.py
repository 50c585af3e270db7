"""Net-worth snapshot repository protocol."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Protocol

from ...models.net_worth import NetWorthSnapshot


class NetWorthRepository(Protocol):
    """Append-only store of net-worth snapshots."""

    def get_by_id(self, snapshot_id: int, *, user_id: int) -> Optional[NetWorthSnapshot]:
        ...

    def list_for_user(
        self,
        *,
        user_id: int,
        descending: bool = True,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> list[NetWorthSnapshot]:
        """Return the user's timeline ordered by date."""
        ...

    def latest(self, *, user_id: int) -> Optional[NetWorthSnapshot]:
        ...

    def create(self, values: Mapping[str, Any], *, user_id: int) -> NetWorthSnapshot:
        ...

    def delete(self, snapshot_id: int, *, user_id: int) -> None:
        ...
