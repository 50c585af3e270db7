"""Asset valuation helpers."""

from __future__ import annotations

from datetime import date
from typing import Optional

from ..domain.repositories import AssetRepository
from ..models.asset import Asset


def record_valuation(
    repo: AssetRepository,
    asset_id: int,
    value: float,
    *,
    user_id: int,
    on: Optional[date] = None,
    notes: Optional[str] = None,
    update_value: bool = True,
) -> Asset:
    """Append a valuation and, unless told otherwise, make it the current value.

    Both happen in a single write so the history never disagrees with the
    asset it belongs to.
    """

    entry = {"date": on or date.today(), "value": value}
    if notes:
        entry["notes"] = notes
    changes = {"value": value} if update_value else None
    return repo.append_history(asset_id, entry, user_id=user_id, changes=changes)


__all__ = ["record_valuation"]
