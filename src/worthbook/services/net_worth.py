"""Net worth aggregation over the asset and liability stores."""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import Any, Iterable, Optional

from ..domain.repositories import AssetRepository, LiabilityRepository, NetWorthRepository
from ..logging_config import get_logger
from ..models.asset import Asset
from ..models.liability import Liability
from ..models.net_worth import NetWorthSnapshot

logger = get_logger("services.net_worth")


def _round(amount: float) -> float:
    return round(amount + 1e-9, 2)


def _breakdown(rows: Iterable[tuple[str, float]]) -> list[dict[str, Any]]:
    totals: dict[str, float] = defaultdict(float)
    for kind, amount in rows:
        totals[kind] += amount
    return [{"type": kind, "amount": _round(amount)} for kind, amount in sorted(totals.items())]


def summarize(
    assets: Iterable[Asset],
    liabilities: Iterable[Liability],
    *,
    currency: str = "USD",
) -> dict[str, Any]:
    """Build snapshot values from the given records.

    Amounts are summed as stored; records in another currency are included
    unconverted and reported in the log.
    """

    assets = list(assets)
    liabilities = list(liabilities)

    foreign = sorted(
        {record.currency for record in [*assets, *liabilities] if record.currency != currency}
    )
    if foreign:
        logger.warning(
            "Summing records in mixed currencies", extra={"currency": currency, "others": foreign}
        )

    assets_by_type = _breakdown((asset.type, asset.value) for asset in assets)
    liabilities_by_type = _breakdown((item.type, item.amount) for item in liabilities)
    total_assets = _round(sum(asset.value for asset in assets))
    total_liabilities = _round(sum(item.amount for item in liabilities))

    return {
        "total_assets": total_assets,
        "total_liabilities": total_liabilities,
        "net_worth": _round(total_assets - total_liabilities),
        "assets_by_type": assets_by_type,
        "liabilities_by_type": liabilities_by_type,
        "currency": currency,
    }


def capture_snapshot(
    asset_repo: AssetRepository,
    liability_repo: LiabilityRepository,
    snapshot_repo: NetWorthRepository,
    *,
    user_id: int,
    currency: str = "USD",
    notes: Optional[str] = None,
    at: Optional[datetime] = None,
) -> NetWorthSnapshot:
    """Read current assets and active liabilities and record a snapshot."""

    values = summarize(
        asset_repo.list_for_user(user_id=user_id),
        liability_repo.list_for_user(user_id=user_id, is_active=True),
        currency=currency,
    )
    if notes:
        values["notes"] = notes
    if at is not None:
        values["date"] = at
    return snapshot_repo.create(values, user_id=user_id)


def breakdown_matches_totals(snapshot: NetWorthSnapshot, *, tolerance: float = 0.01) -> bool:
    """Cross-check a snapshot's breakdowns against its stored totals."""

    assets = sum(entry.amount for entry in snapshot.asset_breakdown())
    liabilities = sum(entry.amount for entry in snapshot.liability_breakdown())
    return (
        abs(assets - snapshot.total_assets) <= tolerance
        and abs(liabilities - snapshot.total_liabilities) <= tolerance
    )


__all__ = ["breakdown_matches_totals", "capture_snapshot", "summarize"]
