"""Point-in-time net worth snapshots."""

from __future__ import annotations

import datetime as dt
from typing import Any, ClassVar, Optional

from sqlalchemy import Index
from sqlmodel import Field, SQLModel

from .base import TimestampedModel, embedded_list_field, utcnow


class BreakdownEntry(SQLModel):
    """Total for one asset or liability type within a snapshot."""

    type: str
    amount: float


class NetWorthSnapshot(TimestampedModel, table=True):
    """Immutable aggregate of a user's assets and liabilities at ``date``."""

    __tablename__: ClassVar[str] = "net_worth_history"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    date: dt.datetime = Field(default_factory=utcnow, nullable=False)
    total_assets: float = Field(nullable=False)
    total_liabilities: float = Field(nullable=False)
    net_worth: float = Field(nullable=False)
    currency: str = Field(default="USD", nullable=False, max_length=8)
    notes: Optional[str] = Field(default=None, max_length=500)

    # Unordered (type, amount) pairs; sums are not enforced against totals.
    assets_by_type: list[dict[str, Any]] = embedded_list_field()
    liabilities_by_type: list[dict[str, Any]] = embedded_list_field()

    def asset_breakdown(self) -> list[BreakdownEntry]:
        return [BreakdownEntry.model_validate(item) for item in self.assets_by_type or []]

    def liability_breakdown(self) -> list[BreakdownEntry]:
        return [BreakdownEntry.model_validate(item) for item in self.liabilities_by_type or []]


_snapshot_columns = NetWorthSnapshot.__table__.c  # type: ignore[attr-defined]
Index("ix_net_worth_user_date", _snapshot_columns.user_id, _snapshot_columns.date)
Index("ix_net_worth_user_date_desc", _snapshot_columns.user_id, _snapshot_columns.date.desc())
