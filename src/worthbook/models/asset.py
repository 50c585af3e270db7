"""Asset records and their valuation history."""

from __future__ import annotations

import datetime as dt
from typing import Any, ClassVar, Optional

from sqlalchemy import Index
from sqlmodel import Field, SQLModel

from .base import TimestampedModel, embedded_list_field

ASSET_TYPES: tuple[str, ...] = ("cash", "investment", "property", "vehicle", "other")


class ValuationEntry(SQLModel):
    """One point in an asset's valuation history."""

    date: dt.date
    value: float
    notes: Optional[str] = None


class Asset(TimestampedModel, table=True):
    """Something the user owns, with its current value."""

    __tablename__: ClassVar[str] = "asset"
    __table_args__ = (
        Index("ix_asset_user_type", "user_id", "type"),
        Index("ix_asset_user_liquid", "user_id", "is_liquid"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=120)
    type: str = Field(nullable=False, max_length=32)
    value: float = Field(nullable=False)
    currency: str = Field(default="USD", nullable=False, max_length=8)
    description: Optional[str] = Field(default=None, max_length=500)
    purchase_date: Optional[dt.date] = Field(default=None)
    purchase_price: Optional[float] = Field(default=None)
    appreciation_rate: float = Field(default=0.0, nullable=False)
    is_liquid: bool = Field(default=False, nullable=False)

    # Stored inline; serialized ValuationEntry dicts in append order.
    history: list[dict[str, Any]] = embedded_list_field()

    def valuations(self) -> list[ValuationEntry]:
        """Return the history as typed entries."""
        return [ValuationEntry.model_validate(item) for item in self.history or []]
