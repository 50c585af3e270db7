"""Debt and liability entities."""

from __future__ import annotations

import datetime as dt
from typing import Any, ClassVar, Optional

from sqlalchemy import Index
from sqlmodel import Field, SQLModel

from .base import TimestampedModel, embedded_list_field

LIABILITY_TYPES: tuple[str, ...] = ("loan", "credit_card", "mortgage", "other")


class PaymentEntry(SQLModel):
    """A payment made against a liability.

    ``amount`` is the balance left after the payment, ``payment`` the sum paid.
    """

    date: dt.date
    amount: float
    payment: float
    notes: Optional[str] = None


class Liability(TimestampedModel, table=True):
    """Installment or revolving debt owed by the user."""

    __tablename__: ClassVar[str] = "liability"
    __table_args__ = (
        Index("ix_liability_user_type", "user_id", "type"),
        Index("ix_liability_user_active", "user_id", "is_active"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=120)
    type: str = Field(nullable=False, max_length=32)
    amount: float = Field(nullable=False)
    currency: str = Field(default="USD", nullable=False, max_length=8)
    interest_rate: float = Field(nullable=False)
    minimum_payment: float = Field(nullable=False)
    due_date: Optional[dt.date] = Field(default=None)
    start_date: dt.date = Field(nullable=False)
    end_date: Optional[dt.date] = Field(default=None)
    description: Optional[str] = Field(default=None, max_length=500)
    is_active: bool = Field(default=True, nullable=False)

    history: list[dict[str, Any]] = embedded_list_field()

    def payments(self) -> list[PaymentEntry]:
        """Return the payment history as typed entries."""
        return [PaymentEntry.model_validate(item) for item in self.history or []]
