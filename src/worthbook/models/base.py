"""Shared column helpers for record tables."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    """Return an aware UTC timestamp."""

    return datetime.now(timezone.utc)


def embedded_list_field() -> Any:
    """Inline JSON column holding a list of owned sub-records."""

    return Field(default_factory=list, sa_column=Column(JSON, nullable=False))


class TimestampedModel(SQLModel):
    """Adds automatically maintained creation/update timestamps."""

    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)


__all__ = ["TimestampedModel", "embedded_list_field", "utcnow"]
