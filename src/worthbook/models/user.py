"""Minimal user table that owns every record."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from .base import utcnow


class User(SQLModel, table=True):
    """Identity row referenced by ``user_id`` on every record.

    Authentication lives outside this package; the row only gives the
    foreign keys a target.
    """

    __tablename__: ClassVar[str] = "user"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(nullable=False, unique=True, index=True, max_length=64)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
