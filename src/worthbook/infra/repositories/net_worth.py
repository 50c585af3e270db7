"""SQLModel implementation of the net-worth snapshot repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from sqlmodel import Session, select

from ...logging_config import get_logger
from ...models.net_worth import NetWorthSnapshot
from ...validation import parse_datetime, validate_snapshot
from ._common import fetch_owned, raise_for_errors, require_owned

logger = get_logger("repositories.net_worth")

KIND = "net worth snapshot"


class SQLModelNetWorthRepository:
    """Snapshots are written once and never updated."""

    def __init__(self, session_factory: Callable[[], Session], *, default_currency: str = "USD"):
        self.session_factory = session_factory
        self.default_currency = default_currency

    def get_by_id(self, snapshot_id: int, *, user_id: int) -> Optional[NetWorthSnapshot]:
        with self.session_factory() as session:
            return fetch_owned(session, NetWorthSnapshot, snapshot_id, user_id)

    def list_for_user(
        self,
        *,
        user_id: int,
        descending: bool = True,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> list[NetWorthSnapshot]:
        """Return the user's timeline ordered by date, newest first by default.

        ``start`` and ``end`` are inclusive bounds.
        """
        bounds = {"start": start, "end": end}
        parsed: dict[str, Optional[datetime]] = {}
        errors: dict[str, list[str]] = {}
        for name, raw in bounds.items():
            if raw is None:
                parsed[name] = None
                continue
            parsed[name] = parse_datetime(raw)
            if parsed[name] is None:
                errors[name] = ["Enter a valid date."]
        if limit is not None and limit < 1:
            errors["limit"] = ["Limit must be a positive number."]
        raise_for_errors(errors, kind=KIND, logger=logger, user_id=user_id)

        with self.session_factory() as session:
            statement = select(NetWorthSnapshot).where(NetWorthSnapshot.user_id == user_id)
            if parsed["start"] is not None:
                statement = statement.where(NetWorthSnapshot.date >= parsed["start"])
            if parsed["end"] is not None:
                statement = statement.where(NetWorthSnapshot.date <= parsed["end"])
            if descending:
                statement = statement.order_by(
                    NetWorthSnapshot.date.desc(), NetWorthSnapshot.id.desc()  # type: ignore[attr-defined]
                )
            else:
                statement = statement.order_by(
                    NetWorthSnapshot.date.asc(), NetWorthSnapshot.id.asc()  # type: ignore[attr-defined]
                )
            if limit is not None:
                statement = statement.limit(limit)
            return list(session.exec(statement).all())

    def latest(self, *, user_id: int) -> Optional[NetWorthSnapshot]:
        snapshots = self.list_for_user(user_id=user_id, descending=True, limit=1)
        return snapshots[0] if snapshots else None

    def create(self, values: Mapping[str, Any], *, user_id: int) -> NetWorthSnapshot:
        """Validate and persist a snapshot."""
        cleaned, errors = validate_snapshot(values, currency=self.default_currency)
        raise_for_errors(errors, kind=KIND, logger=logger, user_id=user_id)
        with self.session_factory() as session:
            snapshot = NetWorthSnapshot(user_id=user_id, **cleaned)
            session.add(snapshot)
            session.commit()
            session.refresh(snapshot)
            logger.info(
                "Recorded net worth snapshot",
                extra={"snapshot_id": snapshot.id, "user_id": user_id, "net_worth": snapshot.net_worth},
            )
            return snapshot

    def delete(self, snapshot_id: int, *, user_id: int) -> None:
        with self.session_factory() as session:
            snapshot = require_owned(session, NetWorthSnapshot, snapshot_id, user_id, kind=KIND)
            session.delete(snapshot)
            session.commit()
        logger.info("Deleted net worth snapshot", extra={"snapshot_id": snapshot_id, "user_id": user_id})
