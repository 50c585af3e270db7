"""SQLModel implementation of Liability repository."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Tuple

from sqlalchemy import update
from sqlmodel import Session, select

from ...errors import ConflictError
from ...logging_config import get_logger
from ...models.base import utcnow
from ...models.liability import Liability
from ...validation import validate_liability, validate_payment_entry
from ._common import (
    append_embedded,
    apply_changes,
    fetch_owned,
    merge_errors,
    raise_for_errors,
    require_owned,
)

logger = get_logger("repositories.liability")

KIND = "liability"

# Optimistic write attempts before giving up on a contended liability.
MAX_WRITE_ATTEMPTS = 3

PaymentComputation = Callable[[Liability], Tuple[Mapping[str, Any], Mapping[str, Any]]]


class SQLModelLiabilityRepository:
    """SQLModel-based liability repository implementation."""

    def __init__(self, session_factory: Callable[[], Session], *, default_currency: str = "USD"):
        """Initialize with a session factory."""
        self.session_factory = session_factory
        self.default_currency = default_currency

    def get_by_id(self, liability_id: int, *, user_id: int) -> Optional[Liability]:
        """Retrieve a liability by ID."""
        with self.session_factory() as session:
            return fetch_owned(session, Liability, liability_id, user_id)

    def list_for_user(
        self, *, user_id: int, type: Optional[str] = None, is_active: Optional[bool] = None
    ) -> list[Liability]:
        """List liabilities, optionally narrowed by type and active flag."""
        with self.session_factory() as session:
            statement = select(Liability).where(Liability.user_id == user_id)
            if type is not None:
                statement = statement.where(Liability.type == type)
            if is_active is not None:
                statement = statement.where(Liability.is_active == is_active)
            statement = statement.order_by(Liability.name, Liability.id)  # type: ignore[arg-type]
            return list(session.exec(statement).all())

    def create(self, values: Mapping[str, Any], *, user_id: int) -> Liability:
        """Create a new liability."""
        cleaned, errors = validate_liability(values, currency=self.default_currency)
        raise_for_errors(errors, kind=KIND, logger=logger, user_id=user_id)
        with self.session_factory() as session:
            liability = Liability(user_id=user_id, **cleaned)
            session.add(liability)
            session.commit()
            session.refresh(liability)
            logger.info("Created liability", extra={"liability_id": liability.id, "user_id": user_id})
            return liability

    def update(self, liability_id: int, changes: Mapping[str, Any], *, user_id: int) -> Liability:
        """Update an existing liability."""
        cleaned, errors = validate_liability(changes, partial=True)
        raise_for_errors(errors, kind=KIND, logger=logger, user_id=user_id)
        with self.session_factory() as session:
            liability = require_owned(session, Liability, liability_id, user_id, kind=KIND)
            apply_changes(liability, cleaned)
            session.add(liability)
            session.commit()
            session.refresh(liability)
            return liability

    def append_history(
        self,
        liability_id: int,
        entry: Mapping[str, Any],
        *,
        user_id: int,
        changes: Optional[Mapping[str, Any]] = None,
    ) -> Liability:
        """Append a payment entry; ``changes`` are applied in the same write."""
        cleaned_entry, entry_errors = validate_payment_entry(entry, prefix="history.")
        cleaned_changes, change_errors = validate_liability(changes or {}, partial=True)
        raise_for_errors(
            merge_errors(entry_errors, change_errors), kind=KIND, logger=logger, user_id=user_id
        )
        with self.session_factory() as session:
            liability = require_owned(session, Liability, liability_id, user_id, kind=KIND)
            append_embedded(liability, "history", cleaned_entry)
            apply_changes(liability, cleaned_changes)
            session.add(liability)
            session.commit()
            session.refresh(liability)
            logger.info(
                "Appended liability payment",
                extra={"liability_id": liability_id, "user_id": user_id},
            )
            return liability

    def append_computed_history(
        self, liability_id: int, compute: PaymentComputation, *, user_id: int
    ) -> Liability:
        """Append an entry derived from the liability's current state.

        ``compute`` receives the freshly loaded liability and returns
        ``(entry, changes)``. The write only lands if the row is unchanged since
        it was read; otherwise the row is re-read and ``compute`` runs again, so
        a payment never overwrites one recorded in between.
        """
        for attempt in range(1, MAX_WRITE_ATTEMPTS + 1):
            with self.session_factory() as session:
                liability = require_owned(session, Liability, liability_id, user_id, kind=KIND)
                entry, changes = compute(liability)
                cleaned_entry, entry_errors = validate_payment_entry(entry, prefix="history.")
                cleaned_changes, change_errors = validate_liability(changes or {}, partial=True)
                raise_for_errors(
                    merge_errors(entry_errors, change_errors),
                    kind=KIND,
                    logger=logger,
                    user_id=user_id,
                )

                values = dict(cleaned_changes)
                values["history"] = [*(liability.history or []), cleaned_entry]
                values["updated_at"] = utcnow()
                statement = (
                    update(Liability)
                    .where(
                        Liability.id == liability_id,
                        Liability.user_id == user_id,
                        Liability.amount == liability.amount,
                        Liability.updated_at == liability.updated_at,
                    )
                    .values(**values)
                )
                result = session.connection().execute(statement)
                if result.rowcount == 1:
                    session.commit()
                    session.refresh(liability)
                    logger.info(
                        "Appended liability payment",
                        extra={"liability_id": liability_id, "user_id": user_id, "attempt": attempt},
                    )
                    return liability
            logger.warning(
                "Liability changed during payment, retrying",
                extra={"liability_id": liability_id, "user_id": user_id, "attempt": attempt},
            )
        raise ConflictError(
            KIND, f"Liability {liability_id} kept changing; the entry was not recorded"
        )

    def delete(self, liability_id: int, *, user_id: int) -> None:
        """Delete a liability by ID."""
        with self.session_factory() as session:
            liability = require_owned(session, Liability, liability_id, user_id, kind=KIND)
            session.delete(liability)
            session.commit()
        logger.info("Deleted liability", extra={"liability_id": liability_id, "user_id": user_id})

    def get_total_outstanding(self, *, user_id: int, active_only: bool = True) -> float:
        """Calculate total outstanding debt."""
        liabilities = self.list_for_user(user_id=user_id, is_active=True if active_only else None)
        return sum(liability.amount for liability in liabilities)

