"""Utilities for recording liability payments."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from ..domain.repositories import LiabilityRepository
from ..errors import ValidationError
from ..models.liability import Liability
from ..validation import parse_number


def _normalize_currency(amount: float) -> float:
    """Round to cents using half-up rounding."""

    return round(amount + 1e-9, 2)


def _parse_payment(payment: Any) -> float:
    value = parse_number(payment)
    if value is None or value <= 0:
        raise ValidationError({"payment": ["Payment must be greater than zero."]}, kind="liability")
    return value


def build_payment_entry(
    liability: Liability,
    payment: Any,
    *,
    on: Optional[date] = None,
    notes: Optional[str] = None,
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Return ``(history_entry, changes)`` for a payment against ``liability``.

    The entry's ``amount`` is the balance left after the payment, floored at
    zero. A liability paid down to zero is marked inactive.
    """

    value = _parse_payment(payment)
    remaining = _normalize_currency(max(float(liability.amount) - value, 0.0))
    entry: dict[str, Any] = {
        "date": on or date.today(),
        "amount": remaining,
        "payment": _normalize_currency(value),
    }
    if notes:
        entry["notes"] = notes

    changes: dict[str, Any] = {"amount": remaining}
    if remaining == 0:
        changes["is_active"] = False
    return entry, changes


def record_payment(
    repo: LiabilityRepository,
    liability_id: int,
    payment: Any,
    *,
    user_id: int,
    on: Optional[date] = None,
    notes: Optional[str] = None,
) -> Liability:
    """Record a payment: append history, lower the balance, settle at zero."""

    value = _parse_payment(payment)
    # The balance is read and written in one guarded step.
    return repo.append_computed_history(
        liability_id,
        lambda current: build_payment_entry(current, value, on=on, notes=notes),
        user_id=user_id,
    )


__all__ = ["build_payment_entry", "record_payment"]
