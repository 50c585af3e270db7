"""Explicit validators run before any record is persisted.

Every validator returns ``(cleaned, errors)``. ``cleaned`` holds coerced values
ready to assign onto a model; ``errors`` maps field names to messages in the
same shape the liability form helpers use. Callers raise
:class:`~worthbook.errors.ValidationError` when ``errors`` is non-empty.
"""

from __future__ import annotations

import datetime as dt
import math
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from .models.asset import ASSET_TYPES, ValuationEntry
from .models.base import utcnow
from .models.liability import LIABILITY_TYPES, PaymentEntry
from .models.net_worth import BreakdownEntry
from .models.notification_settings import NOTIFICATION_DEFAULTS, CustomAlert

Errors = Dict[str, List[str]]
Result = Tuple[Dict[str, Any], Errors]

_MISSING = object()

# Fields no caller may set directly.
PROTECTED_FIELDS = frozenset({"id", "user_id", "created_at", "updated_at"})

REQUIRED = "This field is required."
NOT_NULL = "This field cannot be empty."


class _Cleaner:
    """Collects coerced values and per-field errors for one payload."""

    def __init__(self, values: Mapping[str, Any], *, partial: bool, prefix: str = "") -> None:
        self.values = values
        self.partial = partial
        self.prefix = prefix
        self.cleaned: Dict[str, Any] = {}
        self.errors: Errors = {}

    def error(self, field: str, message: str) -> None:
        self.errors.setdefault(f"{self.prefix}{field}", []).append(message)

    def _fetch(self, field: str, *, required: bool, default: Any) -> Any:
        """Return the raw value, or ``_MISSING`` when nothing should be stored."""

        raw = self.values.get(field, _MISSING)
        if raw is _MISSING:
            if self.partial:
                return _MISSING
            if default is None and required:
                self.error(field, REQUIRED)
                return _MISSING
            self.cleaned[field] = default() if callable(default) else default
            return _MISSING
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            if required:
                self.error(field, REQUIRED)
            elif default is not None:
                # Defaulted columns are NOT NULL; omit the key to get the default.
                self.error(field, NOT_NULL)
            else:
                self.cleaned[field] = None
            return _MISSING
        return raw

    def text(self, field: str, *, required: bool = False, default: Any = None) -> None:
        raw = self._fetch(field, required=required, default=default)
        if raw is _MISSING:
            return
        if not isinstance(raw, str):
            self.error(field, "Enter text.")
            return
        self.cleaned[field] = raw.strip()

    def choice(self, field: str, choices: Iterable[str], *, required: bool = True) -> None:
        raw = self._fetch(field, required=required, default=None)
        if raw is _MISSING:
            return
        options = tuple(choices)
        if raw not in options:
            self.error(field, f"Choose one of: {', '.join(options)}.")
            return
        self.cleaned[field] = raw

    def number(
        self,
        field: str,
        *,
        required: bool = False,
        minimum: Optional[float] = None,
        default: Any = None,
    ) -> None:
        raw = self._fetch(field, required=required, default=default)
        if raw is _MISSING:
            return
        value = parse_number(raw)
        if value is None:
            self.error(field, "Enter a valid number.")
            return
        if minimum is not None and value < minimum:
            self.error(field, "Amount must be at least zero." if minimum == 0 else f"Must be at least {minimum}.")
            return
        self.cleaned[field] = value

    def boolean(self, field: str, *, default: Any = None) -> None:
        raw = self.values.get(field, _MISSING)
        if raw is _MISSING:
            if not self.partial:
                self.cleaned[field] = default
            return
        if not isinstance(raw, bool):
            self.error(field, "Must be true or false.")
            return
        self.cleaned[field] = raw

    def date(self, field: str, *, required: bool = False) -> None:
        raw = self._fetch(field, required=required, default=None)
        if raw is _MISSING:
            return
        value = parse_date(raw)
        if value is None:
            self.error(field, "Enter a valid date.")
            return
        self.cleaned[field] = value

    def timestamp(self, field: str, *, required: bool = False, default: Any = None) -> None:
        raw = self._fetch(field, required=required, default=default)
        if raw is _MISSING:
            return
        value = parse_datetime(raw)
        if value is None:
            self.error(field, "Enter a valid date.")
            return
        self.cleaned[field] = value

    def reject_unknown(self, allowed: Iterable[str], *, embedded: Iterable[str] = ()) -> None:
        allowed = set(allowed)
        embedded = set(embedded)
        for key in self.values:
            if key in PROTECTED_FIELDS:
                self.error(key, "Field cannot be changed.")
            elif key in embedded and self.partial:
                self.error(key, "Entries can only be appended, not replaced.")
            elif key not in allowed and key not in embedded:
                self.error(key, "Unknown field.")

    def result(self) -> Result:
        return self.cleaned, self.errors


def parse_number(raw: Any) -> Optional[float]:
    """Coerce ints, floats, Decimals and numeric strings; reject booleans."""

    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float, Decimal)):
        value = float(raw)
    elif isinstance(raw, str):
        try:
            value = float(Decimal(raw.strip()))
        except (InvalidOperation, ValueError):
            return None
    else:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def _iso(raw: str) -> str:
    text = raw.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return text


def parse_date(raw: Any) -> Optional[dt.date]:
    """Coerce to a calendar date.

    History entries and the asset/liability date fields store days, not
    instants: a datetime or ISO timestamp keeps the date as written and drops
    the time of day and offset (``"2024-01-01T23:30:00-05:00"`` becomes
    2024-01-01). Only snapshot ``date`` keeps a full timestamp; see
    :func:`parse_datetime`.
    """

    if isinstance(raw, dt.datetime):
        return raw.date()
    if isinstance(raw, dt.date):
        return raw
    if isinstance(raw, str):
        text = _iso(raw)
        try:
            return dt.date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return dt.datetime.fromisoformat(text).date()
        except ValueError:
            return None
    return None


def parse_datetime(raw: Any) -> Optional[dt.datetime]:
    """Coerce to a UTC datetime; bare dates become midnight UTC."""

    if isinstance(raw, dt.datetime):
        value = raw
    elif isinstance(raw, dt.date):
        value = dt.datetime.combine(raw, dt.time.min)
    elif isinstance(raw, str):
        try:
            value = dt.datetime.fromisoformat(_iso(raw))
        except ValueError:
            return None
    else:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


def _embedded(
    cleaner: _Cleaner,
    field: str,
    validator: Callable[..., Result],
) -> None:
    """Validate a list of embedded entries supplied at creation time."""

    raw = cleaner.values.get(field, _MISSING)
    if raw is _MISSING or raw is None:
        if not cleaner.partial:
            cleaner.cleaned[field] = []
        return
    if not isinstance(raw, (list, tuple)):
        cleaner.error(field, "Provide a list of entries.")
        return
    entries: list[dict[str, Any]] = []
    for index, item in enumerate(raw):
        entry, errors = validator(item, prefix=f"{cleaner.prefix}{field}[{index}].")
        for key, messages in errors.items():
            cleaner.errors.setdefault(key, []).extend(messages)
        if not errors:
            entries.append(entry)
    cleaner.cleaned[field] = entries


def _as_mapping(values: Any, prefix: str) -> Tuple[Mapping[str, Any], Errors]:
    if isinstance(values, Mapping):
        return values, {}
    if hasattr(values, "model_dump"):
        return values.model_dump(exclude_none=True), {}
    return {}, {prefix.rstrip(".") or "entry": ["Provide an object."]}


# =============================================================================
# Embedded entries
# =============================================================================


def validate_valuation_entry(values: Any, *, prefix: str = "") -> Result:
    """Validate one asset history entry; cleaned form is JSON-ready."""

    values, errors = _as_mapping(values, prefix)
    if errors:
        return {}, errors
    c = _Cleaner(values, partial=False, prefix=prefix)
    c.reject_unknown(("date", "value", "notes"))
    c.date("date", required=True)
    c.number("value", required=True)
    c.text("notes")
    if c.errors:
        return {}, c.errors
    return ValuationEntry(**c.cleaned).model_dump(mode="json", exclude_none=True), {}


def validate_payment_entry(values: Any, *, prefix: str = "") -> Result:
    values, errors = _as_mapping(values, prefix)
    if errors:
        return {}, errors
    c = _Cleaner(values, partial=False, prefix=prefix)
    c.reject_unknown(("date", "amount", "payment", "notes"))
    c.date("date", required=True)
    c.number("amount", required=True)
    c.number("payment", required=True)
    c.text("notes")
    if c.errors:
        return {}, c.errors
    return PaymentEntry(**c.cleaned).model_dump(mode="json", exclude_none=True), {}


def validate_breakdown_entry(values: Any, *, prefix: str = "") -> Result:
    values, errors = _as_mapping(values, prefix)
    if errors:
        return {}, errors
    c = _Cleaner(values, partial=False, prefix=prefix)
    c.reject_unknown(("type", "amount"))
    c.text("type", required=True)
    c.number("amount", required=True, minimum=0)
    if c.errors:
        return {}, c.errors
    return BreakdownEntry(**c.cleaned).model_dump(mode="json"), {}


def validate_custom_alert(values: Any, *, prefix: str = "") -> Result:
    values, errors = _as_mapping(values, prefix)
    if errors:
        return {}, errors
    c = _Cleaner(values, partial=False, prefix=prefix)
    c.reject_unknown(("type", "threshold", "enabled"))
    c.text("type", required=True)
    c.number("threshold", required=True)
    c.boolean("enabled", default=True)
    if c.errors:
        return {}, c.errors
    return CustomAlert(**c.cleaned).model_dump(mode="json"), {}


# =============================================================================
# Records
# =============================================================================

ASSET_FIELDS = (
    "name", "type", "value", "currency", "description", "purchase_date",
    "purchase_price", "appreciation_rate", "is_liquid",
)
LIABILITY_FIELDS = (
    "name", "type", "amount", "currency", "interest_rate", "minimum_payment",
    "due_date", "start_date", "end_date", "description", "is_active",
)
SNAPSHOT_FIELDS = (
    "date", "total_assets", "total_liabilities", "net_worth", "currency", "notes",
)


def validate_asset(values: Mapping[str, Any], *, partial: bool = False, currency: str = "USD") -> Result:
    """Validate a new asset, or with ``partial`` a change set for one."""

    c = _Cleaner(values, partial=partial)
    c.reject_unknown(ASSET_FIELDS, embedded=("history",))
    c.text("name", required=True)
    c.choice("type", ASSET_TYPES)
    c.number("value", required=True, minimum=0)
    c.text("currency", required=True, default=currency)
    c.text("description")
    c.date("purchase_date")
    c.number("purchase_price")
    c.number("appreciation_rate", default=0.0)
    c.boolean("is_liquid", default=False)
    if not partial:
        _embedded(c, "history", validate_valuation_entry)
    return c.result()


def validate_liability(
    values: Mapping[str, Any], *, partial: bool = False, currency: str = "USD"
) -> Result:
    c = _Cleaner(values, partial=partial)
    c.reject_unknown(LIABILITY_FIELDS, embedded=("history",))
    c.text("name", required=True)
    c.choice("type", LIABILITY_TYPES)
    c.number("amount", required=True, minimum=0)
    c.text("currency", required=True, default=currency)
    c.number("interest_rate", required=True, minimum=0)
    c.number("minimum_payment", required=True, minimum=0)
    c.date("due_date")
    c.date("start_date", required=True)
    c.date("end_date")
    c.text("description")
    c.boolean("is_active", default=True)
    if not partial:
        _embedded(c, "history", validate_payment_entry)
    return c.result()


def validate_snapshot(values: Mapping[str, Any], *, currency: str = "USD") -> Result:
    """Validate a snapshot; ``net_worth`` defaults to assets minus liabilities."""

    c = _Cleaner(values, partial=False)
    c.reject_unknown(SNAPSHOT_FIELDS, embedded=("assets_by_type", "liabilities_by_type"))
    c.timestamp("date", default=utcnow)
    c.number("total_assets", required=True, minimum=0)
    c.number("total_liabilities", required=True, minimum=0)
    if values.get("net_worth") is None:
        assets = c.cleaned.get("total_assets")
        liabilities = c.cleaned.get("total_liabilities")
        if assets is not None and liabilities is not None:
            c.cleaned["net_worth"] = assets - liabilities
    else:
        c.number("net_worth", required=True)
    c.text("currency", required=True, default=currency)
    c.text("notes")
    _embedded(c, "assets_by_type", validate_breakdown_entry)
    _embedded(c, "liabilities_by_type", validate_breakdown_entry)
    return c.result()


def validate_notification_settings(values: Mapping[str, Any], *, partial: bool = False) -> Result:
    """Only the documented toggles (and, on creation, custom alerts) are accepted."""

    c = _Cleaner(values, partial=partial)
    c.reject_unknown(NOTIFICATION_DEFAULTS, embedded=("custom_alerts",))
    for name, default in NOTIFICATION_DEFAULTS.items():
        c.boolean(name, default=default)
    if not partial:
        _embedded(c, "custom_alerts", validate_custom_alert)
    return c.result()


__all__ = [
    "Errors",
    "parse_date",
    "parse_datetime",
    "parse_number",
    "validate_asset",
    "validate_breakdown_entry",
    "validate_custom_alert",
    "validate_liability",
    "validate_notification_settings",
    "validate_payment_entry",
    "validate_snapshot",
    "validate_valuation_entry",
]
