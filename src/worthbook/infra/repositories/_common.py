"""Helpers shared by the SQLModel repositories."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Type, TypeVar

from sqlalchemy.orm.attributes import flag_modified
from sqlmodel import Session, SQLModel, select

from ...errors import NotFoundError, ValidationError
from ...models.base import utcnow
from ...validation import Errors

RecordT = TypeVar("RecordT", bound=SQLModel)


def fetch_owned(
    session: Session, model: Type[RecordT], record_id: int, user_id: int
) -> Optional[RecordT]:
    """Return the record only when it belongs to ``user_id``."""

    return session.exec(
        select(model).where(model.id == record_id, model.user_id == user_id)  # type: ignore[attr-defined]
    ).first()


def require_owned(
    session: Session, model: Type[RecordT], record_id: int, user_id: int, *, kind: str
) -> RecordT:
    record = fetch_owned(session, model, record_id, user_id)
    if record is None:
        raise NotFoundError(kind, record_id)
    return record


def raise_for_errors(errors: Errors, *, kind: str, logger, user_id: int) -> None:
    if errors:
        logger.warning(
            "Rejected %s write", kind, extra={"user_id": user_id, "fields": sorted(errors)}
        )
        raise ValidationError(errors, kind=kind)


def merge_errors(*groups: Errors) -> Errors:
    merged: Errors = {}
    for group in groups:
        for key, messages in group.items():
            merged.setdefault(key, []).extend(messages)
    return merged


def apply_changes(record: SQLModel, changes: Mapping[str, Any]) -> None:
    """Assign cleaned values and bump ``updated_at``."""

    for key, value in changes.items():
        setattr(record, key, value)
    record.updated_at = utcnow()  # type: ignore[attr-defined]


def append_embedded(record: SQLModel, field: str, entry: Mapping[str, Any]) -> None:
    """Append to an inline JSON list without mutating the loaded value."""

    current = list(getattr(record, field) or [])
    current.append(dict(entry))
    setattr(record, field, current)
    flag_modified(record, field)
