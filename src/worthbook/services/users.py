"""Owner rows referenced by every record.

Credentials and sessions belong to the identity service; this module only
keeps the rows that records point at.
"""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ..errors import ConflictError, ValidationError
from ..models.user import User

SessionFactory = Callable[[], Session]


def get_user_by_username(username: str, session_factory: SessionFactory) -> Optional[User]:
    """Fetch a user by username."""
    username = username.strip()
    with session_factory() as session:
        return session.exec(select(User).where(User.username == username)).first()


def create_user(username: str, *, session_factory: SessionFactory) -> User:
    """Create a new owner row; usernames are unique."""

    username = (username or "").strip()
    if not username:
        raise ValidationError({"username": ["Enter a username."]}, kind="user")
    if get_user_by_username(username, session_factory) is not None:
        raise ConflictError("user", f"Username {username!r} already exists")
    with session_factory() as session:
        user = User(username=username)
        session.add(user)
        session.commit()
        session.refresh(user)
        return user


def ensure_user(username: str, *, session_factory: SessionFactory) -> User:
    """Return the named user, creating it when missing."""

    existing = get_user_by_username(username, session_factory)
    if existing is not None:
        return existing
    return create_user(username, session_factory=session_factory)


__all__ = ["create_user", "ensure_user", "get_user_by_username"]
