"""Error types raised by the record stores."""

from __future__ import annotations

from typing import Dict, List, Mapping


class WorthBookError(Exception):
    """Base class for WorthBook store errors."""


class ValidationError(WorthBookError, ValueError):
    """A candidate record or change set failed validation.

    ``errors`` maps each offending field to its messages.
    """

    def __init__(self, errors: Mapping[str, List[str]], *, kind: str | None = None):
        self.errors: Dict[str, List[str]] = {key: list(value) for key, value in errors.items()}
        self.kind = kind
        fields = ", ".join(sorted(self.errors))
        prefix = f"Invalid {kind}" if kind else "Invalid record"
        super().__init__(f"{prefix}: {fields}")

    @property
    def fields(self) -> list[str]:
        return sorted(self.errors)


class NotFoundError(WorthBookError, LookupError):
    """The identifier does not resolve to a record owned by the user."""

    def __init__(self, kind: str, identifier: object):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} {identifier} was not found")


class ConflictError(WorthBookError):
    """A uniqueness rule would be violated by the write."""

    def __init__(self, kind: str, message: str):
        self.kind = kind
        super().__init__(message)


__all__ = ["WorthBookError", "ValidationError", "NotFoundError", "ConflictError"]
