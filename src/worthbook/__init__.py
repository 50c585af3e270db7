"""WorthBook personal-finance record stores."""

from __future__ import annotations

from .config import BaseConfig, DevConfig, TestConfig
from .context import AppContext, create_app_context
from .errors import ConflictError, NotFoundError, ValidationError, WorthBookError

__all__ = [
    "AppContext",
    "BaseConfig",
    "ConflictError",
    "DevConfig",
    "NotFoundError",
    "TestConfig",
    "ValidationError",
    "WorthBookError",
    "create_app_context",
]
