"""Service module exports."""

from . import assets, liabilities, net_worth, users

__all__ = ["assets", "liabilities", "net_worth", "users"]
