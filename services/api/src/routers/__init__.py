"""Routers package."""

from . import health, identity_providers

__all__ = [
    "health",
    "identity_providers",
]
