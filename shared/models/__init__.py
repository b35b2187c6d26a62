"""Database models package."""

from .base import Base, TimestampMixin, generate_id
from .identity_provider import (
    REDIRECT_ANY_DOMAIN_KEY,
    REDIRECT_DOMAIN_KEY,
    REDIRECT_EMAIL_MATCHES_KEY,
    IdentityProvider,
)
from .identity_provider_domain import IdentityProviderDomain

__all__ = [
    "Base",
    "TimestampMixin",
    "generate_id",
    "IdentityProvider",
    "IdentityProviderDomain",
    "REDIRECT_ANY_DOMAIN_KEY",
    "REDIRECT_DOMAIN_KEY",
    "REDIRECT_EMAIL_MATCHES_KEY",
]
