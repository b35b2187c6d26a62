"""Identity provider model."""

from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import ID_LENGTH, Base, TimestampMixin, generate_id

# Redirect modes stored in IdentityProvider.config
REDIRECT_ANY_DOMAIN_KEY = "redirect_email_matches_any_domain"
REDIRECT_EMAIL_MATCHES_KEY = "redirect_email_matches"
REDIRECT_DOMAIN_KEY = "domain"

if TYPE_CHECKING:
    from .identity_provider_domain import IdentityProviderDomain


class IdentityProvider(TimestampMixin, Base):
    """Identity provider - an external authentication source users log in through."""

    __tablename__ = "IDENTITY_PROVIDER"

    internal_id: Mapped[str] = mapped_column(
        "INTERNAL_ID", String(ID_LENGTH), primary_key=True, default=generate_id
    )
    alias: Mapped[str] = mapped_column("PROVIDER_ALIAS", String(255), unique=True, index=True)
    display_name: Mapped[str | None] = mapped_column("PROVIDER_DISPLAY_NAME", String(255))
    provider_id: Mapped[str] = mapped_column("PROVIDER_ID", String(255), default="oidc")  # oidc, saml
    enabled: Mapped[bool] = mapped_column("ENABLED", Boolean, default=True)
    hide_on_login: Mapped[bool] = mapped_column("HIDE_ON_LOGIN", Boolean, default=False)
    config: Mapped[dict[str, Any]] = mapped_column("CONFIG", JSON, default=dict)

    domains: Mapped[list["IdentityProviderDomain"]] = relationship(
        back_populates="identity_provider",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="IdentityProviderDomain.name",
    )

    @property
    def redirect_any_domain(self) -> bool:
        """Users whose email domain is any of this provider's domains are sent straight to it."""
        return bool((self.config or {}).get(REDIRECT_ANY_DOMAIN_KEY, False))

    @property
    def redirect_email_matches(self) -> bool:
        """Users whose email domain is the chosen redirect domain are sent straight to it."""
        return bool((self.config or {}).get(REDIRECT_EMAIL_MATCHES_KEY, False))

    @property
    def redirect_domain(self) -> str | None:
        return (self.config or {}).get(REDIRECT_DOMAIN_KEY) or None

    def redirects_email_domain(self, domain: str) -> bool:
        """Whether a user with an email at ``domain`` (normalized) is redirected here."""
        if not any(row.name == domain for row in self.domains):
            return False
        if self.redirect_any_domain:
            return True
        return self.redirect_email_matches and self.redirect_domain == domain

    def __repr__(self) -> str:
        return f"<IdentityProvider alias={self.alias!r}>"
