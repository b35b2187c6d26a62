"""Conversions between API contracts and database rows."""

from shared.models import IdentityProvider, IdentityProviderDomain, generate_id

from .dto.identity_provider import IdentityProviderDomainDTO, IdentityProviderDTO


def normalize_domain_name(name: str | None) -> str | None:
    """Canonical form of a domain name: trimmed, lowercase, no trailing dot.

    Returns None for unset or blank input.
    """
    if name is None:
        return None
    normalized = name.strip().rstrip(".").lower()
    return normalized or None


def to_domain_dto(row: IdentityProviderDomain) -> IdentityProviderDomainDTO:
    return IdentityProviderDomainDTO(name=row.name)


def to_domain_row(
    dto: IdentityProviderDomainDTO,
    identity_provider: IdentityProvider | None = None,
) -> IdentityProviderDomain:
    """Build a new row for a domain, with its identifier already assigned."""
    row = IdentityProviderDomain(id=generate_id(), name=dto.name)
    if identity_provider is not None:
        row.identity_provider = identity_provider
    return row


def to_identity_provider_dto(provider: IdentityProvider) -> IdentityProviderDTO:
    return IdentityProviderDTO(
        internal_id=provider.internal_id,
        alias=provider.alias,
        display_name=provider.display_name,
        provider_id=provider.provider_id,
        enabled=provider.enabled,
        hide_on_login=provider.hide_on_login,
        config=dict(provider.config or {}),
        domains=[to_domain_dto(row) for row in provider.domains],
    )
