"""Identity provider and domain persistence.

All functions take the request's AsyncSession. Business conflicts raise
StorageError subclasses; database failures propagate as SQLAlchemy errors.
"""

from collections.abc import Iterable
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from shared.contracts.dto.identity_provider import (
    IdentityProviderCreate,
    IdentityProviderDomainDTO,
    IdentityProviderUpdate,
)
from shared.contracts.mapping import normalize_domain_name, to_domain_row
from shared.models import (
    REDIRECT_ANY_DOMAIN_KEY,
    REDIRECT_DOMAIN_KEY,
    REDIRECT_EMAIL_MATCHES_KEY,
    IdentityProvider,
    IdentityProviderDomain,
    generate_id,
)

from .errors import DomainConflictError, DuplicateAliasError, InvalidEmailError

logger = structlog.get_logger()


async def get_identity_provider(db: AsyncSession, alias: str) -> IdentityProvider | None:
    query = select(IdentityProvider).where(IdentityProvider.alias == alias)
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def list_identity_providers(db: AsyncSession) -> list[IdentityProvider]:
    result = await db.execute(select(IdentityProvider).order_by(IdentityProvider.alias))
    return list(result.scalars().all())


async def create_identity_provider(
    db: AsyncSession,
    provider_in: IdentityProviderCreate,
    domain_names: Iterable[str] = (),
) -> IdentityProvider:
    """Create a provider together with its initial domain list.

    Domain names are normalized; blank names are skipped.
    """
    if await get_identity_provider(db, provider_in.alias):
        logger.warning("identity_provider_creation_failed_duplicate", alias=provider_in.alias)
        raise DuplicateAliasError(provider_in.alias)

    names = _normalized(domain_names)
    await _ensure_unowned(db, names, owner_id=None)

    provider = IdentityProvider(
        internal_id=generate_id(),
        alias=provider_in.alias,
        display_name=provider_in.display_name,
        provider_id=provider_in.provider_id,
        enabled=provider_in.enabled,
        hide_on_login=provider_in.hide_on_login,
        config=_redirect_config(provider_in.config),
        domains=[],
    )
    for name in names:
        provider.domains.append(to_domain_row(IdentityProviderDomainDTO(name=name)))

    db.add(provider)
    await db.commit()
    await db.refresh(provider, ["domains"])

    logger.info(
        "identity_provider_created",
        alias=provider.alias,
        internal_id=provider.internal_id,
        domain_count=len(provider.domains),
    )
    return provider


async def update_identity_provider(
    db: AsyncSession,
    provider: IdentityProvider,
    provider_in: IdentityProviderUpdate,
) -> IdentityProvider:
    """Apply the fields set on ``provider_in``; the domain list is left untouched."""
    if provider_in.display_name is not None:
        provider.display_name = provider_in.display_name
    if provider_in.enabled is not None:
        provider.enabled = provider_in.enabled
    if provider_in.hide_on_login is not None:
        provider.hide_on_login = provider_in.hide_on_login
    if provider_in.config is not None:
        provider.config = _redirect_config(provider_in.config)

    await db.commit()
    await db.refresh(provider, ["domains"])

    logger.info("identity_provider_updated", alias=provider.alias)
    return provider


async def replace_domains(
    db: AsyncSession,
    provider: IdentityProvider,
    domain_names: Iterable[str],
) -> IdentityProvider:
    """Make the provider's domain list exactly ``domain_names``.

    Rows whose name is still listed keep their id. Rows no longer listed are
    deleted and new names get new rows. Names are normalized before they are
    compared or stored; repeated names collapse into one row.
    """
    names = _normalized(domain_names)
    await _ensure_unowned(db, names, owner_id=provider.internal_id)

    existing = {normalize_domain_name(row.name): row for row in provider.domains}
    removed = [row for key, row in existing.items() if key not in names]
    for row in removed:
        provider.domains.remove(row)

    added = [name for name in names if name not in existing]
    for name in added:
        provider.domains.append(to_domain_row(IdentityProviderDomainDTO(name=name)))

    await db.commit()
    await db.refresh(provider, ["domains"])

    logger.info(
        "domains_replaced",
        alias=provider.alias,
        added=added,
        removed=[row.name for row in removed],
    )
    return provider


async def delete_identity_provider(db: AsyncSession, provider: IdentityProvider) -> None:
    """Delete a provider; its domain rows go with it."""
    domain_count = len(provider.domains)
    await db.delete(provider)
    await db.commit()
    logger.info("identity_provider_deleted", alias=provider.alias, domain_count=domain_count)


async def find_domain(db: AsyncSession, name: str) -> IdentityProviderDomain | None:
    normalized = normalize_domain_name(name)
    if normalized is None:
        return None
    query = select(IdentityProviderDomain).where(IdentityProviderDomain.name == normalized)
    result = await db.execute(query)
    return result.scalars().first()


async def load_identity_provider(row: IdentityProviderDomain) -> IdentityProvider:
    """Fetch the provider owning ``row`` if it is not loaded yet.

    Must run while the row's session is open.
    """
    return await row.awaitable_attrs.identity_provider


def email_domain(email: str) -> str:
    """Domain part of an email address, normalized.

    Raises:
        InvalidEmailError: No local part or no domain.
    """
    local, sep, domain = email.strip().rpartition("@")
    normalized = normalize_domain_name(domain)
    if not sep or not local or normalized is None:
        raise InvalidEmailError(email)
    return normalized


async def resolve_by_email(db: AsyncSession, email: str) -> tuple[str, list[IdentityProvider]]:
    """Enabled providers owning the domain of ``email``, ordered by alias."""
    domain = email_domain(email)
    query = (
        select(IdentityProvider)
        .join(IdentityProvider.domains)
        .where(
            IdentityProviderDomain.name == domain,
            IdentityProvider.enabled.is_(True),
        )
        .order_by(IdentityProvider.alias)
    )
    result = await db.execute(query)
    providers = list(result.scalars().unique().all())

    logger.debug("email_domain_resolved", domain=domain, matches=[p.alias for p in providers])
    return domain, providers


def _normalized(names: Iterable[str | None]) -> list[str]:
    """Normalized, de-duplicated names in first-seen order; blank names are dropped."""
    normalized = (normalize_domain_name(name) for name in names)
    return list(dict.fromkeys(name for name in normalized if name is not None))


def _redirect_config(config: dict[str, Any]) -> dict[str, Any]:
    """Copy of ``config`` with a consistent redirect mode.

    Redirecting on any domain drops the chosen redirect domain and its flag.
    Otherwise the chosen domain is stored normalized.
    """
    config = dict(config)
    if config.get(REDIRECT_ANY_DOMAIN_KEY):
        config.pop(REDIRECT_DOMAIN_KEY, None)
        config.pop(REDIRECT_EMAIL_MATCHES_KEY, None)
    elif REDIRECT_DOMAIN_KEY in config:
        domain = config[REDIRECT_DOMAIN_KEY]
        normalized = normalize_domain_name(domain) if isinstance(domain, str) else None
        if normalized is None:
            config.pop(REDIRECT_DOMAIN_KEY)
        else:
            config[REDIRECT_DOMAIN_KEY] = normalized
    return config


async def _ensure_unowned(db: AsyncSession, names: list[str], owner_id: str | None) -> None:
    """Raise if any of ``names`` is linked to a provider other than ``owner_id``."""
    if not names:
        return
    query = (
        select(IdentityProviderDomain.name, IdentityProvider.alias)
        .join(IdentityProviderDomain.identity_provider)
        .where(IdentityProviderDomain.name.in_(names))
    )
    if owner_id is not None:
        query = query.where(IdentityProviderDomain.identity_provider_id != owner_id)
    result = await db.execute(query.limit(1))
    conflict = result.first()
    if conflict is not None:
        domain, owner_alias = conflict
        logger.warning("domain_conflict", domain=domain, owner=owner_alias)
        raise DomainConflictError(domain, owner_alias)
