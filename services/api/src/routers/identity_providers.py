"""Identity providers router."""

from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from shared.contracts.dto.identity_provider import (
    IdentityProviderCreate,
    IdentityProviderDomainDTO,
    IdentityProviderDTO,
    IdentityProviderUpdate,
    ProviderResolution,
)
from shared.contracts.mapping import (
    normalize_domain_name,
    to_domain_dto,
    to_identity_provider_dto,
)
from shared.models import IdentityProvider

from .. import storage
from ..database import get_async_session
from ..errors import DomainConflictError, DuplicateAliasError, InvalidEmailError

logger = structlog.get_logger()

router = APIRouter(prefix="/identity-providers", tags=["identity-providers"])

# Kept outside the alias namespace so any alias stays addressable
resolve_router = APIRouter(prefix="/resolve", tags=["identity-providers"])


def _domain_names(domains: list[IdentityProviderDomainDTO]) -> list[str]:
    """Normalized names of the requested domains; unset or blank names are rejected."""
    names = []
    for index, domain in enumerate(domains):
        name = normalize_domain_name(domain.name)
        if name is None:
            raise HTTPException(
                status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
                detail=f"Domain at position {index} has no name",
            )
        names.append(name)
    return names


async def _get_provider_or_404(alias: str, db: AsyncSession) -> IdentityProvider:
    provider = await storage.get_identity_provider(db, alias)
    if not provider:
        raise HTTPException(status_code=404, detail="Identity provider not found")
    return provider


@router.post("/", response_model=IdentityProviderDTO, status_code=status.HTTP_201_CREATED)
async def create_identity_provider(
    provider_in: IdentityProviderCreate,
    db: AsyncSession = Depends(get_async_session),
) -> IdentityProviderDTO:
    """Create a new identity provider with its domains."""
    logger.info("creating_identity_provider", alias=provider_in.alias)
    names = _domain_names(provider_in.domains)

    try:
        provider = await storage.create_identity_provider(db, provider_in, names)
    except (DuplicateAliasError, DomainConflictError) as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e

    return to_identity_provider_dto(provider)


@router.get("/", response_model=list[IdentityProviderDTO])
async def list_identity_providers(
    db: AsyncSession = Depends(get_async_session),
) -> list[IdentityProviderDTO]:
    """List identity providers ordered by alias."""
    providers = await storage.list_identity_providers(db)
    return [to_identity_provider_dto(provider) for provider in providers]


@router.get("/{alias}", response_model=IdentityProviderDTO)
async def get_identity_provider(
    alias: str,
    db: AsyncSession = Depends(get_async_session),
) -> IdentityProviderDTO:
    """Get identity provider by alias."""
    provider = await _get_provider_or_404(alias, db)
    return to_identity_provider_dto(provider)


@router.patch("/{alias}", response_model=IdentityProviderDTO)
async def patch_identity_provider(
    alias: str,
    provider_in: IdentityProviderUpdate,
    db: AsyncSession = Depends(get_async_session),
) -> IdentityProviderDTO:
    """Partial update of identity provider settings."""
    provider = await _get_provider_or_404(alias, db)
    provider = await storage.update_identity_provider(db, provider, provider_in)
    return to_identity_provider_dto(provider)


@router.delete("/{alias}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_identity_provider(
    alias: str,
    db: AsyncSession = Depends(get_async_session),
) -> Response:
    """Delete identity provider and all of its domains."""
    provider = await _get_provider_or_404(alias, db)
    await storage.delete_identity_provider(db, provider)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{alias}/domains", response_model=list[IdentityProviderDomainDTO])
async def list_domains(
    alias: str,
    db: AsyncSession = Depends(get_async_session),
) -> list[IdentityProviderDomainDTO]:
    """List the domains linked to an identity provider."""
    provider = await _get_provider_or_404(alias, db)
    return [to_domain_dto(row) for row in provider.domains]


@router.put("/{alias}/domains", response_model=list[IdentityProviderDomainDTO])
async def replace_domains(
    alias: str,
    domains: list[IdentityProviderDomainDTO],
    db: AsyncSession = Depends(get_async_session),
) -> list[IdentityProviderDomainDTO]:
    """Replace the domain list of an identity provider."""
    provider = await _get_provider_or_404(alias, db)
    names = _domain_names(domains)

    try:
        provider = await storage.replace_domains(db, provider, names)
    except DomainConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e

    return [to_domain_dto(row) for row in provider.domains]


@resolve_router.get("", response_model=ProviderResolution)
async def resolve_identity_provider(
    email: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_async_session),
) -> ProviderResolution:
    """Find the enabled identity providers linked to the domain of an email address.

    ``redirect_alias`` is set when exactly one of them redirects users with
    this email domain, either because it redirects on any of its domains or
    because this is its chosen redirect domain.
    """
    try:
        domain, providers = await storage.resolve_by_email(db, email)
    except InvalidEmailError as e:
        raise HTTPException(status_code=HTTPStatus.UNPROCESSABLE_ENTITY, detail=str(e)) from e

    redirecting = [p.alias for p in providers if p.redirects_email_domain(domain)]
    return ProviderResolution(
        email=email,
        domain=domain,
        providers=[to_identity_provider_dto(p) for p in providers],
        redirect_alias=redirecting[0] if len(redirecting) == 1 else None,
    )
