"""Shared models, contracts and utilities for the identity provider services."""

# Models: from shared.models import IdentityProvider, IdentityProviderDomain
# Contracts: from shared.contracts.dto.identity_provider import IdentityProviderDomainDTO
