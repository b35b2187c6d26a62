from typing import Any

from pydantic import BaseModel, ConfigDict, Field

_UNSET = object()


class IdentityProviderDomainDTO(BaseModel):
    """Internet domain of an identity provider, as exchanged over the API.

    ``name`` may be left unset and is never validated here. Instances with the
    same name are equal; an instance without a name is only equal to itself.
    """

    model_config = ConfigDict(from_attributes=True)

    name: str | None = None

    def __init__(self, name: Any = _UNSET, /, **data: Any) -> None:
        if name is not _UNSET:
            if "name" in data:
                raise TypeError("got multiple values for argument 'name'")
            data["name"] = name
        super().__init__(**data)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, IdentityProviderDomainDTO):
            return NotImplemented
        return self.name is not None and self.name == other.name

    def __hash__(self) -> int:
        if self.name is None:
            return object.__hash__(self)
        return hash(self.name)


class IdentityProviderCreate(BaseModel):
    """Create identity provider request."""

    alias: str = Field(..., min_length=1, max_length=255)
    display_name: str | None = None
    provider_id: str = "oidc"
    enabled: bool = True
    hide_on_login: bool = False
    config: dict[str, Any] = {}
    domains: list[IdentityProviderDomainDTO] = []


class IdentityProviderUpdate(BaseModel):
    """Update identity provider request."""

    display_name: str | None = None
    enabled: bool | None = None
    hide_on_login: bool | None = None
    config: dict[str, Any] | None = None


class IdentityProviderDTO(BaseModel):
    """Identity provider response."""

    model_config = ConfigDict(from_attributes=True)

    internal_id: str
    alias: str
    display_name: str | None = None
    provider_id: str
    enabled: bool = True
    hide_on_login: bool = False
    config: dict[str, Any] = {}
    domains: list[IdentityProviderDomainDTO] = []


class ProviderResolution(BaseModel):
    """Identity providers matching the domain of an email address."""

    email: str
    domain: str
    providers: list[IdentityProviderDTO] = []
    redirect_alias: str | None = None
