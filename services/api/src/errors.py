"""Storage errors raised for identity provider conflicts."""


class StorageError(Exception):
    """Base class for identity provider storage errors."""


class DuplicateAliasError(StorageError):
    def __init__(self, alias: str):
        super().__init__(f"Identity provider with alias '{alias}' already exists")
        self.alias = alias


class DomainConflictError(StorageError):
    """Domain is already linked to a different identity provider."""

    def __init__(self, domain: str, owner_alias: str):
        super().__init__(
            f"Domain '{domain}' is already linked to identity provider '{owner_alias}'"
        )
        self.domain = domain
        self.owner_alias = owner_alias


class InvalidEmailError(StorageError):
    def __init__(self, email: str):
        super().__init__(f"Cannot extract a domain from email address '{email}'")
        self.email = email
