"""Identity provider domain model."""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import ID_LENGTH, Base, generate_id

if TYPE_CHECKING:
    from .identity_provider import IdentityProvider


class IdentityProviderDomain(Base):
    """Internet domain associated with an identity provider.

    Many domains may belong to one provider. The owning provider is not
    loaded with the row; reading ``identity_provider`` fetches it on first
    access. Under an ``AsyncSession`` that fetch has to be awaited through
    ``awaitable_attrs``, and any database failure surfaces from there.

    Rows compare equal by ``id``. A row without an ``id`` is only equal to
    itself and hashes by identity until the ``id`` is assigned.
    """

    __tablename__ = "IDENTITY_PROVIDER_DOMAIN"

    # Length is enforced by the schema only
    id: Mapped[str] = mapped_column("ID", String(ID_LENGTH), primary_key=True, default=generate_id)
    name: Mapped[str | None] = mapped_column("NAME", String(255), index=True)

    identity_provider_id: Mapped[str] = mapped_column(
        "IDENTITY_PROVIDER_ID",
        String(ID_LENGTH),
        ForeignKey("IDENTITY_PROVIDER.INTERNAL_ID", ondelete="CASCADE"),
        index=True,
    )
    identity_provider: Mapped["IdentityProvider"] = relationship(
        back_populates="domains",
        lazy="select",
    )

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, IdentityProviderDomain):
            return NotImplemented
        return self.id is not None and self.id == other.id

    def __hash__(self) -> int:
        if self.id is None:
            return object.__hash__(self)
        return hash(self.id)

    def __repr__(self) -> str:
        return f"<IdentityProviderDomain id={self.id!r} name={self.name!r}>"
