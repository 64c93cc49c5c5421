"""Customer database models."""

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from costumetrack.core.constants import MAX_EMAIL_LENGTH, MAX_NAME_LENGTH
from costumetrack.core.database.base import (
    Base,
    OrganizationMixin,
    TimestampMixin,
    UUIDMixin,
)


class Customer(Base, UUIDMixin, TimestampMixin, OrganizationMixin):
    """A person or company that rents costumes.

    Attributes:
        portal_enabled: Whether the read-only portal link works
        portal_token: Secret part of the portal link; globally unique
    """

    __tablename__ = "customers"

    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    email: Mapped[str | None] = mapped_column(String(MAX_EMAIL_LENGTH), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    company: Mapped[str | None] = mapped_column(String(MAX_NAME_LENGTH), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    portal_enabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    portal_token: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        unique=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Customer(id={self.id}, name={self.name})>"
