"""User database models."""

from uuid import UUID

from sqlalchemy import Boolean, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from costumetrack.core.auth.schemas import Role
from costumetrack.core.constants import MAX_EMAIL_LENGTH, MAX_NAME_LENGTH
from costumetrack.core.database.base import Base, TimestampMixin, UUIDMixin


class User(Base, UUIDMixin, TimestampMixin):
    """User model representing an authenticated person.

    A user belongs to at most one organization. The reference stays empty
    between registration and onboarding.

    Attributes:
        email: Globally unique, stored lowercase
        password_hash: Bcrypt-hashed password
        name: Display name
        role: Role within the organization
        is_active: Whether the user can log in
        organization_id: The user's organization, if onboarded
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    role: Mapped[Role] = mapped_column(
        Enum(Role, native_enum=False, length=20),
        default=Role.MEMBER,
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )
    organization_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("organizations.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, organization_id={self.organization_id})>"
