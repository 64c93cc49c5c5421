"""Authentication schemas for tokens and the resolved caller context."""

from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class Role(StrEnum):
    """Organization roles, highest privilege first."""

    OWNER = "OWNER"
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


ADMIN_ROLES = frozenset({Role.OWNER, Role.ADMIN})


def is_admin_role(role: Role | str) -> bool:
    """Check whether a role carries owner/admin privileges."""
    return role in ADMIN_ROLES


class TokenData(BaseModel):
    """Data extracted from a JWT token.

    The token only identifies the user; organization and role are
    loaded from the database on every request so they are never stale.

    Attributes:
        user_id: The user's UUID
        exp: Token expiration time
        type: Token type (access or refresh)
    """

    user_id: UUID
    exp: datetime
    type: str = "access"


class TokenPair(BaseModel):
    """A pair of access and refresh tokens.

    Attributes:
        access_token: Short-lived JWT for API access
        refresh_token: Long-lived JWT for getting new access tokens
        token_type: Always "bearer"
        expires_in: Access token expiration in seconds
    """

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


class SessionContext(BaseModel):
    """The resolved caller of a request.

    Attributes:
        user_id: The authenticated user
        email: The user's e-mail address
        role: The user's organization role
        organization_id: The user's organization, None until onboarding
        is_system_admin: Whether the user may manage global resources
    """

    model_config = ConfigDict(frozen=True)

    user_id: UUID
    email: str
    role: Role
    organization_id: UUID | None = None
    is_system_admin: bool = False


class OrgContext(BaseModel):
    """Tenant context passed explicitly into every scoped repository call.

    Only ever built from the authenticated session, never from client input.
    """

    model_config = ConfigDict(frozen=True)

    organization_id: UUID
    user_id: UUID
    role: Role

    @property
    def is_admin(self) -> bool:
        return is_admin_role(self.role)
