"""FastAPI dependencies for authentication and authorization.

Three privilege tiers guard the API:

- ``OrgMember``: any user of an organization
- ``OrgAdmin``: owners and admins of an organization
- ``SystemAdmin``: operators of the service, outside any organization

Tenant identity always comes from the authenticated user's row, never
from the request.
"""

from typing import Annotated

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from costumetrack.config import settings
from costumetrack.core.auth.backend import decode_token
from costumetrack.core.auth.schemas import OrgContext, SessionContext, TokenData
from costumetrack.core.errors import ForbiddenError, UnauthorizedError
from costumetrack.modules.users.models import User
from costumetrack.modules.users.repos import UserRepo


# HTTP Bearer token security scheme
bearer_scheme = HTTPBearer(auto_error=False)


async def get_token_data(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> TokenData:
    """Extract and validate token data from the Authorization header.

    Args:
        credentials: Bearer token credentials from the request

    Returns:
        Decoded token data

    Raises:
        UnauthorizedError: If token is missing or invalid
    """
    if not credentials:
        raise UnauthorizedError(
            "Missing authentication token",
            error_code="missing_token",
        )

    token_data = decode_token(credentials.credentials)
    if not token_data:
        raise UnauthorizedError(
            "Invalid or expired token",
            error_code="invalid_token",
        )

    if token_data.type != "access":
        raise UnauthorizedError(
            "Invalid token type",
            error_code="invalid_token_type",
        )

    return token_data


async def get_current_user(
    token_data: Annotated[TokenData, Depends(get_token_data)],
    repo: UserRepo,
) -> User:
    """Get the currently authenticated user.

    Raises:
        UnauthorizedError: If the user no longer exists
        ForbiddenError: If the user is deactivated
    """
    user = await repo.get_by_id(token_data.user_id)

    if not user:
        raise UnauthorizedError(
            "User not found",
            error_code="user_not_found",
        )

    if not user.is_active:
        raise ForbiddenError(
            "User account is deactivated",
            error_code="user_inactive",
        )

    return user


def is_system_admin(email: str) -> bool:
    """Check an e-mail address against the configured system administrators."""
    return email.strip().lower() in settings.system_admins


async def get_session_context(
    request: Request,
    user: Annotated[User, Depends(get_current_user)],
) -> SessionContext:
    """Resolve the caller's session from the authenticated user.

    The ids are also placed on ``request.state`` for the request logger.
    """
    session = SessionContext(
        user_id=user.id,
        email=user.email,
        role=user.role,
        organization_id=user.organization_id,
        is_system_admin=is_system_admin(user.email),
    )
    request.state.user_id = session.user_id
    request.state.organization_id = session.organization_id
    structlog.contextvars.bind_contextvars(
        user_id=str(session.user_id),
        organization_id=str(session.organization_id) if session.organization_id else None,
    )
    return session


async def get_org_context(
    session: Annotated[SessionContext, Depends(get_session_context)],
) -> OrgContext:
    """Require an organization and return the tenant context.

    Raises:
        UnauthorizedError: If the caller has not completed onboarding
    """
    if session.organization_id is None:
        raise UnauthorizedError(
            "An organization is required for this operation",
            error_code="organization_required",
        )

    return OrgContext(
        organization_id=session.organization_id,
        user_id=session.user_id,
        role=session.role,
    )


async def require_org_admin(
    org: Annotated[OrgContext, Depends(get_org_context)],
) -> OrgContext:
    """Require the OWNER or ADMIN role.

    Raises:
        ForbiddenError: If the caller is a regular member
    """
    if not org.is_admin:
        raise ForbiddenError(
            "Owner or admin role required",
            error_code="admin_required",
        )
    return org


async def require_system_admin(
    session: Annotated[SessionContext, Depends(get_session_context)],
) -> SessionContext:
    """Require a system administrator.

    Raises:
        ForbiddenError: If the caller is not a system administrator
    """
    if not session.is_system_admin:
        raise ForbiddenError(
            "System administrator privileges required",
            error_code="system_admin_required",
        )
    return session


# Type aliases for cleaner dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
CurrentSession = Annotated[SessionContext, Depends(get_session_context)]
OrgMember = Annotated[OrgContext, Depends(get_org_context)]
OrgAdmin = Annotated[OrgContext, Depends(require_org_admin)]
SystemAdmin = Annotated[SessionContext, Depends(require_system_admin)]
