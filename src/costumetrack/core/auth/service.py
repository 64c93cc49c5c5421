"""Authentication service for registration, login, tokens and onboarding."""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends
from sqlalchemy.exc import IntegrityError

from costumetrack.api.dependencies import DBSession
from costumetrack.config import settings
from costumetrack.core.auth.backend import (
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)
from costumetrack.core.auth.schemas import OrgContext, Role, SessionContext, TokenPair
from costumetrack.core.constants import MAX_SLUG_ATTEMPTS, RESERVED_SLUGS
from costumetrack.core.database import atomic
from costumetrack.core.errors import ConflictError, UnauthorizedError
from costumetrack.core.utils.text import generate_slug, with_suffix
from costumetrack.modules.inventory.repos import CategoryRepository
from costumetrack.modules.inventory.services import CategoryService
from costumetrack.modules.invites.repos import InviteCodeRepository
from costumetrack.modules.invites.services import InviteCodeService
from costumetrack.modules.organizations.models import Organization
from costumetrack.modules.organizations.repos import OrganizationRepository
from costumetrack.modules.users.models import User
from costumetrack.modules.users.repos import UserRepository


logger = structlog.get_logger()

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


class AuthService:
    """Service for authentication operations.

    Handles user registration, login, token refresh and the one-time
    creation of the user's organization.
    """

    def __init__(self, db: DBSession) -> None:
        self.db = db
        self.user_repo = UserRepository(db)
        self.org_repo = OrganizationRepository(db)
        self.invites = InviteCodeService(InviteCodeRepository(db))
        self.categories = CategoryService(CategoryRepository(db))

    # ============================================================
    # Accounts
    # ============================================================

    async def register(self, name: str, email: str, password: str) -> tuple[User, TokenPair]:
        """Register a new user without an organization.

        Args:
            name: Display name
            email: E-mail address, stored lowercase
            password: Plain text password

        Returns:
            Tuple of (user, token_pair)

        Raises:
            ConflictError: If the e-mail is already registered
        """
        existing = await self.user_repo.get_by_email(email)
        if existing:
            raise ConflictError(
                "An account with this email already exists",
                error_code="email_taken",
            )

        user = User(
            email=email.strip().lower(),
            password_hash=hash_password(password),
            name=name,
            role=Role.MEMBER,
        )
        user = await self.user_repo.create(user)
        logger.info("user_registered", user_id=str(user.id))

        return user, self._create_tokens(user.id)

    async def login(self, email: str, password: str) -> tuple[User, TokenPair]:
        """Authenticate a user with e-mail and password.

        Raises:
            UnauthorizedError: If credentials are invalid or the account is deactivated
        """
        user = await self.user_repo.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            raise UnauthorizedError(
                INVALID_CREDENTIALS_MESSAGE,
                error_code="invalid_credentials",
            )

        if not user.is_active:
            raise UnauthorizedError(
                "Account is deactivated",
                error_code="account_inactive",
            )

        return user, self._create_tokens(user.id)

    async def refresh_tokens(self, refresh_token: str) -> TokenPair:
        """Issue a new token pair from a valid refresh token.

        Raises:
            UnauthorizedError: If the token is invalid or its user is gone
        """
        token_data = decode_token(refresh_token)
        if token_data is None or token_data.type != "refresh":
            raise UnauthorizedError(
                "Invalid refresh token",
                error_code="invalid_refresh_token",
            )

        user = await self.user_repo.get_by_id(token_data.user_id)
        if not user or not user.is_active:
            raise UnauthorizedError(
                "User not found or inactive",
                error_code="user_invalid",
            )

        return self._create_tokens(user.id)

    def _create_tokens(self, user_id: UUID) -> TokenPair:
        return TokenPair(
            access_token=create_access_token(user_id),
            refresh_token=create_refresh_token(user_id),
            expires_in=settings.access_token_expire_minutes * 60,
        )

    # ============================================================
    # Onboarding
    # ============================================================

    async def onboard(
        self,
        session: SessionContext,
        organization_name: str,
        invite_code: str | None,
    ) -> Organization:
        """Create the caller's organization and make them its owner.

        The invite use, the organization, its default categories and the
        promotion to OWNER are committed together. A candidate slug that
        loses a race on the unique index is retried with the next suffix.

        Args:
            session: The authenticated caller
            organization_name: Display name of the new organization
            invite_code: Invite code, required while the invite gate is on

        Returns:
            The new organization

        Raises:
            ConflictError: If the caller already has an organization, or no
                free slug was found
            BadRequestError: If the invite code is not redeemable
        """
        base_slug = generate_slug(organization_name) or "organization"
        attempt = 0
        collisions = 0

        while True:
            slug = with_suffix(base_slug, attempt)
            attempt += 1
            if slug in RESERVED_SLUGS or await self.org_repo.slug_exists(slug):
                continue

            try:
                async with atomic(self.db):
                    organization = await self._create_organization(
                        session, organization_name, slug, invite_code
                    )
            except IntegrityError:
                if not await self.org_repo.slug_exists(slug):
                    raise
                collisions += 1
                logger.warning("organization_slug_collision", slug=slug)
                if collisions >= MAX_SLUG_ATTEMPTS:
                    raise ConflictError(
                        "Could not find an available URL for this organization name",
                        error_code="slug_unavailable",
                    ) from None
                continue

            logger.info(
                "organization_onboarded",
                organization_id=str(organization.id),
                user_id=str(session.user_id),
            )
            return organization

    async def _create_organization(
        self,
        session: SessionContext,
        name: str,
        slug: str,
        invite_code: str | None,
    ) -> Organization:
        # Locking the user row serializes concurrent onboarding by one user
        user = await self.user_repo.get_by_id_for_update(session.user_id)
        if user is None:
            raise UnauthorizedError("User not found", error_code="user_not_found")
        if user.organization_id is not None:
            raise ConflictError(
                "You already belong to an organization",
                error_code="already_onboarded",
            )

        if settings.require_invite_code:
            await self.invites.redeem(invite_code or "")

        organization = await self.org_repo.create(Organization(name=name, slug=slug))
        await self.categories.create_defaults(
            OrgContext(
                organization_id=organization.id,
                user_id=user.id,
                role=Role.OWNER,
            )
        )

        user.organization_id = organization.id
        user.role = Role.OWNER
        await self.user_repo.update(user)
        return organization


# Type alias for dependency injection
AuthSvc = Annotated[AuthService, Depends(AuthService)]
