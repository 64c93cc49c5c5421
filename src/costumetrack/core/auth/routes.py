"""Authentication API routes.

Provides endpoints for:
- User registration
- Login and token refresh
- The current session
- Onboarding (creating the caller's organization)
"""

from fastapi import APIRouter, status

from costumetrack.core.auth.dependencies import CurrentSession, CurrentUser
from costumetrack.core.auth.service import AuthSvc
from costumetrack.modules.organizations.schemas import (
    OnboardingRequest,
    OnboardingResponse,
    OrganizationSummary,
)
from costumetrack.modules.users.schemas import (
    LoginRequest,
    MeResponse,
    RefreshTokenRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UserResponse,
)


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
    description="Creates a user account without an organization. Use onboarding to create one.",
)
async def register(data: RegisterRequest, service: AuthSvc) -> RegisterResponse:
    """Register a new user."""
    user, tokens = await service.register(
        name=data.name,
        email=data.email,
        password=data.password,
    )

    return RegisterResponse(
        user=UserResponse.model_validate(user),
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        expires_in=tokens.expires_in,
    )


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login with email and password",
    description="Authenticate with email and password to receive access and refresh tokens.",
)
async def login(data: LoginRequest, service: AuthSvc) -> TokenResponse:
    """Login with email and password."""
    _, tokens = await service.login(email=data.email, password=data.password)
    return TokenResponse(**tokens.model_dump())


@router.post(
    "/refresh",
    response_model=TokenResponse,
    summary="Refresh access token",
    description="Exchange a refresh token for a new token pair.",
)
async def refresh_token(data: RefreshTokenRequest, service: AuthSvc) -> TokenResponse:
    """Refresh the access token."""
    tokens = await service.refresh_tokens(data.refresh_token)
    return TokenResponse(**tokens.model_dump())


@router.get(
    "/me",
    response_model=MeResponse,
    summary="Get current session",
    description="Returns the authenticated user with their organization and role.",
)
async def get_me(user: CurrentUser, session: CurrentSession) -> MeResponse:
    """Get the current user's session."""
    return MeResponse(
        user=UserResponse.model_validate(user),
        organization_id=session.organization_id,
        role=session.role,
        is_system_admin=session.is_system_admin,
    )


@router.post(
    "/onboarding",
    response_model=OnboardingResponse,
    summary="Create organization",
    description=(
        "Creates the caller's organization and promotes them to OWNER. "
        "Requires a valid invite code while the invite gate is enabled."
    ),
)
async def onboarding(
    data: OnboardingRequest,
    session: CurrentSession,
    service: AuthSvc,
) -> OnboardingResponse:
    organization = await service.onboard(
        session,
        organization_name=data.organization_name,
        invite_code=data.invite_code,
    )
    return OnboardingResponse(organization=OrganizationSummary.model_validate(organization))
