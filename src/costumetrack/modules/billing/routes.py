"""Billing API routes."""

from costumetrack.core.auth.dependencies import CurrentSession, OrgAdmin
from costumetrack.modules.billing import router
from costumetrack.modules.billing.schemas import (
    CheckoutRequest,
    CheckoutResponse,
    PortalSessionResponse,
)
from costumetrack.modules.billing.services import BillingSvc
from costumetrack.modules.billing.stripe_client import StripeDep


@router.post(
    "/portal",
    response_model=PortalSessionResponse,
    summary="Open billing portal",
    description="Returns a Stripe customer portal URL. Owner or admin only.",
)
async def create_portal_session(
    org: OrgAdmin,
    stripe: StripeDep,
    service: BillingSvc,
) -> PortalSessionResponse:
    return await service.create_portal_session(org, stripe)


@router.post(
    "/checkout",
    response_model=CheckoutResponse,
    summary="Choose a plan",
    description=(
        "CORE with SMALL storage switches to the free plan directly. Other "
        "plans return a Stripe Checkout URL."
    ),
)
async def create_checkout(
    data: CheckoutRequest,
    org: OrgAdmin,
    session: CurrentSession,
    stripe: StripeDep,
    service: BillingSvc,
) -> CheckoutResponse:
    return await service.create_checkout(org, data, email=session.email, stripe=stripe)
