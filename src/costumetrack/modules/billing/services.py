"""Billing service: plan checkout and the Stripe customer portal."""

from typing import Annotated

import structlog
from fastapi import Depends

from costumetrack.config import settings
from costumetrack.core.auth.schemas import OrgContext
from costumetrack.core.errors import BadRequestError, NotFoundError, ServiceUnavailableError
from costumetrack.modules.billing.schemas import (
    CheckoutRequest,
    CheckoutResponse,
    PortalSessionResponse,
)
from costumetrack.modules.billing.stripe_client import StripeClient
from costumetrack.modules.organizations.models import (
    BillingCycle,
    Organization,
    PlanTier,
    StorageSize,
)
from costumetrack.modules.organizations.repos import OrganizationRepo


logger = structlog.get_logger()

# (items, users) per plan; None users means unlimited
PLAN_LIMITS: dict[PlanTier, dict[StorageSize, tuple[int, int | None]]] = {
    PlanTier.CORE: {
        StorageSize.SMALL: (500, 1),
        StorageSize.MEDIUM: (2000, 1),
        StorageSize.LARGE: (5000, 1),
    },
    PlanTier.PRO: {
        StorageSize.SMALL: (500, 3),
        StorageSize.MEDIUM: (2000, 3),
        StorageSize.LARGE: (5000, 3),
    },
    PlanTier.TEAM: {
        StorageSize.SMALL: (500, None),
        StorageSize.MEDIUM: (2000, None),
        StorageSize.LARGE: (5000, None),
    },
}

NO_BILLING_ACCOUNT_MESSAGE = "No billing account found. Please subscribe to a plan first."


def is_free_plan(plan_tier: PlanTier, storage_size: StorageSize) -> bool:
    return plan_tier == PlanTier.CORE and storage_size == StorageSize.SMALL


def price_key(plan_tier: PlanTier, storage_size: StorageSize, billing_cycle: BillingCycle) -> str:
    """Key into the configured price ids, e.g. ``PRO_MEDIUM_MONTHLY``."""
    return f"{plan_tier.value}_{storage_size.value}_{billing_cycle.value}"


def apply_plan(
    organization: Organization,
    plan_tier: PlanTier,
    storage_size: StorageSize,
    billing_cycle: BillingCycle,
) -> None:
    """Set an organization's plan together with the limits it grants."""
    max_items, max_users = PLAN_LIMITS[plan_tier][storage_size]
    organization.plan_tier = plan_tier
    organization.storage_size = storage_size
    organization.billing_cycle = billing_cycle
    organization.max_items = max_items
    organization.max_users = max_users


class BillingService:
    """Starts Stripe flows for the caller's organization."""

    def __init__(self, org_repo: OrganizationRepo) -> None:
        self.org_repo = org_repo

    async def _organization(self, org: OrgContext) -> Organization:
        organization = await self.org_repo.get_current(org)
        if organization is None:
            raise NotFoundError("Organization not found", resource="organization")
        return organization

    async def create_portal_session(
        self, org: OrgContext, stripe: StripeClient
    ) -> PortalSessionResponse:
        """Open the Stripe customer portal.

        Raises:
            BadRequestError: If the organization never subscribed
        """
        organization = await self._organization(org)
        if not organization.stripe_customer_id:
            raise BadRequestError(NO_BILLING_ACCOUNT_MESSAGE, error_code="no_billing_account")

        session = await stripe.create_portal_session(
            customer_id=organization.stripe_customer_id,
            return_url=f"{settings.app_url}/settings",
        )
        return PortalSessionResponse(url=session.url)

    async def create_checkout(
        self,
        org: OrgContext,
        data: CheckoutRequest,
        email: str,
        stripe: StripeClient,
    ) -> CheckoutResponse:
        """Switch to the free plan, or start a subscription checkout.

        Raises:
            ServiceUnavailableError: If no price is configured for the plan
        """
        organization = await self._organization(org)

        if is_free_plan(data.plan_tier, data.storage_size):
            apply_plan(organization, PlanTier.CORE, StorageSize.SMALL, BillingCycle.MONTHLY)
            await self.org_repo.update(organization)
            logger.info("plan_changed", organization_id=str(organization.id), plan="CORE_SMALL")
            return CheckoutResponse(free=True)

        price_id = settings.stripe_price_ids.get(
            price_key(data.plan_tier, data.storage_size, data.billing_cycle)
        )
        if not price_id:
            raise ServiceUnavailableError(
                "Billing is not configured for this plan",
                error_code="price_not_configured",
            )

        if not organization.stripe_customer_id:
            customer = await stripe.create_customer(
                email=email,
                name=organization.name,
                metadata={"organization_id": str(organization.id)},
            )
            organization.stripe_customer_id = customer.id
            await self.org_repo.update(organization)

        metadata = {
            "organization_id": str(organization.id),
            "plan_tier": data.plan_tier.value,
            "storage_size": data.storage_size.value,
            "billing_cycle": data.billing_cycle.value,
        }
        session = await stripe.create_checkout_session(
            customer_id=organization.stripe_customer_id,
            price_id=price_id,
            success_url=f"{settings.app_url}/settings?billing=success",
            cancel_url=f"{settings.app_url}/settings?billing=cancelled",
            metadata=metadata,
        )
        logger.info("checkout_started", **metadata)
        return CheckoutResponse(url=session.url)


# Type alias for dependency injection
BillingSvc = Annotated[BillingService, Depends(BillingService)]
