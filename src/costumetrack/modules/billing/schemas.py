"""Billing API schemas."""

from pydantic import BaseModel

from costumetrack.modules.organizations.models import BillingCycle, PlanTier, StorageSize


class CheckoutRequest(BaseModel):
    plan_tier: PlanTier
    storage_size: StorageSize
    billing_cycle: BillingCycle


class CheckoutResponse(BaseModel):
    """Either a hosted checkout URL, or ``free`` when no payment was needed."""

    url: str | None = None
    free: bool = False


class PortalSessionResponse(BaseModel):
    url: str
