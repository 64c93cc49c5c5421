"""Stripe client wrapper for async operations."""

import asyncio
from typing import Annotated

import stripe
from fastapi import Depends

from costumetrack.config import settings
from costumetrack.core.errors import ServiceUnavailableError


class StripeClient:
    """Async wrapper for the Stripe calls billing needs.

    The SDK is blocking, so every call runs in a worker thread.
    """

    def __init__(self, api_key: str) -> None:
        self.api_key = api_key

    # ============================================================
    # Customers
    # ============================================================

    async def create_customer(
        self,
        email: str | None = None,
        name: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> stripe.Customer:
        """Create a new Stripe customer."""
        return await asyncio.to_thread(
            stripe.Customer.create,
            api_key=self.api_key,
            email=email,
            name=name,
            metadata=metadata or {},
        )

    # ============================================================
    # Checkout Sessions
    # ============================================================

    async def create_checkout_session(
        self,
        customer_id: str,
        price_id: str,
        success_url: str,
        cancel_url: str,
        metadata: dict[str, str] | None = None,
    ) -> stripe.checkout.Session:
        """Create a subscription Checkout session.

        The metadata is copied onto the subscription so plan changes can be
        traced back to the organization.
        """
        return await asyncio.to_thread(
            stripe.checkout.Session.create,
            api_key=self.api_key,
            customer=customer_id,
            mode="subscription",
            payment_method_types=["card"],
            line_items=[{"price": price_id, "quantity": 1}],
            success_url=success_url,
            cancel_url=cancel_url,
            metadata=metadata or {},
            subscription_data={"metadata": metadata or {}},
        )

    # ============================================================
    # Customer Portal
    # ============================================================

    async def create_portal_session(
        self, customer_id: str, return_url: str
    ) -> stripe.billing_portal.Session:
        """Create a Stripe Customer Portal session."""
        return await asyncio.to_thread(
            stripe.billing_portal.Session.create,
            api_key=self.api_key,
            customer=customer_id,
            return_url=return_url,
        )


def get_stripe_client() -> StripeClient:
    """Dependency returning a client for the configured account.

    Raises:
        ServiceUnavailableError: If no Stripe key is configured
    """
    if not settings.billing_enabled:
        raise ServiceUnavailableError(
            "Billing is not configured",
            error_code="billing_not_configured",
        )
    return StripeClient(api_key=settings.stripe_secret_key or "")


StripeDep = Annotated[StripeClient, Depends(get_stripe_client)]
