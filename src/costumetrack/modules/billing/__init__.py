"""Billing module: plan selection through Stripe Checkout and the customer portal."""

from fastapi import APIRouter


router = APIRouter(prefix="/billing", tags=["billing"])

# Import routes to register them (must be after router is defined)
from costumetrack.modules.billing import routes  # noqa: F401, E402


# Module metadata
__module_info__ = {
    "name": "billing",
    "version": "1.0.0",
    "description": "Stripe billing",
    "dependencies": ["organizations"],
}
