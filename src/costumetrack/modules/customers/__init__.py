"""Customers module: renters and their portal links."""

from fastapi import APIRouter


router = APIRouter(prefix="/customers", tags=["customers"])

# Import routes to register them (must be after router is defined)
from costumetrack.modules.customers import routes  # noqa: F401, E402


# Module metadata
__module_info__ = {
    "name": "customers",
    "version": "1.0.0",
    "description": "Customer records and portal links",
    "dependencies": ["organizations"],
}
