"""Rentals module: checkout and return of costumes, and the customer portal."""

from fastapi import APIRouter


router = APIRouter(tags=["rentals"])

# Import routes to register them (must be after router is defined)
from costumetrack.modules.rentals import routes  # noqa: F401, E402


# Module metadata
__module_info__ = {
    "name": "rentals",
    "version": "1.0.0",
    "description": "Rental lifecycle and customer portal",
    "dependencies": ["inventory", "customers", "productions"],
}
