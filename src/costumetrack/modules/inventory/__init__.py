"""Inventory module: categories, costume items and their photos."""

from fastapi import APIRouter


router = APIRouter(tags=["inventory"])

# Import routes to register them (must be after router is defined)
from costumetrack.modules.inventory import routes  # noqa: F401, E402


# Module metadata
__module_info__ = {
    "name": "inventory",
    "version": "1.0.0",
    "description": "Categories and costume inventory",
    "dependencies": ["organizations"],
}
