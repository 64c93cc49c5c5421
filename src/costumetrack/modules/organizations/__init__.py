"""Organizations module: tenant settings, public pages and label formats."""

from fastapi import APIRouter


router = APIRouter(tags=["organizations"])

# Import routes to register them (must be after router is defined)
from costumetrack.modules.organizations import routes  # noqa: F401, E402


# Module metadata
__module_info__ = {
    "name": "organizations",
    "version": "1.0.0",
    "description": "Organization settings, public page and label formats",
    "dependencies": [],
}
