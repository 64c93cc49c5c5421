"""Invites module: system invite codes that gate organization onboarding."""

from fastapi import APIRouter


router = APIRouter(prefix="/admin/invite-codes", tags=["admin"])

# Import routes to register them (must be after router is defined)
from costumetrack.modules.invites import routes  # noqa: F401, E402


# Module metadata
__module_info__ = {
    "name": "invites",
    "version": "1.0.0",
    "description": "System invite codes",
    "dependencies": [],
}
