"""Uploads module: image storage for costume photos and character sketches."""

from fastapi import APIRouter


router = APIRouter(prefix="/upload", tags=["uploads"])

# Import routes to register them (must be after router is defined)
from costumetrack.modules.uploads import routes  # noqa: F401, E402


# Module metadata
__module_info__ = {
    "name": "uploads",
    "version": "1.0.0",
    "description": "Image uploads",
    "dependencies": [],
}
