"""Productions module: shows, their scene and character breakdown, and the costume plot."""

from fastapi import APIRouter


router = APIRouter(prefix="/productions", tags=["productions"])

# Import routes to register them (must be after router is defined)
from costumetrack.modules.productions import routes  # noqa: F401, E402


# Module metadata
__module_info__ = {
    "name": "productions",
    "version": "1.0.0",
    "description": "Productions, breakdowns and costume plots",
    "dependencies": ["inventory"],
}
