"""Model registry.

Importing this module registers every table on ``Base.metadata``; Alembic
and the test suite rely on it.
"""

from costumetrack.core.database.base import Base
from costumetrack.modules.customers.models import Customer
from costumetrack.modules.inventory.models import Category, CostumeItem, CostumePhoto
from costumetrack.modules.invites.models import SystemInviteCode
from costumetrack.modules.organizations.models import LabelFormat, Organization
from costumetrack.modules.productions.models import (
    Character,
    CharacterSketch,
    CostumeAssignment,
    Production,
    Scene,
)
from costumetrack.modules.rentals.models import Rental, RentalItem
from costumetrack.modules.users.models import User


__all__ = [
    "Base",
    "Category",
    "Character",
    "CharacterSketch",
    "CostumeAssignment",
    "CostumeItem",
    "CostumePhoto",
    "Customer",
    "LabelFormat",
    "Organization",
    "Production",
    "Rental",
    "RentalItem",
    "Scene",
    "SystemInviteCode",
    "User",
]
