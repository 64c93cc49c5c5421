"""Database layer - session management, base models, and mixins."""

from costumetrack.core.database.base import (
    Base,
    OrganizationMixin,
    TimestampMixin,
    UUIDMixin,
)
from costumetrack.core.database.session import (
    async_engine,
    async_session_factory,
    atomic,
    get_db,
)
from costumetrack.core.database.tenant import OrganizationScope, ScopedRepository


__all__ = [
    "Base",
    "OrganizationMixin",
    "OrganizationScope",
    "ScopedRepository",
    "TimestampMixin",
    "UUIDMixin",
    "async_engine",
    "async_session_factory",
    "atomic",
    "get_db",
]
