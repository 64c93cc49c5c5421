"""Authentication module for JWT, password handling and caller context.

Dependencies, the auth service and routes are imported from their own
submodules; they depend on the users module, which depends on this one.
"""

from costumetrack.core.auth.backend import (
    create_access_token,
    create_refresh_token,
    decode_token,
    generate_portal_token,
    hash_password,
    verify_password,
)
from costumetrack.core.auth.schemas import (
    OrgContext,
    Role,
    SessionContext,
    TokenData,
    TokenPair,
    is_admin_role,
)


__all__ = [
    # Schemas
    "OrgContext",
    "Role",
    "SessionContext",
    "TokenData",
    "TokenPair",
    # Token utilities
    "create_access_token",
    "create_refresh_token",
    "decode_token",
    "generate_portal_token",
    # Password utilities
    "hash_password",
    "is_admin_role",
    "verify_password",
]
