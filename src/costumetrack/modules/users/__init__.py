"""Users module: accounts that authenticate against the API.

Registration, login and onboarding routes live in ``costumetrack.core.auth``.
"""

# Module metadata
__module_info__ = {
    "name": "users",
    "version": "1.0.0",
    "description": "User accounts",
    "dependencies": ["organizations"],
}
