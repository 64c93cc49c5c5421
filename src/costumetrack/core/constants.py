"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# Slug generation
MAX_SLUG_LENGTH = 50
MAX_SLUG_ATTEMPTS = 5

# String field lengths
MAX_EMAIL_LENGTH = 255
MAX_NAME_LENGTH = 255
MAX_SHORT_TEXT_LENGTH = 100
MAX_URL_LENGTH = 2048
MAX_SKU_LENGTH = 64
MAX_COLOR_LENGTH = 32
MAX_ORGANIZATION_NAME_LENGTH = 100
MIN_ORGANIZATION_NAME_LENGTH = 2

# Password requirements
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 128
BCRYPT_ROUNDS = 12

# Pagination defaults
DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 100

# Customer portal
PORTAL_TOKEN_BYTES = 24

# Invite codes
MIN_INVITE_CODE_LENGTH = 4
MAX_INVITE_CODE_LENGTH = 32

# Label formats (inches)
MAX_LABEL_DIMENSION = 12

# Uploads
MAX_UPLOAD_BYTES = 4 * 1024 * 1024
UPLOAD_KEY_PREFIX = "costumes"

# System administrators recognised regardless of configuration
BUILTIN_SYSTEM_ADMIN_EMAILS = ("support@costumetrack.com",)

# Default categories created for every new organization: (name, color)
DEFAULT_CATEGORIES = (
    ("Dresses", "#9333ea"),
    ("Suits", "#22c55e"),
    ("Accessories", "#eab308"),
    ("Footwear", "#3b82f6"),
    ("Headwear", "#ec4899"),
    ("Outerwear", "#f97316"),
)

# Secret key requirements
MIN_SECRET_KEY_LENGTH = 32
DEFAULT_INSECURE_SECRET = "change-me-in-production"

# Slugs that collide with application routes; onboarding suffixes them
RESERVED_SLUGS = frozenset(
    {
        "admin",
        "api",
        "customers",
        "dashboard",
        "inventory",
        "login",
        "portal",
        "productions",
        "register",
        "rentals",
        "settings",
    }
)
