"""Text processing utilities."""

import re

from costumetrack.core.constants import MAX_SLUG_LENGTH


_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def generate_slug(name: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Generate a URL-safe slug from a name.

    Converts the input string to a URL-friendly slug by:
    - Converting to lowercase
    - Collapsing every run of non-alphanumeric characters to one hyphen
    - Trimming leading and trailing hyphens
    - Truncating to max_length

    Args:
        name: The input string to slugify
        max_length: Maximum length of output slug (default 50)

    Returns:
        URL-safe lowercase slug, possibly empty

    Examples:
        >>> generate_slug("My Theatre Company")
        'my-theatre-company'
        >>> generate_slug("  Hello!! World@2024 ")
        'hello-world-2024'
    """
    slug = _NON_ALPHANUMERIC.sub("-", name.lower()).strip("-")
    return slug[:max_length]


def with_suffix(slug: str, attempt: int) -> str:
    """Return the candidate slug for a collision attempt.

    Examples:
        >>> with_suffix("acme", 0)
        'acme'
        >>> with_suffix("acme", 2)
        'acme-2'
    """
    return slug if attempt == 0 else f"{slug}-{attempt}"


def blank_to_none(value: str | None) -> str | None:
    """Normalize empty or whitespace-only strings to None."""
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None
