"""Shared helpers."""

from costumetrack.core.utils.text import blank_to_none, generate_slug, with_suffix


__all__ = ["blank_to_none", "generate_slug", "with_suffix"]
