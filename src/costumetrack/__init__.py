"""CostumeTrack: costume inventory and rental management API."""

__version__ = "0.1.0"
