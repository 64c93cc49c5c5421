"""Blob storage for uploaded files."""

from costumetrack.core.storage.s3 import (
    BlobStorage,
    BlobStorageError,
    OptionalStorage,
    Storage,
    delete_blob_quietly,
    get_blob_storage,
    get_optional_blob_storage,
)


__all__ = [
    "BlobStorage",
    "BlobStorageError",
    "OptionalStorage",
    "Storage",
    "delete_blob_quietly",
    "get_blob_storage",
    "get_optional_blob_storage",
]
