"""Image upload service."""

import re
import time
from typing import Annotated

import structlog
from fastapi import Depends

from costumetrack.config import settings
from costumetrack.core.auth.schemas import OrgContext
from costumetrack.core.constants import UPLOAD_KEY_PREFIX
from costumetrack.core.errors import AppException, BadRequestError, NotFoundError
from costumetrack.core.storage import BlobStorageError, Storage
from costumetrack.modules.uploads.schemas import UploadResponse


logger = structlog.get_logger()

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(filename: str | None) -> str:
    """Reduce a client filename to a safe object-key segment.

    Examples:
        >>> safe_filename("../My Dress (front).JPG")
        'My-Dress-front-.JPG'
    """
    name = (filename or "").replace("\\", "/").rsplit("/", 1)[-1]
    name = _UNSAFE_FILENAME_CHARS.sub("-", name).strip("-.")
    return name or "upload"


def organization_prefix(org: OrgContext) -> str:
    return f"{UPLOAD_KEY_PREFIX}/{org.organization_id}/"


class UploadService:
    """Stores images under the caller's organization prefix."""

    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    async def upload_image(
        self,
        org: OrgContext,
        content: bytes,
        filename: str | None,
        content_type: str | None,
    ) -> UploadResponse:
        """Validate and store an image.

        Raises:
            BadRequestError: If the file is not an image or too large
            AppException: If the storage backend rejects the upload
        """
        if not content_type or not content_type.startswith("image/"):
            raise BadRequestError("File must be an image", error_code="invalid_file_type")
        if len(content) > settings.max_upload_bytes:
            limit_mb = settings.max_upload_bytes // (1024 * 1024)
            raise BadRequestError(
                f"File must be less than {limit_mb}MB",
                error_code="file_too_large",
            )

        key = f"{organization_prefix(org)}{int(time.time() * 1000)}-{safe_filename(filename)}"
        try:
            url = await self.storage.put(key, content, content_type)
        except BlobStorageError as e:
            logger.error("upload_failed", key=key, error=str(e))
            raise AppException("Upload failed", error_code="upload_failed") from e

        return UploadResponse(url=url, key=key)

    async def delete_image(self, org: OrgContext, url: str) -> None:
        """Delete an uploaded image owned by the caller's organization.

        Raises:
            NotFoundError: If the URL is not an object under the organization prefix
        """
        key = self.storage.key_from_url(url)
        if key is None or not key.startswith(organization_prefix(org)):
            raise NotFoundError("File not found", resource="file")

        try:
            await self.storage.delete(key)
        except BlobStorageError as e:
            logger.error("upload_delete_failed", key=key, error=str(e))
            raise AppException("Delete failed", error_code="delete_failed") from e


# Type alias for dependency injection
UploadSvc = Annotated[UploadService, Depends(UploadService)]
