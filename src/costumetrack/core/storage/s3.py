"""S3-compatible blob storage for uploaded images.

The boto3 client is blocking, so every call runs in a worker thread.
"""

import asyncio
from functools import lru_cache
from typing import Annotated

import boto3
import structlog
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import Depends

from costumetrack.config import settings
from costumetrack.core.errors import ServiceUnavailableError


logger = structlog.get_logger()


class BlobStorageError(Exception):
    """Raised when the storage backend rejects or fails an operation."""


class BlobStorage:
    """Puts and deletes objects in one bucket and maps keys to public URLs."""

    def __init__(
        self,
        bucket: str,
        region: str,
        endpoint_url: str | None = None,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        public_base_url: str | None = None,
    ) -> None:
        retry_config = Config(
            retries={
                "max_attempts": 3,
                "mode": "standard",
            },
            connect_timeout=5,
            read_timeout=10,
        )

        client_kwargs = {
            "region_name": region,
            "config": retry_config,
        }
        # Credentials are optional when running with an IAM role
        if access_key_id and secret_access_key:
            client_kwargs["aws_access_key_id"] = access_key_id
            client_kwargs["aws_secret_access_key"] = secret_access_key
        if endpoint_url:
            client_kwargs["endpoint_url"] = endpoint_url

        self.bucket = bucket
        self.client = boto3.client("s3", **client_kwargs)
        self.public_base_url = (
            public_base_url or f"https://{bucket}.s3.{region}.amazonaws.com"
        ).rstrip("/")

    def url_for(self, key: str) -> str:
        return f"{self.public_base_url}/{key}"

    def key_from_url(self, url: str) -> str | None:
        """Return the object key for a URL served by this bucket, else None."""
        prefix = f"{self.public_base_url}/"
        if not url.startswith(prefix):
            return None
        return url[len(prefix) :] or None

    async def put(self, key: str, body: bytes, content_type: str) -> str:
        """Upload an object and return its public URL.

        Raises:
            BlobStorageError: If the upload fails
        """
        try:
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=body,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as e:
            raise BlobStorageError(f"Failed to upload {key}: {e}") from e

        logger.info("blob_uploaded", key=key, size=len(body))
        return self.url_for(key)

    async def delete(self, key: str) -> None:
        """Delete an object.

        Raises:
            BlobStorageError: If the delete fails
        """
        try:
            await asyncio.to_thread(
                self.client.delete_object,
                Bucket=self.bucket,
                Key=key,
            )
        except (BotoCoreError, ClientError) as e:
            raise BlobStorageError(f"Failed to delete {key}: {e}") from e

        logger.info("blob_deleted", key=key)


@lru_cache
def _build_storage() -> BlobStorage:
    return BlobStorage(
        bucket=settings.storage_bucket or "",
        region=settings.storage_region,
        endpoint_url=settings.storage_endpoint_url,
        access_key_id=settings.storage_access_key_id,
        secret_access_key=settings.storage_secret_access_key,
        public_base_url=settings.storage_public_base_url,
    )


def get_blob_storage() -> BlobStorage:
    """Dependency returning the process-wide storage client.

    Raises:
        ServiceUnavailableError: If no bucket is configured
    """
    if not settings.storage_enabled:
        raise ServiceUnavailableError(
            "File storage is not configured",
            error_code="storage_not_configured",
        )
    return _build_storage()


def get_optional_blob_storage() -> BlobStorage | None:
    """Dependency for cleanup paths that must work without storage configured."""
    return _build_storage() if settings.storage_enabled else None


async def delete_blob_quietly(
    storage: BlobStorage, url: str, event: str = "blob_delete_failed"
) -> None:
    """Best-effort delete used after a database row is already gone.

    Failures are logged and ignored: the row deletion has committed, so a
    leftover object is an accepted inconsistency.
    """
    key = storage.key_from_url(url)
    if key is None:
        logger.warning("blob_delete_skipped", url=url, reason="foreign_url")
        return
    try:
        await storage.delete(key)
    except BlobStorageError as e:
        logger.warning(event, key=key, error=str(e))


Storage = Annotated[BlobStorage, Depends(get_blob_storage)]
OptionalStorage = Annotated[BlobStorage | None, Depends(get_optional_blob_storage)]
