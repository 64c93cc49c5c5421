"""Integration tests for image uploads and blob cleanup."""

import pytest
from httpx import AsyncClient

from costumetrack.config import settings
from costumetrack.core.storage import (
    BlobStorage,
    BlobStorageError,
    get_blob_storage,
    get_optional_blob_storage,
)
from costumetrack.models import Organization


pytestmark = pytest.mark.integration

UPLOAD_URL = "/api/v1/upload"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class InMemoryStorage(BlobStorage):
    """Bucket stand-in that keeps objects in a dict."""

    def __init__(self, public_base_url: str = "https://cdn.example") -> None:
        self.bucket = "test-bucket"
        self.public_base_url = public_base_url
        self.objects: dict[str, bytes] = {}
        self.fail = False

    async def put(self, key: str, body: bytes, content_type: str) -> str:
        if self.fail:
            raise BlobStorageError(f"Failed to upload {key}")
        self.objects[key] = body
        return self.url_for(key)

    async def delete(self, key: str) -> None:
        if self.fail:
            raise BlobStorageError(f"Failed to delete {key}")
        self.objects.pop(key, None)


@pytest.fixture
def storage(app) -> InMemoryStorage:
    backend = InMemoryStorage()
    app.dependency_overrides[get_blob_storage] = lambda: backend
    app.dependency_overrides[get_optional_blob_storage] = lambda: backend
    return backend


class TestUpload:
    """Tests for POST /upload."""

    async def test_upload_image(
        self,
        client: AsyncClient,
        owner_headers: dict[str, str],
        organization: Organization,
        storage: InMemoryStorage,
    ):
        response = await client.post(
            UPLOAD_URL,
            files={"file": ("My Dress (front).png", PNG_BYTES, "image/png")},
            headers=owner_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["key"].startswith(f"costumes/{organization.id}/")
        assert data["key"].endswith("-My-Dress-front-.png")
        assert data["url"] == f"https://cdn.example/{data['key']}"
        assert storage.objects[data["key"]] == PNG_BYTES

    async def test_non_image_rejected(
        self, client: AsyncClient, owner_headers: dict[str, str], storage: InMemoryStorage
    ):
        response = await client.post(
            UPLOAD_URL,
            files={"file": ("notes.txt", b"hello", "text/plain")},
            headers=owner_headers,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "File must be an image"
        assert storage.objects == {}

    async def test_too_large_rejected(
        self,
        client: AsyncClient,
        owner_headers: dict[str, str],
        storage: InMemoryStorage,
        monkeypatch: pytest.MonkeyPatch,
    ):
        monkeypatch.setattr(settings, "max_upload_bytes", 16)

        response = await client.post(
            UPLOAD_URL,
            files={"file": ("big.png", PNG_BYTES, "image/png")},
            headers=owner_headers,
        )

        assert response.status_code == 400
        assert response.json()["type"].endswith("/file_too_large")

    async def test_storage_failure(
        self, client: AsyncClient, owner_headers: dict[str, str], storage: InMemoryStorage
    ):
        storage.fail = True

        response = await client.post(
            UPLOAD_URL,
            files={"file": ("a.png", PNG_BYTES, "image/png")},
            headers=owner_headers,
        )

        assert response.status_code == 500
        assert response.json()["detail"] == "Upload failed"

    async def test_upload_unavailable_without_storage(
        self,
        client: AsyncClient,
        owner_headers: dict[str, str],
        monkeypatch: pytest.MonkeyPatch,
    ):
        monkeypatch.setattr(settings, "storage_bucket", None)

        response = await client.post(
            UPLOAD_URL,
            files={"file": ("a.png", PNG_BYTES, "image/png")},
            headers=owner_headers,
        )

        assert response.status_code == 503

    async def test_upload_requires_organization(
        self, client: AsyncClient, new_user_headers: dict[str, str], storage: InMemoryStorage
    ):
        response = await client.post(
            UPLOAD_URL,
            files={"file": ("a.png", PNG_BYTES, "image/png")},
            headers=new_user_headers,
        )

        assert response.status_code == 401


class TestDeleteUpload:
    """Tests for DELETE /upload."""

    async def test_delete_own_upload(
        self, client: AsyncClient, owner_headers: dict[str, str], storage: InMemoryStorage
    ):
        uploaded = await client.post(
            UPLOAD_URL,
            files={"file": ("a.png", PNG_BYTES, "image/png")},
            headers=owner_headers,
        )

        response = await client.request(
            "DELETE", UPLOAD_URL, json={"url": uploaded.json()["url"]}, headers=owner_headers
        )

        assert response.status_code == 204
        assert storage.objects == {}

    async def test_cannot_delete_other_organizations_upload(
        self,
        client: AsyncClient,
        owner_headers: dict[str, str],
        other_headers: dict[str, str],
        storage: InMemoryStorage,
    ):
        uploaded = await client.post(
            UPLOAD_URL,
            files={"file": ("a.png", PNG_BYTES, "image/png")},
            headers=owner_headers,
        )

        response = await client.request(
            "DELETE", UPLOAD_URL, json={"url": uploaded.json()["url"]}, headers=other_headers
        )

        assert response.status_code == 404
        assert uploaded.json()["key"] in storage.objects

    async def test_foreign_host_not_found(
        self, client: AsyncClient, owner_headers: dict[str, str], storage: InMemoryStorage
    ):
        response = await client.request(
            "DELETE",
            UPLOAD_URL,
            json={"url": "https://elsewhere.example/costumes/x.png"},
            headers=owner_headers,
        )

        assert response.status_code == 404


class TestSketchBlobCleanup:
    async def test_deleting_sketch_removes_blob(
        self, client: AsyncClient, owner_headers: dict[str, str], storage: InMemoryStorage
    ):
        """The sketch's file is removed from storage after the row is deleted."""
        uploaded = await client.post(
            UPLOAD_URL,
            files={"file": ("sketch.png", PNG_BYTES, "image/png")},
            headers=owner_headers,
        )
        production = await client.post(
            "/api/v1/productions", json={"name": "Cymbeline"}, headers=owner_headers
        )
        production_id = production.json()["id"]
        character = await client.post(
            f"/api/v1/productions/{production_id}/characters",
            json={"name": "Imogen"},
            headers=owner_headers,
        )
        sketches_url = (
            f"/api/v1/productions/{production_id}/characters/{character.json()['id']}/sketches"
        )
        sketch = await client.post(sketches_url, json=uploaded.json(), headers=owner_headers)

        response = await client.delete(
            f"{sketches_url}/{sketch.json()['id']}", headers=owner_headers
        )

        assert response.status_code == 204
        assert storage.objects == {}
