"""Integration tests for Problem Details error responses."""

from uuid import uuid4

import pytest
from httpx import AsyncClient


pytestmark = pytest.mark.integration

CUSTOMERS_URL = "/api/v1/customers"


class TestProblemDetails:
    """Error bodies follow RFC 7807."""

    async def test_not_found_fields(self, client: AsyncClient, owner_headers: dict[str, str]):
        customer_id = uuid4()

        response = await client.get(f"{CUSTOMERS_URL}/{customer_id}", headers=owner_headers)

        assert response.status_code == 404
        assert response.headers["content-type"].startswith("application/json")
        data = response.json()
        assert data["type"].endswith("/errors/not_found")
        assert data["title"] == "Not Found"
        assert data["status"] == 404
        assert data["detail"] == "Customer not found"
        assert data["instance"] == f"{CUSTOMERS_URL}/{customer_id}"
        assert data["resource"] == "customer"

    async def test_unauthenticated(self, client: AsyncClient):
        response = await client.get(CUSTOMERS_URL)

        assert response.status_code == 401
        assert response.json()["status"] == 401


class TestRequestBodyErrors:
    """Tests for malformed and invalid request bodies."""

    async def test_malformed_json(self, client: AsyncClient, owner_headers: dict[str, str]):
        response = await client.post(
            CUSTOMERS_URL,
            content=b'{"name": "Broken',
            headers={**owner_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        data = response.json()
        assert data["type"].endswith("/invalid_body")
        assert data["detail"] == "Invalid or missing request body"

    async def test_missing_body(self, client: AsyncClient, owner_headers: dict[str, str]):
        response = await client.post(CUSTOMERS_URL, headers=owner_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid or missing request body"

    async def test_field_errors_listed(self, client: AsyncClient, owner_headers: dict[str, str]):
        """The first failure becomes the detail and every failure is listed."""
        response = await client.post(
            CUSTOMERS_URL,
            json={"email": "not-an-email"},
            headers=owner_headers,
        )

        assert response.status_code == 400
        data = response.json()
        assert data["type"].endswith("/validation_error")
        fields = {error["field"] for error in data["errors"]}
        assert {"name", "email"} <= fields
        first = data["errors"][0]
        assert data["detail"] in (first["message"], f"{first['field']}: {first['message']}")

    async def test_value_error_message_unprefixed(
        self, client: AsyncClient, owner_headers: dict[str, str]
    ):
        response = await client.put(
            "/api/v1/settings/profile", json={"name": "   "}, headers=owner_headers
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Name is required"
