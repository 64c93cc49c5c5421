"""Integration tests for multi-tenancy isolation.

Every organization-scoped resource must answer 404 to callers from another
organization, exactly as if the row did not exist.
"""

from datetime import date, timedelta

import pytest
from httpx import AsyncClient

from costumetrack.models import Organization


pytestmark = pytest.mark.integration


class TestCrossTenantAccess:
    """Reads and writes across organizations look like missing rows."""

    @pytest.mark.parametrize(
        ("factory", "url"),
        [
            ("make_item", "/api/v1/inventory/{id}"),
            ("make_customer", "/api/v1/customers/{id}"),
            ("make_production", "/api/v1/productions/{id}"),
        ],
    )
    async def test_foreign_rows_hidden(
        self,
        request: pytest.FixtureRequest,
        client: AsyncClient,
        owner_headers: dict[str, str],
        other_organization: Organization,
        factory: str,
        url: str,
    ):
        make = request.getfixturevalue(factory)
        row = await make(owner_org=other_organization)
        target = url.format(id=row.id)

        fetched = await client.get(target, headers=owner_headers)
        patched = await client.patch(target, json={"name": "Hijacked"}, headers=owner_headers)
        deleted = await client.delete(target, headers=owner_headers)

        assert fetched.status_code == 404
        assert patched.status_code == 404
        assert deleted.status_code == 404

    async def test_foreign_rows_untouched(
        self,
        client: AsyncClient,
        owner_headers: dict[str, str],
        other_headers: dict[str, str],
        other_organization: Organization,
        make_item,
    ):
        item = await make_item(owner_org=other_organization, name="Velvet Doublet")

        await client.patch(
            f"/api/v1/inventory/{item.id}", json={"name": "Hijacked"}, headers=owner_headers
        )
        await client.delete(f"/api/v1/inventory/{item.id}", headers=owner_headers)
        response = await client.get(f"/api/v1/inventory/{item.id}", headers=other_headers)

        assert response.status_code == 200
        assert response.json()["name"] == "Velvet Doublet"

    async def test_listings_scoped(
        self,
        client: AsyncClient,
        owner_headers: dict[str, str],
        other_organization: Organization,
        make_item,
        make_customer,
    ):
        await make_item(name="Ours")
        await make_item(owner_org=other_organization, name="Theirs")
        await make_customer(owner_org=other_organization)

        items = await client.get("/api/v1/inventory", headers=owner_headers)
        customers = await client.get("/api/v1/customers", headers=owner_headers)

        assert [i["name"] for i in items.json()["items"]] == ["Ours"]
        assert customers.json()["total"] == 0

    async def test_foreign_rental_hidden(
        self,
        client: AsyncClient,
        owner_headers: dict[str, str],
        other_headers: dict[str, str],
        other_organization: Organization,
        make_item,
        make_customer,
    ):
        item = await make_item(owner_org=other_organization)
        customer = await make_customer(owner_org=other_organization)
        created = await client.post(
            "/api/v1/rentals",
            json={
                "customer_id": str(customer.id),
                "due_date": (date.today() + timedelta(days=7)).isoformat(),
                "items": [{"costume_item_id": str(item.id), "condition_out": "GOOD"}],
            },
            headers=other_headers,
        )
        rental_id = created.json()["id"]

        fetched = await client.get(f"/api/v1/rentals/{rental_id}", headers=owner_headers)
        returned = await client.post(
            f"/api/v1/rentals/{rental_id}/return", headers=owner_headers
        )
        listed = await client.get("/api/v1/rentals", headers=owner_headers)

        assert created.status_code == 201
        assert fetched.status_code == 404
        assert returned.status_code == 404
        assert listed.json()["total"] == 0

    async def test_cannot_rent_foreign_items_to_own_customer(
        self,
        client: AsyncClient,
        owner_headers: dict[str, str],
        other_organization: Organization,
        make_item,
        make_customer,
    ):
        foreign_item = await make_item(owner_org=other_organization)
        customer = await make_customer()

        response = await client.post(
            "/api/v1/rentals",
            json={
                "customer_id": str(customer.id),
                "due_date": (date.today() + timedelta(days=7)).isoformat(),
                "items": [{"costume_item_id": str(foreign_item.id), "condition_out": "GOOD"}],
            },
            headers=owner_headers,
        )

        assert response.status_code == 404


class TestAccessLevels:
    """Tests for organization membership and role checks."""

    @pytest.mark.parametrize(
        "url",
        ["/api/v1/inventory", "/api/v1/customers", "/api/v1/productions", "/api/v1/rentals"],
    )
    async def test_user_without_organization(
        self, client: AsyncClient, new_user_headers: dict[str, str], url: str
    ):
        response = await client.get(url, headers=new_user_headers)

        assert response.status_code == 401
        assert response.json()["type"].endswith("/organization_required")

    @pytest.mark.parametrize(
        ("method", "url"),
        [
            ("GET", "/api/v1/settings/profile"),
            ("GET", "/api/v1/settings/agreement"),
            ("POST", "/api/v1/categories"),
            ("DELETE", "/api/v1/categories/00000000-0000-0000-0000-000000000000"),
        ],
    )
    async def test_member_blocked_from_admin_endpoints(
        self, client: AsyncClient, member_headers: dict[str, str], method: str, url: str
    ):
        response = await client.request(method, url, json={"name": "x"}, headers=member_headers)

        assert response.status_code == 403

    async def test_owner_is_not_system_admin(
        self, client: AsyncClient, owner_headers: dict[str, str]
    ):
        response = await client.post(
            "/api/v1/admin/invite-codes", json={"code": "SNEAKY"}, headers=owner_headers
        )

        assert response.status_code == 403
