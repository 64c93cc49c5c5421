"""Integration tests for categories and costume items."""

from uuid import UUID

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from costumetrack.modules.inventory.models import ItemStatus
from tests.factories import CategoryCreateFactory, CostumeItemCreateFactory


pytestmark = pytest.mark.integration

INVENTORY_URL = "/api/v1/inventory"
CATEGORIES_URL = "/api/v1/categories"


def item_payload(**overrides) -> dict:
    return CostumeItemCreateFactory.build(**overrides).model_dump(mode="json")


class TestCategories:
    """Tests for category management."""

    async def test_create_and_list(self, client: AsyncClient, owner_headers: dict[str, str]):
        payload = CategoryCreateFactory.build(name="Armour").model_dump(mode="json")

        created = await client.post(CATEGORIES_URL, json=payload, headers=owner_headers)
        listed = await client.get(CATEGORIES_URL, headers=owner_headers)

        assert created.status_code == 201
        assert created.json()["name"] == "Armour"
        assert [c["name"] for c in listed.json()] == ["Armour"]

    async def test_duplicate_name_conflicts(
        self, client: AsyncClient, owner_headers: dict[str, str]
    ):
        await client.post(CATEGORIES_URL, json={"name": "Masks"}, headers=owner_headers)

        response = await client.post(CATEGORIES_URL, json={"name": "Masks"}, headers=owner_headers)

        assert response.status_code == 409
        assert response.json()["detail"] == "A category with this name already exists"

    async def test_same_name_in_other_organization(
        self,
        client: AsyncClient,
        owner_headers: dict[str, str],
        other_headers: dict[str, str],
    ):
        first = await client.post(CATEGORIES_URL, json={"name": "Masks"}, headers=owner_headers)
        second = await client.post(CATEGORIES_URL, json={"name": "Masks"}, headers=other_headers)

        assert first.status_code == 201
        assert second.status_code == 201

    async def test_member_cannot_create_category(
        self, client: AsyncClient, member_headers: dict[str, str]
    ):
        response = await client.post(
            CATEGORIES_URL, json={"name": "Masks"}, headers=member_headers
        )

        assert response.status_code == 403

    async def test_delete_category_uncategorizes_items(
        self, client: AsyncClient, db: AsyncSession, owner_headers: dict[str, str], make_item
    ):
        category = await client.post(
            CATEGORIES_URL, json={"name": "Capes"}, headers=owner_headers
        )
        category_id = UUID(category.json()["id"])
        item = await make_item(category_id=category_id)

        response = await client.delete(f"{CATEGORIES_URL}/{category_id}", headers=owner_headers)

        assert response.status_code == 204
        await db.refresh(item)
        assert item.category_id is None

    async def test_item_shows_category(self, client: AsyncClient, owner_headers: dict[str, str]):
        category = await client.post(
            CATEGORIES_URL, json={"name": "Capes"}, headers=owner_headers
        )

        response = await client.post(
            INVENTORY_URL,
            json=item_payload(category_id=category.json()["id"]),
            headers=owner_headers,
        )

        assert response.status_code == 201
        assert response.json()["category"]["name"] == "Capes"


class TestCostumeItems:
    """Tests for costume item CRUD."""

    async def test_create_item_with_photos(
        self, client: AsyncClient, member_headers: dict[str, str]
    ):
        """POST /inventory should store photos in order with one MAIN."""
        payload = item_payload(
            name="Emerald Gown",
            photos=[
                {"url": "https://cdn.example/a.jpg", "type": "ALTERNATE"},
                {"url": "https://cdn.example/b.jpg", "type": "MAIN"},
            ],
        )

        response = await client.post(INVENTORY_URL, json=payload, headers=member_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Emerald Gown"
        assert data["status"] == "AVAILABLE"
        assert [p["url"] for p in data["photos"]] == [
            "https://cdn.example/a.jpg",
            "https://cdn.example/b.jpg",
        ]
        assert [p["sort_order"] for p in data["photos"]] == [0, 1]
        assert "-" in data["item_code"]

    async def test_extra_main_photos_demoted(
        self, client: AsyncClient, owner_headers: dict[str, str]
    ):
        payload = item_payload(
            photos=[
                {"url": "https://cdn.example/front.jpg", "type": "MAIN"},
                {"url": "https://cdn.example/back.jpg", "type": "MAIN"},
            ]
        )

        response = await client.post(INVENTORY_URL, json=payload, headers=owner_headers)

        assert response.status_code == 201
        assert [p["type"] for p in response.json()["photos"]] == ["MAIN", "ALTERNATE"]

    async def test_factory_defaults_to_no_photos(
        self, client: AsyncClient, owner_headers: dict[str, str]
    ):
        response = await client.post(INVENTORY_URL, json=item_payload(), headers=owner_headers)

        assert response.status_code == 201
        assert response.json()["photos"] == []

    async def test_create_rented_item_rejected(
        self, client: AsyncClient, owner_headers: dict[str, str]
    ):
        response = await client.post(
            INVENTORY_URL, json=item_payload(status="RENTED"), headers=owner_headers
        )

        assert response.status_code == 400

    async def test_duplicate_sku_conflicts(
        self, client: AsyncClient, owner_headers: dict[str, str]
    ):
        await client.post(INVENTORY_URL, json=item_payload(sku="HAT-1"), headers=owner_headers)

        response = await client.post(
            INVENTORY_URL, json=item_payload(sku="HAT-1"), headers=owner_headers
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "An item with this SKU already exists"

    async def test_items_without_sku_do_not_conflict(
        self, client: AsyncClient, owner_headers: dict[str, str]
    ):
        first = await client.post(INVENTORY_URL, json=item_payload(sku=None), headers=owner_headers)
        second = await client.post(
            INVENTORY_URL, json=item_payload(sku=None), headers=owner_headers
        )

        assert first.status_code == 201
        assert second.status_code == 201

    async def test_negative_price_rejected(
        self, client: AsyncClient, owner_headers: dict[str, str]
    ):
        payload = item_payload()
        payload["rental_price"] = "-1.00"

        response = await client.post(INVENTORY_URL, json=payload, headers=owner_headers)

        assert response.status_code == 400

    async def test_foreign_category_rejected(
        self,
        client: AsyncClient,
        owner_headers: dict[str, str],
        other_headers: dict[str, str],
    ):
        foreign = await client.post(
            CATEGORIES_URL, json={"name": "Foreign"}, headers=other_headers
        )

        response = await client.post(
            INVENTORY_URL,
            json=item_payload(category_id=foreign.json()["id"]),
            headers=owner_headers,
        )

        assert response.status_code == 404

    async def test_update_replaces_photos(
        self, client: AsyncClient, owner_headers: dict[str, str]
    ):
        created = await client.post(
            INVENTORY_URL,
            json=item_payload(photos=[{"url": "https://cdn.example/old.jpg"}]),
            headers=owner_headers,
        )
        item_id = created.json()["id"]

        response = await client.patch(
            f"{INVENTORY_URL}/{item_id}",
            json={"location": "Rack 9", "photos": [{"url": "https://cdn.example/new.jpg"}]},
            headers=owner_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["location"] == "Rack 9"
        assert [p["url"] for p in data["photos"]] == ["https://cdn.example/new.jpg"]
        assert data["name"] == created.json()["name"]

    async def test_update_to_maintenance(
        self, client: AsyncClient, owner_headers: dict[str, str], make_item
    ):
        item = await make_item()

        response = await client.patch(
            f"{INVENTORY_URL}/{item.id}",
            json={"status": "MAINTENANCE", "condition": "NEEDS_REPAIR"},
            headers=owner_headers,
        )

        assert response.status_code == 200
        assert response.json()["status"] == "MAINTENANCE"
        assert response.json()["condition"] == "NEEDS_REPAIR"

    async def test_update_to_rented_rejected(
        self, client: AsyncClient, owner_headers: dict[str, str], make_item
    ):
        item = await make_item()

        response = await client.patch(
            f"{INVENTORY_URL}/{item.id}", json={"status": "RENTED"}, headers=owner_headers
        )

        assert response.status_code == 400

    async def test_rented_item_status_locked(
        self, client: AsyncClient, owner_headers: dict[str, str], make_item
    ):
        item = await make_item(status=ItemStatus.RENTED)

        response = await client.patch(
            f"{INVENTORY_URL}/{item.id}", json={"status": "AVAILABLE"}, headers=owner_headers
        )

        assert response.status_code == 409

    async def test_rented_item_cannot_be_deleted(
        self, client: AsyncClient, owner_headers: dict[str, str], make_item
    ):
        item = await make_item(status=ItemStatus.RENTED)

        response = await client.delete(f"{INVENTORY_URL}/{item.id}", headers=owner_headers)

        assert response.status_code == 409

    async def test_delete_item(
        self, client: AsyncClient, owner_headers: dict[str, str], make_item
    ):
        item = await make_item()

        response = await client.delete(f"{INVENTORY_URL}/{item.id}", headers=owner_headers)
        follow_up = await client.get(f"{INVENTORY_URL}/{item.id}", headers=owner_headers)

        assert response.status_code == 204
        assert follow_up.status_code == 404


class TestInventorySearch:
    """Tests for listing, filtering and SKU lookup."""

    async def test_search_and_status_filter(
        self, client: AsyncClient, owner_headers: dict[str, str], make_item
    ):
        await make_item(name="Pirate Coat", status=ItemStatus.AVAILABLE)
        await make_item(name="Pirate Hat", status=ItemStatus.MAINTENANCE)
        await make_item(name="Fairy Wings")

        searched = await client.get(
            INVENTORY_URL, params={"search": "pirate"}, headers=owner_headers
        )
        filtered = await client.get(
            INVENTORY_URL,
            params={"search": "pirate", "status": "MAINTENANCE"},
            headers=owner_headers,
        )

        assert searched.json()["total"] == 2
        assert [i["name"] for i in filtered.json()["items"]] == ["Pirate Hat"]

    async def test_pagination(self, client: AsyncClient, owner_headers: dict[str, str], make_item):
        for _ in range(3):
            await make_item()

        response = await client.get(
            INVENTORY_URL, params={"page": 2, "page_size": 2}, headers=owner_headers
        )

        data = response.json()
        assert data["total"] == 3
        assert len(data["items"]) == 1
        assert data["has_prev"] is True
        assert data["has_next"] is False

    async def test_lookup_by_sku(
        self, client: AsyncClient, owner_headers: dict[str, str], make_item
    ):
        await make_item(name="Top Hat", sku="TH-100", location="Shelf B")

        response = await client.get(
            f"{INVENTORY_URL}/lookup", params={"sku": " TH-100 "}, headers=owner_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Top Hat"
        assert data["location"] == "Shelf B"

    async def test_lookup_ignores_case(
        self, client: AsyncClient, owner_headers: dict[str, str], make_item
    ):
        await make_item(name="Top Hat", sku="TH-100")

        response = await client.get(
            f"{INVENTORY_URL}/lookup", params={"sku": "th-100"}, headers=owner_headers
        )

        assert response.status_code == 200
        assert response.json()["sku"] == "TH-100"

    async def test_lookup_with_case_variants_returns_one(
        self, client: AsyncClient, owner_headers: dict[str, str], make_item
    ):
        """SKUs differing only in case are distinct rows; lookup picks one."""
        lower = await make_item(sku="ab-1")
        upper = await make_item(sku="AB-1")

        response = await client.get(
            f"{INVENTORY_URL}/lookup", params={"sku": "Ab-1"}, headers=owner_headers
        )

        assert response.status_code == 200
        assert response.json()["id"] in {str(lower.id), str(upper.id)}

    async def test_lookup_without_sku(self, client: AsyncClient, owner_headers: dict[str, str]):
        response = await client.get(f"{INVENTORY_URL}/lookup", headers=owner_headers)

        assert response.status_code == 400

    async def test_lookup_foreign_sku_not_found(
        self, client: AsyncClient, owner_headers: dict[str, str], other_organization, make_item
    ):
        await make_item(owner_org=other_organization, sku="THEIRS-1")

        response = await client.get(
            f"{INVENTORY_URL}/lookup", params={"sku": "THEIRS-1"}, headers=owner_headers
        )

        assert response.status_code == 404
