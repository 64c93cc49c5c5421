"""Integration tests for organization settings, public pages and label formats."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from costumetrack.models import Organization
from costumetrack.modules.organizations.repos import (
    LabelFormatRepository,
    OrganizationRepository,
)
from costumetrack.modules.organizations.services import LabelFormatService


pytestmark = pytest.mark.integration

PROFILE_URL = "/api/v1/settings/profile"
AGREEMENT_URL = "/api/v1/settings/agreement"
LABELS_URL = "/api/v1/label-formats"


@pytest.fixture
async def presets(db: AsyncSession) -> int:
    service = LabelFormatService(LabelFormatRepository(db), OrganizationRepository(db))
    return await service.seed_presets()


class TestProfile:
    """Tests for the organization profile."""

    async def test_get_profile(self, client: AsyncClient, owner_headers: dict[str, str]):
        response = await client.get(PROFILE_URL, headers=owner_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Globe Theatre"
        assert data["slug"] == "globe-theatre"

    async def test_update_profile_blanks_become_null(
        self, client: AsyncClient, owner_headers: dict[str, str]
    ):
        response = await client.put(
            PROFILE_URL,
            json={
                "name": "  The Globe  ",
                "description": "Costumes since 1599",
                "contact_email": "",
                "contact_phone": "   ",
                "website": "https://globe.example/home",
                "public_page_enabled": True,
            },
            headers=owner_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "The Globe"
        assert data["contact_email"] is None
        assert data["contact_phone"] is None
        assert data["website"] == "https://globe.example/home"
        assert data["public_page_enabled"] is True
        assert data["slug"] == "globe-theatre"

    async def test_blank_name_rejected(self, client: AsyncClient, owner_headers: dict[str, str]):
        response = await client.put(PROFILE_URL, json={"name": "  "}, headers=owner_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Name is required"

    async def test_member_cannot_read_profile(
        self, client: AsyncClient, member_headers: dict[str, str]
    ):
        response = await client.get(PROFILE_URL, headers=member_headers)

        assert response.status_code == 403


class TestAgreement:
    """Tests for the rental agreement text."""

    async def test_set_and_clear_agreement(
        self, client: AsyncClient, owner_headers: dict[str, str]
    ):
        saved = await client.put(
            AGREEMENT_URL,
            json={"text": "Items must be returned dry-cleaned."},
            headers=owner_headers,
        )
        cleared = await client.put(AGREEMENT_URL, json={"text": ""}, headers=owner_headers)
        current = await client.get(AGREEMENT_URL, headers=owner_headers)

        assert saved.json() == {"text": "Items must be returned dry-cleaned."}
        assert cleared.json() == {"text": None}
        assert current.json() == {"text": None}


class TestPublicPage:
    """Tests for the unauthenticated public organization page."""

    async def test_enabled_page_visible(
        self, client: AsyncClient, db: AsyncSession, organization: Organization
    ):
        organization.public_page_enabled = True
        organization.contact_email = "box-office@globe.example"
        await db.flush()

        response = await client.get("/api/v1/public/globe-theatre")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Globe Theatre"
        assert data["contact_email"] == "box-office@globe.example"
        assert "id" not in data
        assert "stripe_customer_id" not in data

    async def test_disabled_page_not_found(
        self, client: AsyncClient, db: AsyncSession, organization: Organization
    ):
        organization.public_page_enabled = False
        await db.flush()

        response = await client.get("/api/v1/public/globe-theatre")

        assert response.status_code == 404

    async def test_unknown_slug_not_found(self, client: AsyncClient):
        response = await client.get("/api/v1/public/no-such-theatre")

        assert response.status_code == 404


class TestLabelFormats:
    """Tests for label presets, custom formats and selection."""

    async def test_presets_listed_first(
        self, client: AsyncClient, owner_headers: dict[str, str], presets: int
    ):
        await client.post(
            LABELS_URL,
            json={"name": "A Custom Tag", "width_inches": 1.5, "height_inches": 1},
            headers=owner_headers,
        )

        response = await client.get(LABELS_URL, headers=owner_headers)

        formats = response.json()["formats"]
        assert presets == 6
        assert len(formats) == 7
        assert all(f["is_preset"] for f in formats[:6])
        assert formats[-1]["name"] == "A Custom Tag"
        assert response.json()["selected_format_id"] is None

    async def test_seed_presets_is_idempotent(self, db: AsyncSession, presets: int):
        service = LabelFormatService(LabelFormatRepository(db), OrganizationRepository(db))

        assert await service.seed_presets() == 0

    async def test_other_organizations_formats_hidden(
        self,
        client: AsyncClient,
        owner_headers: dict[str, str],
        other_headers: dict[str, str],
    ):
        await client.post(
            LABELS_URL,
            json={"name": "Private Tag", "width_inches": 2, "height_inches": 1},
            headers=other_headers,
        )

        response = await client.get(LABELS_URL, headers=owner_headers)

        assert response.json()["formats"] == []

    async def test_invalid_dimensions_rejected(
        self, client: AsyncClient, owner_headers: dict[str, str]
    ):
        response = await client.post(
            LABELS_URL,
            json={"name": "Broken", "width_inches": 0, "height_inches": 1},
            headers=owner_headers,
        )

        assert response.status_code == 400

    async def test_select_and_delete_clears_selection(
        self, client: AsyncClient, owner_headers: dict[str, str]
    ):
        created = await client.post(
            LABELS_URL,
            json={"name": "Bin Label", "width_inches": 3, "height_inches": 2},
            headers=owner_headers,
        )
        format_id = created.json()["id"]

        selected = await client.patch(
            f"{LABELS_URL}/selection", json={"format_id": format_id}, headers=owner_headers
        )
        after_select = await client.get(LABELS_URL, headers=owner_headers)
        deleted = await client.delete(f"{LABELS_URL}/{format_id}", headers=owner_headers)
        after_delete = await client.get(LABELS_URL, headers=owner_headers)

        assert selected.status_code == 204
        assert after_select.json()["selected_format_id"] == format_id
        assert deleted.status_code == 204
        assert after_delete.json()["selected_format_id"] is None
        assert after_delete.json()["formats"] == []

    async def test_presets_cannot_be_deleted(
        self, client: AsyncClient, owner_headers: dict[str, str], presets: int
    ):
        listed = await client.get(LABELS_URL, headers=owner_headers)
        preset_id = listed.json()["formats"][0]["id"]

        response = await client.delete(f"{LABELS_URL}/{preset_id}", headers=owner_headers)

        assert response.status_code == 404

    async def test_select_foreign_format_not_found(
        self,
        client: AsyncClient,
        owner_headers: dict[str, str],
        other_headers: dict[str, str],
    ):
        foreign = await client.post(
            LABELS_URL,
            json={"name": "Theirs", "width_inches": 2, "height_inches": 1},
            headers=other_headers,
        )

        response = await client.patch(
            f"{LABELS_URL}/selection",
            json={"format_id": foreign.json()["id"]},
            headers=owner_headers,
        )

        assert response.status_code == 404
