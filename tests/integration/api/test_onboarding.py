"""Integration tests for organization onboarding."""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from costumetrack.config import settings
from costumetrack.core.auth import Role, SessionContext
from costumetrack.core.auth.service import AuthService
from costumetrack.models import Category, Organization, SystemInviteCode, User
from tests.conftest import bearer, create_organization, create_user


pytestmark = pytest.mark.integration

ONBOARDING_URL = "/api/v1/auth/onboarding"


@pytest.fixture
async def invite(db: AsyncSession) -> SystemInviteCode:
    code = SystemInviteCode(code="OPENINGNIGHT", max_uses=5, used_count=0, is_active=True)
    db.add(code)
    await db.flush()
    await db.refresh(code)
    return code


async def count_organizations(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(Organization))
    return result.scalar_one()


class TestOnboarding:
    """Tests for creating the caller's organization."""

    async def test_onboarding_creates_organization(
        self,
        client: AsyncClient,
        db: AsyncSession,
        new_user: User,
        new_user_headers: dict[str, str],
        invite: SystemInviteCode,
    ):
        """POST /auth/onboarding should create the org and promote the caller."""
        response = await client.post(
            ONBOARDING_URL,
            json={"organization_name": "  Acme Players ", "invite_code": "openingnight"},
            headers=new_user_headers,
        )

        assert response.status_code == 200
        organization = response.json()["organization"]
        assert organization["name"] == "Acme Players"
        assert organization["slug"] == "acme-players"

        await db.refresh(new_user)
        assert str(new_user.organization_id) == organization["id"]
        assert new_user.role == Role.OWNER

        categories = await db.execute(
            select(Category.name).where(Category.organization_id == new_user.organization_id)
        )
        assert sorted(categories.scalars().all()) == [
            "Accessories",
            "Dresses",
            "Footwear",
            "Headwear",
            "Outerwear",
            "Suits",
        ]

        await db.refresh(invite)
        assert invite.used_count == 1

    async def test_onboarding_twice_conflicts(
        self,
        client: AsyncClient,
        owner_headers: dict[str, str],
        invite: SystemInviteCode,
    ):
        """A user who already has an organization cannot create another."""
        response = await client.post(
            ONBOARDING_URL,
            json={"organization_name": "Second Company", "invite_code": invite.code},
            headers=owner_headers,
        )

        assert response.status_code == 409
        assert response.json()["type"].endswith("/already_onboarded")

    async def test_slug_collision_gets_suffix(
        self, client: AsyncClient, db: AsyncSession, invite: SystemInviteCode
    ):
        """Two organizations with the same name get distinct slugs."""
        first = await create_user(db)
        second = await create_user(db)

        first_response = await client.post(
            ONBOARDING_URL,
            json={"organization_name": "Acme", "invite_code": invite.code},
            headers=bearer(first),
        )
        second_response = await client.post(
            ONBOARDING_URL,
            json={"organization_name": "Acme", "invite_code": invite.code},
            headers=bearer(second),
        )

        assert first_response.json()["organization"]["slug"] == "acme"
        assert second_response.json()["organization"]["slug"] == "acme-1"

    async def test_reserved_slug_gets_suffix(
        self,
        client: AsyncClient,
        new_user_headers: dict[str, str],
        invite: SystemInviteCode,
    ):
        response = await client.post(
            ONBOARDING_URL,
            json={"organization_name": "Admin", "invite_code": invite.code},
            headers=new_user_headers,
        )

        assert response.status_code == 200
        assert response.json()["organization"]["slug"] == "admin-1"

    async def test_name_without_slug_characters(
        self,
        client: AsyncClient,
        new_user_headers: dict[str, str],
        invite: SystemInviteCode,
    ):
        response = await client.post(
            ONBOARDING_URL,
            json={"organization_name": "!!!", "invite_code": invite.code},
            headers=new_user_headers,
        )

        assert response.status_code == 200
        assert response.json()["organization"]["slug"] == "organization"

    async def test_short_name_rejected(
        self, client: AsyncClient, new_user_headers: dict[str, str]
    ):
        response = await client.post(
            ONBOARDING_URL,
            json={"organization_name": "A", "invite_code": "OPENINGNIGHT"},
            headers=new_user_headers,
        )

        assert response.status_code == 400

    async def test_requires_authentication(self, client: AsyncClient):
        response = await client.post(
            ONBOARDING_URL,
            json={"organization_name": "Acme", "invite_code": "OPENINGNIGHT"},
        )

        assert response.status_code == 401


class TestOnboardingInviteGate:
    """Tests for the invite code requirement."""

    @pytest.mark.parametrize("invite_code", [None, "", "NOSUCHCODE"])
    async def test_missing_or_unknown_code(
        self,
        client: AsyncClient,
        db: AsyncSession,
        new_user_headers: dict[str, str],
        invite_code: str | None,
    ):
        """Onboarding without a valid code should fail and create nothing."""
        before = await count_organizations(db)

        response = await client.post(
            ONBOARDING_URL,
            json={"organization_name": "Acme", "invite_code": invite_code},
            headers=new_user_headers,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid or expired invite code"
        assert await count_organizations(db) == before

    async def test_used_up_code(
        self,
        client: AsyncClient,
        db: AsyncSession,
        new_user: User,
        new_user_headers: dict[str, str],
        invite: SystemInviteCode,
    ):
        invite.max_uses = 1
        invite.used_count = 1
        await db.flush()

        response = await client.post(
            ONBOARDING_URL,
            json={"organization_name": "Acme", "invite_code": invite.code},
            headers=new_user_headers,
        )

        assert response.status_code == 400
        await db.refresh(new_user)
        assert new_user.organization_id is None

    async def test_inactive_code(
        self,
        client: AsyncClient,
        db: AsyncSession,
        new_user_headers: dict[str, str],
        invite: SystemInviteCode,
    ):
        invite.is_active = False
        await db.flush()

        response = await client.post(
            ONBOARDING_URL,
            json={"organization_name": "Acme", "invite_code": invite.code},
            headers=new_user_headers,
        )

        assert response.status_code == 400

    async def test_gate_disabled(
        self,
        client: AsyncClient,
        new_user_headers: dict[str, str],
        monkeypatch: pytest.MonkeyPatch,
    ):
        """With the gate off, no code is needed."""
        monkeypatch.setattr(settings, "require_invite_code", False)

        response = await client.post(
            ONBOARDING_URL,
            json={"organization_name": "Acme"},
            headers=new_user_headers,
        )

        assert response.status_code == 200


class TestSlugRace:
    """Service-level tests for losing a slug to a concurrent onboarding."""

    async def test_retries_after_unique_violation(
        self,
        db: AsyncSession,
        new_user: User,
        monkeypatch: pytest.MonkeyPatch,
    ):
        """A slug taken between the check and the insert is retried with a suffix."""
        monkeypatch.setattr(settings, "require_invite_code", False)
        await create_organization(db, name="Acme", slug="acme")

        service = AuthService(db)

        real_slug_exists = service.org_repo.slug_exists
        checked: set[str] = set()

        async def slug_appears_after_check(slug: str) -> bool:
            if slug in checked:
                return await real_slug_exists(slug)
            checked.add(slug)
            return False

        monkeypatch.setattr(service.org_repo, "slug_exists", slug_appears_after_check)

        organization = await service.onboard(
            SessionContext(user_id=new_user.id, email=new_user.email, role=Role.MEMBER),
            "Acme",
            None,
        )

        assert organization.slug == "acme-1"
        await db.refresh(new_user)
        assert new_user.organization_id == organization.id

    async def test_other_constraint_failures_propagate(
        self,
        db: AsyncSession,
        new_user: User,
        monkeypatch: pytest.MonkeyPatch,
    ):
        """Only a lost slug is retried; other integrity errors surface unchanged."""
        monkeypatch.setattr(settings, "require_invite_code", False)
        service = AuthService(db)
        attempts = 0

        async def broken_defaults(org: object) -> None:
            nonlocal attempts
            attempts += 1
            raise IntegrityError("INSERT INTO categories", {}, Exception("check failed"))

        monkeypatch.setattr(service.categories, "create_defaults", broken_defaults)

        with pytest.raises(IntegrityError):
            await service.onboard(
                SessionContext(user_id=new_user.id, email=new_user.email, role=Role.MEMBER),
                "Acme",
                None,
            )

        assert attempts == 1
        await db.refresh(new_user)
        assert new_user.organization_id is None
