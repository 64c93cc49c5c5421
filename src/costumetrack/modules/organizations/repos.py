"""Organization and label format repositories."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import or_, select

from costumetrack.api.dependencies import DBSession
from costumetrack.core.auth.schemas import OrgContext
from costumetrack.modules.organizations.models import LabelFormat, Organization


class OrganizationRepository:
    """Repository for the tenant root.

    Organizations are resolved from the caller's context, never from an id
    supplied by the client. Slug lookups serve the public page and
    onboarding.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def get_current(self, org: OrgContext) -> Organization | None:
        """Load the caller's own organization."""
        return await self.session.get(Organization, org.organization_id)

    async def get_by_id(self, organization_id: UUID) -> Organization | None:
        return await self.session.get(Organization, organization_id)

    async def get_by_slug(self, slug: str) -> Organization | None:
        stmt = select(Organization).where(Organization.slug == slug)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def slug_exists(self, slug: str) -> bool:
        stmt = select(Organization.id).where(Organization.slug == slug)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def create(self, organization: Organization) -> Organization:
        """Insert an organization and flush so its id is available."""
        self.session.add(organization)
        await self.session.flush()
        return organization

    async def update(self, organization: Organization) -> Organization:
        await self.session.flush()
        await self.session.refresh(organization)
        return organization


class LabelFormatRepository:
    """Repository for presets and organization-owned label formats."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    def _visible_to(self, org: OrgContext):
        return or_(
            LabelFormat.is_preset.is_(True),
            LabelFormat.organization_id == org.organization_id,
        )

    async def list_available(self, org: OrgContext) -> list[LabelFormat]:
        """Presets first, then the organization's custom formats, by name."""
        stmt = (
            select(LabelFormat)
            .where(self._visible_to(org))
            .order_by(LabelFormat.is_preset.desc(), LabelFormat.name.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_available(self, org: OrgContext, format_id: UUID) -> LabelFormat | None:
        """Get a preset or one of the organization's own formats."""
        stmt = select(LabelFormat).where(
            LabelFormat.id == format_id,
            self._visible_to(org),
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_custom(self, org: OrgContext, format_id: UUID) -> LabelFormat | None:
        """Get a format the organization created itself."""
        stmt = select(LabelFormat).where(
            LabelFormat.id == format_id,
            LabelFormat.organization_id == org.organization_id,
            LabelFormat.is_preset.is_(False),
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_presets(self) -> list[LabelFormat]:
        stmt = select(LabelFormat).where(LabelFormat.is_preset.is_(True))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, label_format: LabelFormat) -> LabelFormat:
        self.session.add(label_format)
        await self.session.flush()
        await self.session.refresh(label_format)
        return label_format

    async def delete(self, label_format: LabelFormat) -> None:
        await self.session.delete(label_format)
        await self.session.flush()


# Type aliases for dependency injection
OrganizationRepo = Annotated[OrganizationRepository, Depends(OrganizationRepository)]
LabelFormatRepo = Annotated[LabelFormatRepository, Depends(LabelFormatRepository)]
