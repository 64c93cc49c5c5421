"""Organization settings, public page and label format services."""

from decimal import Decimal
from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from costumetrack.core.auth.schemas import OrgContext
from costumetrack.core.errors import NotFoundError
from costumetrack.modules.organizations.models import LabelFormat, Organization
from costumetrack.modules.organizations.repos import LabelFormatRepo, OrganizationRepo
from costumetrack.modules.organizations.schemas import (
    AgreementPayload,
    LabelFormatCreate,
    LabelFormatList,
    LabelFormatResponse,
    ProfileUpdate,
)


logger = structlog.get_logger()


# (name, width, height, description) of the built-in thermal label sizes
LABEL_FORMAT_PRESETS: tuple[tuple[str, str, str, str], ...] = (
    (
        "Direct Thermal Tag 2.25x1.37",
        "2.25",
        "1.37",
        "Standard loop tag with pre-punched hole - fits most tag guns",
    ),
    ("Direct Thermal Tag 2x1", "2", "1", "Compact loop tag for smaller items"),
    ("Thermal Label 4x2", "4", "2", "Large shipping-style label"),
    ("Thermal Label 3x2", "3", "2", "Medium label for shelf/bin marking"),
    ("Thermal Label 2x1", "2", "1", "Small adhesive label"),
    ("Jewelry Tag 2.2x0.5", "2.2", "0.5", "Narrow tag for accessories and small items"),
)


class OrganizationService:
    """Reads and edits the caller's organization."""

    def __init__(self, repo: OrganizationRepo) -> None:
        self.repo = repo

    async def get_current(self, org: OrgContext) -> Organization:
        """Get the caller's organization.

        Raises:
            NotFoundError: If the organization was removed underneath the session
        """
        organization = await self.repo.get_current(org)
        if organization is None:
            raise NotFoundError("Organization not found", resource="organization")
        return organization

    async def update_profile(self, org: OrgContext, data: ProfileUpdate) -> Organization:
        organization = await self.get_current(org)

        organization.name = data.name
        organization.description = data.description
        organization.contact_email = data.contact_email
        organization.contact_phone = data.contact_phone
        organization.address = data.address
        organization.website = str(data.website) if data.website else None
        organization.logo_url = str(data.logo_url) if data.logo_url else None
        organization.public_page_enabled = data.public_page_enabled

        organization = await self.repo.update(organization)
        logger.info("organization_profile_updated", organization_id=str(organization.id))
        return organization

    async def get_agreement(self, org: OrgContext) -> str | None:
        organization = await self.get_current(org)
        return organization.rental_agreement

    async def update_agreement(self, org: OrgContext, data: AgreementPayload) -> str | None:
        organization = await self.get_current(org)
        organization.rental_agreement = data.text
        organization = await self.repo.update(organization)
        return organization.rental_agreement

    async def get_public_page(self, slug: str) -> Organization:
        """Get an organization's public profile.

        Disabled pages are reported exactly like unknown slugs.

        Raises:
            NotFoundError: If the slug is unknown or the page is disabled
        """
        organization = await self.repo.get_by_slug(slug)
        if organization is None or not organization.public_page_enabled:
            raise NotFoundError("Organization not found", resource="organization")
        return organization


class LabelFormatService:
    """Label presets, custom formats and the organization's selection."""

    def __init__(self, repo: LabelFormatRepo, org_repo: OrganizationRepo) -> None:
        self.repo = repo
        self.org_repo = org_repo

    async def list_formats(self, org: OrgContext) -> LabelFormatList:
        formats = await self.repo.list_available(org)
        organization = await self.org_repo.get_current(org)
        return LabelFormatList(
            formats=[LabelFormatResponse.model_validate(f) for f in formats],
            selected_format_id=(
                organization.selected_label_format_id if organization else None
            ),
        )

    async def create_format(self, org: OrgContext, data: LabelFormatCreate) -> LabelFormat:
        label_format = LabelFormat(
            name=data.name,
            width_inches=Decimal(str(data.width_inches)),
            height_inches=Decimal(str(data.height_inches)),
            description=data.description,
            is_preset=False,
            organization_id=org.organization_id,
        )
        return await self.repo.create(label_format)

    async def select_format(self, org: OrgContext, format_id: UUID | None) -> None:
        """Select a preset or own format; None clears the selection.

        Raises:
            NotFoundError: If the format is neither a preset nor owned
        """
        if format_id is not None:
            label_format = await self.repo.get_available(org, format_id)
            if label_format is None:
                raise NotFoundError(
                    "Label format not found",
                    resource="label_format",
                    resource_id=str(format_id),
                )

        organization = await self.org_repo.get_current(org)
        if organization is None:
            raise NotFoundError("Organization not found", resource="organization")
        organization.selected_label_format_id = format_id
        await self.org_repo.update(organization)

    async def delete_format(self, org: OrgContext, format_id: UUID) -> None:
        """Delete one of the organization's custom formats.

        Raises:
            NotFoundError: If the id is a preset or not owned by the caller
        """
        label_format = await self.repo.get_custom(org, format_id)
        if label_format is None:
            raise NotFoundError(
                "Custom label format not found",
                resource="label_format",
                resource_id=str(format_id),
            )

        organization = await self.org_repo.get_current(org)
        if organization is not None and organization.selected_label_format_id == format_id:
            organization.selected_label_format_id = None
        await self.repo.delete(label_format)

    async def seed_presets(self) -> int:
        """Insert any missing presets. Returns the number created."""
        existing = {f.name for f in await self.repo.list_presets()}
        created = 0
        for name, width, height, description in LABEL_FORMAT_PRESETS:
            if name in existing:
                continue
            await self.repo.create(
                LabelFormat(
                    name=name,
                    width_inches=Decimal(width),
                    height_inches=Decimal(height),
                    description=description,
                    is_preset=True,
                )
            )
            created += 1
        return created


# Type aliases for dependency injection
OrganizationSvc = Annotated[OrganizationService, Depends(OrganizationService)]
LabelFormatSvc = Annotated[LabelFormatService, Depends(LabelFormatService)]
