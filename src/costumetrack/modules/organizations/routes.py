"""Organization settings, public page and label format routes."""

from uuid import UUID

from fastapi import status

from costumetrack.core.auth.dependencies import OrgAdmin, OrgMember
from costumetrack.modules.organizations import router
from costumetrack.modules.organizations.schemas import (
    AgreementPayload,
    LabelFormatCreate,
    LabelFormatList,
    LabelFormatResponse,
    LabelFormatSelection,
    ProfileResponse,
    ProfileUpdate,
    PublicProfileResponse,
)
from costumetrack.modules.organizations.services import LabelFormatSvc, OrganizationSvc


# ============================================================
# Settings
# ============================================================


@router.get(
    "/settings/profile",
    response_model=ProfileResponse,
    summary="Get organization profile",
    description="Returns the organization profile. Owner or admin only.",
)
async def get_profile(org: OrgAdmin, service: OrganizationSvc) -> ProfileResponse:
    organization = await service.get_current(org)
    return ProfileResponse.model_validate(organization)


@router.put(
    "/settings/profile",
    response_model=ProfileResponse,
    summary="Update organization profile",
    description="Replaces the organization profile. Blank fields are cleared.",
)
async def update_profile(
    data: ProfileUpdate,
    org: OrgAdmin,
    service: OrganizationSvc,
) -> ProfileResponse:
    organization = await service.update_profile(org, data)
    return ProfileResponse.model_validate(organization)


@router.get(
    "/settings/agreement",
    response_model=AgreementPayload,
    summary="Get rental agreement",
)
async def get_agreement(org: OrgAdmin, service: OrganizationSvc) -> AgreementPayload:
    return AgreementPayload(text=await service.get_agreement(org))


@router.put(
    "/settings/agreement",
    response_model=AgreementPayload,
    summary="Update rental agreement",
    description="Stores the rental agreement text. Blank text clears it.",
)
async def update_agreement(
    data: AgreementPayload,
    org: OrgAdmin,
    service: OrganizationSvc,
) -> AgreementPayload:
    return AgreementPayload(text=await service.update_agreement(org, data))


# ============================================================
# Public page
# ============================================================


@router.get(
    "/public/{slug}",
    response_model=PublicProfileResponse,
    summary="Public organization page",
    description="Unauthenticated. Returns 404 unless the organization enabled its public page.",
)
async def get_public_page(slug: str, service: OrganizationSvc) -> PublicProfileResponse:
    organization = await service.get_public_page(slug)
    return PublicProfileResponse.model_validate(organization)


# ============================================================
# Label formats
# ============================================================


@router.get(
    "/label-formats",
    response_model=LabelFormatList,
    summary="List label formats",
    description="Presets plus the organization's custom formats, and the selected format.",
)
async def list_label_formats(org: OrgMember, service: LabelFormatSvc) -> LabelFormatList:
    return await service.list_formats(org)


@router.post(
    "/label-formats",
    response_model=LabelFormatResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create custom label format",
)
async def create_label_format(
    data: LabelFormatCreate,
    org: OrgAdmin,
    service: LabelFormatSvc,
) -> LabelFormatResponse:
    label_format = await service.create_format(org, data)
    return LabelFormatResponse.model_validate(label_format)


@router.patch(
    "/label-formats/selection",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Select label format",
    description="Selects the format used for printing tags. Null clears the selection.",
)
async def select_label_format(
    data: LabelFormatSelection,
    org: OrgAdmin,
    service: LabelFormatSvc,
) -> None:
    await service.select_format(org, data.format_id)


@router.delete(
    "/label-formats/{format_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete custom label format",
    description="Only the organization's own formats can be deleted; presets cannot.",
)
async def delete_label_format(
    format_id: UUID,
    org: OrgAdmin,
    service: LabelFormatSvc,
) -> None:
    await service.delete_format(org, format_id)
