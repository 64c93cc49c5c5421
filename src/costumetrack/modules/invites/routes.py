"""System administrator routes for invite codes."""

from uuid import UUID

from fastapi import status

from costumetrack.core.auth.dependencies import SystemAdmin
from costumetrack.modules.invites import router
from costumetrack.modules.invites.schemas import (
    InviteCodeCreate,
    InviteCodeResponse,
    InviteCodeUpdate,
)
from costumetrack.modules.invites.services import InviteCodeSvc


@router.get(
    "",
    response_model=list[InviteCodeResponse],
    summary="List invite codes",
    description="All invite codes, newest first. System administrators only.",
)
async def list_invite_codes(
    _admin: SystemAdmin,
    service: InviteCodeSvc,
) -> list[InviteCodeResponse]:
    codes = await service.list_codes()
    return [InviteCodeResponse.model_validate(c) for c in codes]


@router.post(
    "",
    response_model=InviteCodeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create invite code",
    description="Codes are stored uppercase and must be unique.",
)
async def create_invite_code(
    data: InviteCodeCreate,
    admin: SystemAdmin,
    service: InviteCodeSvc,
) -> InviteCodeResponse:
    invite = await service.create_code(data, created_by=admin.email)
    return InviteCodeResponse.model_validate(invite)


@router.patch(
    "/{code_id}",
    response_model=InviteCodeResponse,
    summary="Update invite code",
)
async def update_invite_code(
    code_id: UUID,
    data: InviteCodeUpdate,
    _admin: SystemAdmin,
    service: InviteCodeSvc,
) -> InviteCodeResponse:
    invite = await service.update_code(code_id, data)
    return InviteCodeResponse.model_validate(invite)


@router.delete(
    "/{code_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete invite code",
)
async def delete_invite_code(
    code_id: UUID,
    _admin: SystemAdmin,
    service: InviteCodeSvc,
) -> None:
    await service.delete_code(code_id)
