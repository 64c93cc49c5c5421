"""System invite code service."""

from datetime import UTC, datetime
from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from costumetrack.core.errors import BadRequestError, NotFoundError
from costumetrack.modules.invites.models import SystemInviteCode
from costumetrack.modules.invites.repos import InviteCodeRepo
from costumetrack.modules.invites.schemas import InviteCodeCreate, InviteCodeUpdate


logger = structlog.get_logger()

INVALID_INVITE_MESSAGE = "Invalid or expired invite code"


def _as_utc(value: datetime) -> datetime:
    # Some drivers hand back naive timestamps; they are stored as UTC
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def is_redeemable(invite: SystemInviteCode, now: datetime | None = None) -> bool:
    """Check whether a code can be used right now."""
    now = now or datetime.now(UTC)
    if not invite.is_active:
        return False
    if invite.expires_at is not None and _as_utc(invite.expires_at) <= now:
        return False
    return invite.max_uses is None or invite.used_count < invite.max_uses


class InviteCodeService:
    """Issues, edits and redeems invite codes."""

    def __init__(self, repo: InviteCodeRepo) -> None:
        self.repo = repo

    async def list_codes(self) -> list[SystemInviteCode]:
        return await self.repo.list_all()

    async def get_code(self, code_id: UUID) -> SystemInviteCode:
        invite = await self.repo.get_by_id(code_id)
        if invite is None:
            raise NotFoundError(
                "Invite code not found",
                resource="invite_code",
                resource_id=str(code_id),
            )
        return invite

    async def create_code(self, data: InviteCodeCreate, created_by: str) -> SystemInviteCode:
        invite = await self.repo.create(
            SystemInviteCode(
                code=data.code,
                description=data.description,
                max_uses=data.max_uses,
                expires_at=data.expires_at,
                created_by=created_by,
            )
        )
        logger.info("invite_code_created", invite_code_id=str(invite.id))
        return invite

    async def update_code(self, code_id: UUID, data: InviteCodeUpdate) -> SystemInviteCode:
        invite = await self.get_code(code_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("is_active", True) is None:
            changes.pop("is_active")
        for field, value in changes.items():
            setattr(invite, field, value)
        return await self.repo.update(invite)

    async def delete_code(self, code_id: UUID) -> None:
        invite = await self.get_code(code_id)
        await self.repo.delete(invite)
        logger.info("invite_code_deleted", invite_code_id=str(code_id))

    async def redeem(self, code: str) -> SystemInviteCode:
        """Validate a code and count one use.

        Must run inside the caller's transaction so the use is undone if
        the surrounding operation fails.

        Raises:
            BadRequestError: If the code is unknown, inactive, expired or used up
        """
        invite = await self.repo.get_by_code(code) if code.strip() else None
        if invite is None or not is_redeemable(invite):
            raise BadRequestError(INVALID_INVITE_MESSAGE, error_code="invalid_invite_code")

        if await self.repo.increment_use(invite) == 0:
            raise BadRequestError(INVALID_INVITE_MESSAGE, error_code="invalid_invite_code")
        return invite


# Type alias for dependency injection
InviteCodeSvc = Annotated[InviteCodeService, Depends(InviteCodeService)]
