"""System invite code repository."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError

from costumetrack.api.dependencies import DBSession
from costumetrack.core.errors import ConflictError
from costumetrack.modules.invites.models import SystemInviteCode


class InviteCodeRepository:
    """Global repository; invite codes belong to no organization."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def list_all(self) -> list[SystemInviteCode]:
        stmt = select(SystemInviteCode).order_by(SystemInviteCode.created_at.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(self, code_id: UUID) -> SystemInviteCode | None:
        return await self.session.get(SystemInviteCode, code_id)

    async def get_by_code(self, code: str) -> SystemInviteCode | None:
        stmt = select(SystemInviteCode).where(SystemInviteCode.code == code.strip().upper())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, invite: SystemInviteCode) -> SystemInviteCode:
        """Insert a code.

        Raises:
            ConflictError: If the code already exists
        """
        try:
            async with self.session.begin_nested():
                self.session.add(invite)
                await self.session.flush()
        except IntegrityError as e:
            raise ConflictError("This code already exists") from e
        await self.session.refresh(invite)
        return invite

    async def update(self, invite: SystemInviteCode) -> SystemInviteCode:
        await self.session.flush()
        await self.session.refresh(invite)
        return invite

    async def delete(self, invite: SystemInviteCode) -> None:
        await self.session.delete(invite)
        await self.session.flush()

    async def increment_use(self, invite: SystemInviteCode) -> int:
        """Count one redemption unless the code reached its limit meanwhile.

        Returns:
            1 if the redemption was counted, else 0
        """
        stmt = (
            update(SystemInviteCode)
            .where(
                SystemInviteCode.id == invite.id,
                SystemInviteCode.is_active.is_(True),
                or_(
                    SystemInviteCode.max_uses.is_(None),
                    SystemInviteCode.used_count < SystemInviteCode.max_uses,
                ),
            )
            .values(used_count=SystemInviteCode.used_count + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.refresh(invite)
        return result.rowcount


# Type alias for dependency injection
InviteCodeRepo = Annotated[InviteCodeRepository, Depends(InviteCodeRepository)]
