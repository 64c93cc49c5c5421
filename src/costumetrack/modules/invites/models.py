"""System invite code model."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from costumetrack.core.constants import MAX_EMAIL_LENGTH, MAX_INVITE_CODE_LENGTH
from costumetrack.core.database.base import Base, TimestampMixin, UUIDMixin


class SystemInviteCode(Base, UUIDMixin, TimestampMixin):
    """A code that lets a registered user create an organization.

    Codes are global and managed by system administrators.

    Attributes:
        code: Unique, stored uppercase
        max_uses: Redemption limit; None means unlimited
        used_count: Successful redemptions so far
        expires_at: Moment after which the code stops working, if any
        created_by: E-mail of the administrator who issued the code
    """

    __tablename__ = "system_invite_codes"

    code: Mapped[str] = mapped_column(
        String(MAX_INVITE_CODE_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)
    max_uses: Mapped[int | None] = mapped_column(Integer, nullable=True)
    used_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_by: Mapped[str | None] = mapped_column(String(MAX_EMAIL_LENGTH), nullable=True)

    def __repr__(self) -> str:
        return f"<SystemInviteCode(code={self.code}, used_count={self.used_count})>"
