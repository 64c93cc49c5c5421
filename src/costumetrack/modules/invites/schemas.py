"""Pydantic schemas for system invite codes."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from costumetrack.core.constants import MAX_INVITE_CODE_LENGTH, MIN_INVITE_CODE_LENGTH


class InviteCodeCreate(BaseModel):
    code: str = Field(..., min_length=MIN_INVITE_CODE_LENGTH, max_length=MAX_INVITE_CODE_LENGTH)
    description: str | None = Field(None, max_length=255)
    max_uses: int | None = Field(None, gt=0)
    expires_at: datetime | None = None

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        v = v.strip().upper()
        if len(v) < MIN_INVITE_CODE_LENGTH:
            raise ValueError(f"Code must be at least {MIN_INVITE_CODE_LENGTH} characters")
        return v


class InviteCodeUpdate(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    description: str | None = Field(None, max_length=255)
    max_uses: int | None = Field(None, gt=0)
    expires_at: datetime | None = None
    is_active: bool | None = None


class InviteCodeResponse(BaseModel):
    id: UUID
    code: str
    description: str | None = None
    max_uses: int | None = None
    used_count: int
    expires_at: datetime | None = None
    is_active: bool
    created_by: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
