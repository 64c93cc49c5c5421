"""Pydantic schemas for customers and their portal links."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from costumetrack.core.constants import MAX_NAME_LENGTH
from costumetrack.core.utils import blank_to_none


class _CustomerFields(BaseModel):
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    company: str | None = Field(None, max_length=MAX_NAME_LENGTH)
    address: str | None = None
    notes: str | None = None

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_null(cls, v: object) -> object:
        return blank_to_none(v) if isinstance(v, str) else v


class CustomerCreate(_CustomerFields):
    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)


class CustomerUpdate(_CustomerFields):
    """Partial customer update; omitted fields are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)


class CustomerResponse(BaseModel):
    id: UUID
    name: str
    email: str | None = None
    phone: str | None = None
    company: str | None = None
    address: str | None = None
    notes: str | None = None
    portal_enabled: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PortalUpdate(BaseModel):
    """Enable or disable a customer's portal and optionally rotate its token."""

    enabled: bool | None = None
    regenerate_token: bool = False


class PortalSettings(BaseModel):
    portal_enabled: bool
    portal_token: str | None = None

    model_config = ConfigDict(from_attributes=True)
