"""Pydantic schemas for organization settings, public pages and labels."""

from uuid import UUID

from pydantic import (
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
)

from costumetrack.core.constants import (
    MAX_LABEL_DIMENSION,
    MAX_NAME_LENGTH,
    MAX_ORGANIZATION_NAME_LENGTH,
    MIN_ORGANIZATION_NAME_LENGTH,
)
from costumetrack.core.utils import blank_to_none


# ============================================================
# Profile
# ============================================================


class OrganizationSummary(BaseModel):
    id: UUID
    name: str
    slug: str

    model_config = ConfigDict(from_attributes=True)


class PublicProfileResponse(BaseModel):
    """Fields shown on an organization's public page."""

    name: str
    slug: str
    description: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    address: str | None = None
    website: str | None = None
    logo_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ProfileResponse(PublicProfileResponse):
    """The full organization profile as seen by its admins."""

    id: UUID
    public_page_enabled: bool


class ProfileUpdate(BaseModel):
    """Replace the organization profile.

    Blank optional strings are stored as null.
    """

    name: str = Field(..., max_length=MAX_NAME_LENGTH)
    description: str | None = None
    contact_email: EmailStr | None = None
    contact_phone: str | None = Field(None, max_length=50)
    address: str | None = None
    website: AnyHttpUrl | None = None
    logo_url: AnyHttpUrl | None = None
    public_page_enabled: bool = False

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator(
        "description",
        "contact_email",
        "contact_phone",
        "address",
        "website",
        "logo_url",
        mode="before",
    )
    @classmethod
    def blank_is_null(cls, v: object) -> object:
        return blank_to_none(v) if isinstance(v, str) else v


# ============================================================
# Rental agreement
# ============================================================


class AgreementPayload(BaseModel):
    """Rental agreement text; blank text clears it."""

    text: str | None = None

    @field_validator("text", mode="before")
    @classmethod
    def blank_is_null(cls, v: object) -> object:
        return blank_to_none(v) if isinstance(v, str) else v


# ============================================================
# Label formats
# ============================================================


class LabelFormatCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    width_inches: float = Field(..., gt=0, le=MAX_LABEL_DIMENSION)
    height_inches: float = Field(..., gt=0, le=MAX_LABEL_DIMENSION)
    description: str | None = Field(None, max_length=255)


class LabelFormatResponse(BaseModel):
    id: UUID
    name: str
    width_inches: float
    height_inches: float
    description: str | None = None
    is_preset: bool

    model_config = ConfigDict(from_attributes=True)


class LabelFormatList(BaseModel):
    """Presets first, then the organization's own formats, by name."""

    formats: list[LabelFormatResponse]
    selected_format_id: UUID | None = None


class LabelFormatSelection(BaseModel):
    """Select a label format; null clears the selection."""

    format_id: UUID | None


# ============================================================
# Onboarding
# ============================================================


class OnboardingRequest(BaseModel):
    """Create the caller's organization."""

    organization_name: str = Field(
        ...,
        min_length=MIN_ORGANIZATION_NAME_LENGTH,
        max_length=MAX_ORGANIZATION_NAME_LENGTH,
    )
    invite_code: str | None = None

    @field_validator("organization_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < MIN_ORGANIZATION_NAME_LENGTH:
            raise ValueError(
                f"Organization name must be at least {MIN_ORGANIZATION_NAME_LENGTH} characters"
            )
        return v


class OnboardingResponse(BaseModel):
    organization: OrganizationSummary
