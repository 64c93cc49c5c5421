"""Pydantic schemas for categories and costume inventory."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from costumetrack.core.constants import (
    MAX_COLOR_LENGTH,
    MAX_NAME_LENGTH,
    MAX_SHORT_TEXT_LENGTH,
    MAX_SKU_LENGTH,
    MAX_URL_LENGTH,
)
from costumetrack.core.utils import blank_to_none
from costumetrack.modules.inventory.models import ItemCondition, ItemStatus, PhotoType


# ============================================================
# Categories
# ============================================================


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=MAX_SHORT_TEXT_LENGTH)
    description: str | None = None
    color: str | None = Field(None, max_length=MAX_COLOR_LENGTH)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v


class CategoryUpdate(BaseModel):
    """Partial category update; omitted fields are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=MAX_SHORT_TEXT_LENGTH)
    description: str | None = None
    color: str | None = Field(None, max_length=MAX_COLOR_LENGTH)


class CategoryResponse(BaseModel):
    id: UUID
    name: str
    description: str | None = None
    color: str | None = None

    model_config = ConfigDict(from_attributes=True)


class CategorySummary(BaseModel):
    id: UUID
    name: str
    color: str | None = None

    model_config = ConfigDict(from_attributes=True)


# ============================================================
# Photos
# ============================================================


class PhotoInput(BaseModel):
    """A photo reference, usually the result of ``POST /upload``."""

    url: str = Field(..., min_length=1, max_length=MAX_URL_LENGTH)
    key: str | None = None
    type: PhotoType = PhotoType.ALTERNATE


class PhotoResponse(BaseModel):
    id: UUID
    url: str
    key: str | None = None
    type: PhotoType
    sort_order: int

    model_config = ConfigDict(from_attributes=True)


# ============================================================
# Costume items
# ============================================================


class _ItemFields(BaseModel):
    description: str | None = None
    sku: str | None = Field(None, max_length=MAX_SKU_LENGTH)
    size: str | None = Field(None, max_length=50)
    color: str | None = Field(None, max_length=MAX_SHORT_TEXT_LENGTH)
    era: str | None = Field(None, max_length=MAX_SHORT_TEXT_LENGTH)
    location: str | None = Field(None, max_length=MAX_NAME_LENGTH)
    notes: str | None = None
    purchase_price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    rental_price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    category_id: UUID | None = None

    @field_validator("sku", mode="before")
    @classmethod
    def blank_sku_is_null(cls, v: object) -> object:
        return blank_to_none(v) if isinstance(v, str) else v


class CostumeItemCreate(_ItemFields):
    """Create a costume item.

    ``photos`` is stored in the given order; only the first MAIN photo
    keeps that type.
    """

    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    condition: ItemCondition = ItemCondition.GOOD
    status: ItemStatus = ItemStatus.AVAILABLE
    photos: list[PhotoInput] = Field(default_factory=list)


class CostumeItemUpdate(_ItemFields):
    """Partial item update; omitted fields are left unchanged.

    A supplied ``photos`` list replaces every existing photo.
    """

    name: str | None = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    condition: ItemCondition | None = None
    status: ItemStatus | None = None
    photos: list[PhotoInput] | None = None


class CostumeItemResponse(BaseModel):
    id: UUID
    item_code: str
    name: str
    description: str | None = None
    sku: str | None = None
    size: str | None = None
    color: str | None = None
    era: str | None = None
    condition: ItemCondition
    status: ItemStatus
    location: str | None = None
    notes: str | None = None
    purchase_price: Decimal | None = None
    rental_price: Decimal | None = None
    category_id: UUID | None = None
    category: CategorySummary | None = None
    photos: list[PhotoResponse] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ItemLookupResponse(BaseModel):
    """Compact item view for scanner lookups by SKU."""

    id: UUID
    name: str
    sku: str | None = None
    status: ItemStatus
    location: str | None = None
    category_name: str | None = None
    main_photo_url: str | None = None
