"""Pydantic schemas for rentals and the customer portal."""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from costumetrack.modules.inventory.models import ItemCondition, ItemStatus
from costumetrack.modules.rentals.models import RentalStatus


# ============================================================
# Requests
# ============================================================


class RentalItemInput(BaseModel):
    costume_item_id: UUID
    condition_out: ItemCondition
    notes: str | None = None


class RentalCreate(BaseModel):
    """Check out costume items to a customer.

    ``checkout_date`` defaults to today. Items may not repeat.
    """

    customer_id: UUID
    production_id: UUID | None = None
    checkout_date: date | None = None
    due_date: date
    deposit_amount: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    notes: str | None = None
    items: list[RentalItemInput] = Field(..., min_length=1)

    @field_validator("items")
    @classmethod
    def no_duplicate_items(cls, v: list[RentalItemInput]) -> list[RentalItemInput]:
        ids = [item.costume_item_id for item in v]
        if len(ids) != len(set(ids)):
            raise ValueError("Each costume item can only be added once")
        return v


# ============================================================
# Responses
# ============================================================


class RentalCustomer(BaseModel):
    id: UUID
    name: str
    email: str | None = None
    phone: str | None = None

    model_config = ConfigDict(from_attributes=True)


class RentalProduction(BaseModel):
    id: UUID
    name: str

    model_config = ConfigDict(from_attributes=True)


class RentalCostume(BaseModel):
    id: UUID
    name: str
    sku: str | None = None
    item_code: str
    status: ItemStatus
    main_photo_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class RentalItemResponse(BaseModel):
    id: UUID
    costume_item_id: UUID
    costume_item: RentalCostume
    condition_out: ItemCondition
    condition_in: ItemCondition | None = None
    notes: str | None = None

    model_config = ConfigDict(from_attributes=True)


class RentalResponse(BaseModel):
    id: UUID
    status: RentalStatus
    customer: RentalCustomer
    production: RentalProduction | None = None
    checkout_date: date
    due_date: date
    return_date: datetime | None = None
    deposit_amount: Decimal | None = None
    notes: str | None = None
    is_overdue: bool
    items: list[RentalItemResponse]
    created_by_id: UUID | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ============================================================
# Customer portal
# ============================================================


class PortalCostume(BaseModel):
    name: str
    sku: str | None = None
    main_photo_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class PortalRental(BaseModel):
    id: UUID
    status: RentalStatus
    production: RentalProduction | None = None
    checkout_date: date
    due_date: date
    return_date: datetime | None = None
    is_overdue: bool
    items: list[PortalCostume]


class PortalResponse(BaseModel):
    """What a customer sees through their portal link."""

    organization_name: str
    customer_name: str
    rentals: list[PortalRental]
