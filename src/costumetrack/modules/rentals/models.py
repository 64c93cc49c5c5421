"""Rental and rental line item models."""

from datetime import UTC, date, datetime
from decimal import Decimal
from enum import StrEnum
from uuid import UUID

from sqlalchemy import Date, DateTime, Enum, ForeignKey, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from costumetrack.core.database.base import (
    Base,
    OrganizationMixin,
    TimestampMixin,
    UUIDMixin,
)
from costumetrack.modules.customers.models import Customer
from costumetrack.modules.inventory.models import CostumeItem, ItemCondition
from costumetrack.modules.productions.models import Production


class RentalStatus(StrEnum):
    ACTIVE = "ACTIVE"
    RETURNED = "RETURNED"


class Rental(Base, UUIDMixin, TimestampMixin, OrganizationMixin):
    """A checkout of one or more costume items to a customer.

    A rental is created ACTIVE and moves to RETURNED exactly once.
    Customers and productions referenced by a rental cannot be deleted.

    Attributes:
        checkout_date: Day the items left the stock
        due_date: Day the items are expected back
        return_date: Moment the rental was returned, if it was
        created_by_id: User who checked the items out
        items: Line items, deleted with the rental
    """

    __tablename__ = "rentals"

    customer_id: Mapped[UUID] = mapped_column(
        ForeignKey("customers.id", ondelete="RESTRICT"),
        index=True,
        nullable=False,
    )
    production_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("productions.id", ondelete="RESTRICT"),
        index=True,
        nullable=True,
    )
    status: Mapped[RentalStatus] = mapped_column(
        Enum(RentalStatus, native_enum=False, length=20),
        default=RentalStatus.ACTIVE,
        nullable=False,
        index=True,
    )
    checkout_date: Mapped[date] = mapped_column(Date, nullable=False)
    due_date: Mapped[date] = mapped_column(Date, nullable=False)
    return_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    deposit_amount: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    customer: Mapped[Customer] = relationship(lazy="selectin")
    production: Mapped[Production | None] = relationship(lazy="selectin")
    items: Mapped[list["RentalItem"]] = relationship(
        back_populates="rental",
        cascade="all, delete-orphan",
        order_by="RentalItem.created_at",
        lazy="selectin",
    )

    @property
    def is_overdue(self) -> bool:
        return self.status == RentalStatus.ACTIVE and self.due_date < datetime.now(UTC).date()

    def __repr__(self) -> str:
        return f"<Rental(id={self.id}, status={self.status})>"


class RentalItem(Base, UUIDMixin, TimestampMixin):
    """One costume item on a rental, with its condition at checkout and return."""

    __tablename__ = "rental_items"

    rental_id: Mapped[UUID] = mapped_column(
        ForeignKey("rentals.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    costume_item_id: Mapped[UUID] = mapped_column(
        ForeignKey("costume_items.id", ondelete="RESTRICT"),
        index=True,
        nullable=False,
    )
    condition_out: Mapped[ItemCondition] = mapped_column(
        Enum(ItemCondition, native_enum=False, length=20),
        nullable=False,
    )
    condition_in: Mapped[ItemCondition | None] = mapped_column(
        Enum(ItemCondition, native_enum=False, length=20),
        nullable=True,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    rental: Mapped[Rental] = relationship(back_populates="items")
    costume_item: Mapped[CostumeItem] = relationship(lazy="selectin")

    def __repr__(self) -> str:
        return f"<RentalItem(rental_id={self.rental_id}, costume_item_id={self.costume_item_id})>"
