"""Category, costume item and photo models."""

from decimal import Decimal
from enum import StrEnum
from uuid import UUID

from sqlalchemy import Enum, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from costumetrack.core.constants import (
    MAX_COLOR_LENGTH,
    MAX_NAME_LENGTH,
    MAX_SHORT_TEXT_LENGTH,
    MAX_SKU_LENGTH,
    MAX_URL_LENGTH,
)
from costumetrack.core.database.base import (
    Base,
    OrganizationMixin,
    TimestampMixin,
    UUIDMixin,
)


class ItemStatus(StrEnum):
    AVAILABLE = "AVAILABLE"
    RENTED = "RENTED"
    RESERVED = "RESERVED"
    MAINTENANCE = "MAINTENANCE"
    RETIRED = "RETIRED"


class ItemCondition(StrEnum):
    EXCELLENT = "EXCELLENT"
    GOOD = "GOOD"
    FAIR = "FAIR"
    POOR = "POOR"
    NEEDS_REPAIR = "NEEDS_REPAIR"


class PhotoType(StrEnum):
    MAIN = "MAIN"
    ALTERNATE = "ALTERNATE"
    FEATURE = "FEATURE"
    MATERIAL = "MATERIAL"
    INFO = "INFO"


class Category(Base, UUIDMixin, TimestampMixin, OrganizationMixin):
    """A grouping of costume items, unique by name within an organization."""

    __tablename__ = "categories"
    __table_args__ = (
        UniqueConstraint("organization_id", "name", name="uq_categories_organization_name"),
    )

    name: Mapped[str] = mapped_column(String(MAX_SHORT_TEXT_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    color: Mapped[str | None] = mapped_column(String(MAX_COLOR_LENGTH), nullable=True)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name})>"


class CostumeItem(Base, UUIDMixin, TimestampMixin, OrganizationMixin):
    """A physical costume piece in an organization's inventory.

    ``status`` is RENTED exactly while the item is attached to an active
    rental; the rental lifecycle is the only writer of that value.

    Attributes:
        sku: Optional stock keeping unit, unique within the organization
        condition: Current physical condition
        status: Availability state
        category_id: Optional category, cleared when the category is deleted
        photos: Ordered photos, deleted with the item
    """

    __tablename__ = "costume_items"
    __table_args__ = (
        UniqueConstraint("organization_id", "sku", name="uq_costume_items_organization_sku"),
    )

    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    sku: Mapped[str | None] = mapped_column(String(MAX_SKU_LENGTH), nullable=True)
    size: Mapped[str | None] = mapped_column(String(50), nullable=True)
    color: Mapped[str | None] = mapped_column(String(MAX_SHORT_TEXT_LENGTH), nullable=True)
    era: Mapped[str | None] = mapped_column(String(MAX_SHORT_TEXT_LENGTH), nullable=True)
    condition: Mapped[ItemCondition] = mapped_column(
        Enum(ItemCondition, native_enum=False, length=20),
        default=ItemCondition.GOOD,
        nullable=False,
    )
    status: Mapped[ItemStatus] = mapped_column(
        Enum(ItemStatus, native_enum=False, length=20),
        default=ItemStatus.AVAILABLE,
        nullable=False,
        index=True,
    )
    location: Mapped[str | None] = mapped_column(String(MAX_NAME_LENGTH), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    purchase_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    rental_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    category_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("categories.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
    )

    category: Mapped[Category | None] = relationship(lazy="selectin")
    photos: Mapped[list["CostumePhoto"]] = relationship(
        back_populates="costume_item",
        cascade="all, delete-orphan",
        order_by="CostumePhoto.sort_order",
        lazy="selectin",
    )

    @property
    def main_photo_url(self) -> str | None:
        for photo in self.photos:
            if photo.type == PhotoType.MAIN:
                return photo.url
        return None

    @property
    def item_code(self) -> str:
        """Printable code for tags: org prefix plus the tail of the item id."""
        return f"{str(self.organization_id)[:4].upper()}-{str(self.id)[-8:].upper()}"

    def __repr__(self) -> str:
        return f"<CostumeItem(id={self.id}, name={self.name}, status={self.status})>"


class CostumePhoto(Base, UUIDMixin, TimestampMixin):
    """A photo of a costume item; owned by the item and deleted with it."""

    __tablename__ = "costume_photos"

    costume_item_id: Mapped[UUID] = mapped_column(
        ForeignKey("costume_items.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    url: Mapped[str] = mapped_column(String(MAX_URL_LENGTH), nullable=False)
    key: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    type: Mapped[PhotoType] = mapped_column(
        Enum(PhotoType, native_enum=False, length=20),
        default=PhotoType.ALTERNATE,
        nullable=False,
    )
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    costume_item: Mapped[CostumeItem] = relationship(back_populates="photos")

    def __repr__(self) -> str:
        return f"<CostumePhoto(id={self.id}, type={self.type})>"
