"""Organization (tenant root) and label format models."""

from decimal import Decimal
from enum import StrEnum
from uuid import UUID

from sqlalchemy import Boolean, Enum, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from costumetrack.core.constants import MAX_NAME_LENGTH, MAX_URL_LENGTH
from costumetrack.core.database.base import Base, TimestampMixin, UUIDMixin


class PlanTier(StrEnum):
    CORE = "CORE"
    PRO = "PRO"
    TEAM = "TEAM"


class StorageSize(StrEnum):
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"


class BillingCycle(StrEnum):
    MONTHLY = "MONTHLY"
    ANNUAL = "ANNUAL"


class Organization(Base, UUIDMixin, TimestampMixin):
    """The tenant root; every business record belongs to exactly one.

    Attributes:
        name: Display name
        slug: Unique URL slug derived from the name at onboarding
        public_page_enabled: Whether ``/public/{slug}`` shows the profile
        rental_agreement: Agreement text printed on rental paperwork
        stripe_customer_id: Billing-customer reference at the payment provider
        selected_label_format_id: Label format used when printing tags
    """

    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    slug: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        index=True,
    )

    # Public profile
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    contact_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    website: Mapped[str | None] = mapped_column(String(MAX_URL_LENGTH), nullable=True)
    logo_url: Mapped[str | None] = mapped_column(String(MAX_URL_LENGTH), nullable=True)
    public_page_enabled: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    rental_agreement: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Billing
    stripe_customer_id: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        unique=True,
    )
    stripe_subscription_id: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    plan_tier: Mapped[PlanTier] = mapped_column(
        Enum(PlanTier, native_enum=False, length=20),
        default=PlanTier.CORE,
        nullable=False,
    )
    storage_size: Mapped[StorageSize] = mapped_column(
        Enum(StorageSize, native_enum=False, length=20),
        default=StorageSize.SMALL,
        nullable=False,
    )
    billing_cycle: Mapped[BillingCycle] = mapped_column(
        Enum(BillingCycle, native_enum=False, length=20),
        default=BillingCycle.MONTHLY,
        nullable=False,
    )
    max_items: Mapped[int] = mapped_column(Integer, default=500, nullable=False)
    # None means unlimited
    max_users: Mapped[int | None] = mapped_column(Integer, default=1, nullable=True)

    # Labels
    selected_label_format_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("label_formats.id", ondelete="SET NULL", use_alter=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Organization(id={self.id}, slug={self.slug})>"


class LabelFormat(Base, UUIDMixin, TimestampMixin):
    """Physical label dimensions for printing costume tags.

    Presets have no organization and are seeded at deploy time; custom
    formats belong to one organization.
    """

    __tablename__ = "label_formats"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    width_inches: Mapped[Decimal] = mapped_column(Numeric(6, 3), nullable=False)
    height_inches: Mapped[Decimal] = mapped_column(Numeric(6, 3), nullable=False)
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_preset: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    organization_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"),
        index=True,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<LabelFormat(id={self.id}, name={self.name})>"
