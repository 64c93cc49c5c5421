"""initial_schema

Revision ID: 3f1c2a9d7e01
Revises:
Create Date: 2026-01-05 00:01:00.000000

Creates the tenant root, users, invite codes, label formats, inventory,
customers, productions and rentals.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7e01"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_and_timestamps() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def _organization_fk() -> sa.Column:
    return sa.Column(
        "organization_id",
        sa.Uuid(),
        sa.ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    )


def _index(table: str, *columns: str, unique: bool = False) -> None:
    op.create_index(f"ix_{table}_{'_'.join(columns)}", table, list(columns), unique=unique)


def upgrade() -> None:
    """Upgrade database schema."""
    # Tenant root; the selected label format FK is added after label_formats
    op.create_table(
        "organizations",
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("contact_email", sa.String(length=255), nullable=True),
        sa.Column("contact_phone", sa.String(length=50), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("website", sa.String(length=2048), nullable=True),
        sa.Column("logo_url", sa.String(length=2048), nullable=True),
        sa.Column("public_page_enabled", sa.Boolean(), nullable=False),
        sa.Column("rental_agreement", sa.Text(), nullable=True),
        sa.Column("stripe_customer_id", sa.String(length=255), nullable=True),
        sa.Column("stripe_subscription_id", sa.String(length=255), nullable=True),
        sa.Column("plan_tier", sa.String(length=20), nullable=False),
        sa.Column("storage_size", sa.String(length=20), nullable=False),
        sa.Column("billing_cycle", sa.String(length=20), nullable=False),
        sa.Column("max_items", sa.Integer(), nullable=False),
        sa.Column("max_users", sa.Integer(), nullable=True),
        sa.Column("selected_label_format_id", sa.Uuid(), nullable=True),
        *_id_and_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("stripe_customer_id"),
    )
    _index("organizations", "id")
    _index("organizations", "slug", unique=True)

    op.create_table(
        "label_formats",
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("width_inches", sa.Numeric(6, 3), nullable=False),
        sa.Column("height_inches", sa.Numeric(6, 3), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=True),
        sa.Column("is_preset", sa.Boolean(), nullable=False),
        sa.Column(
            "organization_id",
            sa.Uuid(),
            sa.ForeignKey("organizations.id", ondelete="CASCADE"),
            nullable=True,
        ),
        *_id_and_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    _index("label_formats", "id")
    _index("label_formats", "organization_id")

    op.create_foreign_key(
        "organizations_selected_label_format_id_fkey",
        "organizations",
        "label_formats",
        ["selected_label_format_id"],
        ["id"],
        ondelete="SET NULL",
    )

    op.create_table(
        "users",
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column(
            "organization_id",
            sa.Uuid(),
            sa.ForeignKey("organizations.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_id_and_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    _index("users", "id")
    _index("users", "email", unique=True)
    _index("users", "organization_id")

    op.create_table(
        "system_invite_codes",
        sa.Column("code", sa.String(length=32), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=True),
        sa.Column("max_uses", sa.Integer(), nullable=True),
        sa.Column("used_count", sa.Integer(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_by", sa.String(length=255), nullable=True),
        *_id_and_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    _index("system_invite_codes", "id")
    _index("system_invite_codes", "code", unique=True)

    # Inventory
    op.create_table(
        "categories",
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("color", sa.String(length=32), nullable=True),
        _organization_fk(),
        *_id_and_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "organization_id", "name", name="uq_categories_organization_name"
        ),
    )
    _index("categories", "id")
    _index("categories", "organization_id")

    op.create_table(
        "costume_items",
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("sku", sa.String(length=64), nullable=True),
        sa.Column("size", sa.String(length=50), nullable=True),
        sa.Column("color", sa.String(length=100), nullable=True),
        sa.Column("era", sa.String(length=100), nullable=True),
        sa.Column("condition", sa.String(length=20), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("purchase_price", sa.Numeric(10, 2), nullable=True),
        sa.Column("rental_price", sa.Numeric(10, 2), nullable=True),
        sa.Column(
            "category_id",
            sa.Uuid(),
            sa.ForeignKey("categories.id", ondelete="SET NULL"),
            nullable=True,
        ),
        _organization_fk(),
        *_id_and_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "organization_id", "sku", name="uq_costume_items_organization_sku"
        ),
    )
    _index("costume_items", "id")
    _index("costume_items", "organization_id")
    _index("costume_items", "status")
    _index("costume_items", "category_id")

    op.create_table(
        "costume_photos",
        sa.Column(
            "costume_item_id",
            sa.Uuid(),
            sa.ForeignKey("costume_items.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("url", sa.String(length=2048), nullable=False),
        sa.Column("key", sa.String(length=1024), nullable=True),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        *_id_and_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    _index("costume_photos", "id")
    _index("costume_photos", "costume_item_id")

    # Customers
    op.create_table(
        "customers",
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("company", sa.String(length=255), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("portal_enabled", sa.Boolean(), nullable=False),
        sa.Column("portal_token", sa.String(length=64), nullable=True),
        _organization_fk(),
        *_id_and_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    _index("customers", "id")
    _index("customers", "organization_id")
    _index("customers", "portal_token", unique=True)

    # Productions
    op.create_table(
        "productions",
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("venue", sa.String(length=255), nullable=True),
        sa.Column("director", sa.String(length=255), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        _organization_fk(),
        *_id_and_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    _index("productions", "id")
    _index("productions", "organization_id")

    op.create_table(
        "scenes",
        sa.Column(
            "production_id",
            sa.Uuid(),
            sa.ForeignKey("productions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("act", sa.Integer(), nullable=True),
        sa.Column("scene_number", sa.Integer(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        *_id_and_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    _index("scenes", "id")
    _index("scenes", "production_id")

    measurement_columns = [
        sa.Column(name, sa.String(length=100), nullable=True)
        for name in (
            "height",
            "weight",
            "head",
            "collar",
            "chest",
            "bust",
            "under_bust",
            "waist",
            "hip",
            "inseam",
            "outseam",
            "sleeve",
            "shoe_size",
        )
    ]
    op.create_table(
        "characters",
        sa.Column(
            "production_id",
            sa.Uuid(),
            sa.ForeignKey("productions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("actor_name", sa.String(length=255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("color", sa.String(length=32), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        *measurement_columns,
        *_id_and_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    _index("characters", "id")
    _index("characters", "production_id")

    op.create_table(
        "character_sketches",
        sa.Column(
            "character_id",
            sa.Uuid(),
            sa.ForeignKey("characters.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "scene_id",
            sa.Uuid(),
            sa.ForeignKey("scenes.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("url", sa.String(length=2048), nullable=False),
        sa.Column("key", sa.String(length=1024), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        *_id_and_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    _index("character_sketches", "id")
    _index("character_sketches", "character_id")

    op.create_table(
        "costume_assignments",
        sa.Column(
            "character_id",
            sa.Uuid(),
            sa.ForeignKey("characters.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "scene_id",
            sa.Uuid(),
            sa.ForeignKey("scenes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "costume_item_id",
            sa.Uuid(),
            sa.ForeignKey("costume_items.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("is_quick_change", sa.Boolean(), nullable=False),
        sa.Column("change_time_seconds", sa.Integer(), nullable=True),
        *_id_and_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "character_id", "scene_id", name="uq_costume_assignments_character_scene"
        ),
    )
    _index("costume_assignments", "id")
    _index("costume_assignments", "character_id")
    _index("costume_assignments", "scene_id")

    # Rentals
    op.create_table(
        "rentals",
        sa.Column(
            "customer_id",
            sa.Uuid(),
            sa.ForeignKey("customers.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column(
            "production_id",
            sa.Uuid(),
            sa.ForeignKey("productions.id", ondelete="RESTRICT"),
            nullable=True,
        ),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("checkout_date", sa.Date(), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=False),
        sa.Column("return_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("deposit_amount", sa.Numeric(10, 2), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "created_by_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        _organization_fk(),
        *_id_and_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    _index("rentals", "id")
    _index("rentals", "organization_id")
    _index("rentals", "customer_id")
    _index("rentals", "production_id")
    _index("rentals", "status")

    op.create_table(
        "rental_items",
        sa.Column(
            "rental_id",
            sa.Uuid(),
            sa.ForeignKey("rentals.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "costume_item_id",
            sa.Uuid(),
            sa.ForeignKey("costume_items.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("condition_out", sa.String(length=20), nullable=False),
        sa.Column("condition_in", sa.String(length=20), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_id_and_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    _index("rental_items", "id")
    _index("rental_items", "rental_id")
    _index("rental_items", "costume_item_id")


def downgrade() -> None:
    """Downgrade database schema."""
    for table in (
        "rental_items",
        "rentals",
        "costume_assignments",
        "character_sketches",
        "characters",
        "scenes",
        "productions",
        "customers",
        "costume_photos",
        "costume_items",
        "categories",
        "system_invite_codes",
        "users",
    ):
        op.drop_table(table)

    op.drop_constraint(
        "organizations_selected_label_format_id_fkey",
        "organizations",
        type_="foreignkey",
    )
    op.drop_table("label_formats")
    op.drop_table("organizations")
