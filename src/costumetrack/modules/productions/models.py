"""Production, scene, character, sketch and costume assignment models.

Only ``Production`` carries the organization id. Scenes and characters
are owned through their production, sketches and assignments through
their character, and all of them are removed with their parent.
"""

from datetime import date
from uuid import UUID

from sqlalchemy import (
    Boolean,
    Date,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from costumetrack.core.constants import (
    MAX_COLOR_LENGTH,
    MAX_NAME_LENGTH,
    MAX_SHORT_TEXT_LENGTH,
    MAX_URL_LENGTH,
)
from costumetrack.core.database.base import (
    Base,
    OrganizationMixin,
    TimestampMixin,
    UUIDMixin,
)


# Actor measurement columns on a character, stored as free text ("34in", "M")
MEASUREMENT_FIELDS = (
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


class Production(Base, UUIDMixin, TimestampMixin, OrganizationMixin):
    """A show or event that costumes are planned and rented for."""

    __tablename__ = "productions"

    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    venue: Mapped[str | None] = mapped_column(String(MAX_NAME_LENGTH), nullable=True)
    director: Mapped[str | None] = mapped_column(String(MAX_NAME_LENGTH), nullable=True)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Production(id={self.id}, name={self.name})>"


class Scene(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "scenes"

    production_id: Mapped[UUID] = mapped_column(
        ForeignKey("productions.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    act: Mapped[int | None] = mapped_column(Integer, nullable=True)
    scene_number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    def __repr__(self) -> str:
        return f"<Scene(id={self.id}, name={self.name})>"


class Character(Base, UUIDMixin, TimestampMixin):
    """A role in a production, with the actor's measurements."""

    __tablename__ = "characters"

    production_id: Mapped[UUID] = mapped_column(
        ForeignKey("productions.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    actor_name: Mapped[str | None] = mapped_column(String(MAX_NAME_LENGTH), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    color: Mapped[str | None] = mapped_column(String(MAX_COLOR_LENGTH), nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Measurements
    height: Mapped[str | None] = mapped_column(String(MAX_SHORT_TEXT_LENGTH), nullable=True)
    weight: Mapped[str | None] = mapped_column(String(MAX_SHORT_TEXT_LENGTH), nullable=True)
    head: Mapped[str | None] = mapped_column(String(MAX_SHORT_TEXT_LENGTH), nullable=True)
    collar: Mapped[str | None] = mapped_column(String(MAX_SHORT_TEXT_LENGTH), nullable=True)
    chest: Mapped[str | None] = mapped_column(String(MAX_SHORT_TEXT_LENGTH), nullable=True)
    bust: Mapped[str | None] = mapped_column(String(MAX_SHORT_TEXT_LENGTH), nullable=True)
    under_bust: Mapped[str | None] = mapped_column(String(MAX_SHORT_TEXT_LENGTH), nullable=True)
    waist: Mapped[str | None] = mapped_column(String(MAX_SHORT_TEXT_LENGTH), nullable=True)
    hip: Mapped[str | None] = mapped_column(String(MAX_SHORT_TEXT_LENGTH), nullable=True)
    inseam: Mapped[str | None] = mapped_column(String(MAX_SHORT_TEXT_LENGTH), nullable=True)
    outseam: Mapped[str | None] = mapped_column(String(MAX_SHORT_TEXT_LENGTH), nullable=True)
    sleeve: Mapped[str | None] = mapped_column(String(MAX_SHORT_TEXT_LENGTH), nullable=True)
    shoe_size: Mapped[str | None] = mapped_column(String(MAX_SHORT_TEXT_LENGTH), nullable=True)

    def __repr__(self) -> str:
        return f"<Character(id={self.id}, name={self.name})>"


class CharacterSketch(Base, UUIDMixin, TimestampMixin):
    """A design sketch for a character; the image itself lives in blob storage."""

    __tablename__ = "character_sketches"

    character_id: Mapped[UUID] = mapped_column(
        ForeignKey("characters.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    scene_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("scenes.id", ondelete="SET NULL"),
        nullable=True,
    )
    url: Mapped[str] = mapped_column(String(MAX_URL_LENGTH), nullable=False)
    key: Mapped[str] = mapped_column(String(1024), nullable=False)
    name: Mapped[str | None] = mapped_column(String(MAX_NAME_LENGTH), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    def __repr__(self) -> str:
        return f"<CharacterSketch(id={self.id}, character_id={self.character_id})>"


class CostumeAssignment(Base, UUIDMixin, TimestampMixin):
    """One cell of the costume plot: what a character wears in a scene."""

    __tablename__ = "costume_assignments"
    __table_args__ = (
        UniqueConstraint("character_id", "scene_id", name="uq_costume_assignments_character_scene"),
    )

    character_id: Mapped[UUID] = mapped_column(
        ForeignKey("characters.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    scene_id: Mapped[UUID] = mapped_column(
        ForeignKey("scenes.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    costume_item_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("costume_items.id", ondelete="SET NULL"),
        nullable=True,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_quick_change: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    change_time_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<CostumeAssignment(character_id={self.character_id}, "
            f"scene_id={self.scene_id})>"
        )
