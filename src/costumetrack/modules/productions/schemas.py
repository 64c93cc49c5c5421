"""Pydantic schemas for productions and their costume plot."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from costumetrack.core.constants import (
    MAX_COLOR_LENGTH,
    MAX_NAME_LENGTH,
    MAX_SHORT_TEXT_LENGTH,
    MAX_URL_LENGTH,
)


# ============================================================
# Productions
# ============================================================


class _ProductionFields(BaseModel):
    venue: str | None = Field(None, max_length=MAX_NAME_LENGTH)
    director: str | None = Field(None, max_length=MAX_NAME_LENGTH)
    start_date: date | None = None
    end_date: date | None = None
    notes: str | None = None


class ProductionCreate(_ProductionFields):
    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)

    @model_validator(mode="after")
    def end_after_start(self) -> "ProductionCreate":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("End date cannot be before the start date")
        return self


class ProductionUpdate(_ProductionFields):
    """Partial production update; omitted fields are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)


class ProductionResponse(BaseModel):
    id: UUID
    name: str
    venue: str | None = None
    director: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    notes: str | None = None

    model_config = ConfigDict(from_attributes=True)


# ============================================================
# Scenes
# ============================================================


class SceneCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    act: int | None = None
    scene_number: int | None = None
    description: str | None = None
    sort_order: int | None = None


class SceneUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    act: int | None = None
    scene_number: int | None = None
    description: str | None = None
    sort_order: int | None = None


class SceneResponse(BaseModel):
    id: UUID
    production_id: UUID
    name: str
    act: int | None = None
    scene_number: int | None = None
    description: str | None = None
    sort_order: int

    model_config = ConfigDict(from_attributes=True)


# ============================================================
# Characters
# ============================================================


class Measurements(BaseModel):
    height: str | None = Field(None, max_length=MAX_SHORT_TEXT_LENGTH)
    weight: str | None = Field(None, max_length=MAX_SHORT_TEXT_LENGTH)
    head: str | None = Field(None, max_length=MAX_SHORT_TEXT_LENGTH)
    collar: str | None = Field(None, max_length=MAX_SHORT_TEXT_LENGTH)
    chest: str | None = Field(None, max_length=MAX_SHORT_TEXT_LENGTH)
    bust: str | None = Field(None, max_length=MAX_SHORT_TEXT_LENGTH)
    under_bust: str | None = Field(None, max_length=MAX_SHORT_TEXT_LENGTH)
    waist: str | None = Field(None, max_length=MAX_SHORT_TEXT_LENGTH)
    hip: str | None = Field(None, max_length=MAX_SHORT_TEXT_LENGTH)
    inseam: str | None = Field(None, max_length=MAX_SHORT_TEXT_LENGTH)
    outseam: str | None = Field(None, max_length=MAX_SHORT_TEXT_LENGTH)
    sleeve: str | None = Field(None, max_length=MAX_SHORT_TEXT_LENGTH)
    shoe_size: str | None = Field(None, max_length=MAX_SHORT_TEXT_LENGTH)


class CharacterCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    actor_name: str | None = Field(None, max_length=MAX_NAME_LENGTH)
    description: str | None = None
    color: str | None = Field(None, max_length=MAX_COLOR_LENGTH)
    sort_order: int | None = None


class CharacterUpdate(Measurements):
    """Partial character update, including actor measurements."""

    name: str | None = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    actor_name: str | None = Field(None, max_length=MAX_NAME_LENGTH)
    description: str | None = None
    color: str | None = Field(None, max_length=MAX_COLOR_LENGTH)
    sort_order: int | None = None


class CharacterResponse(Measurements):
    id: UUID
    production_id: UUID
    name: str
    actor_name: str | None = None
    description: str | None = None
    color: str | None = None
    sort_order: int

    model_config = ConfigDict(from_attributes=True)


# ============================================================
# Sketches
# ============================================================


class SketchCreate(BaseModel):
    url: str = Field(..., min_length=1, max_length=MAX_URL_LENGTH)
    key: str = Field(..., min_length=1, max_length=1024)
    name: str | None = Field(None, max_length=MAX_NAME_LENGTH)
    description: str | None = None
    scene_id: UUID | None = None


class SketchResponse(BaseModel):
    id: UUID
    character_id: UUID
    scene_id: UUID | None = None
    url: str
    key: str
    name: str | None = None
    description: str | None = None
    sort_order: int

    model_config = ConfigDict(from_attributes=True)


# ============================================================
# Assignments and costume plot
# ============================================================


class AssignmentUpsert(BaseModel):
    """Set what a character wears in a scene."""

    character_id: UUID
    scene_id: UUID
    costume_item_id: UUID | None = None
    notes: str | None = None
    is_quick_change: bool = False
    change_time_seconds: int | None = Field(None, ge=0)


class AssignmentResponse(BaseModel):
    id: UUID
    character_id: UUID
    scene_id: UUID
    costume_item_id: UUID | None = None
    notes: str | None = None
    is_quick_change: bool
    change_time_seconds: int | None = None

    model_config = ConfigDict(from_attributes=True)


class AssignedCostume(BaseModel):
    id: UUID
    name: str
    sku: str | None = None
    main_photo_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class AssignmentDetail(AssignmentResponse):
    """An assignment with a summary of the costume worn."""

    costume_item: AssignedCostume | None = None


class QuickChange(BaseModel):
    """A costume switch between two consecutive scenes for one character."""

    character_id: UUID
    from_scene_id: UUID
    to_scene_id: UUID
    from_costume_item_id: UUID
    to_costume_item_id: UUID


class CostumePlotStats(BaseModel):
    total_scenes: int
    total_characters: int
    total_assignments: int
    assignments_with_costumes: int
    quick_change_count: int


class CostumePlotResponse(BaseModel):
    production: ProductionResponse
    scenes: list[SceneResponse]
    characters: list[CharacterResponse]
    assignments: list[AssignmentResponse]
    quick_changes: list[QuickChange]
    stats: CostumePlotStats
