"""Production, breakdown and costume plot services."""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from costumetrack.core.auth.schemas import OrgContext
from costumetrack.core.errors import NotFoundError
from costumetrack.core.pagination import PageParams
from costumetrack.modules.inventory.repos import CostumeItemRepo
from costumetrack.modules.productions.models import (
    Character,
    CharacterSketch,
    CostumeAssignment,
    Production,
    Scene,
)
from costumetrack.modules.productions.repos import ProductionChildRepo, ProductionRepo
from costumetrack.modules.productions.schemas import (
    AssignedCostume,
    AssignmentDetail,
    AssignmentResponse,
    AssignmentUpsert,
    CharacterCreate,
    CharacterResponse,
    CharacterUpdate,
    CostumePlotResponse,
    CostumePlotStats,
    ProductionCreate,
    ProductionResponse,
    ProductionUpdate,
    QuickChange,
    SceneCreate,
    SceneResponse,
    SceneUpdate,
    SketchCreate,
)


logger = structlog.get_logger()


def find_quick_changes(
    scenes: list[Scene],
    characters: list[Character],
    assignments: list[CostumeAssignment],
) -> list[QuickChange]:
    """Detect costume switches between consecutive scenes.

    A quick change is a character with an assigned costume in two adjacent
    scenes (by sort order) where the two costume items differ.
    """
    worn = {
        (a.character_id, a.scene_id): a.costume_item_id
        for a in assignments
        if a.costume_item_id is not None
    }

    changes = []
    for character in characters:
        for current, following in zip(scenes, scenes[1:]):
            before = worn.get((character.id, current.id))
            after = worn.get((character.id, following.id))
            if before and after and before != after:
                changes.append(
                    QuickChange(
                        character_id=character.id,
                        from_scene_id=current.id,
                        to_scene_id=following.id,
                        from_costume_item_id=before,
                        to_costume_item_id=after,
                    )
                )
    return changes


def _apply(instance: object, data: dict, required: frozenset[str]) -> None:
    """Copy a partial update, ignoring explicit nulls on required columns."""
    for field, value in data.items():
        if field in required and value is None:
            continue
        setattr(instance, field, value)


_REQUIRED = frozenset({"name", "sort_order"})


class ProductionService:
    """Productions and everything nested under them.

    Every nested operation resolves the production within the caller's
    organization first, then the child by its own id and the parent id.
    """

    def __init__(
        self,
        repo: ProductionRepo,
        children: ProductionChildRepo,
        items: CostumeItemRepo,
    ) -> None:
        self.repo = repo
        self.children = children
        self.items = items

    # ============================================================
    # Productions
    # ============================================================

    async def list_productions(
        self, org: OrgContext, params: PageParams, search: str | None = None
    ) -> tuple[list[Production], int]:
        search = search.strip() if search else None
        return await self.repo.search(org, params, search=search or None)

    async def get_production(self, org: OrgContext, production_id: UUID) -> Production:
        production = await self.repo.get(org, production_id)
        if production is None:
            raise NotFoundError(
                "Production not found",
                resource="production",
                resource_id=str(production_id),
            )
        return production

    async def create_production(self, org: OrgContext, data: ProductionCreate) -> Production:
        return await self.repo.create(org, Production(**data.model_dump()))

    async def update_production(
        self, org: OrgContext, production_id: UUID, data: ProductionUpdate
    ) -> Production:
        production = await self.get_production(org, production_id)
        _apply(production, data.model_dump(exclude_unset=True), _REQUIRED)
        return await self.repo.save(production)

    async def delete_production(self, org: OrgContext, production_id: UUID) -> None:
        """Delete a production and its breakdown.

        Raises:
            NotFoundError: If the production is not in the organization
            ConflictError: If any rental references the production
        """
        production = await self.get_production(org, production_id)
        await self.repo.delete(production)
        logger.info("production_deleted", production_id=str(production_id))

    # ============================================================
    # Scenes
    # ============================================================

    async def list_scenes(self, org: OrgContext, production_id: UUID) -> list[Scene]:
        await self.get_production(org, production_id)
        return await self.children.list_scenes(production_id)

    async def create_scene(
        self, org: OrgContext, production_id: UUID, data: SceneCreate
    ) -> Scene:
        await self.get_production(org, production_id)
        values = data.model_dump()
        if values["sort_order"] is None:
            values["sort_order"] = await self.children.next_scene_order(production_id)
        return await self.children.add(Scene(production_id=production_id, **values))

    async def get_scene(self, org: OrgContext, production_id: UUID, scene_id: UUID) -> Scene:
        await self.get_production(org, production_id)
        scene = await self.children.get_scene(production_id, scene_id)
        if scene is None:
            raise NotFoundError("Scene not found", resource="scene", resource_id=str(scene_id))
        return scene

    async def update_scene(
        self, org: OrgContext, production_id: UUID, scene_id: UUID, data: SceneUpdate
    ) -> Scene:
        scene = await self.get_scene(org, production_id, scene_id)
        _apply(scene, data.model_dump(exclude_unset=True), _REQUIRED)
        return await self.children.save(scene)

    async def delete_scene(self, org: OrgContext, production_id: UUID, scene_id: UUID) -> None:
        scene = await self.get_scene(org, production_id, scene_id)
        await self.children.delete(scene)

    # ============================================================
    # Characters
    # ============================================================

    async def list_characters(self, org: OrgContext, production_id: UUID) -> list[Character]:
        await self.get_production(org, production_id)
        return await self.children.list_characters(production_id)

    async def create_character(
        self, org: OrgContext, production_id: UUID, data: CharacterCreate
    ) -> Character:
        await self.get_production(org, production_id)
        values = data.model_dump()
        if values["sort_order"] is None:
            values["sort_order"] = await self.children.next_character_order(production_id)
        return await self.children.add(Character(production_id=production_id, **values))

    async def get_character(
        self, org: OrgContext, production_id: UUID, character_id: UUID
    ) -> Character:
        await self.get_production(org, production_id)
        character = await self.children.get_character(production_id, character_id)
        if character is None:
            raise NotFoundError(
                "Character not found",
                resource="character",
                resource_id=str(character_id),
            )
        return character

    async def update_character(
        self,
        org: OrgContext,
        production_id: UUID,
        character_id: UUID,
        data: CharacterUpdate,
    ) -> Character:
        character = await self.get_character(org, production_id, character_id)
        _apply(character, data.model_dump(exclude_unset=True), _REQUIRED)
        return await self.children.save(character)

    async def delete_character(
        self, org: OrgContext, production_id: UUID, character_id: UUID
    ) -> None:
        character = await self.get_character(org, production_id, character_id)
        await self.children.delete(character)

    # ============================================================
    # Sketches
    # ============================================================

    async def list_sketches(
        self, org: OrgContext, production_id: UUID, character_id: UUID
    ) -> list[CharacterSketch]:
        await self.get_character(org, production_id, character_id)
        return await self.children.list_sketches(character_id)

    async def create_sketch(
        self,
        org: OrgContext,
        production_id: UUID,
        character_id: UUID,
        data: SketchCreate,
    ) -> CharacterSketch:
        """Attach an already uploaded sketch to a character.

        Raises:
            NotFoundError: If the character, or the optional scene, is not
                part of the production
        """
        await self.get_character(org, production_id, character_id)
        if data.scene_id is not None:
            await self.get_scene(org, production_id, data.scene_id)

        sketch = CharacterSketch(
            character_id=character_id,
            sort_order=await self.children.next_sketch_order(character_id),
            **data.model_dump(),
        )
        return await self.children.add(sketch)

    async def delete_sketch(
        self,
        org: OrgContext,
        production_id: UUID,
        character_id: UUID,
        sketch_id: UUID,
    ) -> str:
        """Delete a sketch row and return its URL for blob cleanup."""
        await self.get_character(org, production_id, character_id)
        sketch = await self.children.get_sketch(character_id, sketch_id)
        if sketch is None:
            raise NotFoundError("Sketch not found", resource="sketch", resource_id=str(sketch_id))

        url = sketch.url
        await self.children.delete(sketch)
        logger.info("sketch_deleted", sketch_id=str(sketch_id))
        return url

    # ============================================================
    # Assignments and costume plot
    # ============================================================

    async def list_assignments(
        self, org: OrgContext, production_id: UUID
    ) -> list[AssignmentDetail]:
        """List the production's assignments with the assigned costume's summary."""
        await self.get_production(org, production_id)
        assignments = await self.children.list_assignments(production_id)
        item_ids = {a.costume_item_id for a in assignments if a.costume_item_id is not None}
        items = {item.id: item for item in await self.items.list_by_ids(org, item_ids)}

        details = []
        for assignment in assignments:
            detail = AssignmentDetail.model_validate(assignment)
            item = items.get(assignment.costume_item_id)
            if item is not None:
                detail.costume_item = AssignedCostume.model_validate(item)
            details.append(detail)
        return details

    async def upsert_assignment(
        self, org: OrgContext, production_id: UUID, data: AssignmentUpsert
    ) -> CostumeAssignment:
        """Create or replace the assignment for a (character, scene) cell.

        Raises:
            NotFoundError: If the character or scene is not part of the
                production, or the costume item is not in the organization
        """
        await self.get_character(org, production_id, data.character_id)
        await self.get_scene(org, production_id, data.scene_id)
        if data.costume_item_id is not None:
            if await self.items.get(org, data.costume_item_id) is None:
                raise NotFoundError(
                    "Costume item not found",
                    resource="costume_item",
                    resource_id=str(data.costume_item_id),
                )

        assignment = await self.children.get_assignment(data.character_id, data.scene_id)
        if assignment is None:
            return await self.children.add(CostumeAssignment(**data.model_dump()))

        assignment.costume_item_id = data.costume_item_id
        assignment.notes = data.notes
        assignment.is_quick_change = data.is_quick_change
        assignment.change_time_seconds = data.change_time_seconds
        return await self.children.save(assignment)

    async def delete_assignment(
        self, org: OrgContext, production_id: UUID, character_id: UUID, scene_id: UUID
    ) -> None:
        """Clear one (character, scene) cell.

        Raises:
            NotFoundError: If the character or scene is not part of the
                production, or the cell has no assignment
        """
        await self.get_character(org, production_id, character_id)
        await self.get_scene(org, production_id, scene_id)
        assignment = await self.children.get_assignment(character_id, scene_id)
        if assignment is None:
            raise NotFoundError("Assignment not found", resource="costume_assignment")
        await self.children.delete(assignment)

    async def get_costume_plot(self, org: OrgContext, production_id: UUID) -> CostumePlotResponse:
        production = await self.get_production(org, production_id)
        scenes = await self.children.list_scenes(production_id)
        characters = await self.children.list_characters(production_id)
        assignments = await self.children.list_assignments(production_id)
        quick_changes = find_quick_changes(scenes, characters, assignments)

        return CostumePlotResponse(
            production=ProductionResponse.model_validate(production),
            scenes=[SceneResponse.model_validate(s) for s in scenes],
            characters=[CharacterResponse.model_validate(c) for c in characters],
            assignments=[AssignmentResponse.model_validate(a) for a in assignments],
            quick_changes=quick_changes,
            stats=CostumePlotStats(
                total_scenes=len(scenes),
                total_characters=len(characters),
                total_assignments=len(assignments),
                assignments_with_costumes=sum(
                    1 for a in assignments if a.costume_item_id is not None
                ),
                quick_change_count=len(quick_changes),
            ),
        )


# Type alias for dependency injection
ProductionSvc = Annotated[ProductionService, Depends(ProductionService)]
