"""Production routes: breakdown (scenes, characters, sketches) and costume plot."""

from typing import Annotated
from uuid import UUID

from fastapi import BackgroundTasks, Query, status

from costumetrack.core.auth.dependencies import OrgMember
from costumetrack.core.pagination import Page, Pagination
from costumetrack.core.storage import OptionalStorage, delete_blob_quietly
from costumetrack.modules.productions import router
from costumetrack.modules.productions.schemas import (
    AssignmentDetail,
    AssignmentResponse,
    AssignmentUpsert,
    CharacterCreate,
    CharacterResponse,
    CharacterUpdate,
    CostumePlotResponse,
    ProductionCreate,
    ProductionResponse,
    ProductionUpdate,
    SceneCreate,
    SceneResponse,
    SceneUpdate,
    SketchCreate,
    SketchResponse,
)
from costumetrack.modules.productions.services import ProductionSvc


# ============================================================
# Productions
# ============================================================


@router.get(
    "",
    response_model=Page[ProductionResponse],
    summary="List productions",
    description="Paginated, newest start date first. Search matches name and venue.",
)
async def list_productions(
    org: OrgMember,
    service: ProductionSvc,
    pagination: Pagination,
    search: Annotated[str | None, Query(max_length=200)] = None,
) -> Page[ProductionResponse]:
    productions, total = await service.list_productions(org, pagination, search=search)
    return Page.create(
        [ProductionResponse.model_validate(p) for p in productions],
        total,
        pagination,
    )


@router.post(
    "",
    response_model=ProductionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create production",
)
async def create_production(
    data: ProductionCreate,
    org: OrgMember,
    service: ProductionSvc,
) -> ProductionResponse:
    production = await service.create_production(org, data)
    return ProductionResponse.model_validate(production)


@router.get(
    "/{production_id}",
    response_model=ProductionResponse,
    summary="Get production",
)
async def get_production(
    production_id: UUID,
    org: OrgMember,
    service: ProductionSvc,
) -> ProductionResponse:
    production = await service.get_production(org, production_id)
    return ProductionResponse.model_validate(production)


@router.patch(
    "/{production_id}",
    response_model=ProductionResponse,
    summary="Update production",
)
async def update_production(
    production_id: UUID,
    data: ProductionUpdate,
    org: OrgMember,
    service: ProductionSvc,
) -> ProductionResponse:
    production = await service.update_production(org, production_id, data)
    return ProductionResponse.model_validate(production)


@router.delete(
    "/{production_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete production",
    description="Removes scenes, characters and assignments. Productions with rentals cannot be deleted.",
)
async def delete_production(
    production_id: UUID,
    org: OrgMember,
    service: ProductionSvc,
) -> None:
    await service.delete_production(org, production_id)


# ============================================================
# Scenes
# ============================================================


@router.get(
    "/{production_id}/scenes",
    response_model=list[SceneResponse],
    summary="List scenes",
)
async def list_scenes(
    production_id: UUID,
    org: OrgMember,
    service: ProductionSvc,
) -> list[SceneResponse]:
    scenes = await service.list_scenes(org, production_id)
    return [SceneResponse.model_validate(s) for s in scenes]


@router.post(
    "/{production_id}/scenes",
    response_model=SceneResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create scene",
    description="Without an explicit sort_order the scene is appended.",
)
async def create_scene(
    production_id: UUID,
    data: SceneCreate,
    org: OrgMember,
    service: ProductionSvc,
) -> SceneResponse:
    scene = await service.create_scene(org, production_id, data)
    return SceneResponse.model_validate(scene)


@router.patch(
    "/{production_id}/scenes/{scene_id}",
    response_model=SceneResponse,
    summary="Update scene",
)
async def update_scene(
    production_id: UUID,
    scene_id: UUID,
    data: SceneUpdate,
    org: OrgMember,
    service: ProductionSvc,
) -> SceneResponse:
    scene = await service.update_scene(org, production_id, scene_id, data)
    return SceneResponse.model_validate(scene)


@router.delete(
    "/{production_id}/scenes/{scene_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete scene",
)
async def delete_scene(
    production_id: UUID,
    scene_id: UUID,
    org: OrgMember,
    service: ProductionSvc,
) -> None:
    await service.delete_scene(org, production_id, scene_id)


# ============================================================
# Characters
# ============================================================


@router.get(
    "/{production_id}/characters",
    response_model=list[CharacterResponse],
    summary="List characters",
)
async def list_characters(
    production_id: UUID,
    org: OrgMember,
    service: ProductionSvc,
) -> list[CharacterResponse]:
    characters = await service.list_characters(org, production_id)
    return [CharacterResponse.model_validate(c) for c in characters]


@router.post(
    "/{production_id}/characters",
    response_model=CharacterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create character",
)
async def create_character(
    production_id: UUID,
    data: CharacterCreate,
    org: OrgMember,
    service: ProductionSvc,
) -> CharacterResponse:
    character = await service.create_character(org, production_id, data)
    return CharacterResponse.model_validate(character)


@router.patch(
    "/{production_id}/characters/{character_id}",
    response_model=CharacterResponse,
    summary="Update character",
    description="Also accepts the actor's measurements.",
)
async def update_character(
    production_id: UUID,
    character_id: UUID,
    data: CharacterUpdate,
    org: OrgMember,
    service: ProductionSvc,
) -> CharacterResponse:
    character = await service.update_character(org, production_id, character_id, data)
    return CharacterResponse.model_validate(character)


@router.delete(
    "/{production_id}/characters/{character_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete character",
)
async def delete_character(
    production_id: UUID,
    character_id: UUID,
    org: OrgMember,
    service: ProductionSvc,
) -> None:
    await service.delete_character(org, production_id, character_id)


# ============================================================
# Sketches
# ============================================================


@router.get(
    "/{production_id}/characters/{character_id}/sketches",
    response_model=list[SketchResponse],
    summary="List character sketches",
)
async def list_sketches(
    production_id: UUID,
    character_id: UUID,
    org: OrgMember,
    service: ProductionSvc,
) -> list[SketchResponse]:
    sketches = await service.list_sketches(org, production_id, character_id)
    return [SketchResponse.model_validate(s) for s in sketches]


@router.post(
    "/{production_id}/characters/{character_id}/sketches",
    response_model=SketchResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add character sketch",
    description="Records a sketch previously uploaded through POST /upload.",
)
async def create_sketch(
    production_id: UUID,
    character_id: UUID,
    data: SketchCreate,
    org: OrgMember,
    service: ProductionSvc,
) -> SketchResponse:
    sketch = await service.create_sketch(org, production_id, character_id, data)
    return SketchResponse.model_validate(sketch)


@router.delete(
    "/{production_id}/characters/{character_id}/sketches/{sketch_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete character sketch",
    description="The stored image is removed after the response; failures are only logged.",
)
async def delete_sketch(
    production_id: UUID,
    character_id: UUID,
    sketch_id: UUID,
    org: OrgMember,
    service: ProductionSvc,
    storage: OptionalStorage,
    background_tasks: BackgroundTasks,
) -> None:
    url = await service.delete_sketch(org, production_id, character_id, sketch_id)
    if storage is not None:
        background_tasks.add_task(
            delete_blob_quietly,
            storage,
            url,
            event="sketch_blob_delete_failed",
        )


# ============================================================
# Assignments and costume plot
# ============================================================


@router.get(
    "/{production_id}/assignments",
    response_model=list[AssignmentDetail],
    summary="List costume assignments",
    description="Every assigned cell, with the costume's name, SKU and main photo.",
)
async def list_assignments(
    production_id: UUID,
    org: OrgMember,
    service: ProductionSvc,
) -> list[AssignmentDetail]:
    return await service.list_assignments(org, production_id)


@router.put(
    "/{production_id}/assignments",
    response_model=AssignmentResponse,
    summary="Set costume assignment",
    description="Creates or replaces the costume a character wears in a scene.",
)
async def upsert_assignment(
    production_id: UUID,
    data: AssignmentUpsert,
    org: OrgMember,
    service: ProductionSvc,
) -> AssignmentResponse:
    assignment = await service.upsert_assignment(org, production_id, data)
    return AssignmentResponse.model_validate(assignment)


@router.delete(
    "/{production_id}/assignments",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Clear costume assignment",
    description="Removes the assignment for one character in one scene.",
)
async def delete_assignment(
    production_id: UUID,
    character_id: Annotated[UUID, Query()],
    scene_id: Annotated[UUID, Query()],
    org: OrgMember,
    service: ProductionSvc,
) -> None:
    await service.delete_assignment(org, production_id, character_id, scene_id)


@router.get(
    "/{production_id}/costume-plot",
    response_model=CostumePlotResponse,
    summary="Get costume plot",
    description="Scenes, characters, assignments, quick changes and summary stats.",
)
async def get_costume_plot(
    production_id: UUID,
    org: OrgMember,
    service: ProductionSvc,
) -> CostumePlotResponse:
    return await service.get_costume_plot(org, production_id)
