"""Production repositories.

Child rows (scenes, characters, sketches, assignments) have no
organization column. They are always looked up by their own id and the
id of a parent that was already resolved within the caller's
organization.
"""

from typing import Annotated, Any
from uuid import UUID

from fastapi import Depends
from sqlalchemy import func, or_, select

from costumetrack.api.dependencies import DBSession
from costumetrack.core.auth.schemas import OrgContext
from costumetrack.core.database import ScopedRepository
from costumetrack.core.pagination import PageParams
from costumetrack.modules.productions.models import (
    Character,
    CharacterSketch,
    CostumeAssignment,
    Production,
    Scene,
)


class ProductionRepository(ScopedRepository[Production]):
    model = Production
    in_use_message = "This production has rentals and cannot be deleted"

    async def search(
        self,
        org: OrgContext,
        params: PageParams,
        search: str | None = None,
    ) -> tuple[list[Production], int]:
        """List productions, newest start date first, matching name or venue."""
        stmt = self.scope(org).select(Production)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    Production.name.ilike(pattern),
                    Production.venue.ilike(pattern),
                )
            )
        stmt = stmt.order_by(
            Production.start_date.desc().nulls_last(),
            Production.created_at.desc(),
            Production.id,
        )
        return await self.paginate(stmt, params)


class ProductionChildRepository:
    """Data access for rows owned through a production."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def _one(self, stmt: Any) -> Any:
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def _all(self, stmt: Any) -> list[Any]:
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def add(self, instance: Any) -> Any:
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def save(self, instance: Any) -> Any:
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, instance: Any) -> None:
        await self.session.delete(instance)
        await self.session.flush()

    async def _next_sort_order(self, column: Any, parent_column: Any, parent_id: UUID) -> int:
        stmt = select(func.max(column)).where(parent_column == parent_id)
        current = (await self.session.execute(stmt)).scalar_one_or_none()
        return (current or 0) + 1

    # ---- scenes ----

    async def list_scenes(self, production_id: UUID) -> list[Scene]:
        return await self._all(
            select(Scene)
            .where(Scene.production_id == production_id)
            .order_by(Scene.sort_order, Scene.created_at)
        )

    async def get_scene(self, production_id: UUID, scene_id: UUID) -> Scene | None:
        return await self._one(
            select(Scene).where(Scene.id == scene_id, Scene.production_id == production_id)
        )

    async def next_scene_order(self, production_id: UUID) -> int:
        return await self._next_sort_order(Scene.sort_order, Scene.production_id, production_id)

    # ---- characters ----

    async def list_characters(self, production_id: UUID) -> list[Character]:
        return await self._all(
            select(Character)
            .where(Character.production_id == production_id)
            .order_by(Character.sort_order, Character.created_at)
        )

    async def get_character(
        self, production_id: UUID, character_id: UUID
    ) -> Character | None:
        return await self._one(
            select(Character).where(
                Character.id == character_id,
                Character.production_id == production_id,
            )
        )

    async def next_character_order(self, production_id: UUID) -> int:
        return await self._next_sort_order(
            Character.sort_order, Character.production_id, production_id
        )

    # ---- sketches ----

    async def list_sketches(self, character_id: UUID) -> list[CharacterSketch]:
        return await self._all(
            select(CharacterSketch)
            .where(CharacterSketch.character_id == character_id)
            .order_by(CharacterSketch.sort_order, CharacterSketch.created_at)
        )

    async def get_sketch(
        self, character_id: UUID, sketch_id: UUID
    ) -> CharacterSketch | None:
        return await self._one(
            select(CharacterSketch).where(
                CharacterSketch.id == sketch_id,
                CharacterSketch.character_id == character_id,
            )
        )

    async def next_sketch_order(self, character_id: UUID) -> int:
        return await self._next_sort_order(
            CharacterSketch.sort_order, CharacterSketch.character_id, character_id
        )

    # ---- assignments ----

    async def list_assignments(self, production_id: UUID) -> list[CostumeAssignment]:
        return await self._all(
            select(CostumeAssignment)
            .join(Character, CostumeAssignment.character_id == Character.id)
            .where(Character.production_id == production_id)
        )

    async def get_assignment(
        self, character_id: UUID, scene_id: UUID
    ) -> CostumeAssignment | None:
        return await self._one(
            select(CostumeAssignment).where(
                CostumeAssignment.character_id == character_id,
                CostumeAssignment.scene_id == scene_id,
            )
        )


# Type aliases for dependency injection
ProductionRepo = Annotated[ProductionRepository, Depends(ProductionRepository)]
ProductionChildRepo = Annotated[ProductionChildRepository, Depends(ProductionChildRepository)]
