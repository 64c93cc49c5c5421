"""Category and costume item repositories."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import func, or_

from costumetrack.core.auth.schemas import OrgContext
from costumetrack.core.database import ScopedRepository
from costumetrack.core.pagination import PageParams
from costumetrack.modules.inventory.models import Category, CostumeItem, ItemStatus


class CategoryRepository(ScopedRepository[Category]):
    model = Category
    conflict_message = "A category with this name already exists"

    async def list_all(self, org: OrgContext) -> list[Category]:
        scope = self.scope(org)
        return await scope.all(scope.select(Category).order_by(Category.name.asc()))

    async def create_many(self, org: OrgContext, categories: list[Category]) -> None:
        """Insert several categories in one flush (used at onboarding)."""
        scope = self.scope(org)
        for category in categories:
            scope.add(category)
        await self.session.flush()


class CostumeItemRepository(ScopedRepository[CostumeItem]):
    """Repository for costume items.

    Photos and the category load with the item, so responses can be built
    without further queries.
    """

    model = CostumeItem
    conflict_message = "An item with this SKU already exists"
    in_use_message = "This item has rental history and cannot be deleted"

    async def search(
        self,
        org: OrgContext,
        params: PageParams,
        search: str | None = None,
        status: ItemStatus | None = None,
        category_id: UUID | None = None,
    ) -> tuple[list[CostumeItem], int]:
        """List items newest first with optional filters.

        Args:
            org: Caller's organization
            params: Page to return
            search: Case-insensitive match on name, description or SKU
            status: Only items in this status
            category_id: Only items in this category

        Returns:
            Tuple of (items on the page, total matching items)
        """
        stmt = self.scope(org).select(CostumeItem)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    CostumeItem.name.ilike(pattern),
                    CostumeItem.description.ilike(pattern),
                    CostumeItem.sku.ilike(pattern),
                )
            )
        if status is not None:
            stmt = stmt.where(CostumeItem.status == status)
        if category_id is not None:
            stmt = stmt.where(CostumeItem.category_id == category_id)

        stmt = stmt.order_by(CostumeItem.created_at.desc(), CostumeItem.id)
        return await self.paginate(stmt, params)

    async def get_fresh(self, org: OrgContext, item_id: UUID) -> CostumeItem | None:
        """Reload an item and its relationships, bypassing the identity map."""
        stmt = (
            self.scope(org)
            .select(CostumeItem)
            .where(CostumeItem.id == item_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_ids(self, org: OrgContext, item_ids: set[UUID]) -> list[CostumeItem]:
        if not item_ids:
            return []
        scope = self.scope(org)
        return await scope.all(
            scope.select(CostumeItem)
            .where(CostumeItem.id.in_(item_ids))
            .execution_options(populate_existing=True)
        )

    async def get_by_sku(self, org: OrgContext, sku: str) -> CostumeItem | None:
        stmt = (
            self.scope(org)
            .select(CostumeItem)
            .where(func.lower(CostumeItem.sku) == sku.lower())
            .order_by(CostumeItem.created_at, CostumeItem.id)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()


# Type aliases for dependency injection
CategoryRepo = Annotated[CategoryRepository, Depends(CategoryRepository)]
CostumeItemRepo = Annotated[CostumeItemRepository, Depends(CostumeItemRepository)]
