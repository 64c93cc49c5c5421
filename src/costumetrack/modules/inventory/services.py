"""Category and costume inventory services."""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from costumetrack.core.auth.schemas import OrgContext
from costumetrack.core.constants import DEFAULT_CATEGORIES
from costumetrack.core.errors import BadRequestError, ConflictError, NotFoundError
from costumetrack.core.pagination import PageParams
from costumetrack.modules.inventory.models import (
    Category,
    CostumeItem,
    CostumePhoto,
    ItemStatus,
    PhotoType,
)
from costumetrack.modules.inventory.repos import CategoryRepo, CostumeItemRepo
from costumetrack.modules.inventory.schemas import (
    CategoryCreate,
    CategoryUpdate,
    CostumeItemCreate,
    CostumeItemUpdate,
    ItemLookupResponse,
    PhotoInput,
)


logger = structlog.get_logger()

# Columns that cannot be cleared by an explicit null in a partial update
_REQUIRED_ITEM_FIELDS = frozenset({"name", "condition", "status"})


def build_photos(photos: list[PhotoInput]) -> list[CostumePhoto]:
    """Turn photo inputs into ordered rows with at most one MAIN photo.

    Photos keep their list position as ``sort_order``. Every MAIN photo
    after the first is demoted to ALTERNATE.
    """
    rows = []
    has_main = False
    for position, photo in enumerate(photos):
        photo_type = photo.type
        if photo_type == PhotoType.MAIN:
            if has_main:
                photo_type = PhotoType.ALTERNATE
            has_main = True
        rows.append(
            CostumePhoto(
                url=photo.url,
                key=photo.key,
                type=photo_type,
                sort_order=position,
            )
        )
    return rows


class CategoryService:
    """Category CRUD within the caller's organization."""

    def __init__(self, repo: CategoryRepo) -> None:
        self.repo = repo

    async def list_categories(self, org: OrgContext) -> list[Category]:
        return await self.repo.list_all(org)

    async def get_category(self, org: OrgContext, category_id: UUID) -> Category:
        category = await self.repo.get(org, category_id)
        if category is None:
            raise NotFoundError(
                "Category not found",
                resource="category",
                resource_id=str(category_id),
            )
        return category

    async def create_category(self, org: OrgContext, data: CategoryCreate) -> Category:
        category = Category(**data.model_dump())
        return await self.repo.create(org, category)

    async def update_category(
        self, org: OrgContext, category_id: UUID, data: CategoryUpdate
    ) -> Category:
        category = await self.get_category(org, category_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if field == "name" and value is None:
                continue
            setattr(category, field, value)
        return await self.repo.save(category)

    async def delete_category(self, org: OrgContext, category_id: UUID) -> None:
        """Delete a category; its items become uncategorized."""
        category = await self.get_category(org, category_id)
        await self.repo.delete(category)

    async def create_defaults(self, org: OrgContext) -> None:
        """Seed the default categories for a newly created organization."""
        await self.repo.create_many(
            org,
            [Category(name=name, color=color) for name, color in DEFAULT_CATEGORIES],
        )


class InventoryService:
    """Costume item CRUD and SKU lookup.

    The RENTED status belongs to the rental lifecycle. Item edits may set
    any other status but never move an item into or out of RENTED.
    """

    def __init__(self, repo: CostumeItemRepo, categories: CategoryRepo) -> None:
        self.repo = repo
        self.categories = categories

    async def list_items(
        self,
        org: OrgContext,
        params: PageParams,
        search: str | None = None,
        status: ItemStatus | None = None,
        category_id: UUID | None = None,
    ) -> tuple[list[CostumeItem], int]:
        search = search.strip() if search else None
        return await self.repo.search(
            org,
            params,
            search=search or None,
            status=status,
            category_id=category_id,
        )

    async def get_item(self, org: OrgContext, item_id: UUID) -> CostumeItem:
        item = await self.repo.get(org, item_id)
        if item is None:
            raise NotFoundError(
                "Costume item not found",
                resource="costume_item",
                resource_id=str(item_id),
            )
        return item

    async def lookup_by_sku(self, org: OrgContext, sku: str | None) -> ItemLookupResponse:
        """Find an item by SKU, ignoring case, for scanner workflows.

        Raises:
            BadRequestError: If no SKU was given
            NotFoundError: If no item in the organization has this SKU
        """
        sku = sku.strip() if sku else ""
        if not sku:
            raise BadRequestError("SKU is required", error_code="sku_required")

        item = await self.repo.get_by_sku(org, sku)
        if item is None:
            raise NotFoundError("Costume item not found", resource="costume_item")

        return ItemLookupResponse(
            id=item.id,
            name=item.name,
            sku=item.sku,
            status=item.status,
            location=item.location,
            category_name=item.category.name if item.category else None,
            main_photo_url=item.main_photo_url,
        )

    async def create_item(self, org: OrgContext, data: CostumeItemCreate) -> CostumeItem:
        """Create an item with its photos.

        Raises:
            BadRequestError: If the status is RENTED
            NotFoundError: If the category is not in the organization
            ConflictError: If the SKU is already used
        """
        if data.status == ItemStatus.RENTED:
            raise BadRequestError(
                "Items become rented only through a rental",
                error_code="invalid_status",
            )
        await self._check_category(org, data.category_id)

        item = CostumeItem(
            **data.model_dump(exclude={"photos"}),
            photos=build_photos(data.photos),
        )
        item = await self.repo.create(org, item)
        logger.info("costume_item_created", item_id=str(item.id))
        return await self._reload(org, item.id)

    async def update_item(
        self, org: OrgContext, item_id: UUID, data: CostumeItemUpdate
    ) -> CostumeItem:
        """Apply a partial update; a supplied photo list replaces all photos.

        Raises:
            NotFoundError: If the item or the new category is not in the organization
            BadRequestError: If the update would set RENTED
            ConflictError: If the update would change a rented item's status,
                or the SKU is already used
        """
        item = await self.get_item(org, item_id)
        changes = data.model_dump(exclude_unset=True, exclude={"photos"})

        new_status = changes.get("status")
        if new_status is not None and new_status != item.status:
            if new_status == ItemStatus.RENTED:
                raise BadRequestError(
                    "Items become rented only through a rental",
                    error_code="invalid_status",
                )
            if item.status == ItemStatus.RENTED:
                raise ConflictError(
                    "This item is rented; return the rental to change its status"
                )

        if changes.get("category_id") is not None:
            await self._check_category(org, changes["category_id"])

        for field, value in changes.items():
            if field in _REQUIRED_ITEM_FIELDS and value is None:
                continue
            setattr(item, field, value)

        if data.photos is not None:
            item.photos = build_photos(data.photos)

        await self.repo.save(item)
        return await self._reload(org, item.id)

    async def delete_item(self, org: OrgContext, item_id: UUID) -> None:
        """Delete an item that is not currently rented.

        Raises:
            NotFoundError: If the item is not in the organization
            ConflictError: If the item is rented or referenced by past rentals
        """
        item = await self.get_item(org, item_id)
        if item.status == ItemStatus.RENTED:
            raise ConflictError("A rented item cannot be deleted")
        await self.repo.delete(item)
        logger.info("costume_item_deleted", item_id=str(item_id))

    async def _check_category(self, org: OrgContext, category_id: UUID | None) -> None:
        if category_id is None:
            return
        if await self.categories.get(org, category_id) is None:
            raise NotFoundError(
                "Category not found",
                resource="category",
                resource_id=str(category_id),
            )

    async def _reload(self, org: OrgContext, item_id: UUID) -> CostumeItem:
        item = await self.repo.get_fresh(org, item_id)
        if item is None:
            raise NotFoundError("Costume item not found", resource="costume_item")
        return item


# Type aliases for dependency injection
CategorySvc = Annotated[CategoryService, Depends(CategoryService)]
InventorySvc = Annotated[InventoryService, Depends(InventoryService)]
