"""Category and costume inventory routes."""

from typing import Annotated
from uuid import UUID

from fastapi import Query, status

from costumetrack.core.auth.dependencies import OrgAdmin, OrgMember
from costumetrack.core.pagination import Page, Pagination
from costumetrack.modules.inventory import router
from costumetrack.modules.inventory.models import ItemStatus
from costumetrack.modules.inventory.schemas import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    CostumeItemCreate,
    CostumeItemResponse,
    CostumeItemUpdate,
    ItemLookupResponse,
)
from costumetrack.modules.inventory.services import CategorySvc, InventorySvc


# ============================================================
# Categories
# ============================================================


@router.get(
    "/categories",
    response_model=list[CategoryResponse],
    summary="List categories",
    description="All categories of the organization, ordered by name.",
)
async def list_categories(org: OrgMember, service: CategorySvc) -> list[CategoryResponse]:
    categories = await service.list_categories(org)
    return [CategoryResponse.model_validate(c) for c in categories]


@router.post(
    "/categories",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
)
async def create_category(
    data: CategoryCreate,
    org: OrgAdmin,
    service: CategorySvc,
) -> CategoryResponse:
    category = await service.create_category(org, data)
    return CategoryResponse.model_validate(category)


@router.get(
    "/categories/{category_id}",
    response_model=CategoryResponse,
    summary="Get category",
)
async def get_category(
    category_id: UUID,
    org: OrgMember,
    service: CategorySvc,
) -> CategoryResponse:
    category = await service.get_category(org, category_id)
    return CategoryResponse.model_validate(category)


@router.patch(
    "/categories/{category_id}",
    response_model=CategoryResponse,
    summary="Update category",
)
async def update_category(
    category_id: UUID,
    data: CategoryUpdate,
    org: OrgAdmin,
    service: CategorySvc,
) -> CategoryResponse:
    category = await service.update_category(org, category_id, data)
    return CategoryResponse.model_validate(category)


@router.delete(
    "/categories/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete category",
    description="Items in the category are kept and become uncategorized.",
)
async def delete_category(
    category_id: UUID,
    org: OrgAdmin,
    service: CategorySvc,
) -> None:
    await service.delete_category(org, category_id)


# ============================================================
# Inventory
# ============================================================


@router.get(
    "/inventory",
    response_model=Page[CostumeItemResponse],
    summary="List costume items",
    description="Paginated, newest first. Search matches name, description and SKU.",
)
async def list_items(
    org: OrgMember,
    service: InventorySvc,
    pagination: Pagination,
    search: Annotated[str | None, Query(max_length=200)] = None,
    item_status: Annotated[ItemStatus | None, Query(alias="status")] = None,
    category_id: UUID | None = None,
) -> Page[CostumeItemResponse]:
    items, total = await service.list_items(
        org,
        pagination,
        search=search,
        status=item_status,
        category_id=category_id,
    )
    return Page.create(
        [CostumeItemResponse.model_validate(i) for i in items],
        total,
        pagination,
    )


@router.get(
    "/inventory/lookup",
    response_model=ItemLookupResponse,
    summary="Look up item by SKU",
    description="Exact SKU match within the organization, for barcode scanners.",
)
async def lookup_item(
    org: OrgMember,
    service: InventorySvc,
    sku: str | None = None,
) -> ItemLookupResponse:
    return await service.lookup_by_sku(org, sku)


@router.post(
    "/inventory",
    response_model=CostumeItemResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create costume item",
)
async def create_item(
    data: CostumeItemCreate,
    org: OrgMember,
    service: InventorySvc,
) -> CostumeItemResponse:
    item = await service.create_item(org, data)
    return CostumeItemResponse.model_validate(item)


@router.get(
    "/inventory/{item_id}",
    response_model=CostumeItemResponse,
    summary="Get costume item",
)
async def get_item(
    item_id: UUID,
    org: OrgMember,
    service: InventorySvc,
) -> CostumeItemResponse:
    item = await service.get_item(org, item_id)
    return CostumeItemResponse.model_validate(item)


@router.patch(
    "/inventory/{item_id}",
    response_model=CostumeItemResponse,
    summary="Update costume item",
    description="Only supplied fields change. A supplied photo list replaces all photos.",
)
async def update_item(
    item_id: UUID,
    data: CostumeItemUpdate,
    org: OrgMember,
    service: InventorySvc,
) -> CostumeItemResponse:
    item = await service.update_item(org, item_id, data)
    return CostumeItemResponse.model_validate(item)


@router.delete(
    "/inventory/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete costume item",
    description="Rented items cannot be deleted.",
)
async def delete_item(
    item_id: UUID,
    org: OrgMember,
    service: InventorySvc,
) -> None:
    await service.delete_item(org, item_id)
