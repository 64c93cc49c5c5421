"""Customer routes."""

from typing import Annotated
from uuid import UUID

from fastapi import Query, status

from costumetrack.core.auth.dependencies import OrgAdmin, OrgMember
from costumetrack.core.pagination import Page, Pagination
from costumetrack.modules.customers import router
from costumetrack.modules.customers.schemas import (
    CustomerCreate,
    CustomerResponse,
    CustomerUpdate,
    PortalSettings,
    PortalUpdate,
)
from costumetrack.modules.customers.services import CustomerSvc


@router.get(
    "",
    response_model=Page[CustomerResponse],
    summary="List customers",
    description="Paginated, ordered by name. Search matches name, e-mail and company.",
)
async def list_customers(
    org: OrgMember,
    service: CustomerSvc,
    pagination: Pagination,
    search: Annotated[str | None, Query(max_length=200)] = None,
) -> Page[CustomerResponse]:
    customers, total = await service.list_customers(org, pagination, search=search)
    return Page.create(
        [CustomerResponse.model_validate(c) for c in customers],
        total,
        pagination,
    )


@router.post(
    "",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create customer",
)
async def create_customer(
    data: CustomerCreate,
    org: OrgMember,
    service: CustomerSvc,
) -> CustomerResponse:
    customer = await service.create_customer(org, data)
    return CustomerResponse.model_validate(customer)


@router.get(
    "/{customer_id}",
    response_model=CustomerResponse,
    summary="Get customer",
)
async def get_customer(
    customer_id: UUID,
    org: OrgMember,
    service: CustomerSvc,
) -> CustomerResponse:
    customer = await service.get_customer(org, customer_id)
    return CustomerResponse.model_validate(customer)


@router.patch(
    "/{customer_id}",
    response_model=CustomerResponse,
    summary="Update customer",
)
async def update_customer(
    customer_id: UUID,
    data: CustomerUpdate,
    org: OrgMember,
    service: CustomerSvc,
) -> CustomerResponse:
    customer = await service.update_customer(org, customer_id, data)
    return CustomerResponse.model_validate(customer)


@router.delete(
    "/{customer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete customer",
    description="Customers with rentals cannot be deleted.",
)
async def delete_customer(
    customer_id: UUID,
    org: OrgMember,
    service: CustomerSvc,
) -> None:
    await service.delete_customer(org, customer_id)


@router.put(
    "/{customer_id}/portal",
    response_model=PortalSettings,
    summary="Configure customer portal",
    description=(
        "Enable or disable the customer's read-only portal. Enabling issues a "
        "token when none exists; regenerate_token always issues a new one."
    ),
)
async def update_portal(
    customer_id: UUID,
    data: PortalUpdate,
    org: OrgAdmin,
    service: CustomerSvc,
) -> PortalSettings:
    return await service.update_portal(org, customer_id, data)
