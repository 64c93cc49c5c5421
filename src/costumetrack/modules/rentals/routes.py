"""Rental and customer portal routes."""

from typing import Annotated
from uuid import UUID

from fastapi import Query, status

from costumetrack.core.auth.dependencies import OrgMember
from costumetrack.core.pagination import Page, Pagination
from costumetrack.modules.rentals import router
from costumetrack.modules.rentals.models import RentalStatus
from costumetrack.modules.rentals.schemas import PortalResponse, RentalCreate, RentalResponse
from costumetrack.modules.rentals.services import PortalSvc, RentalSvc


@router.get(
    "/rentals",
    response_model=Page[RentalResponse],
    summary="List rentals",
    description="Paginated, newest first, optionally filtered by status.",
)
async def list_rentals(
    org: OrgMember,
    service: RentalSvc,
    pagination: Pagination,
    rental_status: Annotated[RentalStatus | None, Query(alias="status")] = None,
) -> Page[RentalResponse]:
    rentals, total = await service.list_rentals(org, pagination, status=rental_status)
    return Page.create(
        [RentalResponse.model_validate(r) for r in rentals],
        total,
        pagination,
    )


@router.post(
    "/rentals",
    response_model=RentalResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create rental",
    description=(
        "Checks out AVAILABLE costume items to a customer. The rental and the "
        "item status changes succeed or fail together."
    ),
)
async def create_rental(
    data: RentalCreate,
    org: OrgMember,
    service: RentalSvc,
) -> RentalResponse:
    rental = await service.create_rental(org, data)
    return RentalResponse.model_validate(rental)


@router.get(
    "/rentals/{rental_id}",
    response_model=RentalResponse,
    summary="Get rental",
)
async def get_rental(
    rental_id: UUID,
    org: OrgMember,
    service: RentalSvc,
) -> RentalResponse:
    rental = await service.get_rental(org, rental_id)
    return RentalResponse.model_validate(rental)


@router.post(
    "/rentals/{rental_id}/return",
    response_model=RentalResponse,
    summary="Return rental",
    description="Marks an active rental returned and makes its costumes available again.",
)
async def return_rental(
    rental_id: UUID,
    org: OrgMember,
    service: RentalSvc,
) -> RentalResponse:
    rental = await service.return_rental(org, rental_id)
    return RentalResponse.model_validate(rental)


@router.get(
    "/portal/{token}",
    response_model=PortalResponse,
    summary="Customer portal",
    description="Unauthenticated. The customer's rentals, latest checkout first.",
)
async def get_portal(token: str, service: PortalSvc) -> PortalResponse:
    return await service.get_portal(token)
