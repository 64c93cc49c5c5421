"""Rental lifecycle and customer portal services."""

from datetime import UTC, datetime
from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from costumetrack.core.auth.schemas import OrgContext
from costumetrack.core.database import atomic
from costumetrack.core.errors import ConflictError, NotFoundError, ValidationError
from costumetrack.core.pagination import PageParams
from costumetrack.modules.customers.repos import CustomerRepo
from costumetrack.modules.inventory.models import ItemStatus
from costumetrack.modules.organizations.repos import OrganizationRepo
from costumetrack.modules.productions.repos import ProductionRepo
from costumetrack.modules.rentals.models import Rental, RentalItem, RentalStatus
from costumetrack.modules.rentals.repos import RentalRepo
from costumetrack.modules.rentals.schemas import (
    PortalCostume,
    PortalRental,
    PortalResponse,
    RentalCreate,
    RentalProduction,
)


logger = structlog.get_logger()

RENTAL_NOT_RETURNABLE = "Rental not found or already returned"


class RentalService:
    """Checks costumes out to customers and back in.

    Both transitions run inside a savepoint: the rental row, its line
    items and the costume statuses change together or not at all.
    """

    def __init__(
        self,
        repo: RentalRepo,
        customers: CustomerRepo,
        productions: ProductionRepo,
    ) -> None:
        self.repo = repo
        self.customers = customers
        self.productions = productions

    async def list_rentals(
        self,
        org: OrgContext,
        params: PageParams,
        status: RentalStatus | None = None,
    ) -> tuple[list[Rental], int]:
        return await self.repo.search(org, params, status=status)

    async def get_rental(self, org: OrgContext, rental_id: UUID) -> Rental:
        rental = await self.repo.get(org, rental_id)
        if rental is None:
            raise NotFoundError(
                "Rental not found",
                resource="rental",
                resource_id=str(rental_id),
            )
        return rental

    async def create_rental(self, org: OrgContext, data: RentalCreate) -> Rental:
        """Check out costume items.

        Raises:
            NotFoundError: If the customer, production or any item is not in
                the organization
            ValidationError: If the due date precedes the checkout date
            ConflictError: If any item is not AVAILABLE
        """
        if await self.customers.get(org, data.customer_id) is None:
            raise NotFoundError(
                "Customer not found",
                resource="customer",
                resource_id=str(data.customer_id),
            )
        if data.production_id is not None:
            if await self.productions.get(org, data.production_id) is None:
                raise NotFoundError(
                    "Production not found",
                    resource="production",
                    resource_id=str(data.production_id),
                )

        checkout_date = data.checkout_date or datetime.now(UTC).date()
        if data.due_date < checkout_date:
            raise ValidationError(
                "Due date cannot be before the checkout date",
                errors=[{"field": "due_date", "message": "Must not precede checkout_date"}],
            )

        item_ids = [line.costume_item_id for line in data.items]

        async with atomic(self.repo.session):
            items = await self.repo.lock_items(org, item_ids)
            found = {item.id for item in items}
            missing = [item_id for item_id in item_ids if item_id not in found]
            if missing:
                raise NotFoundError(
                    "Costume item not found",
                    resource="costume_item",
                    resource_id=str(missing[0]),
                )
            unavailable = [item for item in items if item.status != ItemStatus.AVAILABLE]
            if unavailable:
                raise ConflictError(
                    f"{unavailable[0].name} is not available for rental",
                    details={"costume_item_ids": [str(i.id) for i in unavailable]},
                )

            rental = Rental(
                customer_id=data.customer_id,
                production_id=data.production_id,
                status=RentalStatus.ACTIVE,
                checkout_date=checkout_date,
                due_date=data.due_date,
                deposit_amount=data.deposit_amount,
                notes=data.notes,
                created_by_id=org.user_id,
                items=[
                    RentalItem(
                        costume_item_id=line.costume_item_id,
                        condition_out=line.condition_out,
                        notes=line.notes,
                    )
                    for line in data.items
                ],
            )
            await self.repo.add(org, rental)

            claimed = await self.repo.claim_items(org, item_ids)
            if claimed != len(item_ids):
                raise ConflictError("One or more items are no longer available")

        logger.info(
            "rental_created",
            rental_id=str(rental.id),
            customer_id=str(data.customer_id),
            item_count=len(item_ids),
        )
        return await self._reload(org, rental.id)

    async def return_rental(self, org: OrgContext, rental_id: UUID) -> Rental:
        """Check a rental back in.

        Marks the rental RETURNED, records each item's return condition and
        puts the costumes back to AVAILABLE. A failure in any step leaves
        all three unchanged.

        Raises:
            NotFoundError: If the rental is foreign, absent or already returned
        """
        rental = await self.repo.get_active(org, rental_id)
        if rental is None:
            raise NotFoundError(RENTAL_NOT_RETURNABLE, resource="rental")

        async with atomic(self.repo.session):
            if await self.repo.mark_returned(org, rental_id) == 0:
                raise NotFoundError(RENTAL_NOT_RETURNABLE, resource="rental")
            await self.repo.record_return_conditions(rental.items)
            await self.repo.release_costumes(
                org, [line.costume_item_id for line in rental.items]
            )

        logger.info(
            "rental_returned",
            rental_id=str(rental_id),
            item_count=len(rental.items),
        )
        return await self._reload(org, rental_id)

    async def _reload(self, org: OrgContext, rental_id: UUID) -> Rental:
        rental = await self.repo.get_fresh(org, rental_id)
        if rental is None:
            raise NotFoundError("Rental not found", resource="rental")
        return rental


class PortalService:
    """Read-only view of a customer's rentals behind a secret link."""

    def __init__(
        self,
        repo: RentalRepo,
        customers: CustomerRepo,
        organizations: OrganizationRepo,
    ) -> None:
        self.repo = repo
        self.customers = customers
        self.organizations = organizations

    async def get_portal(self, token: str) -> PortalResponse:
        """Resolve a portal token.

        Raises:
            NotFoundError: If the token is unknown or the portal is disabled
        """
        customer = await self.customers.get_by_portal_token(token)
        if customer is None:
            raise NotFoundError("Portal not found", resource="portal")

        organization = await self.organizations.get_by_id(customer.organization_id)
        if organization is None:
            raise NotFoundError("Portal not found", resource="portal")

        rentals = await self.repo.list_for_customer(customer.organization_id, customer.id)
        return PortalResponse(
            organization_name=organization.name,
            customer_name=customer.name,
            rentals=[
                PortalRental(
                    id=rental.id,
                    status=rental.status,
                    production=(
                        RentalProduction.model_validate(rental.production)
                        if rental.production
                        else None
                    ),
                    checkout_date=rental.checkout_date,
                    due_date=rental.due_date,
                    return_date=rental.return_date,
                    is_overdue=rental.is_overdue,
                    items=[
                        PortalCostume.model_validate(line.costume_item)
                        for line in rental.items
                    ],
                )
                for rental in rentals
            ],
        )


# Type aliases for dependency injection
RentalSvc = Annotated[RentalService, Depends(RentalService)]
PortalSvc = Annotated[PortalService, Depends(PortalService)]
