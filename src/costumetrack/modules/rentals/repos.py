"""Rental repository.

Item status changes made by the rental lifecycle are single conditional
UPDATE statements; the affected row count tells the service whether
another request got there first.
"""

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import update

from costumetrack.core.auth.schemas import OrgContext
from costumetrack.core.database import OrganizationScope, ScopedRepository
from costumetrack.core.pagination import PageParams
from costumetrack.modules.inventory.models import CostumeItem, ItemStatus
from costumetrack.modules.rentals.models import Rental, RentalItem, RentalStatus


class RentalRepository(ScopedRepository[Rental]):
    model = Rental

    async def search(
        self,
        org: OrgContext,
        params: PageParams,
        status: RentalStatus | None = None,
    ) -> tuple[list[Rental], int]:
        """List rentals newest first, optionally by status."""
        stmt = self.scope(org).select(Rental)
        if status is not None:
            stmt = stmt.where(Rental.status == status)
        stmt = stmt.order_by(Rental.created_at.desc(), Rental.id)
        return await self.paginate(stmt, params)

    async def get_fresh(self, org: OrgContext, rental_id: UUID) -> Rental | None:
        """Reload a rental with its customer, production and items from the database."""
        stmt = (
            self.scope(org)
            .select(Rental)
            .where(Rental.id == rental_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_active(self, org: OrgContext, rental_id: UUID) -> Rental | None:
        stmt = (
            self.scope(org)
            .select(Rental)
            .where(Rental.id == rental_id, Rental.status == RentalStatus.ACTIVE)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_customer(
        self, organization_id: UUID, customer_id: UUID
    ) -> list[Rental]:
        """A customer's rentals, latest checkout first."""
        scope = OrganizationScope(self.session, organization_id)
        return await scope.all(
            scope.select(Rental)
            .where(Rental.customer_id == customer_id)
            .order_by(Rental.checkout_date.desc(), Rental.created_at.desc())
        )

    async def lock_items(self, org: OrgContext, item_ids: Sequence[UUID]) -> list[CostumeItem]:
        """Read the organization's items among ``item_ids`` with row locks."""
        scope = self.scope(org)
        stmt = (
            scope.select(CostumeItem)
            .where(CostumeItem.id.in_(item_ids))
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return await scope.all(stmt)

    async def add(self, org: OrgContext, rental: Rental) -> Rental:
        """Insert a rental and its line items without committing."""
        self.scope(org).add(rental)
        await self.session.flush()
        return rental

    async def claim_items(self, org: OrgContext, item_ids: Sequence[UUID]) -> int:
        """Flip AVAILABLE items to RENTED.

        Returns:
            Number of items claimed; less than ``len(item_ids)`` when any
            item was not AVAILABLE at the time of the UPDATE
        """
        stmt = (
            update(CostumeItem)
            .where(
                CostumeItem.organization_id == org.organization_id,
                CostumeItem.id.in_(item_ids),
                CostumeItem.status == ItemStatus.AVAILABLE,
            )
            .values(status=ItemStatus.RENTED)
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def mark_returned(self, org: OrgContext, rental_id: UUID) -> int:
        """Move an ACTIVE rental to RETURNED.

        Returns:
            1 if the rental was returned by this call, else 0
        """
        stmt = (
            update(Rental)
            .where(
                Rental.organization_id == org.organization_id,
                Rental.id == rental_id,
                Rental.status == RentalStatus.ACTIVE,
            )
            .values(status=RentalStatus.RETURNED, return_date=datetime.now(UTC))
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def record_return_conditions(self, items: Sequence[RentalItem]) -> None:
        """Record each item as coming back in the condition it went out."""
        for item in items:
            item.condition_in = item.condition_out
        await self.session.flush()

    async def release_costumes(self, org: OrgContext, item_ids: Sequence[UUID]) -> int:
        """Put rented items back to AVAILABLE."""
        stmt = (
            update(CostumeItem)
            .where(
                CostumeItem.organization_id == org.organization_id,
                CostumeItem.id.in_(item_ids),
                CostumeItem.status == ItemStatus.RENTED,
            )
            .values(status=ItemStatus.AVAILABLE)
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.session.execute(stmt)
        return result.rowcount


# Type alias for dependency injection
RentalRepo = Annotated[RentalRepository, Depends(RentalRepository)]
