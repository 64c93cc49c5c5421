"""Customer repository."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy import or_, select

from costumetrack.core.auth.schemas import OrgContext
from costumetrack.core.database import ScopedRepository
from costumetrack.core.pagination import PageParams
from costumetrack.modules.customers.models import Customer


class CustomerRepository(ScopedRepository[Customer]):
    model = Customer
    conflict_message = "Customer conflict"
    in_use_message = "This customer has rentals and cannot be deleted"

    async def search(
        self,
        org: OrgContext,
        params: PageParams,
        search: str | None = None,
    ) -> tuple[list[Customer], int]:
        """List customers by name, optionally matching name, e-mail or company."""
        stmt = self.scope(org).select(Customer)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    Customer.name.ilike(pattern),
                    Customer.email.ilike(pattern),
                    Customer.company.ilike(pattern),
                )
            )
        stmt = stmt.order_by(Customer.name.asc(), Customer.id)
        return await self.paginate(stmt, params)

    async def get_by_portal_token(self, token: str) -> Customer | None:
        """Resolve a portal-enabled customer across all organizations.

        The token is the only credential of the public portal, so this is
        the one unscoped customer lookup.
        """
        stmt = select(Customer).where(
            Customer.portal_token == token,
            Customer.portal_enabled.is_(True),
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()


# Type alias for dependency injection
CustomerRepo = Annotated[CustomerRepository, Depends(CustomerRepository)]
