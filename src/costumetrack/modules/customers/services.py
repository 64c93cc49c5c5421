"""Customer service."""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from costumetrack.core.auth.backend import generate_portal_token
from costumetrack.core.auth.schemas import OrgContext
from costumetrack.core.errors import NotFoundError
from costumetrack.core.pagination import PageParams
from costumetrack.modules.customers.models import Customer
from costumetrack.modules.customers.repos import CustomerRepo
from costumetrack.modules.customers.schemas import (
    CustomerCreate,
    CustomerUpdate,
    PortalSettings,
    PortalUpdate,
)


logger = structlog.get_logger()


class CustomerService:
    """Customer CRUD and portal link management."""

    def __init__(self, repo: CustomerRepo) -> None:
        self.repo = repo

    async def list_customers(
        self, org: OrgContext, params: PageParams, search: str | None = None
    ) -> tuple[list[Customer], int]:
        search = search.strip() if search else None
        return await self.repo.search(org, params, search=search or None)

    async def get_customer(self, org: OrgContext, customer_id: UUID) -> Customer:
        customer = await self.repo.get(org, customer_id)
        if customer is None:
            raise NotFoundError(
                "Customer not found",
                resource="customer",
                resource_id=str(customer_id),
            )
        return customer

    async def create_customer(self, org: OrgContext, data: CustomerCreate) -> Customer:
        return await self.repo.create(org, Customer(**data.model_dump()))

    async def update_customer(
        self, org: OrgContext, customer_id: UUID, data: CustomerUpdate
    ) -> Customer:
        customer = await self.get_customer(org, customer_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if field == "name" and value is None:
                continue
            setattr(customer, field, value)
        return await self.repo.save(customer)

    async def delete_customer(self, org: OrgContext, customer_id: UUID) -> None:
        """Delete a customer without rentals.

        Raises:
            NotFoundError: If the customer is not in the organization
            ConflictError: If any rental references the customer
        """
        customer = await self.get_customer(org, customer_id)
        await self.repo.delete(customer)

    async def update_portal(
        self, org: OrgContext, customer_id: UUID, data: PortalUpdate
    ) -> PortalSettings:
        """Toggle the portal and issue tokens.

        Enabling a customer that has no token generates one; regeneration
        always replaces the token, which invalidates the old link.
        """
        customer = await self.get_customer(org, customer_id)

        if data.enabled is not None:
            customer.portal_enabled = data.enabled
        if data.regenerate_token or (customer.portal_enabled and not customer.portal_token):
            customer.portal_token = generate_portal_token()

        customer = await self.repo.save(customer)
        logger.info(
            "customer_portal_updated",
            customer_id=str(customer.id),
            portal_enabled=customer.portal_enabled,
        )
        return PortalSettings.model_validate(customer)


# Type alias for dependency injection
CustomerSvc = Annotated[CustomerService, Depends(CustomerService)]
