"""Organization-scoped data access.

Every tenant-owned query goes through an ``OrganizationScope`` so the
``organization_id`` filter cannot be forgotten. Repositories receive the
caller's ``OrgContext`` explicitly on each call.
"""

from typing import TYPE_CHECKING, Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from costumetrack.api.dependencies import DBSession
from costumetrack.core.errors import ConflictError


if TYPE_CHECKING:
    from sqlalchemy.orm.interfaces import ORMOption

    from costumetrack.core.auth.schemas import OrgContext
    from costumetrack.core.pagination import PageParams


ModelT = TypeVar("ModelT")


class OrganizationScope:
    """Restricts statements and lookups to a single organization.

    Usage:
        scope = OrganizationScope(session, org.organization_id)
        customers = await scope.all(scope.select(Customer).order_by(Customer.name))
    """

    def __init__(self, session: AsyncSession, organization_id: UUID) -> None:
        self.session = session
        self.organization_id = organization_id

    def apply(self, statement: Select[Any], model: Any) -> Select[Any]:
        """Apply the organization filter for ``model`` to a statement."""
        return statement.where(model.organization_id == self.organization_id)

    def select(self, model: type[ModelT], *options: "ORMOption") -> Select[tuple[ModelT]]:
        """Start a SELECT of ``model`` already filtered to this organization."""
        stmt = self.apply(select(model), model)
        if options:
            stmt = stmt.options(*options)
        return stmt

    async def get(
        self, model: type[ModelT], ident: UUID, *options: "ORMOption"
    ) -> ModelT | None:
        """Get an entity by ID, or None when absent or owned elsewhere."""
        stmt = self.select(model, *options).where(model.id == ident)  # type: ignore[attr-defined]
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def all(self, statement: Select[Any]) -> list[Any]:
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    def add(self, instance: Any) -> None:
        """Add an instance, stamping it with this organization."""
        instance.organization_id = self.organization_id
        self.session.add(instance)


class ScopedRepository(Generic[ModelT]):
    """Base repository for organization-owned models.

    Subclasses set ``model`` and the messages used for missing rows and
    unique-key collisions.
    """

    model: type[ModelT]
    conflict_message: str = "Resource conflict"
    in_use_message: str = "Resource is still in use"

    def __init__(self, session: DBSession) -> None:
        self.session = session

    def scope(self, org: "OrgContext") -> OrganizationScope:
        return OrganizationScope(self.session, org.organization_id)

    async def get(
        self, org: "OrgContext", ident: UUID, *options: "ORMOption"
    ) -> ModelT | None:
        return await self.scope(org).get(self.model, ident, *options)

    async def create(self, org: "OrgContext", instance: ModelT) -> ModelT:
        """Insert a new row owned by the caller's organization.

        Raises:
            ConflictError: If a unique constraint rejects the row
        """
        try:
            async with self.session.begin_nested():
                self.scope(org).add(instance)
                await self.session.flush()
        except IntegrityError as e:
            raise ConflictError(self.conflict_message) from e
        await self.session.refresh(instance)
        return instance

    async def save(self, instance: ModelT) -> ModelT:
        """Flush pending changes on an already scoped instance.

        Raises:
            ConflictError: If a unique constraint rejects the change
        """
        try:
            async with self.session.begin_nested():
                await self.session.flush()
        except IntegrityError as e:
            raise ConflictError(self.conflict_message) from e
        await self.session.refresh(instance)
        return instance

    async def delete(self, instance: ModelT) -> None:
        """Delete a row.

        Raises:
            ConflictError: If other rows still reference it
        """
        try:
            async with self.session.begin_nested():
                await self.session.delete(instance)
                await self.session.flush()
        except IntegrityError as e:
            raise ConflictError(self.in_use_message) from e

    async def paginate(
        self, statement: Select[Any], params: "PageParams"
    ) -> tuple[list[ModelT], int]:
        """Run a scoped SELECT for one page.

        Returns:
            Tuple of (rows on the page, total matching rows)
        """
        count_stmt = select(func.count()).select_from(
            statement.order_by(None).subquery()
        )
        total = (await self.session.execute(count_stmt)).scalar_one()

        result = await self.session.execute(
            statement.offset(params.offset).limit(params.page_size)
        )
        return list(result.scalars().unique().all()), total
