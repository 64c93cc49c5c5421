"""Pytest configuration and shared fixtures.

Tests run against an in-memory SQLite database. Each test works inside
one outer transaction that is rolled back afterwards; the application's
own transactions become SAVEPOINTs on that connection.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from costumetrack.core.auth import OrgContext, Role, create_access_token, hash_password
from costumetrack.core.database import get_db
from costumetrack.main import create_app
from costumetrack.models import (
    Base,
    CostumeItem,
    Customer,
    Organization,
    Production,
    User,
)
from tests.factories.customer import CustomerCreateFactory
from tests.factories.inventory import CostumeItemCreateFactory
from tests.factories.organization import OrganizationFactory
from tests.factories.user import UserFactory


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "correct-horse-battery"

# Hashing is deliberately slow; every fixture user shares one hash
TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)


@pytest.fixture
async def engine():
    """Create a fresh in-memory database with the full schema."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # pysqlite's own transaction handling breaks SAVEPOINT; take it over
    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, _connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db(engine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a transactional database session for tests.

    Each test runs in its own transaction that is rolled back
    after the test completes, ensuring test isolation.
    """
    async with engine.connect() as conn:
        await conn.begin()

        session_factory = async_sessionmaker(
            bind=conn,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
            join_transaction_mode="create_savepoint",
        )
        async with session_factory() as session:
            yield session

        await conn.rollback()


@pytest.fixture
async def app(db: AsyncSession):
    """Create test application instance."""
    application = create_app()

    # Override database dependency
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    application.dependency_overrides[get_db] = override_get_db

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as client:
        yield client


# ============================================================
# Organization and User Fixtures
# ============================================================


async def create_organization(db: AsyncSession, **overrides) -> Organization:
    organization = Organization(**OrganizationFactory.build(**overrides).model_dump())
    db.add(organization)
    await db.flush()
    await db.refresh(organization)
    return organization


async def create_user(
    db: AsyncSession,
    organization: Organization | None = None,
    role: Role = Role.MEMBER,
    **overrides,
) -> User:
    data = UserFactory.build(**overrides).model_dump()
    user = User(
        **data,
        password_hash=TEST_PASSWORD_HASH,
        role=role,
        organization_id=organization.id if organization else None,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


def bearer(user: User) -> dict[str, str]:
    """Authorization header for a user."""
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
async def organization(db: AsyncSession) -> Organization:
    """The organization most tests act in."""
    return await create_organization(db, name="Globe Theatre", slug="globe-theatre")


@pytest.fixture
async def other_organization(db: AsyncSession) -> Organization:
    """A second tenant whose data must stay invisible."""
    return await create_organization(db, name="Rose Playhouse", slug="rose-playhouse")


@pytest.fixture
async def owner(db: AsyncSession, organization: Organization) -> User:
    return await create_user(db, organization, Role.OWNER)


@pytest.fixture
async def member(db: AsyncSession, organization: Organization) -> User:
    return await create_user(db, organization, Role.MEMBER)


@pytest.fixture
async def other_owner(db: AsyncSession, other_organization: Organization) -> User:
    return await create_user(db, other_organization, Role.OWNER)


@pytest.fixture
async def new_user(db: AsyncSession) -> User:
    """A registered user who has not completed onboarding."""
    return await create_user(db)


@pytest.fixture
async def system_admin(db: AsyncSession) -> User:
    return await create_user(db, email="support@costumetrack.com")


@pytest.fixture
def owner_headers(owner: User) -> dict[str, str]:
    return bearer(owner)


@pytest.fixture
def member_headers(member: User) -> dict[str, str]:
    return bearer(member)


@pytest.fixture
def other_headers(other_owner: User) -> dict[str, str]:
    return bearer(other_owner)


@pytest.fixture
def new_user_headers(new_user: User) -> dict[str, str]:
    return bearer(new_user)


@pytest.fixture
def admin_headers(system_admin: User) -> dict[str, str]:
    return bearer(system_admin)


@pytest.fixture
def org_context(owner: User, organization: Organization) -> OrgContext:
    """Tenant context for calling services directly."""
    return OrgContext(
        organization_id=organization.id,
        user_id=owner.id,
        role=Role.OWNER,
    )


@pytest.fixture
def headers_for() -> Callable[[User], dict[str, str]]:
    return bearer


# ============================================================
# Tenant Data Fixtures
# ============================================================


@pytest.fixture
def make_item(
    db: AsyncSession, organization: Organization
) -> Callable[..., Awaitable[CostumeItem]]:
    """Insert costume items, in the default organization unless told otherwise."""

    async def _make(owner_org: Organization | None = None, **overrides) -> CostumeItem:
        data = CostumeItemCreateFactory.build(**overrides).model_dump(exclude={"photos"})
        item = CostumeItem(**data, organization_id=(owner_org or organization).id)
        db.add(item)
        await db.flush()
        await db.refresh(item)
        return item

    return _make


@pytest.fixture
def make_customer(
    db: AsyncSession, organization: Organization
) -> Callable[..., Awaitable[Customer]]:
    async def _make(owner_org: Organization | None = None, **overrides) -> Customer:
        data = CustomerCreateFactory.build(**overrides).model_dump()
        customer = Customer(**data, organization_id=(owner_org or organization).id)
        db.add(customer)
        await db.flush()
        await db.refresh(customer)
        return customer

    return _make


@pytest.fixture
def make_production(
    db: AsyncSession, organization: Organization
) -> Callable[..., Awaitable[Production]]:
    async def _make(owner_org: Organization | None = None, **overrides) -> Production:
        production = Production(
            name=overrides.pop("name", "The Tempest"),
            organization_id=(owner_org or organization).id,
            **overrides,
        )
        db.add(production)
        await db.flush()
        await db.refresh(production)
        return production

    return _make
