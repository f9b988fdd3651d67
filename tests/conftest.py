"""Pytest configuration and fixtures for orgadmin.

Every test gets a fresh in-memory SQLite database (aiosqlite, one shared
connection). HTTP tests use orgadmin.main:app with get_session_factory
overridden to point at that database.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-pytest-only-0123456789")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SEED_PERMISSIONS_ON_STARTUP", "false")

from collections.abc import AsyncIterator, Awaitable, Callable  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from orgadmin.api.v1.dependencies import get_session_factory  # noqa: E402
from orgadmin.application.dtos import OrganizationFields, OrganizationResult  # noqa: E402
from orgadmin.application.services import OrganizationService  # noqa: E402
from orgadmin.core.config import get_settings  # noqa: E402
from orgadmin.core.lifespan import seed_permission_catalogue  # noqa: E402
from orgadmin.core.permissions import (  # noqa: E402
    ADMIN_ROLE_KEY,
    ADMIN_ROLE_NAME,
    DEFAULT_PERMISSIONS,
)
from orgadmin.infrastructure.persistence.database import create_session_factory  # noqa: E402
from orgadmin.infrastructure.persistence.models import Base, User, UserRole  # noqa: E402
from orgadmin.infrastructure.persistence.unit_of_work import UnitOfWork  # noqa: E402
from orgadmin.infrastructure.security.jwt import create_access_token  # noqa: E402
from orgadmin.infrastructure.services import PermissionSeeder  # noqa: E402
from orgadmin.main import app  # noqa: E402

get_settings.cache_clear()


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """Fresh in-memory database with the full schema."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Application session factory (AuditedSession) bound to the test engine."""
    return create_session_factory(engine)


@pytest.fixture
def uow(session_factory: async_sessionmaker[AsyncSession]) -> UnitOfWork:
    return UnitOfWork(session_factory, timeout_seconds=10)


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI), backed by the test database."""
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def catalogue(uow: UnitOfWork) -> list[str]:
    """Seed the default permission catalogue; returns the inserted keys."""
    return await seed_permission_catalogue(uow)


def _org_fields(short_name: str, parent_id: int | None = None) -> OrganizationFields:
    return OrganizationFields(
        full_name=f"{short_name} LLC",
        short_name=short_name,
        address="1 Main Street",
        phone_number="+998901234567",
        tin="1234567890",
        email=f"{short_name.lower()}@example.com",
        rekvizit="acc 20208000000000000001",
        parent_id=parent_id,
    )


@pytest.fixture
def make_org(
    uow: UnitOfWork,
) -> Callable[..., Awaitable[OrganizationResult]]:
    """Factory: create an organization as the unrestricted actor."""

    async def _make(short_name: str, parent_id: int | None = None) -> OrganizationResult:
        result = await OrganizationService(uow).create_organization(
            _org_fields(short_name, parent_id)
        )
        return result.unwrap()

    return _make


@pytest.fixture
def make_user(
    uow: UnitOfWork,
) -> Callable[..., Awaitable[int]]:
    """Factory: insert a user directly (optionally with roles); returns its id."""

    async def _make(
        organization_id: int,
        username: str,
        role_ids: tuple[int, ...] = (),
        *,
        is_active: bool = True,
    ) -> int:
        async with uow.transaction() as session:
            user = User(
                organization_id=organization_id,
                username=username,
                email=f"{username}@example.com",
                is_active=is_active,
            )
            session.add(user)
            await session.flush()
            for role_id in role_ids:
                session.add(UserRole(user_id=user.id, role_id=role_id))
            return user.id

    return _make


def _bearer(user_id: int) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture
def headers_for() -> Callable[[int], dict[str, str]]:
    """Factory: Authorization header carrying a valid access token for a user id."""
    return _bearer


@pytest.fixture
async def admin_headers(
    uow: UnitOfWork,
    catalogue: list[str],
    make_org: Callable[..., Awaitable[OrganizationResult]],
    make_user: Callable[..., Awaitable[int]],
) -> dict[str, str]:
    """Headers for an admin holding every catalogue permission (unscoped)."""
    async with uow.transaction() as session:
        role = await PermissionSeeder(session).ensure_role(
            ADMIN_ROLE_KEY, ADMIN_ROLE_NAME, DEFAULT_PERMISSIONS
        )
        role_id = role.id
    root = await make_org("Root")
    admin_id = await make_user(root.id, "admin", (role_id,))
    return _bearer(admin_id)
