"""
Pytest configuration and fixtures.
Provides test app client, async DB session replacement and signed tokens.
"""

import os

# Must be set before the app (and its settings) are imported
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from quotegen.main import app
from quotegen.core.security import create_access_token
from quotegen.db.base import Base
from quotegen.db.session import get_db
from quotegen.models.user import UserRole, UserRoleAssignment
from quotegen.models.rate_card import RateCardItem


# Test database URL (in-memory SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ADMIN_PRINCIPAL = "admin-principal"
USER_PRINCIPAL = "user-principal"
GUEST_PRINCIPAL = "guest-principal"


def auth_headers(principal: str) -> dict:
    """Bearer header for a principal."""
    token = create_access_token({"sub": principal})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
async def test_session_maker():
    """
    Create a sessionmaker bound to a fresh in-memory database.
    """
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture(scope="function")
async def test_db_session(test_session_maker):
    """A session on the test database, for service and repository tests."""
    async with test_session_maker() as session:
        yield session


@pytest.fixture(scope="function")
async def test_client(test_session_maker):
    """
    Create a test HTTP client whose requests use the test database.
    Admin and user principals are registered up front.
    """
    async with test_session_maker() as session:
        session.add_all([
            UserRoleAssignment(principal=ADMIN_PRINCIPAL, role=UserRole.ADMIN),
            UserRoleAssignment(principal=USER_PRINCIPAL, role=UserRole.USER),
        ])
        await session.commit()

    async def override_get_db():
        async with test_session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return auth_headers(ADMIN_PRINCIPAL)


@pytest.fixture
def user_headers():
    return auth_headers(USER_PRINCIPAL)


@pytest.fixture
def guest_headers():
    return auth_headers(GUEST_PRINCIPAL)


@pytest.fixture
async def seeded_rate_card(test_session_maker):
    """Two rate card items: A (std 100, ops 80) and B (std 50, ops 60)."""
    async with test_session_maker() as session:
        session.add_all([
            RateCardItem(
                id="A",
                item_ref_no="R-A",
                category="Cloud",
                subcategory="Compute",
                detailed_description="Virtual machine",
                ops_cost=80.0,
                standard_cost=100.0,
            ),
            RateCardItem(
                id="B",
                item_ref_no="R-B",
                category="Cloud",
                subcategory="Storage",
                detailed_description="",
                ops_cost=60.0,
                standard_cost=50.0,
            ),
        ])
        await session.commit()
    return ["A", "B"]


@pytest.fixture
def headers_for():
    """Build bearer headers for an arbitrary principal."""
    return auth_headers
