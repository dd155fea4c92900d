"""
Test fixtures and configuration.
"""

from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from douanier.config.settings import Settings, override_settings, reset_settings
from douanier.di.container import get_container, reset_container
from douanier.domain.entities.shop import Shop
from douanier.infrastructure.persistence.database import Database
from douanier.infrastructure.persistence.repositories.shop_repository import (
    ShopRepository,
)
from tests.helpers.fakes import FakeBalanceOracle

TEST_SHOP = "test-store.myshopify.com"


@pytest.fixture
def settings(tmp_path) -> Settings:
    """
    Provide isolated settings.

    Each test gets its own SQLite file so tests never share state.
    """
    test_settings = Settings(
        ENV="test",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'douanier_test.db'}",
        JWT_SECRET_KEY="test-secret-key-not-for-production",
        LOG_LEVEL="WARNING",
        SESSION_TTL_MINUTES=15,
        DISCOUNT_CODE_PREFIX="DKG",
        ORACLE_CALL_TIMEOUT=0.5,
    )
    override_settings(test_settings)
    reset_container()

    yield test_settings

    reset_container()
    reset_settings()


@pytest_asyncio.fixture
async def test_db(settings: Settings) -> AsyncGenerator[Database, None]:
    """
    Create test database and tables.

    Each test gets a clean database.
    """
    db = Database(database_url=settings.DATABASE_URL, echo=False)
    await db.connect()
    await db.create_all()

    yield db

    await db.disconnect()


@pytest_asyncio.fixture
async def db_session(test_db: Database) -> AsyncGenerator[AsyncSession, None]:
    """Provide database session for tests."""
    async with test_db.session() as session:
        yield session


@pytest_asyncio.fixture
async def shop(test_db: Database) -> Shop:
    """Seed the installed test shop."""
    async with test_db.session() as session:
        return await ShopRepository(session).create(Shop(shop_domain=TEST_SHOP))


@pytest.fixture
def fake_oracle() -> FakeBalanceOracle:
    """Provide in-memory balance oracle for chain 1."""
    return FakeBalanceOracle(chains=(1,))


@pytest_asyncio.fixture
async def client(
    settings: Settings, fake_oracle: FakeBalanceOracle
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """
    Provide HTTP client for API testing.

    The container's database points at the per-test SQLite file; the
    balance oracle is replaced with the in-memory fake.
    """
    from douanier.di.dependencies import get_balance_oracle
    from douanier.main import create_app

    container = get_container()
    await container.initialize()
    await container.database.create_all()

    app = create_app(settings)
    app.dependency_overrides[get_balance_oracle] = lambda: fake_oracle

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    await container.shutdown()


@pytest_asyncio.fixture
async def installed_shop(client: httpx.AsyncClient) -> Shop:
    """Seed the test shop in the database the API uses."""
    async with get_container().database.session() as session:
        return await ShopRepository(session).create(Shop(shop_domain=TEST_SHOP))
