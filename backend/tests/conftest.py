"""
Birdhouse Backend - Test Configuration (conftest.py)
=====================================================

Shared pytest fixtures for the test suite.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests (no DB)
    ├── sample_bird_data: field values for building Bird instances
    ├── test_engine: fresh in-memory SQLite database with the schema created
    └── test_client: HTTPX AsyncClient talking to the app, whose session
                     dependency is pointed at test_engine
"""

import os

# Must run before anything imports app.config
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_REQUESTS"] = "10000"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.database import Base, engine_options, get_db_session
from app.models.bird import Bird  # noqa: F401  registers the table on Base.metadata


# ══════════════════════════════════════════════════════════════════════════
# Unit-test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_bird(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = bird
            result = await bird_service.get_bird(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_bird_data():
    return {
        "id": 1,
        "name": "Robin",
        "species": "Turdus migratorius",
        "likes": 3,
    }


# ══════════════════════════════════════════════════════════════════════════
# Database-backed Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_engine():
    """
    A fresh in-memory SQLite database per test, schema created from the models.

    Built with the same engine options the app uses, so concurrent requests
    in a test see the same connection handling as in production.
    """
    url = "sqlite+aiosqlite:///:memory:"
    engine = create_async_engine(url, **engine_options(url))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(test_engine):
    """
    HTTPX AsyncClient wired to the FastAPI app through ASGITransport.

    get_db_session is overridden with a session on test_engine that commits
    and rolls back the same way the production dependency does.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/birds")
            assert response.status_code == 200
    """
    from app.main import app

    session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
