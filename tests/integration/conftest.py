"""Integration test fixtures for database and HTTP client operations.

These fixtures require a reachable PostgreSQL database (DATABASE_URL); the
tests are skipped when it is not available.
"""

import asyncio
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool

from src.projecthub import main
from src.projecthub.core import db
from src.projecthub.core import redis as redis_core
from src.projecthub.core.config import get_settings
from src.projecthub.core.db import run_migrations_sync
from src.projecthub.main import create_app
from src.projecthub.models import User
from tests.factories import UserFactory
from tests.utils.cleanup import truncate_all


@pytest.fixture(autouse=True)
async def _reset_redis_between_tests() -> AsyncGenerator[None]:
    """Redis clients hold a reference to the loop they were created on."""
    redis_core.reset_redis_state()
    yield
    await redis_core.close_redis()


@pytest.fixture(autouse=True)
def _reset_health_cache() -> None:
    main._health_cache = None
    main._health_cache_time = 0


@pytest.fixture(scope="function")
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Create test database engine and ensure migrations are applied."""
    await db.dispose_engine()

    settings = get_settings()
    test_engine = create_async_engine(settings.database_url, poolclass=NullPool)
    try:
        async with test_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (OSError, SQLAlchemyError) as e:
        await test_engine.dispose()
        pytest.skip(f"Database not available: {e}")

    await asyncio.to_thread(run_migrations_sync)

    yield test_engine

    async with test_engine.begin() as conn:
        await truncate_all(conn)
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session for arranging and inspecting rows. Call commit() to persist."""
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


async def _create_user(db_session: AsyncSession, username: str, name: str) -> User:
    user = UserFactory.build(username=username, name=name, email=f"{username}@example.com")
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
async def alice(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "alice", "Alice")


@pytest.fixture
async def bob(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "bob", "Bob")


@pytest.fixture
async def carol(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "carol", "Carol")


@pytest.fixture
async def client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    """HTTP client bound to a fresh app. Pass auth headers per request."""
    await db.dispose_engine()

    app = create_app()
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    await db.dispose_engine()
