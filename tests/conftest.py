"""Root test fixtures shared across all test types.

Unit tests run the real initialization path against an in-memory SQLite
engine passed as an override. PostgreSQL-only tests live in
tests/integration/.
"""

import os

os.environ.setdefault("APP_ENV", "testing")
# Cheap hashing for tests
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "1024")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from src.crudwizard.core.config import Settings, get_settings
from src.crudwizard.core.db import Database, initialize_database
from src.crudwizard.main import create_app
from tests.helpers import register_and_login

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
async def sqlite_engine() -> AsyncGenerator[AsyncEngine]:
    """In-memory SQLite engine; StaticPool keeps one shared connection."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    await engine.dispose()


@pytest.fixture
async def database(settings: Settings, sqlite_engine: AsyncEngine) -> Database:
    """A fully initialized Database (hooks, logging, migrated tables) on SQLite."""
    return await initialize_database(settings, engine=sqlite_engine)


@pytest.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession]:
    """Session from the initialized database. Tests commit explicitly."""
    async with database.session() as session:
        yield session


@pytest.fixture
async def client(settings: Settings, database: Database) -> AsyncGenerator[AsyncClient]:
    """HTTP client against the app with the test database on app.state.

    ASGITransport does not run the lifespan, so the database is attached
    directly.
    """
    app = create_app(settings)
    app.state.database = database
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def auth_headers(client: AsyncClient) -> dict[str, str]:
    return await register_and_login(client, "owner@example.com")
