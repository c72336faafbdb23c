"""Integration fixtures - need a PostgreSQL server.

Set POSTGRES_CONNECTION_STRING to a disposable database to run these.
"""

import os
from collections.abc import AsyncGenerator

import pytest
from sqlalchemy import text

from src.crudwizard.core.config import Settings
from src.crudwizard.core.db import Database, initialize_database


def pytest_collection_modifyitems(config, items):
    if os.environ.get("POSTGRES_CONNECTION_STRING"):
        return
    skip = pytest.mark.skip(reason="POSTGRES_CONNECTION_STRING not set")
    for item in items:
        if "integration" in item.nodeid.split("/"):
            item.add_marker(skip)


@pytest.fixture
def pg_settings() -> Settings:
    return Settings(_env_file=None)


async def _drop_tables(database: Database) -> None:
    async with database.engine.begin() as conn:
        await conn.execute(text("DROP TABLE IF EXISTS auth_tokens, projects, users CASCADE"))


@pytest.fixture
async def pg_database(pg_settings: Settings) -> AsyncGenerator[Database]:
    """Initialized database on a clean schema; tables are dropped afterwards."""
    database = await initialize_database(pg_settings)
    await _drop_tables(database)
    await database.dispose()

    database = await initialize_database(pg_settings)
    yield database
    await _drop_tables(database)
    await database.dispose()
