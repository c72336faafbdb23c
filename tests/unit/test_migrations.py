"""Tests for schema auto-migration."""

import pytest
from sqlalchemy import inspect, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine

from src.crudwizard.core.db import auto_migrate, migrate_model
from src.crudwizard.models import MIGRATED_MODELS, Project, User

pytestmark = pytest.mark.unit


async def _columns(engine: AsyncEngine, table: str) -> set[str]:
    async with engine.connect() as conn:
        columns = await conn.run_sync(lambda c: inspect(c).get_columns(table))
    return {column["name"] for column in columns}


async def _indexes(engine: AsyncEngine, table: str) -> set[str]:
    async with engine.connect() as conn:
        indexes = await conn.run_sync(lambda c: inspect(c).get_indexes(table))
    return {index["name"] for index in indexes}


class TestMigrateModel:
    async def test_creates_missing_table(self, sqlite_engine: AsyncEngine):
        async with sqlite_engine.begin() as conn:
            changes = await conn.run_sync(migrate_model, User)

        assert changes == ["create_table"]
        assert {"id", "email", "hashed_password", "full_name"} <= await _columns(
            sqlite_engine, "users"
        )

    async def test_adds_missing_columns_and_keeps_rows(self, sqlite_engine: AsyncEngine):
        # An older users table without full_name, is_active and timestamps
        async with sqlite_engine.begin() as conn:
            await conn.execute(
                text(
                    "CREATE TABLE users ("
                    "id CHAR(32) PRIMARY KEY, "
                    "email VARCHAR(255) NOT NULL, "
                    "hashed_password VARCHAR(255) NOT NULL)"
                )
            )
            await conn.execute(
                text("INSERT INTO users (id, email, hashed_password) VALUES ('a', 'a@b.co', 'h')")
            )

        async with sqlite_engine.begin() as conn:
            changes = await conn.run_sync(migrate_model, User)

        assert "add_column:full_name" in changes
        assert "add_column:is_active" in changes
        assert "add_column:created_at" in changes
        assert {"full_name", "is_active", "created_at", "updated_at"} <= await _columns(
            sqlite_engine, "users"
        )
        assert "ix_users_email" in await _indexes(sqlite_engine, "users")

        async with sqlite_engine.connect() as conn:
            count = await conn.scalar(text("SELECT COUNT(*) FROM users"))
        assert count == 1

    async def test_never_drops_extra_columns(self, sqlite_engine: AsyncEngine):
        async with sqlite_engine.begin() as conn:
            await conn.run_sync(migrate_model, User)
            await conn.execute(text("ALTER TABLE users ADD COLUMN legacy_flag BOOLEAN"))

        async with sqlite_engine.begin() as conn:
            await conn.run_sync(migrate_model, User)

        assert "legacy_flag" in await _columns(sqlite_engine, "users")

    async def test_adds_missing_unique_constraint(self, sqlite_engine: AsyncEngine):
        # An older projects table created before names were unique per owner
        async with sqlite_engine.begin() as conn:
            await conn.execute(
                text(
                    "CREATE TABLE projects ("
                    "id CHAR(32) PRIMARY KEY, "
                    "owner_id CHAR(32) NOT NULL, "
                    "name VARCHAR(200) NOT NULL, "
                    "description VARCHAR(1000), "
                    "spec_url VARCHAR(2048), "
                    "created_at DATETIME NOT NULL, "
                    "updated_at DATETIME NOT NULL)"
                )
            )

        async with sqlite_engine.begin() as conn:
            changes = await conn.run_sync(migrate_model, Project)

        assert "add_constraint:uq_projects_owner_name" in changes
        assert "uq_projects_owner_name" in await _indexes(sqlite_engine, "projects")

        insert = text(
            "INSERT INTO projects (id, owner_id, name, created_at, updated_at) "
            "VALUES (:id, 'owner', 'same', '2026-01-01', '2026-01-01')"
        )
        async with sqlite_engine.begin() as conn:
            await conn.execute(insert, {"id": "p1"})
        with pytest.raises(IntegrityError):
            async with sqlite_engine.begin() as conn:
                await conn.execute(insert, {"id": "p2"})

        async with sqlite_engine.begin() as conn:
            changes = await conn.run_sync(migrate_model, Project)
        assert "add_constraint:uq_projects_owner_name" not in changes

    async def test_current_table_gets_no_new_columns(self, sqlite_engine: AsyncEngine):
        async with sqlite_engine.begin() as conn:
            await conn.run_sync(migrate_model, User)
            await conn.run_sync(migrate_model, Project)

        async with sqlite_engine.begin() as conn:
            changes = await conn.run_sync(migrate_model, Project)

        assert not [change for change in changes if change.startswith("add_column")]


class TestAutoMigrate:
    async def test_creates_all_tables(self, sqlite_engine: AsyncEngine):
        await auto_migrate(sqlite_engine, MIGRATED_MODELS)

        async with sqlite_engine.connect() as conn:
            tables = await conn.run_sync(lambda c: inspect(c).get_table_names())
        assert {"users", "projects", "auth_tokens"} <= set(tables)

    async def test_is_idempotent(self, sqlite_engine: AsyncEngine):
        await auto_migrate(sqlite_engine, MIGRATED_MODELS)
        before = await _columns(sqlite_engine, "auth_tokens")

        await auto_migrate(sqlite_engine, MIGRATED_MODELS)

        assert await _columns(sqlite_engine, "auth_tokens") == before
