"""Schema auto-migration.

Brings each model's table in line with its declaration: missing tables are
created, missing columns, indexes and unique constraints are added. Other
differences are logged and left alone. Nothing is ever dropped or
altered, so running it against an up-to-date schema is a no-op.
"""

from collections.abc import Callable, Sequence
from typing import Any

from alembic.autogenerate import compare_metadata
from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import Column, Connection, Table, UniqueConstraint, inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel import SQLModel

from src.crudwizard.core.db.errors import SchemaMigrationError
from src.crudwizard.core.logging import get_logger

logger = get_logger(__name__)


def _only_table(table_name: str) -> Callable[..., bool]:
    """Alembic include_object filter restricting comparison to one table."""

    def include_object(obj: Any, name: str | None, type_: str, reflected: bool, compare_to: Any) -> bool:
        if type_ == "table":
            return name == table_name
        owner = getattr(obj, "table", None)
        return owner is not None and owner.name == table_name

    return include_object


def _nullable_copy(column: Column) -> Column:
    """Standalone copy of a column for ALTER TABLE ADD COLUMN.

    Added columns are nullable: existing rows have no value for them.
    """
    server_default = column.server_default.arg if column.server_default is not None else None  # type: ignore[attr-defined]
    return Column(column.name, column.type, nullable=True, server_default=server_default)


def _add_unique_constraint(
    operations: Operations, connection: Connection, constraint: UniqueConstraint
) -> bool:
    """Add a missing unique constraint. Returns False when nothing was needed."""
    table = constraint.table
    columns = [column.name for column in constraint.columns]
    if connection.dialect.name != "sqlite":
        operations.create_unique_constraint(constraint.name, table.name, columns, schema=table.schema)
        return True

    # SQLite cannot ALTER TABLE ADD CONSTRAINT; a unique index enforces the same rule
    existing = {index["name"] for index in inspect(connection).get_indexes(table.name, schema=table.schema)}
    if constraint.name in existing:
        return False
    operations.create_index(constraint.name, table.name, columns, unique=True, schema=table.schema)
    return True


def _add_missing(connection: Connection, table: Table) -> list[str]:
    context = MigrationContext.configure(
        connection,
        opts={"include_object": _only_table(table.name), "compare_type": False},
    )
    operations = Operations(context)
    changes: list[str] = []

    for diff in compare_metadata(context, table.metadata):
        # Column modifications arrive as nested lists; they are never applied
        if not isinstance(diff, tuple):
            logger.info("schema_diff_skipped", table=table.name, kind=diff[0][0])
            continue
        kind = diff[0]
        if kind == "add_column":
            _, schema, table_name, column = diff
            operations.add_column(table_name, _nullable_copy(column), schema=schema)
            changes.append(f"add_column:{column.name}")
        elif kind == "add_index":
            index = diff[1]
            operations.create_index(
                index.name,
                table.name,
                [column.name for column in index.columns],
                unique=bool(index.unique),
                schema=table.schema,
                if_not_exists=True,
            )
            changes.append(f"add_index:{index.name}")
        elif kind == "add_constraint" and isinstance(diff[1], UniqueConstraint):
            if _add_unique_constraint(operations, connection, diff[1]):
                changes.append(f"add_constraint:{diff[1].name}")
        else:
            logger.info("schema_diff_skipped", table=table.name, kind=kind)

    return changes


def migrate_model(connection: Connection, model: type[SQLModel]) -> list[str]:
    """Synchronize one model's table on a sync connection.

    Returns:
        Description of the changes applied, empty when the table was current.

    Raises:
        SchemaMigrationError: If any DDL statement fails.
    """
    table: Table = model.__table__  # type: ignore[attr-defined]
    try:
        if not inspect(connection).has_table(table.name, schema=table.schema):
            table.create(connection)
            return ["create_table"]
        return _add_missing(connection, table)
    except SQLAlchemyError as e:
        raise SchemaMigrationError(table.name, str(e)) from e


async def auto_migrate(engine: AsyncEngine, models: Sequence[type[SQLModel]]) -> None:
    """Migrate each model in order, one transaction per model."""
    for model in models:
        async with engine.begin() as connection:
            changes = await connection.run_sync(migrate_model, model)
        logger.info(
            "schema_migrated",
            table=model.__tablename__,
            changes=changes,
        )
