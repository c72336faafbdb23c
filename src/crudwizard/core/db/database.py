"""Database handle and startup initialization."""

from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlmodel import SQLModel

from src.crudwizard.core.config import Settings, get_settings
from src.crudwizard.core.db.dsn import describe_target, resolve_connection_string
from src.crudwizard.core.db.engine import create_database_engine, enable_query_logging
from src.crudwizard.core.db.errors import DatabaseConnectionError
from src.crudwizard.core.db.migrations import auto_migrate
from src.crudwizard.core.db.validation import ValidatingSession, register_validation_hooks
from src.crudwizard.core.logging import get_logger
from src.crudwizard.models import MIGRATED_MODELS

logger = get_logger(__name__)


@dataclass
class Database:
    """Initialized database: engine, session factory and the migrated models.

    Passed explicitly to whatever needs database access; the web app keeps
    it on ``app.state.database``.
    """

    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    models: tuple[type[SQLModel], ...] = field(default_factory=tuple)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession]:
        """Open a session. Commit is left to the caller."""
        async with self.session_factory() as session:
            yield session

    async def dispose(self) -> None:
        """Close all pooled connections. Call during shutdown."""
        await self.engine.dispose()


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        sync_session_class=ValidatingSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def _check_connection(engine: AsyncEngine) -> None:
    async with engine.connect() as connection:
        await connection.execute(text("SELECT 1"))


async def initialize_database(
    settings: Settings | None = None,
    *,
    engine: AsyncEngine | None = None,
    models: Sequence[type[SQLModel]] = MIGRATED_MODELS,
) -> Database:
    """Connect, register validation hooks, enable query logging, auto-migrate.

    Args:
        settings: Settings to read the connection string from. Defaults to
            get_settings().
        engine: Optional engine override for testing. When given, the
            connection string is not used to build one.
        models: Models to migrate, in dependency order.

    Returns:
        The initialized Database.

    Raises:
        DatabaseConnectionError: If the connection cannot be opened. Nothing
            else is initialized in that case.
        SchemaMigrationError: If migrating one of the models fails.
    """
    if settings is None:
        settings = get_settings()

    conninfo = resolve_connection_string(settings.postgres_connection_string)
    if engine is None:
        logger.info("database_connecting", **describe_target(conninfo))
        engine = create_database_engine(conninfo, settings)

    try:
        await _check_connection(engine)
    except (OSError, SQLAlchemyError) as e:
        await engine.dispose()
        logger.error("database_connection_failed", error=str(e))
        raise DatabaseConnectionError(f"Could not connect to database: {e}") from e
    logger.info("database_connected")

    session_factory = create_session_factory(engine)
    register_validation_hooks(ValidatingSession)
    enable_query_logging(engine, log_parameters=settings.debug)

    await auto_migrate(engine, models)

    return Database(engine=engine, session_factory=session_factory, models=tuple(models))
