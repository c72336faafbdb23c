"""Database engine creation and query logging."""

import time
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.crudwizard.core.config import Settings
from src.crudwizard.core.db.dsn import build_database_url
from src.crudwizard.core.logging import get_logger

logger = get_logger("crudwizard.sql")

_QUERY_START_KEY = "crudwizard_query_start"
_LOG_PARAMETERS_OPTION = "crudwizard_log_parameters"


def create_database_engine(conninfo: str, settings: Settings) -> AsyncEngine:
    """Create the async engine for a libpq connection string.

    No connection is made here; the engine connects lazily.
    """
    url, connect_args = build_database_url(conninfo)
    return create_async_engine(
        url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def _before_cursor_execute(
    conn: Any,
    cursor: Any,
    statement: str,
    parameters: Any,
    context: Any,
    executemany: bool,
) -> None:
    conn.info.setdefault(_QUERY_START_KEY, []).append(time.perf_counter())


def _after_cursor_execute(
    conn: Any,
    cursor: Any,
    statement: str,
    parameters: Any,
    context: Any,
    executemany: bool,
) -> None:
    starts = conn.info.get(_QUERY_START_KEY)
    duration_ms = None
    if starts:
        duration_ms = round((time.perf_counter() - starts.pop()) * 1000, 3)
    fields: dict[str, Any] = {}
    # Bound values include password and token hashes
    if conn.get_execution_options().get(_LOG_PARAMETERS_OPTION):
        fields["parameters"] = repr(parameters)
    logger.info(
        "sql_query",
        statement=statement,
        executemany=executemany,
        duration_ms=duration_ms,
        **fields,
    )


def enable_query_logging(engine: AsyncEngine, *, log_parameters: bool = False) -> None:
    """Log every statement executed through the engine. Safe to call twice.

    Bound parameter values are only logged when log_parameters is set.
    """
    sync_engine = engine.sync_engine
    sync_engine.update_execution_options(**{_LOG_PARAMETERS_OPTION: log_parameters})
    if event.contains(sync_engine, "before_cursor_execute", _before_cursor_execute):
        return
    event.listen(sync_engine, "before_cursor_execute", _before_cursor_execute)
    event.listen(sync_engine, "after_cursor_execute", _after_cursor_execute)
