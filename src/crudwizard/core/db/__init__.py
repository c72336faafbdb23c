"""Database utilities - connection, initialization, migrations."""

from src.crudwizard.core.db.database import (
    Database,
    create_session_factory,
    initialize_database,
)
from src.crudwizard.core.db.dsn import build_database_url, resolve_connection_string
from src.crudwizard.core.db.engine import create_database_engine, enable_query_logging
from src.crudwizard.core.db.errors import (
    DatabaseConnectionError,
    DatabaseError,
    RecordValidationError,
    SchemaMigrationError,
)
from src.crudwizard.core.db.migrations import auto_migrate, migrate_model
from src.crudwizard.core.db.validation import ValidatingSession, register_validation_hooks

__all__ = [
    # Handle
    "Database",
    "create_session_factory",
    "initialize_database",
    # Connection
    "build_database_url",
    "create_database_engine",
    "enable_query_logging",
    "resolve_connection_string",
    # Migrations
    "auto_migrate",
    "migrate_model",
    # Validation
    "ValidatingSession",
    "register_validation_hooks",
    # Errors
    "DatabaseConnectionError",
    "DatabaseError",
    "RecordValidationError",
    "SchemaMigrationError",
]
