"""Database initialization errors."""


class DatabaseError(Exception):
    """Base class for database setup failures."""


class DatabaseConnectionError(DatabaseError):
    """The database connection could not be opened.

    Covers malformed connection strings as well as network and
    authentication failures; the original error is chained as __cause__.
    """


class SchemaMigrationError(DatabaseError):
    """Auto-migration of a model's table failed."""

    def __init__(self, table: str, message: str):
        self.table = table
        super().__init__(f"Migration of table '{table}' failed: {message}")


class RecordValidationError(DatabaseError):
    """One or more records failed validation before flush."""

    def __init__(self, errors: dict[str, list[str]]):
        self.errors = errors
        summary = "; ".join(
            f"{name}: {', '.join(messages)}" for name, messages in errors.items()
        )
        super().__init__(f"Validation failed - {summary}")
