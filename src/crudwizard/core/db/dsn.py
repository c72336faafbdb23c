"""PostgreSQL connection string handling.

Connection strings use libpq syntax, either keyword/value
(``user=crudwizard dbname=crudwizard sslmode=disable``) or URI
(``postgresql://crudwizard@localhost/crudwizard``). Both are parsed with
libpq itself via psycopg2 and rebuilt as a SQLAlchemy URL for asyncpg.
"""

import ssl
from typing import Any

import psycopg2
from psycopg2.extensions import parse_dsn
from sqlalchemy.engine import URL

from src.crudwizard.core.config import DEFAULT_CONNECTION_STRING
from src.crudwizard.core.db.errors import DatabaseConnectionError

ASYNC_DRIVER = "postgresql+asyncpg"

SSL_MODES = ("disable", "allow", "prefer", "require", "verify-ca", "verify-full")


def resolve_connection_string(value: str | None) -> str:
    """Return the configured connection string, or the default when unset or empty."""
    if value is None or value == "":
        return DEFAULT_CONNECTION_STRING
    return value


def parse_connection_string(conninfo: str) -> dict[str, str]:
    """Parse a libpq connection string into its parameters."""
    try:
        return parse_dsn(conninfo)
    except psycopg2.ProgrammingError as e:
        raise DatabaseConnectionError(f"Invalid connection string: {e}") from e


def _ssl_connect_arg(params: dict[str, str]) -> str | ssl.SSLContext:
    """Map libpq sslmode/sslrootcert onto asyncpg's ssl argument."""
    ssl_mode = params.get("sslmode", "prefer")
    if ssl_mode not in SSL_MODES:
        raise DatabaseConnectionError(f"Invalid sslmode: {ssl_mode!r}")

    root_cert = params.get("sslrootcert")
    if ssl_mode in ("verify-ca", "verify-full") and root_cert:
        ssl_context = ssl.create_default_context(cafile=root_cert)
        ssl_context.check_hostname = ssl_mode == "verify-full"
        ssl_context.verify_mode = ssl.CERT_REQUIRED
        return ssl_context

    # asyncpg understands the libpq mode names directly
    return ssl_mode


def build_database_url(conninfo: str) -> tuple[URL, dict[str, Any]]:
    """Convert a libpq connection string into an asyncpg URL and connect args.

    Returns:
        Tuple of (url, connect_args) for create_async_engine.

    Raises:
        DatabaseConnectionError: If the string cannot be parsed, or names an
            unknown sslmode or a non-numeric port or connect_timeout.
    """
    params = parse_connection_string(conninfo)

    port = params.get("port")
    try:
        port_number = int(port) if port else None
    except ValueError as e:
        raise DatabaseConnectionError(f"Invalid port: {port!r}") from e

    url = URL.create(
        ASYNC_DRIVER,
        username=params.get("user"),
        password=params.get("password"),
        host=params.get("host") or params.get("hostaddr"),
        port=port_number,
        database=params.get("dbname"),
    )

    connect_args: dict[str, Any] = {"ssl": _ssl_connect_arg(params)}
    if "connect_timeout" in params:
        try:
            connect_args["timeout"] = float(params["connect_timeout"])
        except ValueError as e:
            raise DatabaseConnectionError(
                f"Invalid connect_timeout: {params['connect_timeout']!r}"
            ) from e
    if "application_name" in params:
        connect_args["server_settings"] = {"application_name": params["application_name"]}

    return url, connect_args


def describe_target(conninfo: str) -> dict[str, str | None]:
    """Loggable description of the connection target. Never includes the password."""
    try:
        params = parse_dsn(conninfo)
    except psycopg2.ProgrammingError:
        return {"host": None, "dbname": None, "user": None}
    return {
        "host": params.get("host") or params.get("hostaddr") or "localhost",
        "dbname": params.get("dbname"),
        "user": params.get("user"),
    }
