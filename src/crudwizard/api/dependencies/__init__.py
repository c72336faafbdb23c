"""FastAPI dependency injection definitions."""

from src.crudwizard.api.dependencies.auth import (
    BearerToken,
    CurrentUser,
    get_bearer_token,
    get_current_user,
)
from src.crudwizard.api.dependencies.db import (
    DatabaseDep,
    DBSession,
    get_database,
    get_db_session,
)
from src.crudwizard.api.dependencies.services import AuthServiceDep, get_auth_service

__all__ = [
    # Database
    "DBSession",
    "DatabaseDep",
    "get_database",
    "get_db_session",
    # Auth
    "BearerToken",
    "CurrentUser",
    "get_bearer_token",
    "get_current_user",
    # Services
    "AuthServiceDep",
    "get_auth_service",
]
