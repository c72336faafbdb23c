"""Repository layer - data access abstraction."""

from src.crudwizard.repositories.base import BaseRepository
from src.crudwizard.repositories.project import ProjectRepository
from src.crudwizard.repositories.token import AuthTokenRepository
from src.crudwizard.repositories.user import UserRepository

__all__ = [
    "AuthTokenRepository",
    "BaseRepository",
    "ProjectRepository",
    "UserRepository",
]
