from src.crudwizard.schemas.auth import LoginRequest, TokenResponse
from src.crudwizard.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate
from src.crudwizard.schemas.user import UserCreate, UserRead

__all__ = [
    # Auth
    "LoginRequest",
    "TokenResponse",
    # Project
    "ProjectCreate",
    "ProjectRead",
    "ProjectUpdate",
    # User
    "UserCreate",
    "UserRead",
]
