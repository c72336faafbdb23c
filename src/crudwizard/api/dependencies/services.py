"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.crudwizard.api.dependencies.db import DBSession
from src.crudwizard.services import AuthService


def get_auth_service(session: DBSession) -> AuthService:
    return AuthService(session)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
