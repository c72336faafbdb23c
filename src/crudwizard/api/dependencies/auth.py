"""Authentication dependencies."""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from src.crudwizard.api.dependencies.services import AuthServiceDep
from src.crudwizard.core.logging import bind_user_context
from src.crudwizard.models import User


def get_bearer_token(
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )
    token = authorization[7:].strip()
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return token


BearerToken = Annotated[str, Depends(get_bearer_token)]


async def get_current_user(token: BearerToken, auth_service: AuthServiceDep) -> User:
    user = await auth_service.get_user_for_token(token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    bind_user_context(user.id)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
