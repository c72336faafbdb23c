"""User endpoints."""

from fastapi import APIRouter, HTTPException, status

from src.crudwizard.api.dependencies import AuthServiceDep, CurrentUser
from src.crudwizard.schemas.user import UserCreate, UserRead
from src.crudwizard.services import EmailAlreadyRegisteredError

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "User registered"},
        409: {"description": "Email already registered"},
    },
)
async def register_user(data: UserCreate, service: AuthServiceDep) -> UserRead:
    """Register a new user account."""
    try:
        user = await service.register(data)
    except EmailAlreadyRegisteredError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return UserRead.model_validate(user)


@router.get(
    "/me",
    response_model=UserRead,
    responses={
        200: {"description": "Current user profile"},
        401: {"description": "Not authenticated"},
    },
)
async def get_current_user(current_user: CurrentUser) -> UserRead:
    """Get current authenticated user."""
    return UserRead.model_validate(current_user)
