"""Authentication endpoints - issue and revoke auth tokens."""

from fastapi import APIRouter, HTTPException, status

from src.crudwizard.api.dependencies import AuthServiceDep, BearerToken
from src.crudwizard.schemas.auth import LoginRequest, TokenResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/tokens",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {
            "description": "Token issued",
            "content": {
                "application/json": {
                    "example": {
                        "access_token": "x0l8YfP0S1hQ2rJ0lq2N8m6bL9s1WcG3f5T6u7V8w9A",
                        "token_type": "bearer",
                        "expires_at": "2024-02-14T10:30:00",
                    }
                }
            },
        },
        401: {"description": "Invalid credentials"},
    },
)
async def create_token(login_data: LoginRequest, service: AuthServiceDep) -> TokenResponse:
    """Authenticate with email and password and issue a bearer token."""
    result = await service.authenticate(login_data.email, login_data.password)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    return result


@router.delete(
    "/tokens/current",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        204: {"description": "Token revoked"},
        401: {"description": "Unknown or already revoked token"},
    },
)
async def revoke_current_token(token: BearerToken, service: AuthServiceDep) -> None:
    """Revoke the token used to make this request (logout)."""
    if not await service.revoke(token):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
