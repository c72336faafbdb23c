"""Password hashing and opaque auth token helpers."""

import secrets
from datetime import datetime, timedelta
from hashlib import sha256

import argon2

from src.crudwizard.core.config import get_settings
from src.crudwizard.models.base import utc_now

TOKEN_BYTES = 32


def hash_token(token: str) -> str:
    """Hash a token using SHA256 for secure storage."""
    return sha256(token.encode()).hexdigest()


def generate_token() -> str:
    """Generate a new opaque bearer token."""
    return secrets.token_urlsafe(TOKEN_BYTES)


def token_expiry(days: int | None = None) -> datetime:
    """Expiry for a token issued now, as naive UTC datetime."""
    if days is None:
        days = get_settings().auth_token_expire_days
    return utc_now() + timedelta(days=days)


def _create_password_hasher() -> argon2.PasswordHasher:
    """Create password hasher with settings from config."""
    settings = get_settings()
    return argon2.PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
    )


_password_hasher = _create_password_hasher()

# Verified against when the user does not exist so login timing doesn't leak emails
DUMMY_PASSWORD_HASH = _password_hasher.hash("crudwizard-dummy-password")


def hash_password(password: str) -> str:
    """Hash password using Argon2id."""
    return _password_hasher.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify password against hash. Returns False on any error."""
    try:
        _password_hasher.verify(hashed, password)
        return True
    except argon2.exceptions.VerifyMismatchError:
        return False
    except argon2.exceptions.InvalidHashError:
        return False
