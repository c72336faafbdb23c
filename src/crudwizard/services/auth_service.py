"""Authentication service - registration, login, logout, bearer token lookup."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.crudwizard.core.logging import get_logger
from src.crudwizard.core.security import (
    DUMMY_PASSWORD_HASH,
    generate_token,
    hash_password,
    hash_token,
    token_expiry,
    verify_password,
)
from src.crudwizard.models import AuthToken, User
from src.crudwizard.repositories import AuthTokenRepository, UserRepository
from src.crudwizard.schemas.auth import TokenResponse
from src.crudwizard.schemas.user import UserCreate

logger = get_logger(__name__)


class EmailAlreadyRegisteredError(ValueError):
    """Registration attempted with an email that already has an account."""


class AuthService:
    """Authentication service.

    Tokens are opaque random strings; only their SHA-256 hash is stored in
    auth_tokens, so a database leak doesn't expose usable credentials.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)
        self.token_repo = AuthTokenRepository(session)

    async def register(self, data: UserCreate) -> User:
        """Create a user account.

        Raises:
            EmailAlreadyRegisteredError: If the email is taken.
        """
        email = data.email.lower()
        if await self.user_repo.exists_by_email(email):
            raise EmailAlreadyRegisteredError("Email already registered")

        user = User(
            email=email,
            hashed_password=hash_password(data.password),
            full_name=data.full_name.strip(),
        )
        self.user_repo.add(user)
        try:
            await self.session.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration
            await self.session.rollback()
            raise EmailAlreadyRegisteredError("Email already registered") from e
        except Exception:
            await self.session.rollback()
            raise

        await self.session.refresh(user)
        logger.info("user_registered", user_id=str(user.id))
        return user

    async def authenticate(self, email: str, password: str) -> TokenResponse | None:
        """Verify credentials and issue a new auth token.

        Returns None if authentication fails.
        """
        user = await self.user_repo.get_by_email(email.lower())

        # Always verify a hash so response timing doesn't reveal unknown emails
        password_hash = user.hashed_password if user else DUMMY_PASSWORD_HASH
        password_valid = verify_password(password, password_hash)

        if user is None or not password_valid or not user.is_active:
            return None

        token = generate_token()
        auth_token = AuthToken(
            user_id=user.id,
            token_hash=hash_token(token),
            expires_at=token_expiry(),
        )
        self.token_repo.add(auth_token)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("auth_token_issued", user_id=str(user.id), token_id=str(auth_token.id))
        return TokenResponse(access_token=token, expires_at=auth_token.expires_at)

    async def get_user_for_token(self, token: str) -> User | None:
        """Resolve a bearer token to its active user, or None."""
        auth_token = await self.token_repo.get_active_by_hash(hash_token(token))
        if auth_token is None:
            return None
        user = await self.user_repo.get_by_id(auth_token.user_id)
        if user is None or not user.is_active:
            return None
        return user

    async def revoke(self, token: str) -> bool:
        """Revoke a token. Returns False if it was unknown or already revoked."""
        auth_token = await self.token_repo.get_by_hash(hash_token(token))
        if auth_token is None or auth_token.revoked:
            return False

        auth_token.revoked = True
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("auth_token_revoked", token_id=str(auth_token.id))
        return True
