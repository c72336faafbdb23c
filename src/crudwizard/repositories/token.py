"""Repository for AuthToken entity."""

from sqlmodel import select

from src.crudwizard.models import AuthToken
from src.crudwizard.models.base import utc_now
from src.crudwizard.repositories.base import BaseRepository


class AuthTokenRepository(BaseRepository[AuthToken]):
    model = AuthToken

    async def get_by_hash(self, token_hash: str) -> AuthToken | None:
        result = await self.session.execute(
            select(AuthToken).where(AuthToken.token_hash == token_hash)
        )
        return result.scalar_one_or_none()

    async def get_active_by_hash(self, token_hash: str) -> AuthToken | None:
        """Get a non-revoked, non-expired token by hash."""
        result = await self.session.execute(
            select(AuthToken).where(
                AuthToken.token_hash == token_hash,
                AuthToken.revoked == False,  # noqa: E712
                AuthToken.expires_at > utc_now(),
            )
        )
        return result.scalar_one_or_none()
