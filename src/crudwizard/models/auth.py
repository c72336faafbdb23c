"""Authentication token model."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.crudwizard.models.base import is_blank, utc_now


class AuthToken(SQLModel, table=True):
    """Opaque bearer token. Only the SHA-256 hash is stored."""

    __tablename__ = "auth_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    token_hash: str = Field(max_length=255, unique=True, index=True)
    expires_at: datetime = Field(index=True)
    created_at: datetime = Field(default_factory=utc_now)
    revoked: bool = Field(default=False)

    def validate_record(self) -> list[str]:
        errors = []
        if is_blank(self.token_hash):
            errors.append("token_hash can't be blank")
        if self.expires_at <= self.created_at:
            errors.append("expires_at must be after created_at")
        return errors
