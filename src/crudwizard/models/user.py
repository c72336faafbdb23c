"""User model."""

from datetime import datetime
from uuid import UUID, uuid4

from email_validator import EmailNotValidError, validate_email
from sqlmodel import Field, SQLModel

from src.crudwizard.models.base import is_blank, utc_now


class User(SQLModel, table=True):
    """Account that owns projects and authenticates with auth tokens."""

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    hashed_password: str = Field(max_length=255)
    full_name: str = Field(max_length=100)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def validate_record(self) -> list[str]:
        errors = []
        try:
            validate_email(self.email, check_deliverability=False)
        except EmailNotValidError:
            errors.append("email is not a valid address")
        if is_blank(self.full_name):
            errors.append("full_name can't be blank")
        if is_blank(self.hashed_password):
            errors.append("hashed_password can't be blank")
        return errors
