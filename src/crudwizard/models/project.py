"""Project model - an API description a user builds a CRUD interface for."""

from datetime import datetime
from urllib.parse import urlparse
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from src.crudwizard.models.base import is_blank, utc_now


class Project(SQLModel, table=True):
    """Project owned by a single user. Names are unique per owner."""

    __tablename__ = "projects"
    __table_args__ = (UniqueConstraint("owner_id", "name", name="uq_projects_owner_name"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    owner_id: UUID = Field(foreign_key="users.id", index=True)
    name: str = Field(max_length=200, index=True)
    description: str | None = Field(default=None, max_length=1000)
    spec_url: str | None = Field(default=None, max_length=2048)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)

    def validate_record(self) -> list[str]:
        errors = []
        if is_blank(self.name):
            errors.append("name can't be blank")
        if self.spec_url is not None:
            parsed = urlparse(self.spec_url)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                errors.append("spec_url must be an http(s) URL")
        return errors
