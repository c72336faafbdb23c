"""Repository for Project entity."""

from uuid import UUID

from sqlmodel import select

from src.crudwizard.models import Project
from src.crudwizard.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Projects are always looked up through their owner."""

    model = Project

    async def list_for_owner(self, owner_id: UUID, limit: int = 50, offset: int = 0) -> list[Project]:
        """List an owner's projects, newest first."""
        result = await self.session.execute(
            select(Project)
            .where(Project.owner_id == owner_id)
            .order_by(Project.created_at.desc())  # type: ignore[attr-defined]
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    async def get_for_owner(self, project_id: UUID, owner_id: UUID) -> Project | None:
        result = await self.session.execute(
            select(Project).where(Project.id == project_id, Project.owner_id == owner_id)
        )
        return result.scalar_one_or_none()

    async def get_by_name(self, owner_id: UUID, name: str) -> Project | None:
        """Get one of the owner's projects by name."""
        result = await self.session.execute(
            select(Project).where(Project.owner_id == owner_id, Project.name == name)
        )
        return result.scalar_one_or_none()
