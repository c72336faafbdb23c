"""Project endpoints - owner-scoped CRUD.

Every query is filtered by the authenticated user, so another user's project
is indistinguishable from a missing one (404).
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError

from src.crudwizard.api.dependencies import CurrentUser, DBSession
from src.crudwizard.models import Project
from src.crudwizard.models.base import utc_now
from src.crudwizard.repositories import ProjectRepository
from src.crudwizard.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate

router = APIRouter(prefix="/projects", tags=["projects"])


def _name_conflict(name: str | None) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"Project with name '{name}' already exists",
    )


def _not_found(project_id: UUID) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Project {project_id} not found",
    )


@router.get(
    "",
    response_model=list[ProjectRead],
    summary="List projects",
    description="List the current user's projects, newest first.",
)
async def list_projects(
    session: DBSession,
    user: CurrentUser,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
    offset: Annotated[int, Query(ge=0, description="Items to skip")] = 0,
) -> list[ProjectRead]:
    repo = ProjectRepository(session)
    projects = await repo.list_for_owner(user.id, limit=limit, offset=offset)
    return [ProjectRead.model_validate(p) for p in projects]


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get project",
    responses={
        200: {"description": "Project details"},
        404: {"description": "Project not found"},
    },
)
async def get_project(project_id: UUID, session: DBSession, user: CurrentUser) -> ProjectRead:
    repo = ProjectRepository(session)
    project = await repo.get_for_owner(project_id, user.id)
    if project is None:
        raise _not_found(project_id)
    return ProjectRead.model_validate(project)


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    responses={
        201: {"description": "Project created"},
        409: {"description": "Project with this name already exists"},
        422: {"description": "Project failed validation"},
    },
)
async def create_project(
    request: ProjectCreate,
    session: DBSession,
    user: CurrentUser,
) -> ProjectRead:
    repo = ProjectRepository(session)

    if await repo.get_by_name(user.id, request.name) is not None:
        raise _name_conflict(request.name)

    project = Project(
        owner_id=user.id,
        name=request.name,
        description=request.description,
        spec_url=str(request.spec_url) if request.spec_url is not None else None,
    )
    repo.add(project)

    try:
        await session.commit()
        await session.refresh(project)
    except IntegrityError as e:
        # Fallback in case of race condition
        await session.rollback()
        raise _name_conflict(request.name) from e
    except Exception:
        await session.rollback()
        raise

    return ProjectRead.model_validate(project)


@router.patch(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Update project",
    responses={
        200: {"description": "Project updated"},
        404: {"description": "Project not found"},
        409: {"description": "Project with this name already exists"},
    },
)
async def update_project(
    project_id: UUID,
    request: ProjectUpdate,
    session: DBSession,
    user: CurrentUser,
) -> ProjectRead:
    repo = ProjectRepository(session)
    project = await repo.get_for_owner(project_id, user.id)
    if project is None:
        raise _not_found(project_id)

    if request.name is not None and request.name != project.name:
        if await repo.get_by_name(user.id, request.name) is not None:
            raise _name_conflict(request.name)

    if request.name is not None:
        project.name = request.name
    if request.description is not None:
        project.description = request.description
    if request.spec_url is not None:
        project.spec_url = str(request.spec_url)

    # SQLModel has no onupdate hook
    project.updated_at = utc_now()

    try:
        await session.commit()
        await session.refresh(project)
    except IntegrityError as e:
        await session.rollback()
        raise _name_conflict(request.name) from e
    except Exception:
        await session.rollback()
        raise

    return ProjectRead.model_validate(project)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete project",
    responses={
        204: {"description": "Project deleted"},
        404: {"description": "Project not found"},
    },
)
async def delete_project(project_id: UUID, session: DBSession, user: CurrentUser) -> None:
    repo = ProjectRepository(session)
    project = await repo.get_for_owner(project_id, user.id)
    if project is None:
        raise _not_found(project_id)

    await repo.delete(project)

    try:
        await session.commit()
    except Exception:
        await session.rollback()
        raise
