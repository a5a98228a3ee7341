"""
Projects API endpoints.

CRUD operations for projects. Creating a project also generates its
tasks and schedules them when the project has a date window.
"""

from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from kanban_calendar.api.deps import PlanningService, ProjectRepo
from kanban_calendar.core.exceptions import InfrastructureError, NotFoundError
from kanban_calendar.models.project import (
    Project,
    ProjectCreate,
    ProjectUpdate,
    ProjectWithTasks,
)

router = APIRouter()


async def _get_project_or_404(repo: ProjectRepo, project_id: UUID) -> Project:
    project = await repo.get(project_id)
    if not project:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Project {project_id} not found",
        )
    return project


@router.get("", response_model=list[Project])
async def list_projects(
    repo: ProjectRepo,
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
):
    """List projects, newest first."""
    return await repo.list(limit=limit, offset=offset)


@router.get("/{project_id}", response_model=Project)
async def get_project(project_id: UUID, repo: ProjectRepo):
    """Get a project by ID."""
    return await _get_project_or_404(repo, project_id)


@router.post("", response_model=ProjectWithTasks, status_code=status.HTTP_201_CREATED)
async def create_project(project: ProjectCreate, planner: PlanningService):
    """Create a project with generated tasks, scheduled into its date window."""
    try:
        return await planner.create_project(project)
    except InfrastructureError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=e.message,
        )


@router.put("/{project_id}", response_model=Project)
async def update_project(project_id: UUID, update: ProjectUpdate, repo: ProjectRepo):
    """Update a project."""
    try:
        return await repo.update(project_id, update)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )


@router.delete("/{project_id}")
async def delete_project(project_id: UUID, repo: ProjectRepo):
    """Delete a project with its tasks and their calendar blocks."""
    deleted = await repo.delete(project_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Project {project_id} not found",
        )
    return {"message": "Project deleted successfully"}
