"""
SQLite implementation of Project repository.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import delete, select

from kanban_calendar.core.exceptions import NotFoundError
from kanban_calendar.infrastructure.local.database import (
    CalendarBlockORM,
    ProjectORM,
    TaskORM,
    get_session_factory,
)
from kanban_calendar.interfaces.project_repository import IProjectRepository
from kanban_calendar.models.project import Project, ProjectCreate, ProjectUpdate


class SqliteProjectRepository(IProjectRepository):
    """SQLite implementation of project repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: ProjectORM) -> Project:
        """Convert ORM object to Pydantic model."""
        return Project(
            id=UUID(orm.id),
            name=orm.name,
            description=orm.description,
            start_date=orm.start_date,
            end_date=orm.end_date,
            created_at=orm.created_at,
        )

    async def create(self, project: ProjectCreate) -> Project:
        """Create a new project."""
        async with self._session_factory() as session:
            orm = ProjectORM(
                id=str(uuid4()),
                name=project.name,
                description=project.description,
                start_date=project.start_date,
                end_date=project.end_date,
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get(self, project_id: UUID) -> Optional[Project]:
        """Get a project by ID."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(ProjectORM).where(ProjectORM.id == str(project_id))
            )
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def list(self, limit: int = 100, offset: int = 0) -> list[Project]:
        """List projects, newest first."""
        async with self._session_factory() as session:
            query = (
                select(ProjectORM)
                .order_by(ProjectORM.created_at.desc())
                .limit(limit)
                .offset(offset)
            )
            result = await session.execute(query)
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def update(self, project_id: UUID, update: ProjectUpdate) -> Project:
        """Update an existing project."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(ProjectORM).where(ProjectORM.id == str(project_id))
            )
            orm = result.scalar_one_or_none()

            if not orm:
                raise NotFoundError(f"Project {project_id} not found")

            update_data = update.model_dump(exclude_unset=True)
            for field, value in update_data.items():
                if value is not None:
                    setattr(orm, field, value)

            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def delete(self, project_id: UUID) -> bool:
        """Delete a project, its tasks and their calendar blocks."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(ProjectORM).where(ProjectORM.id == str(project_id))
            )
            orm = result.scalar_one_or_none()

            if not orm:
                return False

            task_ids = select(TaskORM.id).where(TaskORM.project_id == str(project_id))
            await session.execute(
                delete(CalendarBlockORM).where(CalendarBlockORM.task_id.in_(task_ids))
            )
            await session.execute(delete(TaskORM).where(TaskORM.project_id == str(project_id)))
            await session.delete(orm)
            await session.commit()
            return True
