"""
SQLite implementation of Task repository.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import delete, select

from kanban_calendar.core.exceptions import NotFoundError
from kanban_calendar.infrastructure.local.database import (
    CalendarBlockORM,
    TaskORM,
    get_session_factory,
)
from kanban_calendar.interfaces.task_repository import ITaskRepository
from kanban_calendar.models.enums import TaskStatus
from kanban_calendar.models.task import Task, TaskCreate, TaskUpdate


class SqliteTaskRepository(ITaskRepository):
    """SQLite implementation of task repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: TaskORM) -> Task:
        """Convert ORM object to Pydantic model."""
        return Task(
            id=UUID(orm.id),
            project_id=UUID(orm.project_id) if orm.project_id else None,
            title=orm.title,
            description=orm.description,
            status=TaskStatus(orm.status),
            complexity_level=orm.complexity_level if orm.complexity_level is not None else 1,
            start_date=orm.start_date,
            deadline=orm.deadline,
            estimated_hours=orm.estimated_hours if orm.estimated_hours is not None else 1,
            position=orm.position or 0,
            created_at=orm.created_at,
        )

    def _build_orm(self, task: TaskCreate, project_id: Optional[UUID]) -> TaskORM:
        return TaskORM(
            id=str(uuid4()),
            project_id=str(project_id) if project_id else None,
            title=task.title,
            description=task.description,
            status=task.status.value,
            complexity_level=task.complexity_level,
            start_date=task.start_date,
            deadline=task.deadline,
            estimated_hours=task.estimated_hours,
            position=task.position,
        )

    async def create(self, task: TaskCreate) -> Task:
        """Create a new task."""
        async with self._session_factory() as session:
            orm = self._build_orm(task, task.project_id)
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def create_many(self, project_id: Optional[UUID], tasks: list[TaskCreate]) -> list[Task]:
        """Create several tasks in one transaction."""
        async with self._session_factory() as session:
            orms = [self._build_orm(task, project_id) for task in tasks]
            session.add_all(orms)
            await session.commit()
            for orm in orms:
                await session.refresh(orm)
            return [self._orm_to_model(orm) for orm in orms]

    async def get(self, task_id: UUID) -> Optional[Task]:
        """Get a task by ID."""
        async with self._session_factory() as session:
            result = await session.execute(select(TaskORM).where(TaskORM.id == str(task_id)))
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def list(
        self,
        project_id: Optional[UUID] = None,
        status: Optional[TaskStatus] = None,
    ) -> list[Task]:
        """List tasks ordered by position, then creation time."""
        async with self._session_factory() as session:
            query = select(TaskORM)

            if project_id:
                query = query.where(TaskORM.project_id == str(project_id))
            if status:
                query = query.where(TaskORM.status == TaskStatus(status).value)

            query = query.order_by(TaskORM.position, TaskORM.created_at)
            result = await session.execute(query)
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def _get_orm_or_raise(self, session, task_id: UUID) -> TaskORM:
        result = await session.execute(select(TaskORM).where(TaskORM.id == str(task_id)))
        orm = result.scalar_one_or_none()
        if not orm:
            raise NotFoundError(f"Task {task_id} not found")
        return orm

    async def update(self, task_id: UUID, update: TaskUpdate) -> Task:
        """Update an existing task."""
        async with self._session_factory() as session:
            orm = await self._get_orm_or_raise(session, task_id)

            update_data = update.model_dump(exclude_unset=True)
            for field, value in update_data.items():
                if value is not None:
                    if hasattr(value, "value"):  # Enum
                        value = value.value
                    setattr(orm, field, value)

            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def update_status(self, task_id: UUID, status: TaskStatus, position: int = 0) -> Task:
        """Move a task to a Kanban column."""
        async with self._session_factory() as session:
            orm = await self._get_orm_or_raise(session, task_id)
            orm.status = TaskStatus(status).value
            orm.position = position
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def delete(self, task_id: UUID) -> bool:
        """Delete a task and its calendar blocks."""
        return await self.delete_many([task_id]) > 0

    async def delete_many(self, task_ids: list[UUID]) -> int:
        """Delete tasks and their calendar blocks."""
        if not task_ids:
            return 0
        ids = [str(task_id) for task_id in task_ids]
        async with self._session_factory() as session:
            await session.execute(delete(CalendarBlockORM).where(CalendarBlockORM.task_id.in_(ids)))
            result = await session.execute(delete(TaskORM).where(TaskORM.id.in_(ids)))
            await session.commit()
            return result.rowcount or 0
