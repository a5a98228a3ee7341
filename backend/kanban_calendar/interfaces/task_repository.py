"""
Task repository interface.

Defines the contract for task persistence operations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from kanban_calendar.models.enums import TaskStatus
from kanban_calendar.models.task import Task, TaskCreate, TaskUpdate


class ITaskRepository(ABC):
    """Abstract interface for task persistence."""

    @abstractmethod
    async def create(self, task: TaskCreate) -> Task:
        """
        Create a new task.

        Args:
            task: Task creation data

        Returns:
            Created task
        """
        pass

    @abstractmethod
    async def create_many(self, project_id: Optional[UUID], tasks: list[TaskCreate]) -> list[Task]:
        """
        Create several tasks in one transaction.

        Args:
            project_id: Project the tasks belong to (overrides task.project_id)
            tasks: Task creation data, in order

        Returns:
            Created tasks in input order
        """
        pass

    @abstractmethod
    async def get(self, task_id: UUID) -> Optional[Task]:
        """
        Get a task by ID.

        Args:
            task_id: Task ID

        Returns:
            Task if found, None otherwise
        """
        pass

    @abstractmethod
    async def list(
        self,
        project_id: Optional[UUID] = None,
        status: Optional[TaskStatus] = None,
    ) -> list[Task]:
        """
        List tasks ordered by position, then creation time.

        Args:
            project_id: Filter by project
            status: Filter by Kanban column

        Returns:
            List of tasks
        """
        pass

    @abstractmethod
    async def update(self, task_id: UUID, update: TaskUpdate) -> Task:
        """
        Update an existing task.

        Args:
            task_id: Task ID
            update: Fields to update

        Returns:
            Updated task

        Raises:
            NotFoundError: If task not found
        """
        pass

    @abstractmethod
    async def update_status(self, task_id: UUID, status: TaskStatus, position: int = 0) -> Task:
        """
        Move a task to a Kanban column.

        Raises:
            NotFoundError: If task not found
        """
        pass

    @abstractmethod
    async def delete(self, task_id: UUID) -> bool:
        """
        Delete a task and its calendar blocks.

        Args:
            task_id: Task ID

        Returns:
            True if deleted, False if not found
        """
        pass

    @abstractmethod
    async def delete_many(self, task_ids: list[UUID]) -> int:
        """Delete tasks (and their calendar blocks) by ID. Returns rows removed."""
        pass
