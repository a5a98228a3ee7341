"""
Project repository interface.

Defines the contract for project persistence operations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from kanban_calendar.models.project import Project, ProjectCreate, ProjectUpdate


class IProjectRepository(ABC):
    """Abstract interface for project persistence."""

    @abstractmethod
    async def create(self, project: ProjectCreate) -> Project:
        """
        Create a new project.

        Args:
            project: Project creation data

        Returns:
            Created project
        """
        pass

    @abstractmethod
    async def get(self, project_id: UUID) -> Optional[Project]:
        """
        Get a project by ID.

        Args:
            project_id: Project ID

        Returns:
            Project if found, None otherwise
        """
        pass

    @abstractmethod
    async def list(self, limit: int = 100, offset: int = 0) -> list[Project]:
        """
        List projects, newest first.

        Args:
            limit: Maximum number of results
            offset: Pagination offset

        Returns:
            List of projects
        """
        pass

    @abstractmethod
    async def update(self, project_id: UUID, update: ProjectUpdate) -> Project:
        """
        Update an existing project.

        Args:
            project_id: Project ID
            update: Fields to update

        Returns:
            Updated project

        Raises:
            NotFoundError: If project not found
        """
        pass

    @abstractmethod
    async def delete(self, project_id: UUID) -> bool:
        """
        Delete a project together with its tasks and their calendar blocks.

        Args:
            project_id: Project ID

        Returns:
            True if deleted, False if not found
        """
        pass
