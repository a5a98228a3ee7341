"""
Calendar block repository interface.

Defines the contract for calendar block persistence operations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional
from uuid import UUID

from kanban_calendar.models.calendar import CalendarBlock, CalendarBlockCreate, CalendarBlockUpdate
from kanban_calendar.models.schedule import ScheduledBlock


class ICalendarBlockRepository(ABC):
    """Abstract interface for calendar block persistence."""

    @abstractmethod
    async def create(self, block: CalendarBlockCreate) -> CalendarBlock:
        """
        Create a calendar block.

        Args:
            block: Block creation data

        Returns:
            Created block
        """
        pass

    @abstractmethod
    async def create_many(self, blocks: list[ScheduledBlock]) -> list[CalendarBlock]:
        """
        Persist scheduler output verbatim (ids included) in one transaction.

        Either every block is stored or none is.
        """
        pass

    @abstractmethod
    async def get(self, block_id: UUID) -> Optional[CalendarBlock]:
        """
        Get a block by ID.

        Args:
            block_id: Block ID

        Returns:
            Block if found, None otherwise
        """
        pass

    @abstractmethod
    async def list(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        task_id: Optional[UUID] = None,
    ) -> list[CalendarBlock]:
        """
        List blocks ordered by date and start time.

        Args:
            start_date: Inclusive lower bound (applied only with end_date)
            end_date: Inclusive upper bound (applied only with start_date)
            task_id: Filter by task

        Returns:
            List of blocks
        """
        pass

    @abstractmethod
    async def list_for_date(self, day: date) -> list[CalendarBlock]:
        """List blocks on one date ordered by start time."""
        pass

    @abstractmethod
    async def list_unavailable(self) -> list[CalendarBlock]:
        """List every block marked not available."""
        pass

    @abstractmethod
    async def update(self, block_id: UUID, update: CalendarBlockUpdate) -> CalendarBlock:
        """
        Update a block.

        Raises:
            NotFoundError: If block not found
        """
        pass

    @abstractmethod
    async def delete(self, block_id: UUID) -> bool:
        """
        Delete a block.

        Returns:
            True if deleted, False if not found
        """
        pass

    @abstractmethod
    async def delete_many(self, block_ids: list[UUID]) -> int:
        """Delete blocks by ID. Returns rows removed."""
        pass
