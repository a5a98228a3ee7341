"""
Placement strategy interface.

A strategy turns an ordered task list, a date window and a set of
unavailable intervals into calendar blocks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, Sequence

from kanban_calendar.models.schedule import IntervalLike, ScheduledBlock, TaskLike


class IPlacementStrategy(ABC):
    """Abstract interface for packing tasks into calendar slots."""

    @abstractmethod
    def place(
        self,
        tasks: Sequence[TaskLike],
        window_start: date,
        window_end: date,
        unavailable_blocks: Iterable[IntervalLike] = (),
    ) -> list[ScheduledBlock]:
        """
        Place tasks into the calendar.

        Args:
            tasks: Tasks in priority order
            window_start: First date that may receive a block (inclusive)
            window_end: Last date that may receive a block (inclusive)
            unavailable_blocks: Reserved [start_time, end_time) ranges

        Returns:
            Scheduled blocks in placement order. Never raises for an
            unsatisfiable request; unplaced hours are simply missing.
        """
        pass
