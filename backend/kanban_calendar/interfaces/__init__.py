"""Abstract interfaces for infrastructure abstraction."""

from kanban_calendar.interfaces.calendar_block_repository import ICalendarBlockRepository
from kanban_calendar.interfaces.placement_strategy import IPlacementStrategy
from kanban_calendar.interfaces.project_repository import IProjectRepository
from kanban_calendar.interfaces.task_repository import ITaskRepository

__all__ = [
    "ICalendarBlockRepository",
    "IPlacementStrategy",
    "IProjectRepository",
    "ITaskRepository",
]
