"""
Enum definitions for the application.

These enums are used across models and provide type-safe status values.
"""

from enum import Enum


class TaskStatus(str, Enum):
    """Kanban column a task sits in."""

    BACKLOG = "backlog"
    PLANNED = "planned"
    NEXT_UP = "next_up"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    ARCHIVE = "archive"


# Board column order
KANBAN_COLUMNS: tuple[TaskStatus, ...] = tuple(TaskStatus)


class BlockType(str, Enum):
    """Kind of calendar block."""

    TASK = "task"
    UNAVAILABLE = "unavailable"
    FREE = "free"
