"""
Schedule models for the calendar scheduling engine.
"""

from __future__ import annotations

import datetime as dt
from typing import Protocol
from uuid import UUID

from pydantic import BaseModel, Field

from kanban_calendar.models.calendar import TimeRangeModel
from kanban_calendar.models.enums import BlockType


class TaskLike(Protocol):
    """Anything the scheduler can pack: an id and an hour estimate."""

    id: UUID
    estimated_hours: int


class IntervalLike(Protocol):
    """Anything that reserves [start_time, end_time) on a date."""

    date: dt.date
    start_time: dt.time
    end_time: dt.time


class SchedulableTask(BaseModel):
    """Minimal task shape the scheduler reads."""

    id: UUID
    estimated_hours: int


class UnavailableInterval(TimeRangeModel):
    """Half-open [start_time, end_time) exclusion on a date."""

    pass


class ScheduledBlock(TimeRangeModel):
    """One-hour placement of a task, as emitted by the scheduler."""

    id: UUID
    task_id: UUID
    is_available: bool = True
    block_type: BlockType = BlockType.TASK


class TaskAllocationSummary(BaseModel):
    """Requested vs scheduled hours for one task."""

    task_id: UUID
    requested_hours: int = Field(..., ge=0)
    scheduled_hours: int = Field(..., ge=0)

    @property
    def fully_scheduled(self) -> bool:
        return self.scheduled_hours >= self.requested_hours

    @property
    def missing_hours(self) -> int:
        return max(0, self.requested_hours - self.scheduled_hours)
