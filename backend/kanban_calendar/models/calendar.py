"""
Calendar block model definitions.

Blocks are stored with the date as YYYY-MM-DD and wall-clock times as
HH:MM (24-hour). Task blocks are produced by the scheduler; unavailable
blocks are reservations entered by the user.
"""

import datetime as dt
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_serializer, model_validator

from kanban_calendar.models.enums import BlockType


def format_hhmm(value: dt.time) -> str:
    """Render a wall-clock time as HH:MM."""
    return value.strftime("%H:%M")


class TimeRangeModel(BaseModel):
    """Date plus half-open [start_time, end_time) range."""

    date: dt.date
    start_time: dt.time
    end_time: dt.time

    @field_serializer("start_time", "end_time", when_used="json")
    def _serialize_time(self, value: dt.time) -> str:
        return format_hhmm(value)


class CalendarBlockBase(TimeRangeModel):
    """Base calendar block fields."""

    task_id: Optional[UUID] = None
    is_available: bool = True
    block_type: BlockType = BlockType.TASK


class CalendarBlockCreate(CalendarBlockBase):
    """Schema for creating a calendar block."""

    @model_validator(mode="after")
    def _check_range(self) -> "CalendarBlockCreate":
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class UnavailableBlockCreate(TimeRangeModel):
    """Schema for reserving a time range as unavailable."""

    reason: Optional[str] = Field(None, max_length=500)

    @model_validator(mode="after")
    def _check_range(self) -> "UnavailableBlockCreate":
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self

    def to_block(self) -> CalendarBlockCreate:
        return CalendarBlockCreate(
            date=self.date,
            start_time=self.start_time,
            end_time=self.end_time,
            is_available=False,
            block_type=BlockType.UNAVAILABLE,
        )


class CalendarBlockUpdate(BaseModel):
    """Schema for updating a calendar block."""

    task_id: Optional[UUID] = None
    date: Optional[dt.date] = None
    start_time: Optional[dt.time] = None
    end_time: Optional[dt.time] = None
    is_available: Optional[bool] = None
    block_type: Optional[BlockType] = None


class CalendarBlock(CalendarBlockBase):
    """Complete calendar block model."""

    id: UUID
    created_at: datetime
    task_title: Optional[str] = Field(None, description="Title of the linked task")
    project_id: Optional[UUID] = Field(None, description="Project of the linked task")

    class Config:
        from_attributes = True


class AvailableSlot(TimeRangeModel):
    """Free working-hours slot of a given length."""

    duration_hours: int
