"""
Task model definitions.
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from kanban_calendar.models.enums import TaskStatus


class TaskBase(BaseModel):
    """Base task fields."""

    title: str = Field(..., min_length=1, max_length=500, description="Task title")
    description: Optional[str] = Field(None, description="Task details")
    complexity_level: int = Field(1, ge=1, le=5, description="Complexity (1=trivial, 5=hard)")
    start_date: Optional[date] = None
    deadline: Optional[date] = None
    estimated_hours: int = Field(1, ge=0, description="Estimated duration in whole hours")


class TaskCreate(TaskBase):
    """Schema for creating a new task."""

    project_id: Optional[UUID] = None
    status: TaskStatus = TaskStatus.BACKLOG
    position: int = Field(0, ge=0)


class TaskUpdate(BaseModel):
    """Schema for updating an existing task."""

    title: Optional[str] = Field(None, min_length=1, max_length=500)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    complexity_level: Optional[int] = Field(None, ge=1, le=5)
    start_date: Optional[date] = None
    deadline: Optional[date] = None
    estimated_hours: Optional[int] = Field(None, ge=0)
    position: Optional[int] = Field(None, ge=0)


class TaskStatusUpdate(BaseModel):
    """Kanban move: new column and position within it."""

    status: str
    position: int = Field(0, ge=0)


class Task(TaskBase):
    """Complete task model."""

    id: UUID
    project_id: Optional[UUID] = None
    status: TaskStatus = TaskStatus.BACKLOG
    position: int = 0
    created_at: datetime

    class Config:
        from_attributes = True
