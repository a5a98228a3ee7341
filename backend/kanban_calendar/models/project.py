"""
Project model definitions.

Projects group the tasks generated for them and carry the date window
their tasks are scheduled into.
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from kanban_calendar.models.task import Task


class ProjectBase(BaseModel):
    """Base project fields."""

    name: str = Field(..., min_length=1, max_length=200, description="Project name")
    description: Optional[str] = Field(None, max_length=2000, description="Project description")
    start_date: Optional[date] = Field(None, description="First day tasks may be scheduled on")
    end_date: Optional[date] = Field(None, description="Last day tasks may be scheduled on")


class ProjectCreate(ProjectBase):
    """Schema for creating a new project."""

    @model_validator(mode="after")
    def _check_window(self) -> "ProjectCreate":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class ProjectUpdate(BaseModel):
    """Schema for updating an existing project."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class Project(ProjectBase):
    """Complete project model."""

    id: UUID
    created_at: datetime

    class Config:
        from_attributes = True


class ProjectWithTasks(BaseModel):
    """Project creation result: the project and its generated tasks."""

    project: Project
    tasks: list[Task] = Field(default_factory=list)
