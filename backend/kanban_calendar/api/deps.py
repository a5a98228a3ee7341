"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the correct
infrastructure implementations based on environment configuration.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from kanban_calendar.interfaces.calendar_block_repository import ICalendarBlockRepository
from kanban_calendar.interfaces.project_repository import IProjectRepository
from kanban_calendar.interfaces.task_repository import ITaskRepository
from kanban_calendar.services.planning_service import ProjectPlanningService
from kanban_calendar.services.scheduler_service import SchedulerService


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_project_repository() -> IProjectRepository:
    """Get project repository instance."""
    from kanban_calendar.infrastructure.local.project_repository import SqliteProjectRepository
    return SqliteProjectRepository()


@lru_cache()
def get_task_repository() -> ITaskRepository:
    """Get task repository instance."""
    from kanban_calendar.infrastructure.local.task_repository import SqliteTaskRepository
    return SqliteTaskRepository()


@lru_cache()
def get_calendar_block_repository() -> ICalendarBlockRepository:
    """Get calendar block repository instance."""
    from kanban_calendar.infrastructure.local.calendar_block_repository import (
        SqliteCalendarBlockRepository,
    )
    return SqliteCalendarBlockRepository()


# ===========================================
# Service Dependencies
# ===========================================


@lru_cache()
def get_scheduler_service() -> SchedulerService:
    """Get scheduler service (greedy first-fit placement)."""
    return SchedulerService()


def get_planning_service(
    project_repo: IProjectRepository = Depends(get_project_repository),
    task_repo: ITaskRepository = Depends(get_task_repository),
    block_repo: ICalendarBlockRepository = Depends(get_calendar_block_repository),
    scheduler: SchedulerService = Depends(get_scheduler_service),
) -> ProjectPlanningService:
    """Get project planning service wired to the current repositories."""
    return ProjectPlanningService(project_repo, task_repo, block_repo, scheduler)


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

ProjectRepo = Annotated[IProjectRepository, Depends(get_project_repository)]
TaskRepo = Annotated[ITaskRepository, Depends(get_task_repository)]
CalendarBlockRepo = Annotated[ICalendarBlockRepository, Depends(get_calendar_block_repository)]
Scheduler = Annotated[SchedulerService, Depends(get_scheduler_service)]
PlanningService = Annotated[ProjectPlanningService, Depends(get_planning_service)]
