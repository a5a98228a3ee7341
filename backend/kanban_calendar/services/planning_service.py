"""
Project planning workflow.

Creating a project generates its subtasks and, when the project carries
a date window, schedules them into the calendar around existing
unavailable blocks.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from kanban_calendar.core.exceptions import InfrastructureError, KanbanCalendarError
from kanban_calendar.core.logger import setup_logger
from kanban_calendar.interfaces.calendar_block_repository import ICalendarBlockRepository
from kanban_calendar.interfaces.project_repository import IProjectRepository
from kanban_calendar.interfaces.task_repository import ITaskRepository
from kanban_calendar.models.project import ProjectCreate, ProjectWithTasks
from kanban_calendar.models.task import Task
from kanban_calendar.services.scheduler_service import SchedulerService
from kanban_calendar.services.subtask_generator import generate_subtasks

logger = setup_logger(__name__)


class ProjectPlanningService:
    """
    Orchestrates project creation.

    Steps:
    1. Store the project
    2. Generate and store its subtasks in template order
    3. If start_date and end_date are set, schedule the subtasks around
       unavailable blocks and store every returned block

    A storage failure after step 1 removes whatever this call created.
    """

    def __init__(
        self,
        project_repo: IProjectRepository,
        task_repo: ITaskRepository,
        block_repo: ICalendarBlockRepository,
        scheduler: Optional[SchedulerService] = None,
    ):
        self._project_repo = project_repo
        self._task_repo = task_repo
        self._block_repo = block_repo
        self._scheduler = scheduler or SchedulerService()

    async def create_project(self, data: ProjectCreate) -> ProjectWithTasks:
        project = await self._project_repo.create(data)
        tasks: list[Task] = []
        try:
            tasks = await self._task_repo.create_many(
                project.id,
                generate_subtasks(data.name, data.description),
            )
            if data.start_date and data.end_date:
                await self._schedule(tasks, data)
        except KanbanCalendarError:
            await self._compensate(project.id)
            raise
        except Exception as e:
            await self._compensate(project.id)
            raise InfrastructureError(
                f"Failed to create project {project.id}", details=str(e)
            ) from e

        logger.info(f"Created project {project.id} with {len(tasks)} tasks")
        return ProjectWithTasks(project=project, tasks=tasks)

    async def _schedule(self, tasks: list[Task], data: ProjectCreate) -> None:
        unavailable = await self._block_repo.list_unavailable()
        blocks = self._scheduler.schedule(tasks, data.start_date, data.end_date, unavailable)
        self._scheduler.summarize(tasks, blocks)
        await self._block_repo.create_many(blocks)

    async def _compensate(self, project_id: UUID) -> None:
        """Undo a partially created project. Deleting it cascades to tasks and blocks."""
        logger.warning(f"Rolling back project {project_id} after storage failure")
        await self._project_repo.delete(project_id)
