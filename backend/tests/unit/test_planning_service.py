"""
Tests for ProjectPlanningService.
"""

from datetime import date, time
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from kanban_calendar.core.exceptions import InfrastructureError
from kanban_calendar.infrastructure.local.calendar_block_repository import (
    SqliteCalendarBlockRepository,
)
from kanban_calendar.infrastructure.local.project_repository import SqliteProjectRepository
from kanban_calendar.infrastructure.local.task_repository import SqliteTaskRepository
from kanban_calendar.models.calendar import UnavailableBlockCreate
from kanban_calendar.models.enums import BlockType, TaskStatus
from kanban_calendar.models.project import ProjectCreate
from kanban_calendar.services.planning_service import ProjectPlanningService

MONDAY = date(2025, 11, 3)
FRIDAY = date(2025, 11, 7)


@pytest.fixture
def repos(session_factory):
    return (
        SqliteProjectRepository(session_factory=session_factory),
        SqliteTaskRepository(session_factory=session_factory),
        SqliteCalendarBlockRepository(session_factory=session_factory),
    )


@pytest.fixture
def planner(repos):
    return ProjectPlanningService(*repos)


@pytest.mark.asyncio
async def test_create_project_without_dates_skips_scheduling(planner, repos):
    _, task_repo, block_repo = repos

    result = await planner.create_project(ProjectCreate(name="Garden"))

    assert result.project.name == "Garden"
    assert [task.title for task in result.tasks] == [
        "Research and planning",
        "Initial setup",
        "Core implementation",
        "Testing and refinement",
        "Final review",
    ]
    assert all(task.status == TaskStatus.BACKLOG for task in result.tasks)
    assert all(task.project_id == result.project.id for task in result.tasks)
    assert len(await task_repo.list(project_id=result.project.id)) == 5
    assert await block_repo.list() == []


@pytest.mark.asyncio
async def test_create_project_with_dates_schedules_every_hour(planner, repos):
    _, _, block_repo = repos

    result = await planner.create_project(
        ProjectCreate(name="Garden", start_date=MONDAY, end_date=FRIDAY)
    )

    blocks = await block_repo.list()
    # Default template: 3 + 2 + 6 + 4 + 2 hours
    assert len(blocks) == 17
    assert blocks[0].date == MONDAY
    assert blocks[0].start_time == time(9)
    assert blocks[0].task_id == result.tasks[0].id
    assert blocks[0].task_title == result.tasks[0].title
    assert blocks[0].project_id == result.project.id
    assert {block.block_type for block in blocks} == {BlockType.TASK}
    # 8 slots on Monday and Tuesday, the last hour on Wednesday
    assert [block.date for block in blocks].count(MONDAY) == 8
    assert blocks[-1].date == date(2025, 11, 5)
    assert blocks[-1].start_time == time(9)


@pytest.mark.asyncio
async def test_create_project_schedules_around_unavailable_blocks(planner, repos):
    _, _, block_repo = repos
    await block_repo.create(
        UnavailableBlockCreate(date=MONDAY, start_time="09:00", end_time="17:00").to_block()
    )

    await planner.create_project(
        ProjectCreate(name="Mobile client", start_date=MONDAY, end_date=FRIDAY)
    )

    task_blocks = [b for b in await block_repo.list() if b.block_type == BlockType.TASK]
    assert task_blocks
    assert MONDAY not in {block.date for block in task_blocks}
    assert task_blocks[0].date == date(2025, 11, 4)


@pytest.mark.asyncio
async def test_create_project_with_short_window_stores_partial_schedule(planner, repos):
    _, _, block_repo = repos

    result = await planner.create_project(
        ProjectCreate(name="Build a website", start_date=MONDAY, end_date=MONDAY)
    )

    assert len(result.tasks) == 5
    assert len(await block_repo.list()) == 8


@pytest.mark.asyncio
async def test_create_project_rolls_back_on_block_storage_failure(repos):
    project_repo, task_repo, _ = repos
    block_repo = AsyncMock()
    block_repo.list_unavailable.return_value = []
    block_repo.create_many.side_effect = InfrastructureError("disk full")
    planner = ProjectPlanningService(project_repo, task_repo, block_repo)

    with pytest.raises(InfrastructureError):
        await planner.create_project(
            ProjectCreate(name="Doomed", start_date=MONDAY, end_date=FRIDAY)
        )

    assert await project_repo.list() == []
    assert await task_repo.list() == []


@pytest.mark.asyncio
async def test_create_project_wraps_unexpected_errors():
    project_repo = AsyncMock()
    project_repo.create.return_value.id = uuid4()
    task_repo = AsyncMock()
    task_repo.create_many.side_effect = RuntimeError("connection reset")
    planner = ProjectPlanningService(project_repo, task_repo, AsyncMock())

    with pytest.raises(InfrastructureError) as exc_info:
        await planner.create_project(ProjectCreate(name="Flaky"))

    assert exc_info.value.details == "connection reset"
    project_repo.delete.assert_awaited_once_with(project_repo.create.return_value.id)
