"""
Unit tests for the SQLite repositories.
"""

from datetime import date, time
from uuid import uuid4

import pytest

from kanban_calendar.core.exceptions import NotFoundError, ValidationError
from kanban_calendar.infrastructure.local.calendar_block_repository import (
    SqliteCalendarBlockRepository,
)
from kanban_calendar.infrastructure.local.project_repository import SqliteProjectRepository
from kanban_calendar.infrastructure.local.task_repository import SqliteTaskRepository
from kanban_calendar.models.calendar import (
    CalendarBlockCreate,
    CalendarBlockUpdate,
    UnavailableBlockCreate,
)
from kanban_calendar.models.enums import BlockType, TaskStatus
from kanban_calendar.models.project import ProjectCreate, ProjectUpdate
from kanban_calendar.models.schedule import ScheduledBlock
from kanban_calendar.models.task import TaskCreate, TaskUpdate

MONDAY = date(2025, 11, 3)
TUESDAY = date(2025, 11, 4)


@pytest.fixture
def project_repo(session_factory):
    return SqliteProjectRepository(session_factory=session_factory)


@pytest.fixture
def task_repo(session_factory):
    return SqliteTaskRepository(session_factory=session_factory)


@pytest.fixture
def block_repo(session_factory):
    return SqliteCalendarBlockRepository(session_factory=session_factory)


def scheduled(task_id, day, hour):
    return ScheduledBlock(
        id=uuid4(),
        task_id=task_id,
        date=day,
        start_time=time(hour),
        end_time=time(hour + 1),
    )


# ===========================================
# Projects
# ===========================================


@pytest.mark.asyncio
async def test_create_and_get_project(project_repo):
    created = await project_repo.create(
        ProjectCreate(name="Launch", description="Website", start_date=MONDAY, end_date=TUESDAY)
    )

    fetched = await project_repo.get(created.id)

    assert fetched is not None
    assert fetched.name == "Launch"
    assert fetched.start_date == MONDAY
    assert fetched.end_date == TUESDAY


@pytest.mark.asyncio
async def test_update_missing_project_raises(project_repo):
    with pytest.raises(NotFoundError):
        await project_repo.update(uuid4(), ProjectUpdate(name="Nope"))


@pytest.mark.asyncio
async def test_update_project_keeps_unset_fields(project_repo):
    created = await project_repo.create(ProjectCreate(name="Old", description="Keep me"))

    updated = await project_repo.update(created.id, ProjectUpdate(name="New"))

    assert updated.name == "New"
    assert updated.description == "Keep me"


@pytest.mark.asyncio
async def test_delete_project_cascades(project_repo, task_repo, block_repo):
    project = await project_repo.create(ProjectCreate(name="Cascade"))
    tasks = await task_repo.create_many(project.id, [TaskCreate(title="T1")])
    await block_repo.create_many([scheduled(tasks[0].id, MONDAY, 9)])
    reservation = await block_repo.create(
        UnavailableBlockCreate(date=MONDAY, start_time="12:00", end_time="13:00").to_block()
    )

    assert await project_repo.delete(project.id) is True

    assert await project_repo.get(project.id) is None
    assert await task_repo.get(tasks[0].id) is None
    remaining = await block_repo.list()
    assert [block.id for block in remaining] == [reservation.id]
    assert await project_repo.delete(project.id) is False


# ===========================================
# Tasks
# ===========================================


@pytest.mark.asyncio
async def test_create_many_keeps_order_and_project(project_repo, task_repo):
    project = await project_repo.create(ProjectCreate(name="Ordered"))
    data = [TaskCreate(title=f"Task {i}", position=i, estimated_hours=i + 1) for i in range(3)]

    created = await task_repo.create_many(project.id, data)
    listed = await task_repo.list(project_id=project.id)

    assert [task.title for task in created] == ["Task 0", "Task 1", "Task 2"]
    assert [task.id for task in listed] == [task.id for task in created]
    assert all(task.project_id == project.id for task in listed)


@pytest.mark.asyncio
async def test_list_tasks_filters_by_status(task_repo):
    await task_repo.create(TaskCreate(title="Backlog"))
    await task_repo.create(TaskCreate(title="Doing", status=TaskStatus.IN_PROGRESS))

    doing = await task_repo.list(status=TaskStatus.IN_PROGRESS)

    assert [task.title for task in doing] == ["Doing"]


@pytest.mark.asyncio
async def test_update_task(task_repo):
    task = await task_repo.create(TaskCreate(title="Draft", estimated_hours=2))

    updated = await task_repo.update(task.id, TaskUpdate(title="Final", status=TaskStatus.DONE))

    assert updated.title == "Final"
    assert updated.status == TaskStatus.DONE
    assert updated.estimated_hours == 2


@pytest.mark.asyncio
async def test_update_status_moves_task(task_repo):
    task = await task_repo.create(TaskCreate(title="Move me"))

    moved = await task_repo.update_status(task.id, TaskStatus.NEXT_UP, position=3)

    assert moved.status == TaskStatus.NEXT_UP
    assert moved.position == 3


@pytest.mark.asyncio
async def test_update_status_missing_task_raises(task_repo):
    with pytest.raises(NotFoundError):
        await task_repo.update_status(uuid4(), TaskStatus.DONE)


@pytest.mark.asyncio
async def test_delete_task_removes_its_blocks(task_repo, block_repo):
    task = await task_repo.create(TaskCreate(title="Doomed"))
    other = await task_repo.create(TaskCreate(title="Survivor"))
    await block_repo.create_many([scheduled(task.id, MONDAY, 9), scheduled(other.id, MONDAY, 10)])

    assert await task_repo.delete(task.id) is True

    remaining = await block_repo.list()
    assert [block.task_id for block in remaining] == [other.id]
    assert await task_repo.delete(task.id) is False


# ===========================================
# Calendar blocks
# ===========================================


@pytest.mark.asyncio
async def test_create_many_persists_scheduler_output_verbatim(task_repo, block_repo):
    task = await task_repo.create(TaskCreate(title="Scheduled"))
    blocks = [scheduled(task.id, MONDAY, 9), scheduled(task.id, MONDAY, 10)]

    stored = await block_repo.create_many(blocks)

    assert [block.id for block in stored] == [block.id for block in blocks]
    assert stored[0].task_title == "Scheduled"
    assert stored[0].start_time == time(9)
    assert stored[0].end_time == time(10)
    assert stored[0].block_type == BlockType.TASK
    assert stored[0].is_available is True


@pytest.mark.asyncio
async def test_list_blocks_range_and_order(block_repo):
    await block_repo.create(
        CalendarBlockCreate(date=TUESDAY, start_time="09:00", end_time="10:00")
    )
    await block_repo.create(
        CalendarBlockCreate(date=MONDAY, start_time="14:00", end_time="15:00")
    )
    await block_repo.create(
        CalendarBlockCreate(date=MONDAY, start_time="10:00", end_time="11:00")
    )

    all_blocks = await block_repo.list()
    monday = await block_repo.list(start_date=MONDAY, end_date=MONDAY)

    assert [(b.date, b.start_time.hour) for b in all_blocks] == [
        (MONDAY, 10),
        (MONDAY, 14),
        (TUESDAY, 9),
    ]
    assert [b.start_time.hour for b in monday] == [10, 14]
    assert [b.start_time.hour for b in await block_repo.list_for_date(TUESDAY)] == [9]


@pytest.mark.asyncio
async def test_list_unavailable_only_returns_reservations(task_repo, block_repo):
    task = await task_repo.create(TaskCreate(title="Work"))
    await block_repo.create_many([scheduled(task.id, MONDAY, 9)])
    reservation = await block_repo.create(
        UnavailableBlockCreate(date=MONDAY, start_time="13:00", end_time="15:00").to_block()
    )

    result = await block_repo.list_unavailable()

    assert [block.id for block in result] == [reservation.id]
    assert result[0].block_type == BlockType.UNAVAILABLE
    assert result[0].is_available is False


@pytest.mark.asyncio
async def test_update_block(block_repo):
    block = await block_repo.create(
        CalendarBlockCreate(date=MONDAY, start_time="09:00", end_time="10:00")
    )

    updated = await block_repo.update(
        block.id,
        CalendarBlockUpdate(start_time=time(11), end_time=time(12), is_available=False),
    )

    assert updated.start_time == time(11)
    assert updated.end_time == time(12)
    assert updated.is_available is False
    assert updated.date == MONDAY


@pytest.mark.asyncio
async def test_update_block_rejects_inverted_range(block_repo):
    block = await block_repo.create(
        CalendarBlockCreate(date=MONDAY, start_time="09:00", end_time="10:00")
    )

    with pytest.raises(ValidationError):
        await block_repo.update(block.id, CalendarBlockUpdate(start_time=time(11)))
    with pytest.raises(ValidationError):
        await block_repo.update(block.id, CalendarBlockUpdate(end_time=time(9)))

    stored = await block_repo.get(block.id)
    assert stored.start_time == time(9)
    assert stored.end_time == time(10)


@pytest.mark.asyncio
async def test_update_missing_block_raises(block_repo):
    with pytest.raises(NotFoundError):
        await block_repo.update(uuid4(), CalendarBlockUpdate(is_available=False))


@pytest.mark.asyncio
async def test_delete_block(block_repo):
    block = await block_repo.create(
        CalendarBlockCreate(date=MONDAY, start_time="09:00", end_time="10:00")
    )

    assert await block_repo.delete(block.id) is True
    assert await block_repo.get(block.id) is None
    assert await block_repo.delete(block.id) is False
