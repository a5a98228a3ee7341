from datetime import datetime, timezone
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest
from fastapi import HTTPException

from kanban_calendar.api.tasks import build_kanban_board, delete_task, update_task_status
from kanban_calendar.core.exceptions import NotFoundError
from kanban_calendar.models.enums import TaskStatus
from kanban_calendar.models.task import Task, TaskStatusUpdate


def _make_task(index: int, status: TaskStatus, project_id: UUID | None = None) -> Task:
    return Task(
        id=uuid4(),
        project_id=project_id,
        title=f"Task {index}",
        status=status,
        position=index,
        created_at=datetime(2025, 11, 3, 9, 0, tzinfo=timezone.utc),
    )


def test_build_kanban_board_lists_every_column_in_order() -> None:
    tasks = [
        _make_task(0, TaskStatus.DONE),
        _make_task(1, TaskStatus.BACKLOG),
        _make_task(2, TaskStatus.DONE),
    ]

    board = build_kanban_board(tasks)

    assert list(board) == ["backlog", "planned", "next_up", "in_progress", "done", "archive"]
    assert [task.title for task in board["done"]] == ["Task 0", "Task 2"]
    assert [task.title for task in board["backlog"]] == ["Task 1"]
    assert board["archive"] == []


def test_build_kanban_board_empty() -> None:
    assert all(column == [] for column in build_kanban_board([]).values())


@pytest.mark.asyncio
async def test_update_task_status_rejects_unknown_column() -> None:
    repo = AsyncMock()

    with pytest.raises(HTTPException) as exc_info:
        await update_task_status(uuid4(), TaskStatusUpdate(status="blocked"), repo=repo)

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "Invalid status"
    repo.update_status.assert_not_called()


@pytest.mark.asyncio
async def test_update_task_status_passes_position() -> None:
    task_id = uuid4()
    repo = AsyncMock()
    repo.update_status.return_value = _make_task(2, TaskStatus.NEXT_UP)

    result = await update_task_status(
        task_id, TaskStatusUpdate(status="next_up", position=2), repo=repo
    )

    assert result.status == TaskStatus.NEXT_UP
    repo.update_status.assert_awaited_once_with(task_id, TaskStatus.NEXT_UP, 2)


@pytest.mark.asyncio
async def test_update_task_status_missing_task_returns_404() -> None:
    repo = AsyncMock()
    repo.update_status.side_effect = NotFoundError("Task not found")

    with pytest.raises(HTTPException) as exc_info:
        await update_task_status(uuid4(), TaskStatusUpdate(status="done"), repo=repo)

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_delete_missing_task_returns_404() -> None:
    repo = AsyncMock()
    repo.delete.return_value = False

    with pytest.raises(HTTPException) as exc_info:
        await delete_task(uuid4(), repo=repo)

    assert exc_info.value.status_code == 404
