"""
Tasks API endpoints.

CRUD operations for tasks plus Kanban column moves and board view.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from kanban_calendar.api.deps import TaskRepo
from kanban_calendar.core.exceptions import NotFoundError
from kanban_calendar.models.enums import KANBAN_COLUMNS, TaskStatus
from kanban_calendar.models.task import Task, TaskCreate, TaskStatusUpdate, TaskUpdate

router = APIRouter()


def build_kanban_board(tasks: list[Task]) -> dict[str, list[Task]]:
    """Group tasks by column; every column is present, in board order."""
    board: dict[str, list[Task]] = {column.value: [] for column in KANBAN_COLUMNS}
    for task in tasks:
        board[task.status.value].append(task)
    return board


@router.get("", response_model=list[Task])
async def list_tasks(
    repo: TaskRepo,
    project_id: Optional[UUID] = Query(None, description="Filter by project"),
    status: Optional[TaskStatus] = Query(None, description="Filter by Kanban column"),
):
    """List tasks ordered by position."""
    return await repo.list(project_id=project_id, status=status)


@router.get("/kanban/{project_id}", response_model=dict[str, list[Task]])
async def get_kanban_board(project_id: UUID, repo: TaskRepo):
    """Get a project's tasks grouped by Kanban column."""
    tasks = await repo.list(project_id=project_id)
    return build_kanban_board(tasks)


@router.get("/{task_id}", response_model=Task)
async def get_task(task_id: UUID, repo: TaskRepo):
    """Get a task by ID."""
    task = await repo.get(task_id)
    if not task:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Task {task_id} not found",
        )
    return task


@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED)
async def create_task(task: TaskCreate, repo: TaskRepo):
    """Create a task."""
    return await repo.create(task)


@router.put("/{task_id}", response_model=Task)
async def update_task(task_id: UUID, update: TaskUpdate, repo: TaskRepo):
    """Update a task."""
    try:
        return await repo.update(task_id, update)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )


@router.put("/{task_id}/status", response_model=Task)
async def update_task_status(task_id: UUID, move: TaskStatusUpdate, repo: TaskRepo):
    """Move a task to another Kanban column."""
    try:
        new_status = TaskStatus(move.status)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid status",
        )
    try:
        return await repo.update_status(task_id, new_status, move.position)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )


@router.delete("/{task_id}")
async def delete_task(task_id: UUID, repo: TaskRepo):
    """Delete a task and its calendar blocks."""
    deleted = await repo.delete(task_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Task {task_id} not found",
        )
    return {"message": "Task deleted successfully"}
