"""
Calendar API endpoints.

Calendar blocks, unavailable reservations and free slot lookup.
"""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from kanban_calendar.api.deps import CalendarBlockRepo, Scheduler
from kanban_calendar.core.exceptions import NotFoundError, ValidationError
from kanban_calendar.models.calendar import (
    AvailableSlot,
    CalendarBlock,
    CalendarBlockCreate,
    CalendarBlockUpdate,
    UnavailableBlockCreate,
)

router = APIRouter()


@router.get("", response_model=list[CalendarBlock])
async def list_blocks(
    repo: CalendarBlockRepo,
    start_date: Optional[date] = Query(None, description="Range start (needs end_date)"),
    end_date: Optional[date] = Query(None, description="Range end (needs start_date)"),
    task_id: Optional[UUID] = Query(None, description="Filter by task"),
):
    """List calendar blocks ordered by date and start time."""
    return await repo.list(start_date=start_date, end_date=end_date, task_id=task_id)


@router.get("/available", response_model=list[AvailableSlot])
async def list_available_slots(
    repo: CalendarBlockRepo,
    scheduler: Scheduler,
    start_date: date = Query(..., description="First day to search"),
    end_date: date = Query(..., description="Last day to search"),
    duration_hours: int = Query(1, ge=1, le=8, description="Slot length in hours"),
):
    """List free working-hour slots, skipping unavailable blocks."""
    unavailable = await repo.list_unavailable()
    return scheduler.available_slots(start_date, end_date, duration_hours, unavailable)


@router.get("/date/{day}", response_model=list[CalendarBlock])
async def list_blocks_for_date(day: date, repo: CalendarBlockRepo):
    """List calendar blocks on a single date."""
    return await repo.list_for_date(day)


@router.post("", response_model=CalendarBlock, status_code=status.HTTP_201_CREATED)
async def create_block(block: CalendarBlockCreate, repo: CalendarBlockRepo):
    """Create a calendar block."""
    return await repo.create(block)


@router.post("/unavailable", response_model=CalendarBlock, status_code=status.HTTP_201_CREATED)
async def mark_unavailable(block: UnavailableBlockCreate, repo: CalendarBlockRepo):
    """Reserve a time range so the scheduler never places tasks in it."""
    return await repo.create(block.to_block())


@router.put("/{block_id}", response_model=CalendarBlock)
async def update_block(block_id: UUID, update: CalendarBlockUpdate, repo: CalendarBlockRepo):
    """Update a calendar block."""
    try:
        return await repo.update(block_id, update)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.message,
        )


@router.delete("/{block_id}")
async def delete_block(block_id: UUID, repo: CalendarBlockRepo):
    """Delete a calendar block."""
    deleted = await repo.delete(block_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Calendar block {block_id} not found",
        )
    return {"message": "Calendar block deleted successfully"}
