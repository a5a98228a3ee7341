"""
SQLite implementation of CalendarBlock repository.
"""

from __future__ import annotations

from datetime import date
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import and_, delete, select
from sqlalchemy.exc import SQLAlchemyError

from kanban_calendar.core.exceptions import InfrastructureError, NotFoundError, ValidationError
from kanban_calendar.core.logger import setup_logger
from kanban_calendar.infrastructure.local.database import (
    CalendarBlockORM,
    TaskORM,
    get_session_factory,
)
from kanban_calendar.interfaces.calendar_block_repository import ICalendarBlockRepository
from kanban_calendar.models.calendar import (
    CalendarBlock,
    CalendarBlockCreate,
    CalendarBlockUpdate,
    format_hhmm,
)
from kanban_calendar.models.enums import BlockType
from kanban_calendar.models.schedule import ScheduledBlock

logger = setup_logger(__name__)


class SqliteCalendarBlockRepository(ICalendarBlockRepository):
    """SQLite implementation of calendar block repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: CalendarBlockORM, task: Optional[TaskORM] = None) -> CalendarBlock:
        """Convert ORM object (plus the joined task, if any) to Pydantic model."""
        return CalendarBlock(
            id=UUID(orm.id),
            task_id=UUID(orm.task_id) if orm.task_id else None,
            date=orm.date,
            start_time=orm.start_time,
            end_time=orm.end_time,
            is_available=bool(orm.is_available),
            block_type=BlockType(orm.block_type or BlockType.TASK.value),
            created_at=orm.created_at,
            task_title=task.title if task else None,
            project_id=UUID(task.project_id) if task and task.project_id else None,
        )

    def _joined_query(self):
        return select(CalendarBlockORM, TaskORM).outerjoin(
            TaskORM, CalendarBlockORM.task_id == TaskORM.id
        )

    async def _fetch(self, query) -> list[CalendarBlock]:
        async with self._session_factory() as session:
            result = await session.execute(query)
            return [self._orm_to_model(block, task) for block, task in result.all()]

    async def create(self, block: CalendarBlockCreate) -> CalendarBlock:
        """Create a calendar block."""
        block_id = str(uuid4())
        async with self._session_factory() as session:
            session.add(
                CalendarBlockORM(
                    id=block_id,
                    task_id=str(block.task_id) if block.task_id else None,
                    date=block.date,
                    start_time=format_hhmm(block.start_time),
                    end_time=format_hhmm(block.end_time),
                    is_available=block.is_available,
                    block_type=block.block_type.value,
                )
            )
            await session.commit()
        return await self.get(UUID(block_id))

    async def create_many(self, blocks: list[ScheduledBlock]) -> list[CalendarBlock]:
        """Persist scheduler output in one transaction."""
        if not blocks:
            return []
        async with self._session_factory() as session:
            session.add_all(
                [
                    CalendarBlockORM(
                        id=str(block.id),
                        task_id=str(block.task_id),
                        date=block.date,
                        start_time=format_hhmm(block.start_time),
                        end_time=format_hhmm(block.end_time),
                        is_available=block.is_available,
                        block_type=block.block_type.value,
                    )
                    for block in blocks
                ]
            )
            try:
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"Failed to persist {len(blocks)} calendar blocks: {e}")
                raise InfrastructureError("Failed to persist calendar blocks", details=str(e)) from e

        ids = [str(block.id) for block in blocks]
        stored = await self._fetch(
            self._joined_query().where(CalendarBlockORM.id.in_(ids))
        )
        by_id = {str(block.id): block for block in stored}
        return [by_id[block_id] for block_id in ids]

    async def get(self, block_id: UUID) -> Optional[CalendarBlock]:
        """Get a block by ID."""
        blocks = await self._fetch(
            self._joined_query().where(CalendarBlockORM.id == str(block_id))
        )
        return blocks[0] if blocks else None

    async def list(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        task_id: Optional[UUID] = None,
    ) -> list[CalendarBlock]:
        """List blocks ordered by date and start time."""
        query = self._joined_query()
        conditions = []
        if start_date and end_date:
            conditions.append(CalendarBlockORM.date.between(start_date, end_date))
        if task_id:
            conditions.append(CalendarBlockORM.task_id == str(task_id))
        if conditions:
            query = query.where(and_(*conditions))
        query = query.order_by(CalendarBlockORM.date, CalendarBlockORM.start_time)
        return await self._fetch(query)

    async def list_for_date(self, day: date) -> list[CalendarBlock]:
        """List blocks on one date ordered by start time."""
        query = (
            self._joined_query()
            .where(CalendarBlockORM.date == day)
            .order_by(CalendarBlockORM.start_time)
        )
        return await self._fetch(query)

    async def list_unavailable(self) -> list[CalendarBlock]:
        """List every block marked not available."""
        query = (
            self._joined_query()
            .where(CalendarBlockORM.is_available.is_(False))
            .order_by(CalendarBlockORM.date, CalendarBlockORM.start_time)
        )
        return await self._fetch(query)

    async def update(self, block_id: UUID, update: CalendarBlockUpdate) -> CalendarBlock:
        """Update a block."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(CalendarBlockORM).where(CalendarBlockORM.id == str(block_id))
            )
            orm = result.scalar_one_or_none()

            if not orm:
                raise NotFoundError(f"Calendar block {block_id} not found")

            update_data = update.model_dump(exclude_unset=True)
            for field, value in update_data.items():
                if value is None:
                    continue
                if field in ("start_time", "end_time"):
                    value = format_hhmm(value)
                elif field == "task_id":
                    value = str(value)
                elif hasattr(value, "value"):  # Enum
                    value = value.value
                setattr(orm, field, value)

            # Zero-padded HH:MM strings compare chronologically
            if orm.end_time <= orm.start_time:
                raise ValidationError(
                    "end_time must be after start_time",
                    details={"start_time": orm.start_time, "end_time": orm.end_time},
                )

            await session.commit()

        return await self.get(block_id)

    async def delete(self, block_id: UUID) -> bool:
        """Delete a block."""
        return await self.delete_many([block_id]) > 0

    async def delete_many(self, block_ids: list[UUID]) -> int:
        """Delete blocks by ID."""
        if not block_ids:
            return 0
        async with self._session_factory() as session:
            result = await session.execute(
                delete(CalendarBlockORM).where(
                    CalendarBlockORM.id.in_([str(block_id) for block_id in block_ids])
                )
            )
            await session.commit()
            return result.rowcount or 0
