"""
Scheduler service for packing tasks into the working calendar.

Tasks are placed one hour at a time, in input order, by a single
forward-only cursor that walks working hours (09:00-17:00, Mon-Fri)
between two dates. Unavailable intervals are skipped, never moved.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Callable, Iterable, Optional, Sequence, Union
from uuid import UUID, uuid4

from kanban_calendar.core.logger import setup_logger
from kanban_calendar.interfaces.placement_strategy import IPlacementStrategy
from kanban_calendar.models.calendar import AvailableSlot
from kanban_calendar.models.enums import BlockType
from kanban_calendar.models.schedule import (
    IntervalLike,
    ScheduledBlock,
    TaskAllocationSummary,
    TaskLike,
)

logger = setup_logger(__name__)

WORK_START_HOUR = 9
WORK_END_HOUR = 17
WORKING_WEEKDAYS = frozenset({0, 1, 2, 3, 4})  # Monday..Friday
SLOT_HOURS = 1

Exclusions = dict[date, list[tuple[time, time]]]


# ===========================================
# Boundary helpers
# ===========================================


def coerce_date(value: Union[date, datetime, str]) -> date:
    """Accept a date, a datetime or a YYYY-MM-DD string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def coerce_time(value: Union[time, str]) -> time:
    """Accept a time or an HH:MM[:SS] string."""
    if isinstance(value, time):
        return value
    return time.fromisoformat(str(value))


def index_exclusions(unavailable_blocks: Iterable[IntervalLike]) -> Exclusions:
    """Group unavailable intervals by date, keeping input order."""
    exclusions: Exclusions = defaultdict(list)
    for block in unavailable_blocks:
        exclusions[coerce_date(block.date)].append(
            (coerce_time(block.start_time), coerce_time(block.end_time))
        )
    return exclusions


def is_slot_blocked(slot_start: time, intervals: Iterable[tuple[time, time]]) -> bool:
    """
    Check a scheduler slot against the intervals of its date.

    The slot is blocked when it starts inside an interval
    (start <= slot_start < end). Any single match is enough;
    overlapping or duplicate intervals need no reconciliation.
    """
    return any(start <= slot_start < end for start, end in intervals)


def overlaps_any(
    range_start: time,
    range_end: time,
    intervals: Iterable[tuple[time, time]],
) -> bool:
    """True if [range_start, range_end) intersects any interval."""
    return any(start < range_end and end > range_start for start, end in intervals)


# ===========================================
# Cursor
# ===========================================


@dataclass(frozen=True)
class Cursor:
    """Forward-only (day, hour) position over working hours."""

    day: date
    hour: int = WORK_START_HOUR

    @property
    def on_working_day(self) -> bool:
        return self.day.weekday() in WORKING_WEEKDAYS

    @property
    def slot_start(self) -> time:
        return time(self.hour)

    @property
    def slot_end(self) -> time:
        return time(self.hour + SLOT_HOURS)

    def is_exhausted(self, window_end: date) -> bool:
        return self.day > window_end

    def next_day(self) -> Cursor:
        return Cursor(self.day + timedelta(days=1))

    def advance(self) -> Cursor:
        """Move one slot forward, rolling over to the next day at end of hours."""
        hour = self.hour + SLOT_HOURS
        if hour >= WORK_END_HOUR:
            return self.next_day()
        return Cursor(self.day, hour)


def attempt_slot(cursor: Cursor, exclusions: Exclusions) -> tuple[Cursor, Optional[Cursor]]:
    """
    Single transition of the placement state machine.

    Returns the next cursor and, if the current slot is free, the cursor of
    that slot. Non-working days are skipped without consuming a slot.
    """
    if not cursor.on_working_day:
        return cursor.next_day(), None
    blocked = is_slot_blocked(cursor.slot_start, exclusions.get(cursor.day, ()))
    return cursor.advance(), (None if blocked else cursor)


# ===========================================
# Strategies
# ===========================================


class GreedyFirstFitStrategy(IPlacementStrategy):
    """
    Greedy first-fit packer.

    Each task takes the next free one-hour slots from a cursor shared by
    all tasks. The cursor is never rewound, so gaps left behind by
    exclusions are not back-filled by later tasks.
    """

    def __init__(self, id_factory: Callable[[], UUID] = uuid4):
        self._id_factory = id_factory

    def place(
        self,
        tasks: Sequence[TaskLike],
        window_start: date,
        window_end: date,
        unavailable_blocks: Iterable[IntervalLike] = (),
    ) -> list[ScheduledBlock]:
        start = coerce_date(window_start)
        end = coerce_date(window_end)
        exclusions = index_exclusions(unavailable_blocks)

        blocks: list[ScheduledBlock] = []
        cursor = Cursor(start)

        for task in tasks:
            if cursor.is_exhausted(end):
                break
            remaining = task.estimated_hours or 0
            while remaining > 0 and not cursor.is_exhausted(end):
                cursor, slot = attempt_slot(cursor, exclusions)
                if slot is None:
                    continue
                blocks.append(
                    ScheduledBlock(
                        id=self._id_factory(),
                        task_id=task.id,
                        date=slot.day,
                        start_time=slot.slot_start,
                        end_time=slot.slot_end,
                        is_available=True,
                        block_type=BlockType.TASK,
                    )
                )
                remaining -= min(remaining, SLOT_HOURS)

        return blocks


def schedule_tasks_in_calendar(
    tasks: Sequence[TaskLike],
    window_start: date,
    window_end: date,
    unavailable_blocks: Iterable[IntervalLike] = (),
) -> list[ScheduledBlock]:
    """Pack tasks with the greedy first-fit strategy."""
    return GreedyFirstFitStrategy().place(tasks, window_start, window_end, unavailable_blocks)


def summarize_allocation(
    tasks: Sequence[TaskLike],
    blocks: Iterable[ScheduledBlock],
) -> list[TaskAllocationSummary]:
    """Requested vs scheduled hours per task, in task order."""
    scheduled: dict[UUID, int] = defaultdict(int)
    for block in blocks:
        scheduled[block.task_id] += SLOT_HOURS
    return [
        TaskAllocationSummary(
            task_id=task.id,
            requested_hours=max(0, task.estimated_hours or 0),
            scheduled_hours=scheduled.get(task.id, 0),
        )
        for task in tasks
    ]


def find_available_slots(
    start_date: date,
    end_date: date,
    duration_hours: int = 1,
    unavailable_blocks: Iterable[IntervalLike] = (),
) -> list[AvailableSlot]:
    """
    List every on-the-hour slot of the given length inside working hours.

    Slots intersecting an unavailable interval are left out.
    """
    duration = max(1, int(duration_hours or 1))
    start = coerce_date(start_date)
    end = coerce_date(end_date)
    exclusions = index_exclusions(unavailable_blocks)

    slots: list[AvailableSlot] = []
    day = start
    while day <= end:
        if day.weekday() in WORKING_WEEKDAYS:
            for hour in range(WORK_START_HOUR, WORK_END_HOUR - duration + 1):
                slot_start = time(hour)
                slot_end = time(hour + duration)
                if overlaps_any(slot_start, slot_end, exclusions.get(day, ())):
                    continue
                slots.append(
                    AvailableSlot(
                        date=day,
                        start_time=slot_start,
                        end_time=slot_end,
                        duration_hours=duration,
                    )
                )
        day += timedelta(days=1)
    return slots


class SchedulerService:
    """
    Service facade over a placement strategy.

    Provides:
    - Task placement (greedy first-fit unless another strategy is given)
    - Under-scheduling detection
    - Free slot listing
    """

    def __init__(self, strategy: Optional[IPlacementStrategy] = None):
        self.strategy = strategy or GreedyFirstFitStrategy()

    def schedule(
        self,
        tasks: Sequence[TaskLike],
        window_start: date,
        window_end: date,
        unavailable_blocks: Iterable[IntervalLike] = (),
    ) -> list[ScheduledBlock]:
        """
        Place tasks between window_start and window_end (both inclusive).

        Returns fewer blocks than requested hours when the window runs out;
        use summarize() to find the shortfall.
        """
        unavailable = list(unavailable_blocks)
        blocks = self.strategy.place(tasks, window_start, window_end, unavailable)
        requested = sum(max(0, task.estimated_hours or 0) for task in tasks)
        logger.info(
            f"Scheduled {len(blocks)}/{requested} hours for {len(tasks)} tasks "
            f"between {window_start} and {window_end} "
            f"({len(unavailable)} unavailable intervals)"
        )
        return blocks

    def summarize(
        self,
        tasks: Sequence[TaskLike],
        blocks: Iterable[ScheduledBlock],
    ) -> list[TaskAllocationSummary]:
        summaries = summarize_allocation(tasks, blocks)
        for summary in summaries:
            if not summary.fully_scheduled:
                logger.warning(
                    f"Task {summary.task_id} under-scheduled: "
                    f"{summary.scheduled_hours}/{summary.requested_hours} hours placed"
                )
        return summaries

    def available_slots(
        self,
        start_date: date,
        end_date: date,
        duration_hours: int = 1,
        unavailable_blocks: Iterable[IntervalLike] = (),
    ) -> list[AvailableSlot]:
        return find_available_slots(start_date, end_date, duration_hours, unavailable_blocks)
