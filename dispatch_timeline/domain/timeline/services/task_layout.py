"""
Task Bar Layout Resolver

Places a resource's assigned tasks for today on its row. A task starts no
earlier than the end of its travel leg or the drawn end of the task before
it, so bars never overlap. Travel bars are drawn ahead of the task they
precede and every bar is clipped to today's shift.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import date, datetime

from ....core.config import Settings, settings
from ....core.observability import get_logger
from ..entities.resource import ResourceRow
from ..entities.task import Task, TaskDebug
from ..value_objects.bar import Bar, TravelLeg
from ..value_objects.date_range import DateRange
from ..value_objects.enums import BarType
from ..value_objects.timestamps import MS_MINUTE, from_epoch_ms
from .shift_intervals import clip_to_bar
from .travel_scheduler import schedule_travel

logger = get_logger(__name__)


@dataclass
class RowTaskLayout:
    """Task and travel bars of one row, with the annotated task copies."""

    bars: list[Bar] = field(default_factory=list)
    tasks: list[Task] = field(default_factory=list)
    legs: dict[int, TravelLeg] = field(default_factory=dict)
    shift_window: tuple[int, int] | None = None

    @property
    def task_bars(self) -> list[Bar]:
        return [bar for bar in self.bars if bar.type is BarType.TASK]

    @property
    def travel_bars(self) -> list[Bar]:
        return [bar for bar in self.bars if bar.type is BarType.TRAVEL]


def tasks_for_day(
    tasks: Iterable[Task],
    day: date,
    now: datetime,
    assigned_status: str,
) -> list[Task]:
    """Assigned tasks starting on `day`, sorted ascending by start."""
    selected: list[tuple[int, Task]] = []
    for task in tasks:
        if not task.is_assigned(assigned_status):
            continue
        start_ms = task.effective_start_ms(now)
        if start_ms is None:
            logger.debug("Task without start skipped", task_id=task.task_id)
            continue
        if from_epoch_ms(start_ms).date() != day:
            continue
        selected.append((start_ms, task))

    selected.sort(key=lambda item: item[0])
    return [task for _, task in selected]


def apply_gap(bar: Bar, gap_px: float, min_width_px: float) -> Bar:
    """Shrink a task bar so neighbours never touch: half the gap on each side."""
    return replace(
        bar,
        left_px=bar.left_px + gap_px / 2,
        width_px=max(min_width_px, bar.width_px - gap_px),
    )


def _debug_for(
    task: Task,
    expected_ms: int,
    forced_start_ms: float | None,
    leg: TravelLeg | None,
) -> TaskDebug | None:
    if forced_start_ms is None and leg is None:
        return task.debug

    update: dict[str, int] = {}
    if forced_start_ms is not None:
        update["forced_start_ms"] = int(round(forced_start_ms))
        update["original_expected_ms"] = expected_ms
    if leg is not None:
        update["travel_start_ms"] = int(round(leg.start_ms))
        update["travel_end_ms"] = int(round(leg.end_ms))

    base = task.debug or TaskDebug()
    return base.model_copy(update=update)


def resolve_task_bars(
    resource: ResourceRow,
    tasks: Iterable[Task],
    date_range: DateRange,
    px_per_hour: float,
    now: datetime | None = None,
    config: Settings | None = None,
) -> RowTaskLayout:
    """
    Lay out `resource`'s assigned tasks for today.

    `tasks` may contain anything owned by the resource; only assigned tasks
    starting today are placed. Rows without a parseable shift stay empty.
    """
    config = config or settings
    now = now or datetime.now()
    today = now.date()

    shift_window = resource.shift_window_on(today)
    if shift_window is None:
        return RowTaskLayout()
    shift_start_ms, shift_end_ms = shift_window

    day_tasks = tasks_for_day(tasks, today, now, config.ASSIGNED_STATUS)
    legs = schedule_travel(day_tasks, resource, shift_start_ms, now, config)
    layout = RowTaskLayout(legs=legs, shift_window=shift_window)
    # Unclipped end of the previous task as drawn, dropped bars included
    previous_end_ms: float | None = None

    for index, task in enumerate(day_tasks):
        expected_ms = task.effective_start_ms(now)
        if expected_ms is None:
            continue

        leg = legs.get(index)
        if leg is not None and previous_end_ms is not None and leg.start_ms < previous_end_ms:
            # The hop leaves when the previous task actually finishes
            leg = replace(
                leg,
                start_ms=previous_end_ms,
                end_ms=previous_end_ms + (leg.end_ms - leg.start_ms),
            )
            layout.legs[index] = leg

        earliest_ms: float = expected_ms
        if leg is not None:
            earliest_ms = max(earliest_ms, leg.end_ms)
        if previous_end_ms is not None:
            earliest_ms = max(earliest_ms, previous_end_ms)

        start_ms: float = expected_ms
        forced_start_ms: float | None = None
        if earliest_ms > start_ms:
            # Travel and earlier work only ever push a task later
            forced_start_ms = earliest_ms
            start_ms = forced_start_ms
            logger.debug(
                "Task start forced later",
                row=resource.row_key,
                task_id=task.task_id,
                original_expected_ms=expected_ms,
                forced_start_ms=forced_start_ms,
            )

        if leg is not None:
            travel_bar = clip_to_bar(
                leg.start_ms,
                leg.end_ms,
                shift_start_ms,
                shift_end_ms,
                date_range,
                px_per_hour,
                BarType.TRAVEL,
            )
            if travel_bar is not None:
                layout.bars.append(replace(travel_bar, leg=leg))

        annotated = task.model_copy(
            update={
                "debug": _debug_for(task, expected_ms, forced_start_ms, leg),
                "expected_date": from_epoch_ms(expected_ms),
            }
        )
        layout.tasks.append(annotated)

        duration_ms = task.duration_minutes(config.DEFAULT_TASK_DURATION_MINUTES) * MS_MINUTE
        previous_end_ms = start_ms + duration_ms
        task_bar = clip_to_bar(
            start_ms,
            start_ms + duration_ms,
            shift_start_ms,
            shift_end_ms,
            date_range,
            px_per_hour,
            BarType.TASK,
        )
        if task_bar is None:
            logger.debug(
                "Task outside shift window dropped",
                row=resource.row_key,
                task_id=task.task_id,
            )
            continue

        layout.bars.append(
            apply_gap(
                replace(task_bar, task=annotated),
                config.TASK_BAR_GAP_PX,
                config.MIN_TASK_BAR_WIDTH_PX,
            )
        )

    return layout
