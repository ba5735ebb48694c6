"""
Travel-Time Scheduler

Travel time is never part of the dispatch data, so it is inferred from
geography: a home leg from the resource's home to the first task of the day,
and an inter-task leg between consecutive same-day tasks.
"""

from collections.abc import Sequence
from datetime import datetime

from ....core.config import Settings, settings
from ....core.observability import get_logger
from ..entities.resource import ResourceRow
from ..entities.task import Task
from ..value_objects.bar import TravelLeg
from ..value_objects.enums import LegType
from ..value_objects.geo import haversine_km, travel_minutes
from ..value_objects.time_of_day import parse_task_date
from ..value_objects.timestamps import MS_MINUTE, same_calendar_day, to_epoch_ms

logger = get_logger(__name__)


def home_leg(
    resource: ResourceRow,
    first_task: Task,
    shift_start_ms: int,
    config: Settings | None = None,
) -> TravelLeg | None:
    """Leg from home starting at the shift start, or None without coordinates."""
    config = config or settings
    if not resource.has_home_location or not first_task.has_location:
        return None

    distance = haversine_km(
        resource.home_lat, resource.home_lng, first_task.lat, first_task.lng  # type: ignore[arg-type]
    )
    minutes = travel_minutes(
        distance, config.HOME_TRAVEL_FLOOR_MINUTES, config.AVERAGE_SPEED_KMH
    )
    return TravelLeg(
        index=0,
        start_ms=shift_start_ms,
        end_ms=shift_start_ms + minutes * MS_MINUTE,
        type=LegType.HOME,
        distance_km=distance,
    )


def inter_task_leg(
    index: int,
    previous: Task,
    following: Task,
    now: datetime | None = None,
    config: Settings | None = None,
) -> TravelLeg | None:
    """
    Leg between two consecutive tasks, starting when `previous` finishes.

    Pairs on different calendar days, or without coordinates on both sides,
    get no leg.
    """
    config = config or settings
    now = now or datetime.now()
    previous_start = previous.effective_start_ms(now)
    following_start = following.effective_start_ms(now)
    if previous_start is None or following_start is None:
        return None
    if not same_calendar_day(previous_start, following_start):
        return None
    if not previous.has_location or not following.has_location:
        return None

    distance = haversine_km(
        previous.lat, previous.lng, following.lat, following.lng  # type: ignore[arg-type]
    )
    minutes = travel_minutes(
        distance, config.INTER_TASK_TRAVEL_FLOOR_MINUTES, config.AVERAGE_SPEED_KMH
    )

    # Nominal finish of the previous task, falling back to its start
    parsed_end = parse_task_date(previous.finish_value, now)
    start_ms = to_epoch_ms(parsed_end) if parsed_end is not None else previous_start

    return TravelLeg(
        index=index,
        start_ms=start_ms,
        end_ms=start_ms + minutes * MS_MINUTE,
        type=LegType.INTER_TASK,
        distance_km=distance,
    )


def schedule_travel(
    tasks: Sequence[Task],
    resource: ResourceRow,
    shift_start_ms: int,
    now: datetime | None = None,
    config: Settings | None = None,
) -> dict[int, TravelLeg]:
    """
    Travel legs keyed by the index of the task they precede.

    `tasks` are the resource's assigned tasks for today, sorted by start.
    """
    legs: dict[int, TravelLeg] = {}
    if not tasks:
        return legs

    first_leg = home_leg(resource, tasks[0], shift_start_ms, config)
    if first_leg is not None and first_leg.end_ms > first_leg.start_ms:
        legs[0] = first_leg

    for index in range(1, len(tasks)):
        leg = inter_task_leg(index, tasks[index - 1], tasks[index], now, config)
        if leg is not None and leg.end_ms > leg.start_ms:
            legs[index] = leg

    logger.debug(
        "Travel legs scheduled",
        row=resource.row_key,
        legs=len(legs),
        tasks=len(tasks),
    )
    return legs
