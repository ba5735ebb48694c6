"""
ECBT (Estimated Comeback Time) Calculator

ECBT is the instant a resource is expected to be done with all committed
work for the current day. Without committed work it is the shift start.
"""

from collections.abc import Iterable
from datetime import datetime

from ....core.config import Settings, settings
from ..entities.resource import ResourceRow
from ..entities.task import Task
from ..value_objects.timestamps import from_epoch_ms


def committed_tasks(
    resource: ResourceRow,
    tasks: Iterable[Task],
    now: datetime,
    assigned_status: str,
) -> list[Task]:
    """Assigned tasks of `resource` whose start falls on `now`'s date."""
    today = now.date()
    committed = []
    for task in tasks:
        if task.owner_id != resource.row_key or not task.is_assigned(assigned_status):
            continue
        start_ms = task.start_ms(now)
        if start_ms is not None and from_epoch_ms(start_ms).date() == today:
            committed.append(task)
    return committed


def compute_ecbt(
    resource: ResourceRow,
    tasks: Iterable[Task],
    now: datetime | None = None,
    config: Settings | None = None,
) -> int:
    """
    Latest committed finish today, never earlier than the shift start.

    Returns the shift start when nothing is committed, and 0 when the
    resource also has no parseable shift.
    """
    config = config or settings
    now = now or datetime.now()

    shift_start_ms = resource.shift_start_on(now.date())
    ecbt_ms = shift_start_ms or 0

    for task in committed_tasks(resource, tasks, now, config.ASSIGNED_STATUS):
        finish_ms = task.finish_ms(now)
        if finish_ms is not None and finish_ms > ecbt_ms:
            ecbt_ms = finish_ms

    return ecbt_ms
