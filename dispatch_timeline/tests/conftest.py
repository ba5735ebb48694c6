"""Shared fixtures for the timeline tests.

Every time-dependent call receives the fixed `NOW`, so results do not
depend on the wall clock.
"""

from datetime import datetime

import pytest

from dispatch_timeline.domain.timeline.entities import ResourceRow, Task
from dispatch_timeline.domain.timeline.value_objects import DateRange

NOW = datetime(2025, 11, 28, 9, 30)
TODAY = NOW.date()

ASSIGNED = "Assigned (ACT)"


def at(hour: int, minute: int = 0, day: int = 28) -> datetime:
    return datetime(2025, 11, day, hour, minute)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def today_range() -> DateRange:
    """05:00 to 23:59:59.999 on the fixed day."""
    return DateRange.quick_select(1, today=TODAY)


@pytest.fixture
def resource_r1() -> ResourceRow:
    return ResourceRow.model_validate(
        {
            "resourceId": "R1",
            "shiftStart": "6:00 AM",
            "shiftEnd": "2:00 PM",
            "lunchStart": "12:00 PM",
            "lunchEnd": "12:30 PM",
            "homeLat": 51.50,
            "homeLng": -0.12,
        }
    )


@pytest.fixture
def task_t1() -> Task:
    return Task.model_validate(
        {
            "taskId": "T1",
            "employeeId": "R1",
            "expectedStartDate": at(7).isoformat(),
            "estimatedDuration": 60,
            "lat": 51.51,
            "lng": -0.13,
            "taskStatus": ASSIGNED,
        }
    )


@pytest.fixture
def task_factory():
    """Build assigned tasks owned by R1."""

    def make_task(task_id: str, start: datetime | str | None, **fields) -> Task:
        payload = {
            "taskId": task_id,
            "employeeId": "R1",
            "expectedStartDate": (
                start.isoformat() if isinstance(start, datetime) else start
            ),
            "taskStatus": ASSIGNED,
        }
        payload.update(fields)
        return Task.model_validate(payload)

    return make_task
