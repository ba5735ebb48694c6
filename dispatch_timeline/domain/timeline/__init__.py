"""
Timeline Domain

Turns dispatch resources and tasks into positioned bars on a horizontally
scrollable, zoomable time axis.
"""

# Entities
from .entities import ResourceRow, Task, TaskDebug

# Read models
from .read_models import EcbtMarker, TravelConnector

# Domain services
from .services import (
    RowLayout,
    TimelineLayout,
    TimeScale,
    ViewportController,
    compute_ecbt,
    compute_layout,
)

# Value objects
from .value_objects import (
    Bar,
    BarType,
    ClockTime,
    DateRange,
    LegType,
    TimelineTick,
    TravelLeg,
    haversine_km,
    parse_shift_time,
    travel_minutes,
)

__all__ = [
    "Bar",
    "BarType",
    "ClockTime",
    "DateRange",
    "EcbtMarker",
    "LegType",
    "ResourceRow",
    "RowLayout",
    "Task",
    "TaskDebug",
    "TimeScale",
    "TimelineLayout",
    "TimelineTick",
    "TravelConnector",
    "TravelLeg",
    "ViewportController",
    "compute_ecbt",
    "compute_layout",
    "haversine_km",
    "parse_shift_time",
    "travel_minutes",
]
