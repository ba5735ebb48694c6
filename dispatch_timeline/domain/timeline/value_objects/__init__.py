"""Value objects for the timeline domain."""

from .bar import Bar, TimelineTick, TravelLeg
from .date_range import DateRange
from .enums import BarType, LegType, ZoomDirection
from .geo import haversine_km, travel_minutes
from .time_of_day import ClockTime, parse_shift_time, parse_task_date

__all__ = [
    "Bar",
    "BarType",
    "ClockTime",
    "DateRange",
    "LegType",
    "TimelineTick",
    "TravelLeg",
    "ZoomDirection",
    "haversine_km",
    "parse_shift_time",
    "parse_task_date",
    "travel_minutes",
]
