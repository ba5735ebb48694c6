"""
Time Axis Mapper

Converts the visible date range and zoom multiplier into a pixels-per-hour
scale, the tick step, and the labelled header ticks.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime

from ....core.config import Settings, settings
from ..value_objects.bar import TimelineTick
from ..value_objects.date_range import DateRange
from ..value_objects.timestamps import MS_HOUR, from_epoch_ms


def pixels_per_hour(
    total_hours: int,
    zoom_level: float,
    base_px_per_hour: float,
    min_px_per_hour: float,
) -> float:
    """
    Scale for a range of `total_hours`.

    Ranges up to a day use the base rate; longer ranges shrink
    proportionally so they stay navigable, never below the floor.
    """
    if total_hours <= 24:
        return base_px_per_hour * zoom_level
    return max(min_px_per_hour, base_px_per_hour * (24 / total_hours) * zoom_level)


def tick_step_hours(total_hours: int, total_days: int) -> int:
    if total_days > 2:
        return 24
    if total_hours > 24:
        return 6
    return 1


def format_tick_label(moment: datetime, step: int, total_hours: int) -> str:
    """Date label for multi-day ranges, hour labels for short ones."""
    total_days = math.ceil(total_hours / 24)
    if total_days > 2 or step >= 24:
        return f"{moment:%b} {moment.day}"

    hour = moment.hour
    if step > 1:
        return f"{hour:02d}:00 till {(hour + step) % 24:02d}:00"
    return f"{hour:02d}:00"


@dataclass(frozen=True)
class TimeScale:
    """Pixel mapping for one date range at one zoom level."""

    date_range: DateRange
    zoom_level: float
    px_per_hour: float
    total_hours: int
    total_days: int
    step_hours: int

    @classmethod
    def for_range(
        cls,
        date_range: DateRange,
        zoom_level: float,
        config: Settings | None = None,
    ) -> TimeScale:
        config = config or settings
        total_hours = math.ceil(date_range.span_ms / MS_HOUR)
        total_days = math.ceil(total_hours / 24)
        return cls(
            date_range=date_range,
            zoom_level=zoom_level,
            px_per_hour=pixels_per_hour(
                total_hours, zoom_level, config.BASE_PX_PER_HOUR, config.MIN_PX_PER_HOUR
            ),
            total_hours=total_hours,
            total_days=total_days,
            step_hours=tick_step_hours(total_hours, total_days),
        )

    def px_for(self, ms: float) -> float:
        return (ms - self.date_range.start_ms) / MS_HOUR * self.px_per_hour

    def ms_for(self, px: float) -> float:
        return self.date_range.start_ms + px / self.px_per_hour * MS_HOUR

    def content_width(self, container_width: float = 0) -> float:
        """Width of the scrollable content, at least the container width."""
        return max(container_width or 0, self.total_hours * self.px_per_hour)


def quick_select_options(
    today: date | None = None, config: Settings | None = None
) -> dict[int, DateRange]:
    """Date ranges offered by the range picker, keyed by day count."""
    config = config or settings
    return {
        days: DateRange.quick_select(days, today, config.QUICK_SELECT_START_HOUR)
        for days in config.QUICK_SELECT_DAYS
    }


def build_ticks(scale: TimeScale) -> list[TimelineTick]:
    ticks: list[TimelineTick] = []
    for hour in range(0, scale.total_hours + 1, scale.step_hours):
        time_ms = scale.date_range.start_ms + hour * MS_HOUR
        ticks.append(
            TimelineTick(
                time_ms=time_ms,
                label=format_tick_label(
                    from_epoch_ms(time_ms), scale.step_hours, scale.total_hours
                ),
            )
        )
    return ticks
