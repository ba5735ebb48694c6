"""
Shift/Break Interval Extractor

Materialises a resource's daily shift and lunch windows as bars, one per
calendar day of the visible range, clipped to that range.
"""

from ....core.observability import get_logger
from ..entities.resource import ResourceRow
from ..value_objects.bar import Bar
from ..value_objects.date_range import DateRange
from ..value_objects.enums import BarType
from ..value_objects.time_of_day import ClockTime, daily_window, parse_shift_time
from ..value_objects.timestamps import clamp, ms_to_px

logger = get_logger(__name__)


def clip_to_bar(
    start_ms: float,
    end_ms: float,
    lower_ms: float,
    upper_ms: float,
    date_range: DateRange,
    px_per_hour: float,
    bar_type: BarType,
) -> Bar | None:
    """
    Clip `[start_ms, end_ms]` to `[lower_ms, upper_ms]` and convert it to a
    bar positioned from the range start. Empty intervals give None.
    """
    clipped_start = clamp(start_ms, lower_ms, upper_ms)
    clipped_end = clamp(end_ms, lower_ms, upper_ms)
    if clipped_end <= clipped_start:
        return None

    return Bar(
        left_px=ms_to_px(clipped_start - date_range.start_ms, px_per_hour),
        width_px=ms_to_px(clipped_end - clipped_start, px_per_hour),
        type=bar_type,
    )


def daily_bars(
    start: ClockTime,
    end: ClockTime,
    date_range: DateRange,
    px_per_hour: float,
    bar_type: BarType,
) -> list[Bar]:
    bars: list[Bar] = []
    for cursor in date_range.iter_day_cursors():
        start_ms, end_ms = daily_window(start, end, cursor.date())
        bar = clip_to_bar(
            start_ms,
            end_ms,
            date_range.start_ms,
            date_range.end_ms,
            date_range,
            px_per_hour,
            bar_type,
        )
        if bar is not None:
            bars.append(bar)
    return bars


def extract_interval_bars(
    start_text: str | None,
    end_text: str | None,
    date_range: DateRange,
    px_per_hour: float,
    bar_type: BarType = BarType.SHIFT,
) -> list[Bar]:
    """
    Bars for a daily "H:MM AM/PM" window across the visible range.

    An unparseable bound means the row has no such window: the result is empty.
    """
    start = parse_shift_time(start_text)
    end = parse_shift_time(end_text)
    if start is None or end is None:
        return []
    return daily_bars(start, end, date_range, px_per_hour, bar_type)


def shift_bars_for(
    resource: ResourceRow, date_range: DateRange, px_per_hour: float
) -> list[Bar]:
    times = resource.shift_times()
    if times is None:
        logger.debug(
            "No parseable shift for row",
            row=resource.row_key,
            shift_start=resource.shift_start,
            shift_end=resource.shift_end,
        )
        return []
    return daily_bars(times[0], times[1], date_range, px_per_hour, BarType.SHIFT)


def lunch_bars_for(
    resource: ResourceRow, date_range: DateRange, px_per_hour: float
) -> list[Bar]:
    times = resource.lunch_times()
    if times is None:
        return []
    return daily_bars(times[0], times[1], date_range, px_per_hour, BarType.LUNCH)
