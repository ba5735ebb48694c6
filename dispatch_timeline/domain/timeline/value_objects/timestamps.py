"""Epoch-millisecond helpers shared by the timeline services."""

from datetime import date, datetime, time

MS_MINUTE = 60 * 1000
MS_HOUR = 60 * MS_MINUTE
MS_DAY = 24 * MS_HOUR


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def to_epoch_ms(moment: datetime) -> int:
    """Epoch ms for a datetime; naive values are read as local wall-clock time."""
    return int(round(moment.timestamp() * 1000))


def from_epoch_ms(ms: float) -> datetime:
    """Naive local datetime for an epoch ms value."""
    return datetime.fromtimestamp(ms / 1000)


def to_local_naive(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def day_at(day: date, hour: int, minute: int) -> int:
    """Epoch ms of `hour:minute` local time on `day`."""
    return to_epoch_ms(datetime.combine(day, time(hour, minute)))


def same_calendar_day(a_ms: float, b_ms: float) -> bool:
    return from_epoch_ms(a_ms).date() == from_epoch_ms(b_ms).date()


def ms_to_px(offset_ms: float, px_per_hour: float) -> float:
    return offset_ms / MS_HOUR * px_per_hour
