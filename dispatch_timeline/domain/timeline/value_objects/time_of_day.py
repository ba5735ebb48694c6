"""
Time-of-day Value Objects

Parsing of the informal 12-hour clock strings used for shift and lunch
schedules ("6:00 AM") and of the date formats seen on dispatch tasks.
Malformed input degrades to None; nothing here raises on bad data.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from .timestamps import MS_DAY, day_at, from_epoch_ms, to_local_naive

_CLOCK_RE = re.compile(r"(\d+):(\d+)\s*(AM|PM)", re.IGNORECASE)

# "Fri 28 Nov, 12:10 PM"
_DISPLAY_DATE_RE = re.compile(
    r"(\w+)\s+(\d+)\s+(\w+),\s*(\d+):(\d+)\s*(AM|PM)", re.IGNORECASE
)

_MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def _to_24_hour(hour: int, meridiem: str) -> int:
    meridiem = meridiem.upper()
    if meridiem == "PM" and hour != 12:
        return hour + 12
    if meridiem == "AM" and hour == 12:
        return 0
    return hour


@dataclass(frozen=True)
class ClockTime:
    """A wall-clock time of day parsed from a schedule string."""

    h: int
    m: int

    @property
    def minutes_of_day(self) -> int:
        return self.h * 60 + self.m

    def on(self, day: date) -> int:
        """Epoch ms of this clock time on `day` (local time)."""
        return day_at(day, self.h, self.m)

    def __str__(self) -> str:
        return f"{self.h:02d}:{self.m:02d}"


def parse_shift_time(text: Any) -> ClockTime | None:
    """
    Parse "H:MM AM|PM" (case-insensitive, surrounding text allowed).

    12 AM maps to hour 0, 12 PM stays 12, other PM hours gain 12.
    Returns None for empty or non-matching input.
    """
    if not text:
        return None
    match = _CLOCK_RE.search(str(text))
    if not match:
        return None

    hour = _to_24_hour(int(match.group(1)), match.group(3))
    minute = int(match.group(2))
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return ClockTime(h=hour, m=minute)


def daily_window(start: ClockTime, end: ClockTime, day: date) -> tuple[int, int]:
    """
    Epoch ms `(start, end)` of a daily window on `day`.

    Overnight windows (end at or before start in minutes of day) end on the
    following day.
    """
    start_ms = start.on(day)
    end_ms = end.on(day)
    if end.minutes_of_day <= start.minutes_of_day:
        end_ms += MS_DAY
    return start_ms, end_ms


def _parse_display_date(text: str, now: datetime) -> datetime | None:
    match = _DISPLAY_DATE_RE.search(text)
    if not match:
        return None

    month_name = match.group(3)[:3].title()
    if month_name not in _MONTHS:
        return None

    hour = _to_24_hour(int(match.group(4)), match.group(6))
    try:
        # Display dates carry no year
        return datetime(
            now.year,
            _MONTHS.index(month_name) + 1,
            int(match.group(2)),
            hour,
            int(match.group(5)),
        )
    except ValueError:
        return None


def parse_task_date(value: Any, now: datetime | None = None) -> datetime | None:
    """
    Parse a task date field into a naive local datetime.

    Accepts datetimes, epoch milliseconds, the dispatch display format
    ("Fri 28 Nov, 12:10 PM") and ISO-8601 strings.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return to_local_naive(value)
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        try:
            return from_epoch_ms(value)
        except (OverflowError, OSError, ValueError):
            return None

    text = str(value).strip()
    display = _parse_display_date(text, now or datetime.now())
    if display is not None:
        return display

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    return to_local_naive(parsed)
