"""
Date Range Value Object

The visible window of the timeline, held as epoch milliseconds and derived
once per render from a start/end datetime pair.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from ...shared.exceptions import InvalidDateRangeError
from .timestamps import from_epoch_ms, to_epoch_ms, to_local_naive


@dataclass(frozen=True)
class DateRange:
    """Visible timeline window `[start_ms, end_ms]`."""

    start_ms: int
    end_ms: int

    def __post_init__(self):
        if self.end_ms < self.start_ms:
            raise InvalidDateRangeError(
                "end", self.end_ms, "Range end must not be before range start"
            )

    @classmethod
    def from_datetimes(cls, start: datetime, end: datetime) -> DateRange:
        return cls(start_ms=to_epoch_ms(start), end_ms=to_epoch_ms(end))

    @classmethod
    def quick_select(
        cls, days: int, today: date | None = None, start_hour: int = 5
    ) -> DateRange:
        """
        Range covering `days` calendar days from `today`.

        Starts at `start_hour`:00 on the first day and ends at 23:59:59.999
        on the last one.
        """
        if days < 1:
            raise InvalidDateRangeError("days", days, "Quick select needs at least one day")

        today = today or date.today()
        start = datetime(today.year, today.month, today.day, start_hour)
        last_day = today + timedelta(days=days - 1)
        end = datetime(last_day.year, last_day.month, last_day.day, 23, 59, 59, 999000)
        return cls.from_datetimes(start, end)

    @property
    def start(self) -> datetime:
        return from_epoch_ms(self.start_ms)

    @property
    def end(self) -> datetime:
        return from_epoch_ms(self.end_ms)

    @property
    def span_ms(self) -> int:
        return self.end_ms - self.start_ms

    def contains(self, ms: float) -> bool:
        return self.start_ms <= ms <= self.end_ms

    def iter_day_cursors(self) -> Iterator[datetime]:
        """
        Yield one cursor per calendar day, starting at the range start.

        The cursor keeps the start's time of day and stops once it passes the
        range end.
        """
        cursor = to_local_naive(self.start)
        last = to_local_naive(self.end)
        while cursor <= last:
            yield cursor
            cursor = cursor + timedelta(days=1)

    def __str__(self) -> str:
        return f"{self.start.isoformat()} to {self.end.isoformat()}"
