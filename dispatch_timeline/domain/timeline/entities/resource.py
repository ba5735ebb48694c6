"""ResourceRow entity: a field worker scheduled for the visible period."""

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..value_objects.time_of_day import ClockTime, daily_window, parse_shift_time


class ResourceRow(BaseModel):
    """
    A scheduled worker shown as one timeline row.

    Field names follow the upstream dispatch payload (camelCase aliases);
    unknown upstream fields are kept as extras.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    resource_id: str | None = Field(default=None, alias="resourceId")
    id: str | None = None

    shift_start: str | None = Field(default=None, alias="shiftStart")
    shift_end: str | None = Field(default=None, alias="shiftEnd")
    lunch_start: str | None = Field(default=None, alias="lunchStart")
    lunch_end: str | None = Field(default=None, alias="lunchEnd")

    home_lat: float | None = Field(default=None, alias="homeLat")
    home_lng: float | None = Field(default=None, alias="homeLng")

    # Estimated Comeback Time (epoch ms), attached after layout
    ecbt: int | None = None

    @field_validator("resource_id", "id", mode="before")
    @classmethod
    def _coerce_identifier(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @classmethod
    def coerce(cls, value: "ResourceRow | dict[str, Any]") -> "ResourceRow":
        if isinstance(value, cls):
            return value
        return cls.model_validate(value)

    @property
    def row_key(self) -> str:
        """Identifier used to match tasks to this row."""
        return str(self.resource_id or self.id or "UNKNOWN")

    @property
    def has_home_location(self) -> bool:
        return self.home_lat is not None and self.home_lng is not None

    def shift_times(self) -> tuple[ClockTime, ClockTime] | None:
        start = parse_shift_time(self.shift_start)
        end = parse_shift_time(self.shift_end)
        if start is None or end is None:
            return None
        return start, end

    def lunch_times(self) -> tuple[ClockTime, ClockTime] | None:
        start = parse_shift_time(self.lunch_start)
        end = parse_shift_time(self.lunch_end)
        if start is None or end is None:
            return None
        return start, end

    def shift_window_on(self, day: date) -> tuple[int, int] | None:
        """Shift start/end epoch ms on `day`, or None without a parseable shift."""
        times = self.shift_times()
        if times is None:
            return None
        return daily_window(times[0], times[1], day)

    def shift_start_on(self, day: date) -> int | None:
        start = parse_shift_time(self.shift_start)
        return start.on(day) if start is not None else None
