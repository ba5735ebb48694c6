"""
Timeline geometry value objects: bars, travel legs and axis ticks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .enums import BarType, LegType
from .timestamps import MS_MINUTE

if TYPE_CHECKING:
    from ..entities.task import Task


@dataclass(frozen=True)
class TravelLeg:
    """
    Inferred travel interval preceding the task at `index`.

    Index 0 is the leg before the first task of the day.
    """

    index: int
    start_ms: float
    end_ms: float
    type: LegType
    distance_km: float = 0.0

    @property
    def duration_minutes(self) -> float:
        return (self.end_ms - self.start_ms) / MS_MINUTE

    @property
    def label(self) -> str:
        return self.type.label


@dataclass(frozen=True)
class Bar:
    """A rectangle on a resource row, in pixels from the range start."""

    left_px: float
    width_px: float
    type: BarType
    task: Task | None = None
    leg: TravelLeg | None = None

    def __post_init__(self):
        if self.width_px < 0:
            raise ValueError(f"Bar width cannot be negative, got {self.width_px}")

    @property
    def right_px(self) -> float:
        return self.left_px + self.width_px

    @property
    def label(self) -> str:
        if self.leg is not None:
            return self.leg.label
        if self.task is not None and self.task.task_id:
            return str(self.task.task_id)
        return self.type.value


@dataclass(frozen=True)
class TimelineTick:
    """Header tick at `time_ms` with its display label."""

    time_ms: int
    label: str
