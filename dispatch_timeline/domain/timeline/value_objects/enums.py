"""Domain enums for the timeline."""

from enum import Enum


class BarType(str, Enum):
    """Kind of occupancy interval drawn on a resource row."""

    SHIFT = "shift"
    LUNCH = "lunch"
    TASK = "task"
    TRAVEL = "travel"


class LegType(str, Enum):
    """Origin of an inferred travel leg."""

    HOME = "home"
    INTER_TASK = "inter-task"

    @property
    def label(self) -> str:
        return "Travel from Home" if self is LegType.HOME else "Travel"


class ZoomDirection(str, Enum):
    """Direction requested by a zoom gesture."""

    IN = "in"
    OUT = "out"

    @classmethod
    def from_wheel_delta(cls, delta_y: float) -> "ZoomDirection":
        """Wheel scrolled up (negative delta) zooms in."""
        return cls.IN if delta_y < 0 else cls.OUT
