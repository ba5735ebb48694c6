"""
Domain Services

Stateless layout computations over resources and tasks, plus the viewport
controller that owns zoom and scroll state for one view.
"""

from .ecbt import committed_tasks, compute_ecbt
from .layout_service import (
    LayoutContext,
    RowLayout,
    TimelineLayout,
    compute_layout,
    layout_row,
)
from .shift_intervals import extract_interval_bars, lunch_bars_for, shift_bars_for
from .task_layout import RowTaskLayout, resolve_task_bars
from .time_axis import TimeScale, build_ticks, pixels_per_hour, quick_select_options
from .travel_scheduler import schedule_travel
from .viewport import DeferredFrameQueue, ScrollPane, ViewportController

__all__ = [
    "DeferredFrameQueue",
    "LayoutContext",
    "RowLayout",
    "RowTaskLayout",
    "ScrollPane",
    "TimeScale",
    "TimelineLayout",
    "ViewportController",
    "build_ticks",
    "committed_tasks",
    "compute_ecbt",
    "compute_layout",
    "extract_interval_bars",
    "layout_row",
    "lunch_bars_for",
    "pixels_per_hour",
    "quick_select_options",
    "resolve_task_bars",
    "schedule_travel",
    "shift_bars_for",
]
