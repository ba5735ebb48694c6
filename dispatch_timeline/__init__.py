"""
Dispatch Timeline

Layout engine for a field-service dispatch timeline: shift, lunch, travel
and task bars per resource row, Estimated Comeback Time, and the zoomable
time axis.
"""

from .domain.timeline import (
    DateRange,
    ResourceRow,
    Task,
    TimelineLayout,
    ViewportController,
    compute_layout,
)

__version__ = "0.1.0"

__all__ = [
    "DateRange",
    "ResourceRow",
    "Task",
    "TimelineLayout",
    "ViewportController",
    "compute_layout",
]
