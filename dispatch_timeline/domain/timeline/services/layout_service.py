"""
Timeline Layout Service

Entry point of the layout engine: turns resources, tasks, a visible date
range and a zoom level into bar geometry, header ticks and per-row ECBT.

Each resource row is an independent unit of work (`layout_row`); rows share
nothing and may be computed concurrently without changing the result.
"""

from __future__ import annotations

import contextvars
import time
from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ....core.config import Settings, settings
from ....core.observability import (
    get_logger,
    log_performance_metrics,
    row_context,
    set_correlation_id,
)
from ..entities.resource import ResourceRow
from ..entities.task import Task
from ..read_models.row_decorations import (
    EcbtMarker,
    TravelConnector,
    build_ecbt_marker,
    build_travel_connectors,
    lunch_tooltip,
)
from ..value_objects.bar import Bar, TimelineTick
from ..value_objects.date_range import DateRange
from .ecbt import compute_ecbt
from .shift_intervals import lunch_bars_for, shift_bars_for
from .task_layout import resolve_task_bars
from .time_axis import TimeScale, build_ticks

logger = get_logger(__name__)


@dataclass(frozen=True)
class LayoutContext:
    """Inputs shared read-only by every row of one layout run."""

    date_range: DateRange
    scale: TimeScale
    now: datetime
    content_width: float
    config: Settings


@dataclass
class RowLayout:
    """Everything the rendering layer needs for one resource row."""

    resource: ResourceRow
    shift_bars: list[Bar] = field(default_factory=list)
    lunch_bars: list[Bar] = field(default_factory=list)
    task_bars: list[Bar] = field(default_factory=list)
    tasks: list[Task] = field(default_factory=list)
    ecbt_ms: int = 0
    ecbt_marker: EcbtMarker | None = None
    travel_connectors: list[TravelConnector] = field(default_factory=list)
    lunch_tooltip: str = "Lunch Break"

    @property
    def row_key(self) -> str:
        return self.resource.row_key


@dataclass
class TimelineLayout:
    """Result of one layout run."""

    scale: TimeScale
    ticks: list[TimelineTick]
    content_width: float
    rows: list[RowLayout]
    annotated_tasks: dict[str, Task] = field(default_factory=dict)

    @property
    def ecbt_by_row(self) -> list[int]:
        return [row.ecbt_ms for row in self.rows]

    @property
    def resources(self) -> list[ResourceRow]:
        """Input resources with `ecbt` attached."""
        return [row.resource for row in self.rows]

    def row(self, row_key: str) -> RowLayout | None:
        return next((row for row in self.rows if row.row_key == row_key), None)


def layout_row(
    resource: ResourceRow, tasks: Sequence[Task], context: LayoutContext
) -> RowLayout:
    """Compute one row. `tasks` are the tasks owned by `resource`."""
    with row_context(resource.row_key):
        return _layout_row(resource, tasks, context)


def _layout_row(
    resource: ResourceRow, tasks: Sequence[Task], context: LayoutContext
) -> RowLayout:
    scale = context.scale

    task_layout = resolve_task_bars(
        resource,
        [task for task in tasks if task.employee_id == resource.row_key],
        context.date_range,
        scale.px_per_hour,
        now=context.now,
        config=context.config,
    )
    ecbt_ms = compute_ecbt(resource, tasks, now=context.now, config=context.config)

    connectors: list[TravelConnector] = []
    if task_layout.shift_window is not None:
        connectors = build_travel_connectors(
            task_layout.bars,
            scale.px_for(task_layout.shift_window[0]),
            context.content_width,
            context.config.ROW_HEIGHT,
        )

    return RowLayout(
        resource=resource.model_copy(update={"ecbt": ecbt_ms}),
        shift_bars=shift_bars_for(resource, context.date_range, scale.px_per_hour),
        lunch_bars=lunch_bars_for(resource, context.date_range, scale.px_per_hour),
        task_bars=task_layout.bars,
        tasks=task_layout.tasks,
        ecbt_ms=ecbt_ms,
        ecbt_marker=build_ecbt_marker(
            ecbt_ms,
            context.date_range,
            scale.px_per_hour,
            context.config.ROW_HEIGHT,
            context.config.ECBT_MARKER_SIZE,
        ),
        travel_connectors=connectors,
        lunch_tooltip=lunch_tooltip(resource.lunch_start, resource.lunch_end),
    )


def _group_by_owner(tasks: Iterable[Task]) -> Mapping[str, list[Task]]:
    grouped: dict[str, list[Task]] = defaultdict(list)
    for task in tasks:
        owner = task.owner_id
        if owner:
            grouped[owner].append(task)
    return grouped


def _as_date_range(value: DateRange | tuple[datetime, datetime]) -> DateRange:
    if isinstance(value, DateRange):
        return value
    start, end = value
    return DateRange.from_datetimes(start, end)


def compute_layout(
    resources: Iterable[ResourceRow | dict[str, Any]],
    tasks: Iterable[Task | dict[str, Any]],
    date_range: DateRange | tuple[datetime, datetime],
    zoom_level: float = 1.0,
    *,
    now: datetime | None = None,
    container_width: float = 0,
    config: Settings | None = None,
    max_workers: int | None = None,
) -> TimelineLayout:
    """
    Full timeline layout for the visible range.

    Pure apart from logging: inputs are never mutated, annotated task copies
    are returned keyed by task id. Travel and ECBT work on `now`'s calendar
    day regardless of the visible range.
    """
    config = config or settings
    now = now or datetime.now()
    max_workers = max_workers or config.LAYOUT_MAX_WORKERS
    set_correlation_id()
    started = time.perf_counter()

    visible = _as_date_range(date_range)
    rows_in = [ResourceRow.coerce(resource) for resource in resources]
    tasks_by_owner = _group_by_owner(Task.coerce(task) for task in tasks)

    scale = TimeScale.for_range(visible, zoom_level, config)
    context = LayoutContext(
        date_range=visible,
        scale=scale,
        now=now,
        content_width=scale.content_width(container_width),
        config=config,
    )

    def run(resource: ResourceRow) -> RowLayout:
        return layout_row(resource, tasks_by_owner.get(resource.row_key, []), context)

    if max_workers > 1 and len(rows_in) > 1:
        logger.debug("Laying out rows concurrently", rows=len(rows_in), max_workers=max_workers)
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            # Worker threads see this run's correlation id
            futures = [
                executor.submit(contextvars.copy_context().run, run, resource)
                for resource in rows_in
            ]
            rows = [future.result() for future in futures]
    else:
        rows = [run(resource) for resource in rows_in]

    annotated: dict[str, Task] = {}
    for row in rows:
        for task in row.tasks:
            if task.task_id:
                annotated[task.task_id] = task

    layout = TimelineLayout(
        scale=scale,
        ticks=build_ticks(scale),
        content_width=context.content_width,
        rows=rows,
        annotated_tasks=annotated,
    )

    log_performance_metrics(
        "compute_layout",
        time.perf_counter() - started,
        {
            "rows": len(rows),
            "bars": sum(
                len(row.shift_bars) + len(row.lunch_bars) + len(row.task_bars)
                for row in rows
            ),
            "px_per_hour": scale.px_per_hour,
            "max_workers": max_workers,
        },
        slow_threshold_ms=config.SLOW_LAYOUT_WARNING_MS,
    )
    return layout
