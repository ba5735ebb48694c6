"""
Viewport Controller

Thin stateful adapter around the pure time axis: owns the current zoom
level and the scroll offsets of the three timeline panes (header labels,
bar body, row labels), performs cursor-anchored zoom and keeps the panes in
sync. Work that must see the new scale applied is handed to a frame
scheduler and runs on the next paint.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from ....core.config import Settings, settings
from ....core.observability import get_logger
from ...shared.exceptions import InvalidZoomConfigurationError
from ..value_objects.date_range import DateRange
from ..value_objects.enums import ZoomDirection
from ..value_objects.timestamps import clamp
from .time_axis import TimeScale

logger = get_logger(__name__)

ZoomListener = Callable[[float], None]


class FrameScheduler(Protocol):
    """Something that runs callbacks on the next paint cycle."""

    def request_frame(self, callback: Callable[[], None]) -> None: ...


class DeferredFrameQueue:
    """
    Frame scheduler driven by the host's paint loop.

    Callbacks requested while a flush is running are kept for the next flush.
    """

    def __init__(self) -> None:
        self._pending: deque[Callable[[], None]] = deque()

    def request_frame(self, callback: Callable[[], None]) -> None:
        self._pending.append(callback)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def flush(self) -> int:
        """Run the callbacks queued so far. Returns how many ran."""
        batch = list(self._pending)
        self._pending.clear()
        for callback in batch:
            callback()
        return len(batch)


@dataclass
class ScrollPane:
    """Scroll geometry of one pane, mirroring a DOM scroll container."""

    scroll_left: float = 0.0
    scroll_top: float = 0.0
    scroll_width: float = 0.0
    client_width: float = 0.0
    scroll_height: float = 0.0
    client_height: float = 0.0

    @property
    def max_scroll_left(self) -> float:
        return max(0.0, self.scroll_width - self.client_width)

    @property
    def max_scroll_top(self) -> float:
        return max(0.0, self.scroll_height - self.client_height)

    def scroll_to(self, left: float | None = None, top: float | None = None) -> None:
        if left is not None:
            self.scroll_left = clamp(left, 0.0, self.max_scroll_left)
        if top is not None:
            self.scroll_top = clamp(top, 0.0, self.max_scroll_top)


def zoom_control_hint(zoom_level: float, ctrl_pressed: bool, default_zoom: float) -> str:
    """Tooltip text for the zoom reset button."""
    if ctrl_pressed:
        return f"Zoom: {zoom_level:g}x - Use mouse wheel to zoom at cursor position"
    if zoom_level == default_zoom:
        return "Hold Ctrl + mouse wheel to zoom timeline at cursor"
    return f"Zoom: {zoom_level:g}x - Click to reset to default"


class ViewportController:
    """Zoom and scroll state for one timeline view."""

    def __init__(
        self,
        date_range: DateRange,
        *,
        zoom_level: float | None = None,
        header: ScrollPane | None = None,
        body: ScrollPane | None = None,
        row_labels: ScrollPane | None = None,
        frames: FrameScheduler | None = None,
        config: Settings | None = None,
        zoom_min: float | None = None,
        zoom_max: float | None = None,
    ) -> None:
        self._config = config or settings
        self._zoom_min = self._config.ZOOM_MIN if zoom_min is None else zoom_min
        self._zoom_max = self._config.ZOOM_MAX if zoom_max is None else zoom_max
        if self._zoom_min <= 0 or self._zoom_max < self._zoom_min:
            raise InvalidZoomConfigurationError(self._zoom_min, self._zoom_max)

        self._date_range = date_range
        self._zoom_level = (
            self._config.default_zoom if zoom_level is None else zoom_level
        )
        self.header = header or ScrollPane()
        self.body = body or ScrollPane()
        self.row_labels = row_labels
        self.frames: FrameScheduler = frames or DeferredFrameQueue()
        self._listeners: list[ZoomListener] = []
        # Zoom level the pane geometry currently reflects
        self._applied_zoom = self._zoom_level
        self._pending_anchor: tuple[float, float] | None = None

        self._apply_content_width()

    @property
    def zoom_level(self) -> float:
        return self._zoom_level

    @property
    def date_range(self) -> DateRange:
        return self._date_range

    @property
    def scale(self) -> TimeScale:
        return TimeScale.for_range(self._date_range, self._zoom_level, self._config)

    @property
    def displayed_scale(self) -> TimeScale:
        """Scale the panes are laid out at, which lags `scale` until the next frame."""
        return TimeScale.for_range(self._date_range, self._applied_zoom, self._config)

    @property
    def is_default_zoom(self) -> bool:
        return self._zoom_level == self._config.default_zoom

    def on_zoom_change(self, listener: ZoomListener) -> Callable[[], None]:
        """Register a zoom listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_date_range(self, date_range: DateRange) -> None:
        self._date_range = date_range
        self._apply_content_width()

    def set_zoom(self, zoom_level: float) -> None:
        """Zoom level chosen by a zoom control, clamped to the configured bounds."""
        self._set_zoom(clamp(zoom_level, self._zoom_min, self._zoom_max))
        self._apply_content_width()

    def reset_zoom(self) -> None:
        self._set_zoom(self._config.default_zoom)
        self._apply_content_width()

    def hint(self, ctrl_pressed: bool = False) -> str:
        return zoom_control_hint(self._zoom_level, ctrl_pressed, self._config.default_zoom)

    def time_under_cursor(self, viewport_x: float) -> float:
        """Epoch ms under a pointer `viewport_x` pixels into the body pane."""
        return self.displayed_scale.ms_for(self.body.scroll_left + viewport_x)

    def handle_wheel(
        self,
        client_x: float,
        delta_y: float,
        *,
        ctrl_key: bool,
        viewport_left: float = 0.0,
    ) -> bool:
        """
        Cursor-anchored zoom for a wheel event.

        Only Ctrl+wheel zooms. The instant under the pointer is measured at
        the displayed scale; after the zoom change, a next-frame callback
        scrolls the body so that instant is under the pointer again at the
        new scale. Wheel events arriving before that frame replace the
        pending anchor, so only the latest one is restored. Returns True when
        the zoom level changed.
        """
        if not ctrl_key:
            return False

        viewport_x = client_x - viewport_left
        anchor_ms = self.time_under_cursor(viewport_x)

        direction = ZoomDirection.from_wheel_delta(delta_y)
        factor = self._config.ZOOM_STEP_FACTOR
        if direction is ZoomDirection.IN:
            new_zoom = min(self._zoom_max, self._zoom_level * factor)
        else:
            new_zoom = max(self._zoom_min, self._zoom_level / factor)

        if new_zoom == self._zoom_level:
            return False

        self._set_zoom(new_zoom)
        if self._pending_anchor is None:
            self.frames.request_frame(self._restore_anchor)
        self._pending_anchor = (anchor_ms, viewport_x)
        return True

    def sync_from_body(self) -> None:
        """Body scrolled: move the header proportionally, mirror rows next frame."""
        self._sync_horizontal(source=self.body, target=self.header)

        if self.row_labels is not None:
            self.frames.request_frame(self._mirror_vertical)

    def sync_body_from_header(self) -> None:
        """Header scrolled: move the body proportionally."""
        self._sync_horizontal(source=self.header, target=self.body)

    def _set_zoom(self, zoom_level: float) -> None:
        if zoom_level == self._zoom_level:
            return
        previous = self._zoom_level
        self._zoom_level = zoom_level
        logger.debug("Zoom level changed", previous=previous, zoom_level=zoom_level)
        for listener in list(self._listeners):
            listener(zoom_level)

    def _apply_content_width(self) -> None:
        scale = self.scale
        self._applied_zoom = self._zoom_level
        self.body.scroll_width = scale.content_width(self.body.client_width)
        self.header.scroll_width = scale.content_width(self.header.client_width)

    def _restore_anchor(self) -> None:
        if self._pending_anchor is None:
            return
        anchor_ms, viewport_x = self._pending_anchor
        self._pending_anchor = None

        self._apply_content_width()
        self.body.scroll_to(left=self.scale.px_for(anchor_ms) - viewport_x)
        self._sync_horizontal(source=self.body, target=self.header)

    def _mirror_vertical(self) -> None:
        if self.row_labels is not None:
            self.row_labels.scroll_top = self.body.scroll_top

    @staticmethod
    def _sync_horizontal(source: ScrollPane, target: ScrollPane) -> None:
        source_max = source.max_scroll_left
        target_max = target.max_scroll_left
        if source_max > 0 and target_max > 0:
            target.scroll_left = source.scroll_left / source_max * target_max
