"""
Row decoration read models.

Geometry for the small overlays drawn on top of a row's bars: the ECBT
diamond, travel connector lines and the lunch tooltip text.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from ..value_objects.bar import Bar
from ..value_objects.date_range import DateRange
from ..value_objects.enums import BarType, LegType
from ..value_objects.timestamps import from_epoch_ms, ms_to_px


@dataclass(frozen=True)
class EcbtMarker:
    """Diamond marking a resource's ECBT on its row."""

    ecbt_ms: int
    center_px: float
    left_px: float
    top_px: float
    size: int
    label: str


@dataclass(frozen=True)
class TravelConnector:
    """Thin horizontal line leading into a travel bar."""

    left_px: float
    width_px: float
    top_px: float
    leg_type: LegType


def build_ecbt_marker(
    ecbt_ms: int,
    date_range: DateRange,
    px_per_hour: float,
    row_height: int = 40,
    size: int = 12,
) -> EcbtMarker | None:
    """Marker for `ecbt_ms`, or None when unset or outside the visible range."""
    if ecbt_ms <= 0 or not date_range.contains(ecbt_ms):
        return None

    center_px = ms_to_px(ecbt_ms - date_range.start_ms, px_per_hour)
    return EcbtMarker(
        ecbt_ms=ecbt_ms,
        center_px=center_px,
        left_px=center_px - size / 2,
        top_px=(row_height - size) / 2,
        size=size,
        label=f"ECBT {from_epoch_ms(ecbt_ms):%H:%M}",
    )


def build_travel_connectors(
    bars: Sequence[Bar],
    shift_start_px: float,
    content_width: float,
    row_height: int = 40,
) -> list[TravelConnector]:
    """
    Lines from the shift start into the home travel bar, and from the
    previous task bar's right edge into each inter-task travel bar.

    Only positive-length lines whose travel bar starts inside the content
    are produced; lines never extend past the content width.
    """
    top_px = row_height / 2 - 1
    connectors: list[TravelConnector] = []

    for position, bar in enumerate(bars):
        if bar.type is not BarType.TRAVEL or bar.width_px <= 0 or bar.leg is None:
            continue
        if not 0 <= bar.left_px <= content_width:
            continue

        if bar.leg.type is LegType.HOME:
            origin_px = max(0.0, shift_start_px)
        else:
            if position == 0 or bars[position - 1].type is not BarType.TASK:
                continue
            origin_px = bars[position - 1].right_px

        length = bar.left_px - origin_px
        if length <= 0:
            continue

        connectors.append(
            TravelConnector(
                left_px=origin_px,
                width_px=min(length, content_width - origin_px),
                top_px=top_px,
                leg_type=bar.leg.type,
            )
        )

    return connectors


def lunch_tooltip(lunch_start: str | None, lunch_end: str | None) -> str:
    if not lunch_start or not lunch_end:
        return "Lunch Break"
    return f"Expected Lunch Time: {lunch_start} - {lunch_end}"
