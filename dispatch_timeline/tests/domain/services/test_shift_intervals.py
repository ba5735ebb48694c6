"""
Unit Tests for the Shift/Break Interval Extractor
"""

from datetime import date

import pytest

from dispatch_timeline.domain.timeline.entities import ResourceRow
from dispatch_timeline.domain.timeline.services.shift_intervals import (
    extract_interval_bars,
    lunch_bars_for,
    shift_bars_for,
)
from dispatch_timeline.domain.timeline.value_objects import BarType, DateRange

PX = 10.0


class TestExtractIntervalBars:
    """Test daily window extraction across the visible range."""

    def test_day_shift(self, today_range):
        bars = extract_interval_bars("6:00 AM", "2:00 PM", today_range, PX)
        assert len(bars) == 1
        assert bars[0].type is BarType.SHIFT
        assert bars[0].left_px == pytest.approx(10.0)
        assert bars[0].width_px == pytest.approx(80.0)

    def test_one_bar_per_day(self):
        date_range = DateRange.quick_select(4, today=date(2025, 11, 28))
        bars = extract_interval_bars("6:00 AM", "2:00 PM", date_range, PX)
        assert len(bars) == 4
        assert [bar.left_px for bar in bars] == pytest.approx([10.0, 250.0, 490.0, 730.0])

    def test_overnight_shift_spans_eight_hours(self):
        date_range = DateRange.quick_select(2, today=date(2025, 11, 28))
        bars = extract_interval_bars("10:00 PM", "6:00 AM", date_range, PX)
        assert len(bars) == 2
        assert bars[0].left_px == pytest.approx(170.0)
        assert bars[0].width_px == pytest.approx(80.0)
        # Second night is cut at the range end
        assert bars[1].left_px == pytest.approx(410.0)
        assert bars[1].width_px == pytest.approx(20.0, abs=0.01)

    def test_window_before_range_start_is_clipped(self, today_range):
        bars = extract_interval_bars("4:00 AM", "7:00 AM", today_range, PX)
        assert bars[0].left_px == 0
        assert bars[0].width_px == pytest.approx(20.0)

    @pytest.mark.parametrize(
        ("start", "end"), [(None, "2:00 PM"), ("6:00 AM", ""), ("soon", "later")]
    )
    def test_unparseable_bounds_give_no_bars(self, today_range, start, end):
        assert extract_interval_bars(start, end, today_range, PX) == []

    def test_bars_never_overflow_range(self, today_range):
        content_px = today_range.span_ms / 3_600_000 * PX
        for bar in extract_interval_bars("9:00 PM", "11:00 AM", today_range, PX):
            assert bar.left_px >= 0
            assert bar.right_px <= content_px + 1e-6


class TestResourceBars:
    """Test shift and lunch bars for a resource row."""

    def test_shift_and_lunch(self, resource_r1, today_range):
        shifts = shift_bars_for(resource_r1, today_range, PX)
        lunches = lunch_bars_for(resource_r1, today_range, PX)
        assert len(shifts) == 1
        assert lunches[0].type is BarType.LUNCH
        assert lunches[0].left_px == pytest.approx(70.0)
        assert lunches[0].width_px == pytest.approx(5.0)

    def test_resource_without_lunch(self, today_range):
        row = ResourceRow(resourceId="R2", shiftStart="6:00 AM", shiftEnd="2:00 PM")
        assert lunch_bars_for(row, today_range, PX) == []

    def test_resource_without_shift(self, today_range):
        assert shift_bars_for(ResourceRow(resourceId="R3"), today_range, PX) == []
