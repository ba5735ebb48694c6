"""
Integration Tests for the Timeline Layout Service

End-to-end layout of resource rows from upstream-shaped payloads.
"""

from datetime import datetime

import pytest

from dispatch_timeline.core.observability import get_correlation_id
from dispatch_timeline.domain.timeline.services import layout_service
from dispatch_timeline.domain.timeline.services.layout_service import compute_layout
from dispatch_timeline.domain.timeline.value_objects import BarType, DateRange, LegType
from dispatch_timeline.domain.timeline.value_objects.timestamps import to_epoch_ms

NOW = datetime(2025, 11, 28, 9, 30)

R1 = {
    "resourceId": "R1",
    "shiftStart": "6:00 AM",
    "shiftEnd": "2:00 PM",
    "lunchStart": "12:00 PM",
    "lunchEnd": "12:30 PM",
    "homeLat": 51.50,
    "homeLng": -0.12,
}

T1 = {
    "taskId": "T1",
    "employeeId": "R1",
    "expectedStartDate": "2025-11-28T07:00:00",
    "estimatedDuration": 60,
    "lat": 51.51,
    "lng": -0.13,
    "taskStatus": "Assigned (ACT)",
}


@pytest.fixture
def many_rows() -> tuple[list[dict], list[dict]]:
    resources = []
    tasks = []
    for row in range(8):
        resources.append({**R1, "resourceId": f"R{row}", "homeLat": 51.4 + row / 100})
        for hour in (7, 9, 11, 13):
            tasks.append(
                {
                    **T1,
                    "taskId": f"R{row}-{hour}",
                    "employeeId": f"R{row}",
                    "expectedStartDate": f"2025-11-28T{hour:02d}:00:00",
                    "estimatedDuration": 45 + row * 5,
                    "lat": 51.5 + hour / 1000,
                }
            )
    return resources, tasks


class TestComputeLayout:
    """Test the full layout of a single row."""

    def test_single_resource_scenario(self, today_range):
        layout = compute_layout([R1], [T1], today_range, 1.0, now=NOW)

        assert layout.scale.px_per_hour == 50
        assert layout.content_width == 950
        assert len(layout.ticks) == 20

        row = layout.rows[0]
        assert row.row_key == "R1"
        assert len(row.shift_bars) == 1
        assert row.shift_bars[0].left_px == pytest.approx(50)
        assert row.shift_bars[0].width_px == pytest.approx(400)
        assert row.lunch_bars[0].left_px == pytest.approx(350)

        travel, task_bar = row.task_bars
        assert travel.type is BarType.TRAVEL
        assert travel.leg.type is LegType.HOME
        assert travel.width_px == pytest.approx(50 / 6)
        assert task_bar.left_px == pytest.approx(101)
        assert task_bar.width_px == pytest.approx(48)

        assert row.ecbt_ms == to_epoch_ms(datetime(2025, 11, 28, 8, 0))
        assert row.resource.ecbt == row.ecbt_ms
        assert row.ecbt_marker.label == "ECBT 08:00"
        assert row.lunch_tooltip == "Expected Lunch Time: 12:00 PM - 12:30 PM"

    def test_accepts_datetime_pair(self):
        layout = compute_layout(
            [R1], [T1], (datetime(2025, 11, 28, 5, 0), datetime(2025, 11, 28, 23, 0)), now=NOW
        )
        assert layout.scale.total_hours == 18

    def test_annotated_tasks(self, today_range):
        layout = compute_layout([R1], [T1], today_range, now=NOW)
        annotated = layout.annotated_tasks["T1"]
        assert annotated.expected_date == datetime(2025, 11, 28, 7, 0)
        assert annotated.debug.travel_start_ms == to_epoch_ms(datetime(2025, 11, 28, 6, 0))

    def test_inputs_are_not_mutated(self, today_range):
        resource = dict(R1)
        task = dict(T1)
        compute_layout([resource], [task], today_range, now=NOW)
        assert resource == R1
        assert task == T1

    def test_tasks_are_routed_to_their_row(self, today_range):
        other = {**T1, "taskId": "T2", "employeeId": "R2"}
        layout = compute_layout(
            [R1, {**R1, "resourceId": "R2"}], [T1, other], today_range, now=NOW
        )
        assert [bar.task.task_id for bar in layout.rows[0].task_bars if bar.task] == ["T1"]
        assert [bar.task.task_id for bar in layout.rows[1].task_bars if bar.task] == ["T2"]

    def test_row_without_shift(self, today_range):
        layout = compute_layout([{"resourceId": "R3"}], [], today_range, now=NOW)
        row = layout.rows[0]
        assert row.shift_bars == []
        assert row.task_bars == []
        assert row.ecbt_ms == 0
        assert row.ecbt_marker is None

    def test_zoom_scales_geometry(self, today_range):
        base = compute_layout([R1], [T1], today_range, 1.0, now=NOW)
        zoomed = compute_layout([R1], [T1], today_range, 2.0, now=NOW)
        assert zoomed.rows[0].shift_bars[0].width_px == pytest.approx(
            2 * base.rows[0].shift_bars[0].width_px
        )
        assert zoomed.content_width == pytest.approx(2 * base.content_width)

    def test_multi_day_range(self):
        date_range = DateRange.quick_select(4, today=NOW.date())
        layout = compute_layout([R1], [T1], date_range, now=NOW)
        assert len(layout.rows[0].shift_bars) == 4
        assert [tick.label for tick in layout.ticks][0] == "Nov 28"

    def test_ecbt_by_row(self, today_range):
        layout = compute_layout([R1, {"resourceId": "R3"}], [T1], today_range, now=NOW)
        assert layout.ecbt_by_row == [to_epoch_ms(datetime(2025, 11, 28, 8, 0)), 0]
        assert layout.row("R3").ecbt_ms == 0
        assert layout.row("missing") is None

    def test_resources_carry_ecbt(self, today_range):
        layout = compute_layout([R1, {"resourceId": "R3"}], [T1], today_range, now=NOW)
        assert [resource.row_key for resource in layout.resources] == ["R1", "R3"]
        assert [resource.ecbt for resource in layout.resources] == layout.ecbt_by_row
        assert layout.row("R1").resource is layout.resources[0]


class TestParallelLayout:
    """Test that concurrent row layout matches sequential layout."""

    def test_parallel_equals_sequential(self, today_range, many_rows):
        resources, tasks = many_rows
        sequential = compute_layout(resources, tasks, today_range, 1.5, now=NOW, max_workers=1)
        parallel = compute_layout(resources, tasks, today_range, 1.5, now=NOW, max_workers=4)

        assert [row.row_key for row in parallel.rows] == [row.row_key for row in sequential.rows]
        assert parallel.ecbt_by_row == sequential.ecbt_by_row
        for seq_row, par_row in zip(sequential.rows, parallel.rows):
            assert par_row.shift_bars == seq_row.shift_bars
            assert par_row.task_bars == seq_row.task_bars
            assert par_row.travel_connectors == seq_row.travel_connectors
        assert parallel.annotated_tasks == sequential.annotated_tasks

    def test_rows_keep_the_run_correlation_id(self, today_range, many_rows, monkeypatch):
        seen = []
        original = layout_service.layout_row

        def recording_layout_row(resource, tasks, context):
            seen.append(get_correlation_id())
            return original(resource, tasks, context)

        monkeypatch.setattr(layout_service, "layout_row", recording_layout_row)
        resources, tasks = many_rows
        compute_layout(resources, tasks, today_range, now=NOW, max_workers=4)

        run_id = get_correlation_id()
        assert run_id
        assert seen == [run_id] * len(resources)
