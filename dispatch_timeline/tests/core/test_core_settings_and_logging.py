"""
Tests for configuration, observability helpers and domain errors.
"""

import pydantic
import pytest
import structlog
from structlog.testing import capture_logs

from dispatch_timeline.core.config import Settings
from dispatch_timeline.core.observability import (
    LayoutContextProcessor,
    get_correlation_id,
    log_performance_metrics,
    row_context,
    set_correlation_id,
    setup_structured_logging,
)
from dispatch_timeline.domain.shared.exceptions import (
    ErrorType,
    InvalidDateRangeError,
    InvalidZoomConfigurationError,
)


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self):
        config = Settings()
        assert config.BASE_PX_PER_HOUR == 50
        assert config.ZOOM_MIN == 1
        assert config.ZOOM_MAX == 4
        assert config.default_zoom == 1.0
        assert config.ASSIGNED_STATUS == "Assigned (ACT)"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("TIMELINE_BASE_PX_PER_HOUR", "80")
        monkeypatch.setenv("TIMELINE_LAYOUT_MAX_WORKERS", "4")
        config = Settings()
        assert config.BASE_PX_PER_HOUR == 80
        assert config.LAYOUT_MAX_WORKERS == 4

    def test_inverted_zoom_bounds_rejected(self):
        with pytest.raises(pydantic.ValidationError, match="Invalid zoom bounds"):
            Settings(ZOOM_MIN=3, ZOOM_MAX=2)

    def test_default_zoom_index_must_exist(self):
        with pytest.raises(pydantic.ValidationError):
            Settings(DEFAULT_ZOOM_INDEX=12)


class TestObservability:
    """Test correlation tracking and performance logging."""

    def test_correlation_id_round_trip(self):
        correlation_id = set_correlation_id("layout-1")
        assert correlation_id == "layout-1"
        assert get_correlation_id() == "layout-1"

    def test_generated_correlation_id(self):
        assert set_correlation_id() == get_correlation_id() != ""

    def test_processor_adds_correlation_id(self):
        set_correlation_id("layout-2")
        event = LayoutContextProcessor()(None, "info", {"event": "x"})
        assert event["correlation_id"] == "layout-2"
        assert "row" not in event

    def test_row_context_tags_events(self):
        processor = LayoutContextProcessor()
        with row_context("R7"):
            assert processor(None, "debug", {"event": "x"})["row"] == "R7"
            # Explicit row keys are kept
            assert processor(None, "debug", {"event": "x", "row": "R8"})["row"] == "R8"
        assert "row" not in processor(None, "debug", {"event": "x"})

    def test_performance_metrics_are_logged(self):
        set_correlation_id("layout-3")
        with capture_logs() as logs:
            log_performance_metrics("compute_layout", 0.25, {"rows": 3})
        assert logs[0]["event"] == "Layout operation timed"
        assert logs[0]["log_level"] == "info"
        assert logs[0]["operation"] == "compute_layout"
        assert logs[0]["duration_ms"] == 250.0
        assert logs[0]["rows"] == 3
        assert logs[0]["correlation_id"] == "layout-3"

    def test_slow_operations_warn(self):
        with capture_logs() as logs:
            log_performance_metrics("compute_layout", 0.5, slow_threshold_ms=250)
        assert logs[0]["log_level"] == "warning"
        assert logs[0]["threshold_ms"] == 250

    def test_setup_accepts_json_format(self):
        try:
            setup_structured_logging(Settings(LOG_FORMAT="json", LOG_LEVEL="DEBUG"))
            assert structlog.is_configured()
        finally:
            structlog.reset_defaults()


class TestDomainErrors:
    """Test error serialisation."""

    def test_invalid_date_range_to_dict(self):
        error = InvalidDateRangeError("end", 5, "Range end must not be before range start")
        payload = error.to_dict()
        assert payload["type"] == ErrorType.VALIDATION.value
        assert payload["details"]["error_code"] == "INVALID_DATE_RANGE"
        assert payload["details"]["value"] == "5"
        assert "end" in payload["message"]

    def test_invalid_zoom_configuration(self):
        error = InvalidZoomConfigurationError(2, 1)
        assert error.error_type is ErrorType.CONFIGURATION
        assert error.details == {"zoom_min": 2, "zoom_max": 1}
