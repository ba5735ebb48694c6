"""
Observability Infrastructure

Structured logging for the timeline layout engine. Every event emitted
during a layout run carries the run's correlation id, and events emitted
while a resource row is being laid out also carry that row's key.
"""

import contextvars
import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog

from .config import Settings, settings

# Layout run and row being processed in the current context
correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)
row_key_var: contextvars.ContextVar[str] = contextvars.ContextVar("row_key", default="")


class LayoutContextProcessor:
    """Structlog processor adding the current layout run and row to events."""

    def __call__(
        self, logger: Any, name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        correlation_id = correlation_id_var.get()
        if correlation_id:
            event_dict.setdefault("correlation_id", correlation_id)
        row_key = row_key_var.get()
        if row_key:
            event_dict.setdefault("row", row_key)
        return event_dict


def setup_structured_logging(config: Settings | None = None) -> None:
    """Configure structlog for JSON or console output at `LOG_LEVEL`."""
    config = config or settings
    log_level = logging.getLevelName(config.LOG_LEVEL.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        LayoutContextProcessor(),
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if config.LOG_FORMAT == "json":
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(colors=config.ENVIRONMENT == "local")
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Start tracking a layout run, generating an id when none is given."""
    if correlation_id is None:
        correlation_id = uuid.uuid4().hex[:12]
    correlation_id_var.set(correlation_id)
    return correlation_id


def get_correlation_id() -> str:
    return correlation_id_var.get()


@contextmanager
def row_context(row_key: str) -> Iterator[str]:
    """Tag log events emitted inside the block with `row_key`."""
    token = row_key_var.set(row_key)
    try:
        yield row_key
    finally:
        row_key_var.reset(token)


def log_performance_metrics(
    operation: str,
    duration_seconds: float,
    metadata: dict[str, Any] | None = None,
    slow_threshold_ms: float | None = None,
) -> None:
    """
    Log how long a layout operation took, in milliseconds.

    Runs slower than `slow_threshold_ms` are logged as warnings so they
    stand out without raising the log level.
    """
    duration_ms = round(duration_seconds * 1000, 3)
    log = get_logger("dispatch_timeline.performance").bind(
        operation=operation,
        duration_ms=duration_ms,
        correlation_id=get_correlation_id(),
        **(metadata or {}),
    )
    if slow_threshold_ms is not None and duration_ms > slow_threshold_ms:
        log.warning("Slow layout operation", threshold_ms=slow_threshold_ms)
    else:
        log.info("Layout operation timed")
