"""Shared domain components."""

from .exceptions import (
    DomainError,
    ErrorType,
    InvalidDateRangeError,
    InvalidZoomConfigurationError,
    ValidationError,
)

__all__ = [
    "DomainError",
    "ErrorType",
    "InvalidDateRangeError",
    "InvalidZoomConfigurationError",
    "ValidationError",
]
