"""
Domain Exceptions

Errors raised when a caller misuses the layout API (inverted ranges, broken
zoom configuration). Incomplete resource or task data is never an error here:
the layout services recover from it by omitting the affected bar.
"""

from enum import Enum


class ErrorType(str, Enum):
    """Error type enumeration for discriminated unions."""

    VALIDATION = "validation"
    CONFIGURATION = "configuration"


class DomainError(Exception):
    """Base class for all domain errors with type discrimination."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        details: dict[str, str | int | float | bool | None] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> dict[str, str | dict[str, str | int | float | bool | None]]:
        """Convert error to dictionary for host applications."""
        return {
            "type": self.error_type.value,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DomainError):
    """Raised when a value handed to the domain is out of bounds."""

    def __init__(
        self,
        field_name: str,
        value: str | int | float | bool | None,
        message: str,
        error_code: str | None = None,
    ) -> None:
        self.field_name = field_name
        self.value = value
        self.error_code = error_code or "VALIDATION_ERROR"

        full_message = f"Validation failed for field '{field_name}': {message}"
        details: dict[str, str | int | float | bool | None] = {
            "field": field_name,
            "value": str(value) if value is not None else None,
            "error_code": self.error_code,
        }
        super().__init__(full_message, ErrorType.VALIDATION, details)


class InvalidDateRangeError(ValidationError):
    """Raised when a visible date range cannot be built."""

    def __init__(self, field_name: str, value: str | int | None, message: str) -> None:
        super().__init__(field_name, value, message, "INVALID_DATE_RANGE")


class InvalidZoomConfigurationError(DomainError):
    """Raised when zoom bounds are inverted or non-positive."""

    def __init__(self, zoom_min: float, zoom_max: float) -> None:
        super().__init__(
            f"Zoom bounds must satisfy 0 < min <= max, got min={zoom_min}, max={zoom_max}",
            ErrorType.CONFIGURATION,
            {"zoom_min": zoom_min, "zoom_max": zoom_max},
        )
        self.zoom_min = zoom_min
        self.zoom_max = zoom_max
