"""Task entity: a unit of field work pre-assigned to one resource."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..value_objects.time_of_day import parse_task_date
from ..value_objects.timestamps import MS_MINUTE, to_epoch_ms

TaskDate = str | datetime | float | None


class TaskDebug(BaseModel):
    """Diagnostic timestamps written during layout. Not authoritative."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    forced_start_ms: int | None = Field(default=None, alias="forcedStartMs")
    original_expected_ms: int | None = Field(default=None, alias="originalExpectedMs")
    travel_start_ms: int | None = Field(default=None, alias="travelStartMs")
    travel_end_ms: int | None = Field(default=None, alias="travelEndMs")


class Task(BaseModel):
    """
    A dispatch task as delivered by the upstream data source.

    Only tasks in the assigned state take part in timeline layout. Layout
    never mutates a Task; annotated copies carry `debug` and `expected_date`.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    task_id: str | None = Field(default=None, alias="taskId")
    employee_id: str | None = Field(default=None, alias="employeeId")
    resource_id: str | None = Field(default=None, alias="resourceId")

    expected_start_date: TaskDate = Field(default=None, alias="expectedStartDate")
    start_date: TaskDate = Field(default=None, alias="startDate")
    expected_finish_date: TaskDate = Field(default=None, alias="expectedFinishDate")
    end_date: TaskDate = Field(default=None, alias="endDate")
    estimated_duration: float | None = Field(default=None, alias="estimatedDuration")

    lat: float | None = None
    lng: float | None = None

    task_status: str | None = Field(default=None, alias="taskStatus")

    debug: TaskDebug | None = None
    expected_date: datetime | None = Field(default=None, alias="expectedDate")

    @field_validator("task_id", "employee_id", "resource_id", mode="before")
    @classmethod
    def _coerce_identifier(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @classmethod
    def coerce(cls, value: "Task | dict[str, Any]") -> "Task":
        if isinstance(value, cls):
            return value
        return cls.model_validate(value)

    @property
    def start_value(self) -> TaskDate:
        """Expected start, falling back to the raw start field."""
        return self.expected_start_date or self.start_date

    @property
    def finish_value(self) -> TaskDate:
        """Expected finish, falling back to the raw end field."""
        return self.expected_finish_date or self.end_date

    @property
    def owner_id(self) -> str | None:
        return self.employee_id or self.resource_id

    @property
    def has_location(self) -> bool:
        return self.lat is not None and self.lng is not None

    def is_assigned(self, assigned_status: str) -> bool:
        return self.task_status == assigned_status

    def duration_minutes(self, default_minutes: float) -> float:
        return self.estimated_duration or default_minutes

    def start_ms(self, now: datetime | None = None) -> int | None:
        parsed = parse_task_date(self.start_value, now)
        return to_epoch_ms(parsed) if parsed is not None else None

    def effective_start_ms(self, now: datetime) -> int | None:
        """
        Start used for placement: the parsed start, or `now` when the start
        field is present but unparseable. None when no start field is given.
        """
        if not self.start_value:
            return None
        parsed = self.start_ms(now)
        return parsed if parsed is not None else to_epoch_ms(now)

    def finish_ms(self, now: datetime | None = None) -> int | None:
        """
        Finish instant: the finish field, else start plus the estimated
        duration when one is given, else the start itself.
        """
        parsed = parse_task_date(self.finish_value, now)
        if parsed is not None:
            return to_epoch_ms(parsed)

        start = self.start_ms(now)
        if start is None:
            return None
        if self.estimated_duration:
            return int(start + self.estimated_duration * MS_MINUTE)
        return start
