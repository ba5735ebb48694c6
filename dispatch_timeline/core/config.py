from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Self


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TIMELINE_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    # Observability Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"  # "json" or "console"
    SLOW_LAYOUT_WARNING_MS: float = Field(default=250.0, gt=0)

    # Time axis scale
    BASE_PX_PER_HOUR: float = Field(default=50.0, gt=0)
    MIN_PX_PER_HOUR: float = Field(default=10.0, gt=0)

    # Zoom
    ZOOM_MIN: float = 1.0  # 24h spans one default-width screen at 1x
    ZOOM_MAX: float = 4.0
    ZOOM_STEP_FACTOR: float = Field(default=1.2, gt=1)
    ZOOM_LEVELS: list[float] = [0.5, 0.75, 1.0, 1.5, 2.0, 3.0, 4.0]
    DEFAULT_ZOOM_INDEX: int = 2

    # Travel inference
    AVERAGE_SPEED_KMH: float = Field(default=40.0, gt=0)
    HOME_TRAVEL_FLOOR_MINUTES: float = 10.0
    INTER_TASK_TRAVEL_FLOOR_MINUTES: float = 5.0

    # Task bars
    DEFAULT_TASK_DURATION_MINUTES: int = 60
    TASK_BAR_GAP_PX: float = 2.0
    MIN_TASK_BAR_WIDTH_PX: float = 1.0
    ASSIGNED_STATUS: str = "Assigned (ACT)"

    # Row geometry
    ROW_HEIGHT: int = 40
    ECBT_MARKER_SIZE: int = 12

    # Date range quick select
    QUICK_SELECT_DAYS: list[int] = [1, 2, 4, 6, 8, 10, 12]
    QUICK_SELECT_START_HOUR: int = Field(default=5, ge=0, le=23)

    # Rows computed concurrently when > 1
    LAYOUT_MAX_WORKERS: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def _check_zoom_bounds(self) -> Self:
        if self.ZOOM_MIN <= 0 or self.ZOOM_MAX < self.ZOOM_MIN:
            raise ValueError(
                f"Invalid zoom bounds: ZOOM_MIN={self.ZOOM_MIN}, ZOOM_MAX={self.ZOOM_MAX}"
            )
        if not 0 <= self.DEFAULT_ZOOM_INDEX < len(self.ZOOM_LEVELS):
            raise ValueError(
                f"DEFAULT_ZOOM_INDEX {self.DEFAULT_ZOOM_INDEX} is outside ZOOM_LEVELS"
            )
        return self

    @property
    def default_zoom(self) -> float:
        return self.ZOOM_LEVELS[self.DEFAULT_ZOOM_INDEX]


settings = Settings()  # type: ignore
