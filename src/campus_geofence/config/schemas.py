"""
Pydantic schemas for configuration validation.

Provides type-safe, declarative validation with clear error messages.
Every section has defaults, so an empty file gives the reference setup:
the 10-90 square campus, three simulated students, 09:00-12:15.
"""

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..utils.constants import (
    DEFAULT_MAX_STEP,
    DEFAULT_PLANE_MAX,
    DEFAULT_PLANE_MIN,
    DEFAULT_TICK_SECONDS,
)

CLOCK_PATTERN = re.compile(r"^([01]?\d|2[0-3]):[0-5]\d$")


class StrictModel(BaseModel):
    """Base model that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid")


class WindowConfig(StrictModel):
    """Daily alerting window, HH:MM inclusive on both ends."""

    start: str = "09:00"
    end: str = "12:15"

    @field_validator("start", "end")
    @classmethod
    def validate_clock(cls, v: str) -> str:
        if not CLOCK_PATTERN.match(v):
            raise ValueError(f"'{v}' is not a HH:MM time")
        return v


class MonitorConfig(StrictModel):
    """Monitoring loop settings."""

    tick_seconds: float = Field(default=DEFAULT_TICK_SECONDS, gt=0)
    window: WindowConfig = Field(default_factory=WindowConfig)


class PlaneConfig(StrictModel):
    """Coordinate range of both plane axes."""

    min: float = DEFAULT_PLANE_MIN
    max: float = DEFAULT_PLANE_MAX

    @model_validator(mode="after")
    def validate_range(self):
        if self.max <= self.min:
            raise ValueError("plane.max must be > plane.min")
        return self


class SimulationConfig(StrictModel):
    """Random drift for students without a live location source."""

    enabled: bool = True
    max_step: float = Field(default=DEFAULT_MAX_STEP, ge=0)
    seed: int | None = None


class ProjectionConfig(StrictModel):
    """Raw GPS -> plane projection used for live reports."""

    type: Literal["fractional", "bbox"] = "fractional"
    min_lat: float | None = None
    max_lat: float | None = None
    min_lng: float | None = None
    max_lng: float | None = None

    @model_validator(mode="after")
    def validate_box(self):
        if self.type != "bbox":
            return self
        box = (self.min_lat, self.max_lat, self.min_lng, self.max_lng)
        if any(v is None for v in box):
            raise ValueError("bbox projection needs min_lat, max_lat, min_lng, max_lng")
        if self.max_lat <= self.min_lat or self.max_lng <= self.min_lng:
            raise ValueError("bbox projection needs max > min on both axes")
        return self


class VertexConfig(StrictModel):
    """Boundary polygon vertex."""

    lat: float
    lng: float


class PositionConfig(StrictModel):
    """Starting position in plane coordinates."""

    latitude: float
    longitude: float


class StudentConfig(StrictModel):
    """A student tracked from startup."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    roll_number: str = ""
    department: str = ""
    year_of_study: str = ""
    position: PositionConfig | None = None
    live: bool = Field(default=False, description="Position comes from live reports")

    @field_validator("id", "roll_number", "year_of_study", mode="before")
    @classmethod
    def coerce_text(cls, v):
        # YAML reads unquoted 3 or 1001 as integers
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class NotifierConfig(StrictModel):
    """Alert notifier configuration."""

    id: str = Field(..., min_length=1)
    type: Literal["webhook", "ntfy"]
    url: str | None = None
    topic: str | None = None
    server: str | None = None
    priority: str | None = None
    title_template: str | None = None

    @model_validator(mode="after")
    def validate_target(self):
        if self.type == "webhook" and not self.url:
            raise ValueError("webhook notifier needs a url")
        if self.type == "ntfy" and not self.topic:
            raise ValueError("ntfy notifier needs a topic")
        return self


def _default_boundary() -> list[VertexConfig]:
    return [
        VertexConfig(lat=10, lng=10),
        VertexConfig(lat=90, lng=10),
        VertexConfig(lat=90, lng=90),
        VertexConfig(lat=10, lng=90),
    ]


def _default_students() -> list[StudentConfig]:
    return [
        StudentConfig(
            id="mock-1", name="Alice Johnson", roll_number="M001",
            department="CompSci", year_of_study="3",
            position=PositionConfig(latitude=50, longitude=55),
        ),
        StudentConfig(
            id="mock-2", name="Bob Williams", roll_number="M002",
            department="Physics", year_of_study="2",
            position=PositionConfig(latitude=70, longitude=65),
        ),
        StudentConfig(
            id="mock-3", name="Charlie Brown", roll_number="M003",
            department="Chemistry", year_of_study="4",
            position=PositionConfig(latitude=20, longitude=30),
        ),
    ]


class Config(StrictModel):
    """Complete configuration schema."""

    monitor: MonitorConfig = Field(default_factory=MonitorConfig)
    plane: PlaneConfig = Field(default_factory=PlaneConfig)
    simulation: SimulationConfig = Field(default_factory=SimulationConfig)
    projection: ProjectionConfig = Field(default_factory=ProjectionConfig)
    # Polygon size is checked by the semantic validator for a clearer message
    boundary: list[VertexConfig] = Field(default_factory=_default_boundary)
    students: list[StudentConfig] = Field(default_factory=_default_students)
    notifiers: list[NotifierConfig] = Field(default_factory=list)


def validate_config_pydantic(config: dict) -> Config:
    """
    Validate configuration using Pydantic.

    Args:
        config: Raw configuration dictionary

    Returns:
        Validated Config object

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return Config(**config)
