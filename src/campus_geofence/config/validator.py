"""
Configuration Validator - Validates config syntax and semantic correctness.

Schema errors come from pydantic; semantic checks (polygon size,
duplicate ids, positions off the plane) run on the parsed model.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from ..core.geometry import bounding_box, contains
from ..models import BoundaryVertex, Coordinate, PlaneBounds
from ..utils.constants import MIN_BOUNDARY_VERTICES
from .schemas import Config, validate_config_pydantic

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of config validation."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    derived: dict[str, Any] = field(default_factory=dict)
    config: Config | None = None


def validate_config_full(config: dict) -> ValidationResult:
    """
    Comprehensive config validation with detailed error messages.

    Args:
        config: Configuration dictionary to validate

    Returns:
        ValidationResult with errors, warnings, derived facts, and the
        parsed Config when valid.
    """
    result = ValidationResult(valid=True)

    if config is None:
        config = {}
    if not isinstance(config, dict):
        result.errors.append("Configuration must be a mapping of sections")
        result.valid = False
        return result

    try:
        parsed = validate_config_pydantic(config)
    except ValidationError as e:
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"]) or "config"
            result.errors.append(f"{location}: {error['msg']}")
        result.valid = False
        return result

    _validate_boundary(parsed, result)
    _validate_students(parsed, result)
    _validate_window(parsed, result)
    _validate_notifiers(parsed, result)

    if result.errors:
        result.valid = False
        return result

    result.config = parsed
    _derive_facts(parsed, result)
    return result


def _validate_boundary(config: Config, result: ValidationResult) -> None:
    """Validate polygon size and placement."""
    if len(config.boundary) < MIN_BOUNDARY_VERTICES:
        result.errors.append(
            f"boundary needs at least {MIN_BOUNDARY_VERTICES} vertices, "
            f"got {len(config.boundary)}"
        )
        return

    plane = PlaneBounds(config.plane.min, config.plane.max)
    for i, vertex in enumerate(config.boundary):
        if not plane.contains(Coordinate(vertex.lat, vertex.lng)):
            result.warnings.append(
                f"boundary[{i}] ({vertex.lat}, {vertex.lng}) is outside the plane"
            )

    seen = set()
    for i, vertex in enumerate(config.boundary):
        key = (vertex.lat, vertex.lng)
        if key in seen:
            result.warnings.append(f"boundary[{i}] repeats an earlier vertex")
        seen.add(key)


def _validate_students(config: Config, result: ValidationResult) -> None:
    """Validate student ids and starting positions."""
    if not config.students:
        result.warnings.append("No students configured - nothing will be tracked")
        return

    seen_ids = set()
    for student in config.students:
        if student.id in seen_ids:
            result.errors.append(f"Duplicate student id: '{student.id}'")
        seen_ids.add(student.id)

    plane = PlaneBounds(config.plane.min, config.plane.max)
    for student in config.students:
        if student.position is None:
            if not student.live:
                result.warnings.append(
                    f"Student '{student.id}' has no position and is not live - "
                    f"it will never be evaluated"
                )
            continue
        position = Coordinate(student.position.latitude, student.position.longitude)
        if not plane.contains(position):
            result.warnings.append(f"Student '{student.id}' starts outside the plane")


def _validate_window(config: Config, result: ValidationResult) -> None:
    window = config.monitor.window
    start = tuple(int(p) for p in window.start.split(":"))
    end = tuple(int(p) for p in window.end.split(":"))
    if start > end:
        result.warnings.append(
            f"Monitoring window {window.start}-{window.end} wraps past midnight"
        )


def _validate_notifiers(config: Config, result: ValidationResult) -> None:
    seen = set()
    for notifier in config.notifiers:
        if notifier.id in seen:
            result.errors.append(f"Duplicate notifier id: '{notifier.id}'")
        seen.add(notifier.id)


def _derive_facts(config: Config, result: ValidationResult) -> None:
    """Summarize what the monitor will do with this config."""
    boundary = [BoundaryVertex(v.lat, v.lng) for v in config.boundary]

    starting_outside = [
        s.id
        for s in config.students
        if s.position is not None
        and not contains(Coordinate(s.position.latitude, s.position.longitude), boundary)
    ]
    if starting_outside:
        result.warnings.append(
            f"Students starting outside the boundary will alert on the first "
            f"tick in the window: {', '.join(starting_outside)}"
        )

    result.derived["window"] = f"{config.monitor.window.start}-{config.monitor.window.end}"
    result.derived["bounding_box"] = bounding_box(boundary)
    result.derived["students"] = len(config.students)
    result.derived["live_students"] = sum(1 for s in config.students if s.live)
    result.derived["starting_outside"] = starting_outside
    result.derived["notifiers"] = [n.id for n in config.notifiers]
