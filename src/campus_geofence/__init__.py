"""
Campus Geofence Monitor

Tracks students against a polygonal campus boundary and raises an alert
when a student who was inside is seen outside during the monitoring
window.

Package structure:
  core/       - Geometry, state stores, window policy, monitoring loop
  intake/     - Live location reports and GPS projections
  notifiers/  - Alert delivery (webhook, ntfy)
  config/     - Configuration loading, validation, and wiring
  models/     - Data models
  utils/      - Constants
"""

__version__ = "1.0.0"

from .core import (
    AlertLedger,
    AlwaysActive,
    BoundaryStore,
    EntityRegistry,
    MonitoringLoop,
    MonitoringWindow,
    PositionSimulator,
    Session,
    contains,
    validate_boundary,
)
from .errors import (
    ConfigValidationError,
    GeofenceError,
    InvalidBoundary,
    LocationSourceError,
    LocationUnavailable,
)
from .intake import PositionIntake
from .models import Alert, BoundaryVertex, Coordinate, Student

__all__ = [
    # Models
    "Alert",
    "BoundaryVertex",
    "Coordinate",
    "Student",
    # Core
    "AlertLedger",
    "AlwaysActive",
    "BoundaryStore",
    "EntityRegistry",
    "MonitoringLoop",
    "MonitoringWindow",
    "PositionIntake",
    "PositionSimulator",
    "Session",
    "contains",
    "validate_boundary",
    # Errors
    "ConfigValidationError",
    "GeofenceError",
    "InvalidBoundary",
    "LocationSourceError",
    "LocationUnavailable",
]
