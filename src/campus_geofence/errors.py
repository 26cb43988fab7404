"""
Exception hierarchy for the geofence monitor.

Nothing raised here is fatal to a running monitor: every error is local
to the entry point that raised it and recoverable by the caller.
"""


class GeofenceError(Exception):
    """Base class for all geofence monitor errors."""


class InvalidBoundary(GeofenceError):
    """Raised when a boundary edit cannot form a polygon."""


class LocationSourceError(GeofenceError):
    """Raised by a location source that cannot produce a position."""


class LocationUnavailable(LocationSourceError):
    """A failed location report for a specific entity."""

    def __init__(self, entity_id: str, reason: str):
        super().__init__(f"Location unavailable for {entity_id}: {reason}")
        self.entity_id = entity_id
        self.reason = reason


class ConfigValidationError(GeofenceError):
    """Raised when config validation fails."""
