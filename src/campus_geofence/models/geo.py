"""
Plane geometry models - coordinates, boundary vertices, and plane bounds.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinate:
    """
    A position in the monitored plane.

    Attributes:
        latitude: Horizontal axis value (the "x" of the containment test)
        longitude: Vertical axis value (the "y" of the containment test)
    """

    latitude: float
    longitude: float


@dataclass(frozen=True)
class BoundaryVertex:
    """One corner of the geofence polygon."""

    lat: float
    lng: float


@dataclass(frozen=True)
class PlaneBounds:
    """Valid range of both plane axes."""

    minimum: float = 0.0
    maximum: float = 100.0

    def clamp(self, value: float) -> float:
        """Clamp a single axis value into range."""
        return max(self.minimum, min(self.maximum, value))

    def contains(self, coordinate: Coordinate) -> bool:
        """True if both axes of the coordinate are in range."""
        return (
            self.minimum <= coordinate.latitude <= self.maximum
            and self.minimum <= coordinate.longitude <= self.maximum
        )


# An ordered polygon, closing from the last vertex back to the first
Boundary = tuple[BoundaryVertex, ...]
