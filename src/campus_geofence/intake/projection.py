"""
Projections - Map raw GPS readings into the monitored plane.

A projection is any callable ``(raw_lat, raw_lng) -> Coordinate``.
Projections belong to the location collaborator, not to the geofence
core, which only ever sees plane coordinates.
"""

import math
from typing import Callable

from ..models import Coordinate, PlaneBounds

Projection = Callable[[float, float], Coordinate]


class FractionalProjection:
    """
    Keep the 2nd-5th decimal digits of each raw degree value.

    ``((raw - floor(raw)) * 10000) % 100`` maps any reading into [0, 100).
    This is a demo placeholder with no geodetic meaning: points a few
    metres apart can land on opposite sides of the plane.
    """

    def __call__(self, raw_lat: float, raw_lng: float) -> Coordinate:
        return Coordinate(
            latitude=self._scale(raw_lat),
            longitude=self._scale(raw_lng),
        )

    @staticmethod
    def _scale(raw: float) -> float:
        return ((raw - math.floor(raw)) * 10000) % 100


class BoundingBoxProjection:
    """
    Linear map of a lat/lng box onto the plane.

    Readings outside the box are clamped to the plane edges, so a
    student far away still shows up on the border rather than vanishing.
    """

    def __init__(
        self,
        min_lat: float,
        max_lat: float,
        min_lng: float,
        max_lng: float,
        bounds: PlaneBounds | None = None,
    ):
        if max_lat <= min_lat or max_lng <= min_lng:
            raise ValueError("Projection box must have max > min on both axes")
        self.min_lat = min_lat
        self.max_lat = max_lat
        self.min_lng = min_lng
        self.max_lng = max_lng
        self.bounds = bounds or PlaneBounds()

    def _scale(self, value: float, low: float, high: float) -> float:
        span = self.bounds.maximum - self.bounds.minimum
        scaled = self.bounds.minimum + (value - low) / (high - low) * span
        return self.bounds.clamp(scaled)

    def __call__(self, raw_lat: float, raw_lng: float) -> Coordinate:
        return Coordinate(
            latitude=self._scale(raw_lat, self.min_lat, self.max_lat),
            longitude=self._scale(raw_lng, self.min_lng, self.max_lng),
        )


def create_projection(config: dict, bounds: PlaneBounds | None = None) -> Projection:
    """
    Factory function to create a projection from config.

    Args:
        config: Projection config dict with 'type' field

    Returns:
        Projection callable

    Raises:
        ValueError: If projection type is unknown
    """
    projection_type = config.get("type", "fractional")

    if projection_type == "fractional":
        return FractionalProjection()

    elif projection_type == "bbox":
        return BoundingBoxProjection(
            min_lat=config["min_lat"],
            max_lat=config["max_lat"],
            min_lng=config["min_lng"],
            max_lng=config["max_lng"],
            bounds=bounds,
        )

    else:
        raise ValueError(f"Unknown projection type: {projection_type}")
