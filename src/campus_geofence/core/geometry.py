"""
Geofence Geometry - Polygon containment and boundary checks.

Pure functions with no state. The containment test is the even-odd
ray-casting rule: a horizontal ray is cast from the point towards
increasing latitude and every polygon edge it crosses toggles the result.

Points lying exactly on the boundary get a deterministic but half-open
answer. For an axis-aligned square, points on the lower or left edges
(including the lower-left vertex) are inside, points on the upper or
right edges (including the upper-right vertex) are outside.
"""

import math
from collections.abc import Iterable, Sequence

from ..errors import InvalidBoundary
from ..models import BoundaryVertex, Coordinate
from ..utils.constants import MIN_BOUNDARY_VERTICES


def contains(point: Coordinate, boundary: Sequence[BoundaryVertex]) -> bool:
    """
    Check if a point lies inside the boundary polygon.

    Args:
        point: Position to test
        boundary: Ordered polygon vertices (closing edge is implicit)

    Returns:
        True if the point is inside by the even-odd rule
    """
    inside = False
    x, y = point.latitude, point.longitude

    j = len(boundary) - 1
    for i in range(len(boundary)):
        xi, yi = boundary[i].lat, boundary[i].lng
        xj, yj = boundary[j].lat, boundary[j].lng

        # Straddle check guards the division (yj == yi never passes it)
        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i

    return inside


def validate_boundary(vertices: Iterable) -> tuple[BoundaryVertex, ...]:
    """
    Normalize and check a boundary edit.

    Accepts BoundaryVertex objects, ``{"lat": .., "lng": ..}`` dicts, or
    ``(lat, lng)`` pairs. Polygon simplicity is not checked.

    Args:
        vertices: Proposed polygon vertices in order

    Returns:
        Immutable tuple of vertices

    Raises:
        InvalidBoundary: Fewer than 3 vertices, or a non-numeric value
    """
    if isinstance(vertices, (str, bytes)):
        raise InvalidBoundary(f"Boundary must be a sequence of vertices, got {vertices!r}")
    try:
        items = list(vertices)
    except TypeError as e:
        raise InvalidBoundary(
            f"Boundary must be a sequence of vertices, got {type(vertices).__name__}"
        ) from e

    normalized = []
    for index, vertex in enumerate(items):
        try:
            if isinstance(vertex, BoundaryVertex):
                lat, lng = vertex.lat, vertex.lng
            elif isinstance(vertex, dict):
                lat, lng = vertex["lat"], vertex["lng"]
            elif isinstance(vertex, (str, bytes)):
                raise TypeError("vertex is a string")
            else:
                lat, lng = vertex
            lat, lng = float(lat), float(lng)
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidBoundary(f"Vertex {index} is malformed: {vertex!r}") from e

        if not (math.isfinite(lat) and math.isfinite(lng)):
            raise InvalidBoundary(f"Vertex {index} is not finite: ({lat}, {lng})")
        normalized.append(BoundaryVertex(lat=lat, lng=lng))

    if len(normalized) < MIN_BOUNDARY_VERTICES:
        raise InvalidBoundary(
            f"Boundary needs at least {MIN_BOUNDARY_VERTICES} vertices, "
            f"got {len(normalized)}"
        )

    return tuple(normalized)


def bounding_box(
    boundary: Sequence[BoundaryVertex],
) -> tuple[float, float, float, float]:
    """Return (min_lat, min_lng, max_lat, max_lng) of a boundary."""
    lats = [v.lat for v in boundary]
    lngs = [v.lng for v in boundary]
    return min(lats), min(lngs), max(lats), max(lngs)


__all__ = [
    "bounding_box",
    "contains",
    "validate_boundary",
]
