"""
Boundary Store - Holds the current geofence polygon.
"""

import logging
from collections.abc import Iterable

from ..models import Boundary, BoundaryVertex

logger = logging.getLogger(__name__)


class BoundaryStore:
    """
    Current geofence polygon.

    The polygon is kept as an immutable tuple and swapped in one
    assignment, so a reader always sees a complete old or new boundary.
    No validation happens here; the edit surface checks vertices first.
    """

    def __init__(self, boundary: Iterable[BoundaryVertex] = ()):
        self._boundary: Boundary = tuple(boundary)

    def get(self) -> Boundary:
        """Return the current boundary."""
        return self._boundary

    def set(self, new_boundary: Iterable[BoundaryVertex]) -> None:
        """Replace the whole boundary."""
        self._boundary = tuple(new_boundary)
        logger.info(f"Boundary replaced ({len(self._boundary)} vertices)")
