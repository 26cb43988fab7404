"""
Position Intake - Entry point for live location reports.

Raw readings are projected into the plane and stored on the session.
Failures from the location source are logged and handed back to the
caller; they never touch registry state or the monitoring loop.
"""

import logging
import math
from typing import Callable

from ..core import Session
from ..errors import LocationSourceError, LocationUnavailable
from .projection import FractionalProjection, Projection

logger = logging.getLogger(__name__)

# A live location source returns a raw (lat, lng) reading or raises
LocationSource = Callable[[], tuple[float, float]]


class PositionIntake:
    """
    Projects and forwards location reports to a session.

    Args:
        session: Session receiving positions
        projection: Raw GPS -> plane mapping
    """

    def __init__(self, session: Session, projection: Projection | None = None):
        self.session = session
        self.projection = projection or FractionalProjection()

    def report(self, entity_id: str, raw_lat: float, raw_lng: float) -> bool:
        """
        Store a raw reading for a student.

        Returns:
            False if the student id is unknown or the reading is not a
            finite number (the reading is dropped)
        """
        if not (math.isfinite(raw_lat) and math.isfinite(raw_lng)):
            self.report_failure(entity_id, f"non-finite reading ({raw_lat}, {raw_lng})")
            return False

        position = self.projection(raw_lat, raw_lng)
        stored = self.session.report_position(entity_id, position)
        if stored:
            logger.debug(
                f"Position for {entity_id}: "
                f"({position.latitude:.2f}, {position.longitude:.2f})"
            )
        return stored

    def report_failure(self, entity_id: str, reason: str) -> LocationUnavailable:
        """
        Record that a student's location source failed.

        Returns:
            The recoverable error, for the caller to surface to the user
        """
        error = LocationUnavailable(entity_id, reason)
        logger.warning(str(error))
        return error

    def poll(self, entity_id: str, source: LocationSource) -> bool:
        """
        Read one position from a live source and report it.

        Returns:
            True if a position was stored
        """
        try:
            raw_lat, raw_lng = source()
        except LocationSourceError as e:
            self.report_failure(entity_id, str(e))
            return False
        return self.report(entity_id, raw_lat, raw_lng)
