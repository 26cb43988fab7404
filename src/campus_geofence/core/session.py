"""
Session - Explicit context owning all mutable monitor state.

The boundary store, entity registry, and alert ledger live here together
with one re-entrant lock. Every intake and export entry point goes
through the session, so position reports, boundary edits and
acknowledgements are serialized with the monitoring tick.
"""

import logging
import threading
from collections.abc import Iterable
from dataclasses import replace

from ..models import Alert, Boundary, Coordinate, Student
from .boundary import BoundaryStore
from .geometry import validate_boundary
from .ledger import AlertLedger
from .registry import EntityRegistry

logger = logging.getLogger(__name__)


class Session:
    """
    Monitor state for one running process.

    Args:
        boundary: Initial polygon (validated like any boundary edit)
        students: Students to register up front
    """

    def __init__(self, boundary: Iterable, students: Iterable[Student] = ()):
        self.boundary_store = BoundaryStore(validate_boundary(boundary))
        self.registry = EntityRegistry(students)
        self.ledger = AlertLedger()
        self.lock = threading.RLock()

    # Intake

    def register_student(self, student: Student) -> None:
        """
        Add a student, or re-register one with the same id.

        Re-registration keeps the student's place in the list but starts
        tracking over: no position and optimistically inside.
        """
        with self.lock:
            if student.id in self.registry:
                student = replace(student, position=None, is_inside=True)
            self.registry.upsert(student)
        logger.info(f"Registered student {student.id} ({student.name})")

    def report_position(self, student_id: str, position: Coordinate) -> bool:
        """Store a projected position. Unknown ids are ignored."""
        with self.lock:
            return self.registry.report_position(student_id, position)

    def replace_boundary(self, vertices: Iterable) -> Boundary:
        """
        Replace the whole geofence.

        Raises:
            InvalidBoundary: If the vertices cannot form a polygon
        """
        boundary = validate_boundary(vertices)
        with self.lock:
            self.boundary_store.set(boundary)
        return boundary

    # Export

    def students(self) -> list[Student]:
        with self.lock:
            return self.registry.snapshot()

    def boundary(self) -> Boundary:
        return self.boundary_store.get()

    def alerts(self) -> list[Alert]:
        with self.lock:
            return self.ledger.all()

    def acknowledge(self, alert_id: str) -> bool:
        """Mark an alert as read, re-enabling alerts for its student."""
        with self.lock:
            return self.ledger.acknowledge(alert_id)

    def acknowledge_all(self) -> int:
        with self.lock:
            return self.ledger.acknowledge_all()
