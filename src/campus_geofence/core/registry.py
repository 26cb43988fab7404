"""
Entity Registry - Current position and containment of every student.

Updated by position reports between ticks, then evaluated once per tick
by the monitoring loop.
"""

import logging
from dataclasses import replace
from typing import Iterable

from ..models import Boundary, Coordinate, Evaluation, Student
from .geometry import contains

logger = logging.getLogger(__name__)


class EntityRegistry:
    """
    Tracked students keyed by id, in insertion order.

    Reads return copies so that display code cannot mutate registry
    state. Evaluation is the only time-driven mutation.
    """

    def __init__(self, students: Iterable[Student] = ()):
        self._students: dict[str, Student] = {}
        for student in students:
            self.upsert(student)

    def upsert(self, student: Student) -> None:
        """Insert a student, or replace the existing one with the same id."""
        if student.id in self._students:
            logger.debug(f"Replacing student {student.id}")
        self._students[student.id] = replace(student)

    def report_position(self, student_id: str, position: Coordinate) -> bool:
        """
        Record a new position. Containment is left for the next evaluation.

        Returns:
            False if the id is unknown (the report is ignored)
        """
        student = self._students.get(student_id)
        if student is None:
            logger.debug(f"Ignoring position for unknown student {student_id}")
            return False
        student.position = position
        return True

    def get(self, student_id: str) -> Student | None:
        """Return a copy of one student, or None."""
        student = self._students.get(student_id)
        return replace(student) if student else None

    def snapshot(self) -> list[Student]:
        """Return copies of all students in insertion order."""
        return [replace(s) for s in self._students.values()]

    def simulated(self) -> list[Student]:
        """Live objects of students driven by the simulator (not live-tracked)."""
        return [s for s in self._students.values() if not s.is_live_tracked]

    def evaluate(self, boundary: Boundary) -> list[Evaluation]:
        """
        Refresh containment of every positioned student.

        Students without a position are skipped and never transition.

        Args:
            boundary: Polygon to test against

        Returns:
            One Evaluation per positioned student; ``transitioned`` is True
            only for an inside -> outside change
        """
        results = []
        for student in self._students.values():
            if not student.has_position():
                continue

            was_inside = student.is_inside
            is_inside = contains(student.position, boundary)
            student.is_inside = is_inside

            results.append(Evaluation(replace(student), was_inside and not is_inside))

        return results

    def __len__(self) -> int:
        return len(self._students)

    def __contains__(self, student_id: object) -> bool:
        return student_id in self._students
