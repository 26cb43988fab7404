"""
Position Simulation - Random drift for students without a live source.

Stands in for the external position feed of simulated students: each
tick moves every non-live student with a position by a bounded random
step, clamped to the plane.
"""

import logging
import random

from ..models import Coordinate, PlaneBounds
from ..utils.constants import DEFAULT_MAX_STEP
from .registry import EntityRegistry

logger = logging.getLogger(__name__)


class PositionSimulator:
    """
    Bounded random walk for simulated students.

    Args:
        max_step: Largest movement per axis per step
        bounds: Plane range both axes are clamped to
        rng: Random source (seeded in tests)
    """

    def __init__(
        self,
        max_step: float = DEFAULT_MAX_STEP,
        bounds: PlaneBounds | None = None,
        rng: random.Random | None = None,
    ):
        self.max_step = max_step
        self.bounds = bounds or PlaneBounds()
        self._rng = rng or random.Random()

    def _drift(self) -> float:
        return (self._rng.random() - 0.5) * 2 * self.max_step

    def step(self, registry: EntityRegistry) -> int:
        """
        Move every simulated student once.

        Live-tracked students and students without a position are left alone.

        Returns:
            Number of students moved
        """
        moved = 0
        for student in registry.simulated():
            if not student.has_position():
                continue

            new_position = Coordinate(
                latitude=self.bounds.clamp(student.position.latitude + self._drift()),
                longitude=self.bounds.clamp(student.position.longitude + self._drift()),
            )
            registry.report_position(student.id, new_position)
            moved += 1

        logger.debug(f"Simulated movement for {moved} student(s)")
        return moved
