"""
Configuration Resolver - Turns a validated Config into runtime objects.

Handles:
- Building the session (boundary + students)
- Building the window policy, simulator, and projection
- Wiring the monitoring loop with notifiers
"""

import logging
import random
from collections.abc import Callable
from datetime import datetime

from ..core import MonitoringLoop, MonitoringWindow, PositionSimulator, Session, parse_clock
from ..intake import PositionIntake, Projection, create_projection
from ..models import BoundaryVertex, Coordinate, PlaneBounds, Student
from ..notifiers import create_notifiers
from .schemas import Config

logger = logging.getLogger(__name__)


def build_plane(config: Config) -> PlaneBounds:
    return PlaneBounds(config.plane.min, config.plane.max)


def build_students(config: Config) -> list[Student]:
    """Create Student models from config entries."""
    students = []
    for entry in config.students:
        position = None
        if entry.position is not None:
            position = Coordinate(entry.position.latitude, entry.position.longitude)
        students.append(
            Student(
                id=entry.id,
                name=entry.name,
                roll_number=entry.roll_number,
                department=entry.department,
                year_of_study=entry.year_of_study,
                position=position,
                is_live_tracked=entry.live,
            )
        )
    return students


def build_session(config: Config) -> Session:
    """Create a session holding the configured boundary and students."""
    boundary = [BoundaryVertex(v.lat, v.lng) for v in config.boundary]
    session = Session(boundary)
    for student in build_students(config):
        session.register_student(student)
    logger.info(
        f"Session ready: {len(boundary)}-vertex boundary, "
        f"{len(config.students)} student(s)"
    )
    return session


def build_window(config: Config) -> MonitoringWindow:
    window = config.monitor.window
    return MonitoringWindow(parse_clock(window.start), parse_clock(window.end))


def build_simulator(config: Config) -> PositionSimulator | None:
    """Create the drift simulator, or None when simulation is disabled."""
    if not config.simulation.enabled:
        return None
    return PositionSimulator(
        max_step=config.simulation.max_step,
        bounds=build_plane(config),
        rng=random.Random(config.simulation.seed),
    )


def build_projection(config: Config) -> Projection:
    return create_projection(config.projection.model_dump(), bounds=build_plane(config))


def build_intake(config: Config, session: Session) -> PositionIntake:
    return PositionIntake(session, build_projection(config))


def build_monitor(
    config: Config,
    session: Session,
    clock: Callable[[], datetime] = datetime.now,
) -> MonitoringLoop:
    """Wire a monitoring loop for the session from config."""
    return MonitoringLoop(
        session,
        window=build_window(config),
        period=config.monitor.tick_seconds,
        simulator=build_simulator(config),
        clock=clock,
        notifiers=create_notifiers(
            [n.model_dump(exclude_none=True) for n in config.notifiers]
        ),
    )
