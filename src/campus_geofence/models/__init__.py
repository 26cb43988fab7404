"""
Consolidated data models for the geofence monitor.

This package contains all core data structures used across the application.
"""

from .alerts import Alert, Evaluation, TickResult
from .geo import Boundary, BoundaryVertex, Coordinate, PlaneBounds
from .student import Student

__all__ = [
    # Alerts and results
    "Alert",
    "Evaluation",
    "TickResult",
    # Geometry
    "Boundary",
    "BoundaryVertex",
    "Coordinate",
    "PlaneBounds",
    # Entities
    "Student",
]
