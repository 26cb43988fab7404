"""
Location intake - projections and live position reports.
"""

from .position import LocationSource, PositionIntake
from .projection import (
    BoundingBoxProjection,
    FractionalProjection,
    Projection,
    create_projection,
)

__all__ = [
    "BoundingBoxProjection",
    "FractionalProjection",
    "LocationSource",
    "PositionIntake",
    "Projection",
    "create_projection",
]
