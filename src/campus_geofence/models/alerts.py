"""
Breach alert and evaluation result models.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import NamedTuple

from .student import Student


@dataclass
class Alert:
    """
    A boundary-breach alert.

    Attributes:
        id: Unique id derived from emission time and entity id
        entity_id: Id of the student that left the boundary
        entity_name: Student name at emission time
        message: Human-readable alert text
        timestamp: Emission time
        read: Set by the consuming display layer to acknowledge
    """

    id: str
    entity_id: str
    entity_name: str
    message: str
    timestamp: datetime
    read: bool = False

    def to_dict(self) -> dict:
        """Serialize for notifiers and console output."""
        return {
            "id": self.id,
            "entity_id": self.entity_id,
            "entity_name": self.entity_name,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "read": self.read,
        }


class Evaluation(NamedTuple):
    """One row of a registry evaluation: the student and whether it just exited."""

    student: Student
    transitioned: bool


@dataclass
class TickResult:
    """Summary of one monitoring tick."""

    window_active: bool
    evaluated: int = 0
    moved: int = 0
    transitions: list[Student] = field(default_factory=list)
    alerts: list[Alert] = field(default_factory=list)
    suppressed: list[str] = field(default_factory=list)
