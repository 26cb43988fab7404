"""
Tracked entity model.
"""

from dataclasses import dataclass

from .geo import Coordinate


@dataclass
class Student:
    """
    A tracked student with position and containment state.

    Identity fields never change after creation. Only ``position`` and
    ``is_inside`` are mutated, and only through the entity registry.

    Attributes:
        id: Unique identifier
        name: Display name, used in alert messages
        roll_number: Institution roll number
        department: Department name
        year_of_study: Year of study as entered (free text)
        position: Last reported position, None until the first report
        is_inside: Result of the latest containment evaluation (optimistic)
        is_live_tracked: Position comes from real reports, not the simulator
    """

    id: str
    name: str
    roll_number: str = ""
    department: str = ""
    year_of_study: str = ""
    position: Coordinate | None = None
    is_inside: bool = True
    is_live_tracked: bool = False

    def has_position(self) -> bool:
        """True once a first location has been reported."""
        return self.position is not None
