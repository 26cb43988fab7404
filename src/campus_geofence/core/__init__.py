"""
Geofence core - containment, state, alerts, and the monitoring loop.
"""

from .boundary import BoundaryStore
from .delivery import AlertDelivery
from .geometry import bounding_box, contains, validate_boundary
from .ledger import AlertLedger
from .monitor import MonitoringLoop
from .registry import EntityRegistry
from .session import Session
from .simulation import PositionSimulator
from .window import AlwaysActive, MonitoringWindow, WindowPolicy, parse_clock

__all__ = [
    "AlertDelivery",
    "AlertLedger",
    "AlwaysActive",
    "BoundaryStore",
    "EntityRegistry",
    "MonitoringLoop",
    "MonitoringWindow",
    "PositionSimulator",
    "Session",
    "WindowPolicy",
    "bounding_box",
    "contains",
    "parse_clock",
    "validate_boundary",
]
