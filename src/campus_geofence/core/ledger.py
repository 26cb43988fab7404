"""
Alert Ledger - Newest-first log of boundary-breach alerts.

The ledger never enforces suppression itself. The monitoring loop checks
``has_unacknowledged`` and records inside the same serialized tick.
"""

import logging
from dataclasses import replace
from datetime import datetime

from ..models import Alert

logger = logging.getLogger(__name__)


class AlertLedger:
    """Append-only alert log with mutable read state."""

    def __init__(self):
        self._alerts: list[Alert] = []
        self._ids: set[str] = set()

    def has_unacknowledged(self, entity_id: str) -> bool:
        """True if any alert for this entity is still unread."""
        return any(a.entity_id == entity_id and not a.read for a in self._alerts)

    def record(
        self,
        entity_id: str,
        entity_name: str,
        message: str,
        timestamp: datetime | None = None,
    ) -> Alert:
        """
        Create and prepend a new unread alert.

        Args:
            entity_id: Student id
            entity_name: Student name
            message: Alert text
            timestamp: Emission time (defaults to now)

        Returns:
            The recorded alert
        """
        timestamp = timestamp or datetime.now()
        alert = Alert(
            id=self._next_id(entity_id, timestamp),
            entity_id=entity_id,
            entity_name=entity_name,
            message=message,
            timestamp=timestamp,
        )
        self._alerts.insert(0, alert)
        self._ids.add(alert.id)
        return alert

    def _next_id(self, entity_id: str, timestamp: datetime) -> str:
        base = f"alert-{int(timestamp.timestamp() * 1000)}-{entity_id}"
        alert_id = base
        suffix = 1
        while alert_id in self._ids:
            suffix += 1
            alert_id = f"{base}-{suffix}"
        return alert_id

    def acknowledge(self, alert_id: str) -> bool:
        """
        Mark one alert as read.

        Returns:
            False if the id is unknown
        """
        for alert in self._alerts:
            if alert.id == alert_id:
                alert.read = True
                return True
        logger.debug(f"Ignoring acknowledge for unknown alert {alert_id}")
        return False

    def acknowledge_all(self) -> int:
        """Mark every alert as read and return how many changed."""
        count = 0
        for alert in self._alerts:
            if not alert.read:
                alert.read = True
                count += 1
        return count

    def unread_count(self) -> int:
        return sum(1 for a in self._alerts if not a.read)

    def all(self) -> list[Alert]:
        """Return copies of all alerts, newest first."""
        return [replace(a) for a in self._alerts]

    def __len__(self) -> int:
        return len(self._alerts)
