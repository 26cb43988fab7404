"""
Monitoring Window - Time-of-day policy deciding when exits raise alerts.

The loop asks a policy object whether monitoring is active at a given
moment, so containment and alerting can be tested without the system
clock.
"""

from datetime import datetime, time
from typing import Protocol, runtime_checkable

from ..utils.constants import DEFAULT_WINDOW_END, DEFAULT_WINDOW_START


@runtime_checkable
class WindowPolicy(Protocol):
    """Protocol for alerting-window policies."""

    def is_active(self, moment: datetime) -> bool:
        """Return True if exits at this moment should raise alerts."""
        ...


class MonitoringWindow:
    """
    Daily window compared at minute granularity, inclusive on both ends.

    A 09:00-12:15 window is active from 09:00:00 through 12:15:59.
    A window whose start is after its end wraps past midnight.
    """

    def __init__(self, start: time = DEFAULT_WINDOW_START, end: time = DEFAULT_WINDOW_END):
        self.start = start
        self.end = end

    @classmethod
    def parse(cls, text: str) -> "MonitoringWindow":
        """
        Build a window from ``"HH:MM-HH:MM"``.

        Raises:
            ValueError: If the text is not two HH:MM times joined by '-'
        """
        try:
            start_text, end_text = text.split("-")
            return cls(parse_clock(start_text), parse_clock(end_text))
        except ValueError as e:
            raise ValueError(f"Invalid window '{text}', expected HH:MM-HH:MM") from e

    def is_active(self, moment: datetime) -> bool:
        current = (moment.hour, moment.minute)
        start = (self.start.hour, self.start.minute)
        end = (self.end.hour, self.end.minute)

        if start <= end:
            return start <= current <= end
        return current >= start or current <= end

    def __repr__(self) -> str:
        return f"MonitoringWindow({self.start:%H:%M}-{self.end:%H:%M})"


class AlwaysActive:
    """Policy that alerts at any time of day."""

    def is_active(self, moment: datetime) -> bool:
        return True


def parse_clock(text: str) -> time:
    """Parse ``"HH:MM"`` into a time."""
    hours, minutes = text.strip().split(":")
    return time(int(hours), int(minutes))
