"""
Utility modules for constants.
"""

from .constants import (
    ALERT_MESSAGE_TEMPLATE,
    DEFAULT_CONFIG_NAME,
    DEFAULT_MAX_STEP,
    DEFAULT_PLANE_MAX,
    DEFAULT_PLANE_MIN,
    DEFAULT_TICK_SECONDS,
    DEFAULT_WINDOW_END,
    DEFAULT_WINDOW_START,
    ENV_TICK_SECONDS,
    ENV_WINDOW,
    LOOP_STOP_TIMEOUT,
    MIN_BOUNDARY_VERTICES,
)

__all__ = [
    "ALERT_MESSAGE_TEMPLATE",
    "DEFAULT_CONFIG_NAME",
    "DEFAULT_MAX_STEP",
    "DEFAULT_PLANE_MAX",
    "DEFAULT_PLANE_MIN",
    "DEFAULT_TICK_SECONDS",
    "DEFAULT_WINDOW_END",
    "DEFAULT_WINDOW_START",
    "ENV_TICK_SECONDS",
    "ENV_WINDOW",
    "LOOP_STOP_TIMEOUT",
    "MIN_BOUNDARY_VERTICES",
]
