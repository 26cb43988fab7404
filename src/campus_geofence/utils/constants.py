"""
Constants used throughout the geofence monitor
"""

from datetime import time

# Monitoring loop
DEFAULT_TICK_SECONDS = 5.0  # Seconds between evaluation ticks
LOOP_STOP_TIMEOUT = 2.0  # Seconds to wait for the loop thread on stop

# Monitoring window (inclusive of the end minute)
DEFAULT_WINDOW_START = time(9, 0)
DEFAULT_WINDOW_END = time(12, 15)

# Plane and simulation
DEFAULT_PLANE_MIN = 0.0
DEFAULT_PLANE_MAX = 100.0
DEFAULT_MAX_STEP = 1.0  # Max simulated movement per axis per tick

# Alerts
ALERT_MESSAGE_TEMPLATE = "{name} left the designated boundary."
MIN_BOUNDARY_VERTICES = 3

# Config file locations
DEFAULT_CONFIG_NAME = "geofence.yaml"

# Environment variables
ENV_TICK_SECONDS = "GEOFENCE_TICK_SECONDS"
ENV_WINDOW = "GEOFENCE_WINDOW"
