"""
Entry point for running the geofence monitor as a module.

Usage:
    python -m campus_geofence [minutes]
"""

from .cli import main

if __name__ == "__main__":
    main()
