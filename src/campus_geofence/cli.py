"""
Campus Geofence Monitor CLI
Main entry point for running the monitor from a YAML config.

  --validate  Check configuration validity
  --once      Run a single tick now (optionally at a given time of day)
"""

import argparse
import logging
import signal
import sys
from collections.abc import Callable
from datetime import datetime
from threading import Event as ThreadEvent

from . import __version__
from .config import (
    build_monitor,
    build_session,
    find_config_file,
    load_config,
    load_config_with_env,
    print_validation_result,
    read_config_file,
    validate_config_full,
)
from .core import MonitoringLoop, Session, parse_clock
from .errors import ConfigValidationError
from .models import TickResult

logger = logging.getLogger(__name__)

# Module-level shutdown signal for SIGTERM/SIGINT handling
_shutdown_signal = ThreadEvent()


def _handle_shutdown_signal(signum, _frame):
    """Handle SIGTERM/SIGINT for graceful shutdown."""
    signal_name = "SIGTERM" if signum == signal.SIGTERM else "SIGINT"
    # Note: print is safer than logger in signal handlers
    print(f"\nReceived {signal_name}, stopping monitor...")
    _shutdown_signal.set()


def _setup_signal_handlers():
    """Register signal handlers for graceful shutdown."""
    signal.signal(signal.SIGTERM, _handle_shutdown_signal)
    signal.signal(signal.SIGINT, _handle_shutdown_signal)


def setup_logging(quiet: bool = False) -> None:
    """
    Setup logging configuration.

    Args:
        quiet: If True, only show warnings and errors
    """
    level = logging.WARNING if quiet else logging.INFO

    # Custom formatter with shorter module names
    class ShortNameFormatter(logging.Formatter):
        def format(self, record):
            record.name = record.name.replace("campus_geofence.", "cg.")
            return super().format(record)

    handler = logging.StreamHandler()
    handler.setFormatter(
        ShortNameFormatter(
            fmt="%(asctime)s %(name)s %(levelname)s %(message)s", datefmt="%H:%M:%S"
        )
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(level)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Campus Geofence Monitor - Alert when students leave the boundary",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m campus_geofence                # Run until Ctrl+C
  python -m campus_geofence 30             # Run for 30 minutes
  python -m campus_geofence --validate     # Check config validity
  python -m campus_geofence --once 10:00   # One tick as if it were 10:00

Environment Variables:
  GEOFENCE_TICK_SECONDS - Override monitor.tick_seconds
  GEOFENCE_WINDOW       - Override monitor.window as HH:MM-HH:MM
        """,
    )

    parser.add_argument(
        "duration",
        type=float,
        nargs="?",
        help="Duration in minutes (default: run until stopped)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Quiet mode - only show warnings and errors (alerts still shown)",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Path to config file (default: ./geofence.yaml)",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate configuration and show derived settings",
    )
    parser.add_argument(
        "--once",
        nargs="?",
        const="now",
        metavar="HH:MM",
        help="Run a single tick and print the result",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser.parse_args(argv)


def run_validate(config_path: str | None) -> int:
    """Validate config and print a report. Returns exit code."""
    try:
        config_file = find_config_file(config_path)
        raw = read_config_file(config_file) if config_file else {}
        if isinstance(raw, dict):
            raw = load_config_with_env(raw)
    except (FileNotFoundError, ConfigValidationError) as e:
        logger.error(str(e))
        return 1

    result = validate_config_full(raw)
    print_validation_result(result)
    return 0 if result.valid else 1


def fixed_clock(at: str) -> Callable[[], datetime]:
    """Clock returning today's date at the given HH:MM."""
    moment = datetime.combine(datetime.now().date(), parse_clock(at))
    return lambda: moment


def print_status(session: Session, result: TickResult | None = None) -> None:
    """Print the student table and alert list."""
    print()
    if result is not None:
        gate = "active" if result.window_active else "inactive"
        print(f"Monitoring window: {gate}")

    print(f"{'ID':<12} {'Name':<20} {'Position':<18} {'Status':<8} Source")
    print("-" * 70)
    for student in session.students():
        if student.position is None:
            position = "unknown"
        else:
            position = f"({student.position.latitude:.1f}, {student.position.longitude:.1f})"
        status = "inside" if student.is_inside else "OUTSIDE"
        source = "live" if student.is_live_tracked else "simulated"
        print(f"{student.id:<12} {student.name:<20} {position:<18} {status:<8} {source}")

    alerts = session.alerts()
    print(f"\nAlerts ({sum(1 for a in alerts if not a.read)} unread):")
    if not alerts:
        print("  (none)")
    for alert in alerts:
        marker = " " if alert.read else "*"
        print(f"  {marker} {alert.timestamp:%H:%M:%S} {alert.message}")
    print()


def print_banner(session: Session, monitor: MonitoringLoop, duration: float | None) -> None:
    """Print system startup banner."""
    print("\n" + "=" * 70)
    print(f"CAMPUS GEOFENCE MONITOR v{__version__}")
    print("=" * 70)
    print(f"\nBoundary: {len(session.boundary())} vertices")
    print(f"Students: {len(session.students())}")
    print(f"Window: {monitor.window}")
    print(f"Tick: every {monitor.period}s")
    if duration:
        print(f"Duration: {duration} minute(s)")
    print("  Press Ctrl+C to stop")
    print("=" * 70)
    print()


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(quiet=args.quiet)

    if args.validate:
        sys.exit(run_validate(args.config))

    if args.duration is not None and args.duration <= 0:
        logger.error(f"Invalid duration '{args.duration}' - must be positive")
        sys.exit(1)

    try:
        config, _ = load_config(args.config)
    except FileNotFoundError as e:
        logger.error(str(e))
        sys.exit(1)
    except ConfigValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        logger.error("Run with --validate for details")
        sys.exit(1)

    session = build_session(config)

    if args.once:
        try:
            clock = datetime.now if args.once == "now" else fixed_clock(args.once)
        except ValueError:
            logger.error(f"Invalid time '{args.once}' - expected HH:MM")
            sys.exit(1)
        monitor = build_monitor(config, session, clock=clock)
        result = monitor.tick()
        monitor.stop()
        print_status(session, result)
        return

    monitor = build_monitor(config, session)
    print_banner(session, monitor, args.duration)

    _setup_signal_handlers()
    monitor.start()
    try:
        timeout = args.duration * 60 if args.duration else None
        _shutdown_signal.wait(timeout=timeout)
    finally:
        monitor.stop()

    print_status(session)


if __name__ == "__main__":
    main()
