"""
Configuration Loader - Finds, reads, and validates the YAML config.

Provides:
- find_config_file: Standard search locations
- load_config_with_env: Apply environment variable overrides
- load_config: Read, override, validate in one call
- print_validation_result: Terraform-like validation report
"""

import logging
import os
import sys
from pathlib import Path

import yaml

from ..core.window import MonitoringWindow
from ..errors import ConfigValidationError
from ..utils.constants import DEFAULT_CONFIG_NAME, ENV_TICK_SECONDS, ENV_WINDOW
from .schemas import Config
from .validator import ValidationResult, validate_config_full

logger = logging.getLogger(__name__)


# ANSI color codes for terminal output
class Colors:
    GREEN = "\033[92m"
    RED = "\033[91m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    BOLD = "\033[1m"
    RESET = "\033[0m"

    @classmethod
    def disable(cls):
        """Disable colors for non-TTY output."""
        cls.GREEN = cls.RED = cls.YELLOW = cls.CYAN = cls.BOLD = cls.RESET = ""


# Disable colors if not a TTY
if not sys.stdout.isatty():
    Colors.disable()


def find_config_file(config_path: str | None = None) -> Path | None:
    """
    Find config file in standard locations.

    Search order:
    1. Specified path (if provided) - used exclusively
    2. Current directory (geofence.yaml)
    3. ~/.config/campus-geofence/geofence.yaml

    Args:
        config_path: User-specified config path

    Returns:
        Path to config file, or None if no default location has one

    Raises:
        FileNotFoundError: If an explicitly specified path does not exist
    """
    if config_path:
        specified = Path(config_path)
        if not specified.exists():
            raise FileNotFoundError(f"Specified config file not found: {config_path}")
        return specified

    search_paths = [
        Path.cwd() / DEFAULT_CONFIG_NAME,
        Path.home() / ".config" / "campus-geofence" / DEFAULT_CONFIG_NAME,
    ]
    for path in search_paths:
        if path.exists():
            logger.info(f"Using config: {path}")
            return path

    return None


def read_config_file(config_file: Path) -> dict:
    """
    Read a YAML config file.

    Supports pointer files: if config only contains `use: path/to/config.yaml`,
    that file is loaded instead (resolved relative to the pointer file).

    Raises:
        ConfigValidationError: If the YAML cannot be parsed
    """
    try:
        with open(config_file, encoding="utf-8") as f:
            config = yaml.safe_load(f)

        if isinstance(config, dict) and list(config.keys()) == ["use"]:
            pointer_path = Path(config_file).parent / config["use"]
            logger.info(f"Config pointer: {config_file} -> {pointer_path}")
            with open(pointer_path, encoding="utf-8") as f:
                config = yaml.safe_load(f)

    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in {config_file}: {e}") from e

    return config if config is not None else {}


def load_config_with_env(config: dict) -> dict:
    """
    Apply environment variable overrides to config.

    Args:
        config: Base configuration dictionary

    Returns:
        Configuration with environment variables applied

    Raises:
        ConfigValidationError: If the window override is not HH:MM-HH:MM
    """
    if ENV_TICK_SECONDS in os.environ:
        logger.info(f"Using tick period from environment: {ENV_TICK_SECONDS}")
        config.setdefault("monitor", {})["tick_seconds"] = os.environ[ENV_TICK_SECONDS]

    if ENV_WINDOW in os.environ:
        try:
            parsed = MonitoringWindow.parse(os.environ[ENV_WINDOW])
        except ValueError as e:
            raise ConfigValidationError(f"{ENV_WINDOW}: {e}") from e
        logger.info(f"Using monitoring window from environment: {ENV_WINDOW}")
        window = config.setdefault("monitor", {}).setdefault("window", {})
        window["start"] = f"{parsed.start:%H:%M}"
        window["end"] = f"{parsed.end:%H:%M}"

    return config


def load_config(config_path: str | None = None) -> tuple[Config, ValidationResult]:
    """
    Load, override, and validate the configuration.

    Falls back to built-in defaults when no config file is found.

    Returns:
        Parsed Config and the full validation result (for warnings)

    Raises:
        FileNotFoundError: If an explicitly specified file does not exist
        ConfigValidationError: If the config is invalid
    """
    config_file = find_config_file(config_path)
    if config_file is None:
        logger.info("No config file found, using built-in defaults")
        raw = {}
    else:
        raw = read_config_file(config_file)
        logger.info(f"Configuration loaded from {config_file}")

    if isinstance(raw, dict):
        raw = load_config_with_env(raw)

    result = validate_config_full(raw)
    if not result.valid:
        raise ConfigValidationError("; ".join(result.errors))

    for warning in result.warnings:
        logger.warning(warning)
    return result.config, result


def print_validation_result(result: ValidationResult) -> None:
    """Print validation result in Terraform-like format."""
    print()
    print(f"{Colors.BOLD}Configuration Validation{Colors.RESET}")
    print("=" * 60)

    if result.valid:
        print(f"\n{Colors.GREEN}✓ Configuration is valid{Colors.RESET}")
    else:
        print(f"\n{Colors.RED}✗ Configuration has errors{Colors.RESET}")

    if result.errors:
        print(f"\n{Colors.RED}Errors:{Colors.RESET}")
        for error in result.errors:
            print(f"  {Colors.RED}✗{Colors.RESET} {error}")

    if result.warnings:
        print(f"\n{Colors.YELLOW}Warnings:{Colors.RESET}")
        for warning in result.warnings:
            print(f"  {Colors.YELLOW}!{Colors.RESET} {warning}")

    if result.valid and result.derived:
        derived = result.derived
        print(f"\n{Colors.CYAN}Derived Configuration:{Colors.RESET}")
        print(f"  Monitoring window: {derived['window']}")
        min_lat, min_lng, max_lat, max_lng = derived["bounding_box"]
        print(f"  Boundary box: lat {min_lat}-{max_lat}, lng {min_lng}-{max_lng}")
        print(
            f"  Students: {derived['students']} "
            f"({derived['live_students']} live-tracked)"
        )
        if derived["notifiers"]:
            print(f"  Notifiers: {', '.join(derived['notifiers'])}")

    print()
