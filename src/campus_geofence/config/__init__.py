"""
Configuration loading, validation, and runtime wiring.

Provides:
- validate_config_full: Comprehensive validation with errors/warnings
- load_config: Find, read, apply env overrides, validate
- build_session / build_monitor: Runtime objects from a validated Config

Pydantic schemas available for type-safe validation:
- Config: Complete configuration schema
- validate_config_pydantic: Validate and parse config to Pydantic model
"""

from .loader import (
    find_config_file,
    load_config,
    load_config_with_env,
    print_validation_result,
    read_config_file,
)
from .resolver import (
    build_intake,
    build_monitor,
    build_projection,
    build_session,
    build_simulator,
    build_students,
    build_window,
)
from .schemas import (
    Config,
    MonitorConfig,
    NotifierConfig,
    StudentConfig,
    validate_config_pydantic,
)
from .validator import ValidationResult, validate_config_full

__all__ = [
    # Pydantic validation
    "Config",
    "MonitorConfig",
    "NotifierConfig",
    "StudentConfig",
    "ValidationResult",
    # Runtime wiring
    "build_intake",
    "build_monitor",
    "build_projection",
    "build_session",
    "build_simulator",
    "build_students",
    "build_window",
    # Config loading
    "find_config_file",
    "load_config",
    "load_config_with_env",
    "print_validation_result",
    "read_config_file",
    # Validation
    "validate_config_full",
    "validate_config_pydantic",
]
