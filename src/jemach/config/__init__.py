"""Configuration models and validation for jemach."""

from jemach.config.models import DEFAULT_CONFIG, JemachConfig, SlimeDefaultConfig
from jemach.config.validator import (
    ConfigReport,
    ValidationResult,
    format_validation_report,
    load_config_file,
    merge_config,
    validate_config,
    validate_config_file,
)

__all__ = [
    "DEFAULT_CONFIG",
    "ConfigReport",
    "JemachConfig",
    "SlimeDefaultConfig",
    "ValidationResult",
    "format_validation_report",
    "load_config_file",
    "merge_config",
    "validate_config",
    "validate_config_file",
]
