"""Configuration validator with human-readable output.

Validates jemach option sets (loaded from JSON or YAML) and reports
issues with [OK], [WARN], and [ERR] status markers.

Checks performed:
- File readability and JSON/YAML syntax
- Enum options (backend, slime_target, terminal_direction, workspace_style)
- Value types for boolean and integer options
- Non-negative counts and timings (errors)
- Recommended ranges for terminal/workspace geometry (warnings)
- Unknown option names (warnings)

Example:
    >>> from jemach.config.validator import validate_config
    >>> report = validate_config({"backend": "emacs", "terminal_size": 80})
    >>> report.valid
    False
    >>> report.errors
    ["Invalid backend: 'emacs'. Must be one of: 'toggleterm', 'vim-slime', 'auto'"]

"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, get_args

import yaml
from pydantic import ValidationError

from jemach.config.models import (
    DEFAULT_CONFIG,
    BackendType,
    JemachConfig,
    SlimeTarget,
    TerminalDirection,
    WorkspaceStyle,
)
from jemach.core.exceptions import ConfigError, ConfigValidationError

logger = logging.getLogger(__name__)

StatusType = Literal["ok", "warn", "error"]

# Maximum config file size (1MB)
MAX_CONFIG_SIZE = 1024 * 1024

_ENUM_OPTIONS: dict[str, tuple[str, ...]] = {
    "backend": get_args(BackendType),
    "slime_target": get_args(SlimeTarget),
    "terminal_direction": get_args(TerminalDirection),
    "workspace_style": get_args(WorkspaceStyle),
}

_BOOL_OPTIONS: tuple[str, ...] = (
    "activate_project_on_start",
    "auto_update_workspace",
    "auto_save_workspace",
    "save_on_exit",
    "smart_block_detection",
    "use_revise",
    "use_cache",
)

_NON_NEGATIVE_OPTIONS: tuple[str, ...] = (
    "max_history_size",
    "workspace_update_debounce",
    "cache_ttl",
)

# Recommended (inclusive) ranges; values outside only warn
_SOFT_RANGES: dict[str, tuple[int, int]] = {
    "workspace_width": (20, 200),
    "terminal_size": (5, 50),
}

_SLIME_KEYS: tuple[str, ...] = ("socket_name", "target_pane")


@dataclass(frozen=True)
class ValidationResult:
    """Result of a single validation check.

    Attributes:
        status: Validation status ("ok", "warn", or "error").
        field_path: Dot-separated path to the validated option.
        message: Human-readable description of the check result.
        suggestion: Optional suggestion for fixing the issue.

    """

    status: StatusType
    field_path: str
    message: str
    suggestion: str | None = None


@dataclass
class ConfigReport:
    """All check results for one option set."""

    results: list[ValidationResult] = field(default_factory=list)

    @property
    def errors(self) -> list[str]:
        return [r.message for r in self.results if r.status == "error"]

    @property
    def warnings(self) -> list[str]:
        return [r.message for r in self.results if r.status == "warn"]

    @property
    def valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        """Return the {valid, errors, warnings} summary."""
        return {"valid": self.valid, "errors": self.errors, "warnings": self.warnings}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _format_choices(choices: tuple[str, ...]) -> str:
    return ", ".join(f"'{c}'" for c in choices)


def _validate_enums(config: Mapping[str, Any]) -> list[ValidationResult]:
    """Check enum options against their allowed values."""
    results: list[ValidationResult] = []
    for name, choices in _ENUM_OPTIONS.items():
        if name not in config:
            continue
        value = config[name]
        if value in choices:
            results.append(ValidationResult("ok", name, f"{name}: {value}"))
        else:
            results.append(
                ValidationResult(
                    status="error",
                    field_path=name,
                    message=f"Invalid {name}: {value!r}. Must be one of: {_format_choices(choices)}",
                )
            )
    return results


def _validate_booleans(config: Mapping[str, Any]) -> list[ValidationResult]:
    """Check flag options are booleans."""
    results: list[ValidationResult] = []
    for name in _BOOL_OPTIONS:
        if name in config and not isinstance(config[name], bool):
            results.append(
                ValidationResult(
                    status="error",
                    field_path=name,
                    message=f"{name} must be a boolean, got {type(config[name]).__name__}",
                )
            )
    return results


def _validate_numbers(config: Mapping[str, Any]) -> list[ValidationResult]:
    """Check integer options: hard non-negative limits and soft ranges."""
    results: list[ValidationResult] = []

    for name in _NON_NEGATIVE_OPTIONS:
        if name not in config:
            continue
        value = config[name]
        if not _is_int(value):
            results.append(
                ValidationResult("error", name, f"{name} must be an integer, got {type(value).__name__}")
            )
        elif value < 0:
            results.append(
                ValidationResult(
                    status="error",
                    field_path=name,
                    message=f"{name} must be non-negative",
                    suggestion="Use 0 to disable",
                )
            )
        else:
            results.append(ValidationResult("ok", name, f"{name}: {value}"))

    for name, (low, high) in _SOFT_RANGES.items():
        if name not in config:
            continue
        value = config[name]
        if not _is_int(value):
            results.append(
                ValidationResult("error", name, f"{name} must be an integer, got {type(value).__name__}")
            )
        elif not low <= value <= high:
            results.append(
                ValidationResult(
                    status="warn",
                    field_path=name,
                    message=f"{name} should be between {low} and {high}",
                )
            )
        else:
            results.append(ValidationResult("ok", name, f"{name}: {value}"))

    return results


def _validate_slime_config(config: Mapping[str, Any]) -> list[ValidationResult]:
    """Check the nested slime_default_config mapping."""
    if "slime_default_config" not in config:
        return []

    slime = config["slime_default_config"]
    if not isinstance(slime, Mapping):
        return [
            ValidationResult(
                status="error",
                field_path="slime_default_config",
                message="slime_default_config must be a mapping",
                suggestion="Use {socket_name: ..., target_pane: ...}",
            )
        ]

    results: list[ValidationResult] = []
    for key, value in slime.items():
        path = f"slime_default_config.{key}"
        if key not in _SLIME_KEYS:
            results.append(ValidationResult("warn", path, f"Unknown option: {path}"))
        elif not isinstance(value, str):
            results.append(
                ValidationResult("error", path, f"{path} must be a string, got {type(value).__name__}")
            )
    return results


def _validate_unknown_keys(config: Mapping[str, Any]) -> list[ValidationResult]:
    """Warn about option names the config model does not define."""
    known = set(JemachConfig.model_fields)
    return [
        ValidationResult(
            status="warn",
            field_path=str(name),
            message=f"Unknown option: {name}",
            suggestion="Check the option name for typos",
        )
        for name in config
        if name not in known
    ]


def validate_config(config: Mapping[str, Any]) -> ConfigReport:
    """Validate a user option set.

    Each option is checked independently; one bad value never hides
    problems with another.

    Args:
        config: Partial option mapping (missing keys use defaults).

    Returns:
        ConfigReport with every check result.

    """
    report = ConfigReport()
    report.results.extend(_validate_enums(config))
    report.results.extend(_validate_booleans(config))
    report.results.extend(_validate_numbers(config))
    report.results.extend(_validate_slime_config(config))
    report.results.extend(_validate_unknown_keys(config))
    return report


def load_config_file(path: Path) -> dict[str, Any]:
    """Load a JSON or YAML option file.

    Args:
        path: Path to the config file.

    Returns:
        The option mapping (empty for an empty file).

    Raises:
        ConfigError: On file/parse errors or non-mapping content.

    """
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    if not path.is_file():
        raise ConfigError(f"Config path is not a file: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            content = f.read(MAX_CONFIG_SIZE + 1)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    if len(content) > MAX_CONFIG_SIZE:
        raise ConfigError(f"Config file {path} exceeds 1MB limit")

    # JSON is a subset of YAML, so one loader covers both formats
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid JSON/YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a mapping, got {type(data).__name__}")
    return data


def validate_config_file(config_path: Path) -> ConfigReport:
    """Load and validate a config file, reporting load failures as errors."""
    try:
        data = load_config_file(config_path)
    except ConfigError as e:
        return ConfigReport(results=[ValidationResult("error", "(file)", str(e))])

    report = validate_config(data)
    report.results.insert(0, ValidationResult("ok", "(file)", "File syntax is valid"))
    return report


def merge_config(user_config: Mapping[str, Any]) -> JemachConfig:
    """Validate user options and overlay them on the defaults.

    Unknown options are dropped with a warning.

    Args:
        user_config: Partial option mapping.

    Returns:
        Complete, frozen JemachConfig.

    Raises:
        ConfigValidationError: If any option is invalid.

    """
    report = validate_config(user_config)
    if not report.valid:
        raise ConfigValidationError(
            "Configuration validation failed:\n" + "\n".join(report.errors),
            errors=report.errors,
            warnings=report.warnings,
        )
    if report.warnings:
        logger.warning("Configuration warnings:\n%s", "\n".join(report.warnings))

    merged = DEFAULT_CONFIG.model_dump()
    for name, value in user_config.items():
        if name not in merged:
            continue
        if name == "slime_default_config":
            merged[name] = {
                **merged[name],
                **{k: v for k, v in value.items() if k in _SLIME_KEYS},
            }
        else:
            merged[name] = value

    try:
        return JemachConfig.model_validate(merged)
    except ValidationError as e:
        messages = [err["msg"] for err in e.errors()]
        raise ConfigValidationError(f"Configuration validation failed: {e}", errors=messages) from e


def format_validation_report(report: ConfigReport, config_path: Path) -> tuple[str, bool]:
    """Format validation results as a human-readable report.

    Args:
        report: Results of validate_config_file().
        config_path: Path to the validated config file.

    Returns:
        Tuple of (formatted_report, has_errors). The report uses rich markup.

    """
    lines: list[str] = [f"\n[bold]Validating:[/bold] {config_path}\n"]

    for result in report.results:
        if result.status == "ok":
            status_tag = "[green][OK][/green]"
        elif result.status == "warn":
            status_tag = "[yellow][WARN][/yellow]"
        else:
            status_tag = "[red][ERR][/red]"

        lines.append(f"  {status_tag} [dim]{result.field_path}[/dim]: {result.message}")
        if result.suggestion:
            lines.append(f"       [dim]→ {result.suggestion}[/dim]")

    lines.append("")
    if not report.valid:
        lines.append("[red]✗ Configuration has errors[/red]")
    elif report.warnings:
        lines.append("[yellow]⚠ Configuration valid with warnings[/yellow]")
    else:
        lines.append("[green]✓ Configuration is valid[/green]")

    return "\n".join(lines), not report.valid
