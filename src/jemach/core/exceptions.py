"""Custom exception hierarchy for jemach.

All custom exceptions inherit from JemachError to enable:
- Unified exception handling at the CLI boundary
- Clear distinction from built-in exceptions

The Julia analysis engine never raises for malformed source code.
Structural problems are returned as values (see jemach.julia.types).
"""

from typing import Any

__all__ = [
    "JemachError",
    "ConfigError",
    "ConfigValidationError",
    "TmuxError",
]


class JemachError(Exception):
    """Base exception for all jemach errors."""

    pass


class ConfigError(JemachError):
    """Configuration loading error.

    Raised when:
    - Configuration file does not exist or cannot be read
    - Configuration file is not valid JSON/YAML
    - Configuration content is not a mapping
    """

    pass


class ConfigValidationError(ConfigError):
    """Validation error with structured details.

    Attributes:
        errors: Human-readable error messages, one per failed check.
        warnings: Non-fatal findings collected in the same pass.

    Example:
        >>> try:
        ...     merge_config({"backend": "emacs"})
        ... except ConfigValidationError as e:
        ...     for err in e.errors:
        ...         print(err)

    """

    def __init__(
        self,
        message: str,
        errors: list[str],
        warnings: list[str] | None = None,
    ) -> None:
        """Initialize ConfigValidationError with message and collected errors.

        Args:
            message: Human-readable error message.
            errors: Error messages from validate_config().
            warnings: Warning messages from validate_config().

        """
        super().__init__(message)
        self.errors = errors
        self.warnings = warnings or []

    def to_dict(self) -> dict[str, Any]:
        """Return errors and warnings as a JSON-friendly dict."""
        return {"errors": list(self.errors), "warnings": list(self.warnings)}


class TmuxError(JemachError):
    """tmux interaction error.

    Raised when a caller asks for an operation that requires tmux
    (or an attached tmux session) and none is available.
    """

    pass
