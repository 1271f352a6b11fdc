"""
Custom Exceptions for tracebuild.

Design Principles:
- Every exception provides actionable guidance
- Error messages include context (what was expected, what was provided)
- Exceptions are hierarchical for flexible catching

Collaborator failures are NOT exceptions here. They are reported through
ProcessOutcome (see core/executor.py) and turned into exit codes by the
strategies. This module only covers problems with the dispatcher's own
configuration, which are reported before any platform work starts.
"""

from pathlib import Path
from typing import Any, Dict, Optional


class ConfigError(Exception):
    """
    Base exception for all tracebuild configuration errors.

    Attributes:
        message: Human-readable error description
        context: Additional context as key-value pairs
        suggestion: Actionable suggestion to fix the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestion: Optional[str] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the complete error message."""
        parts = [self.message]

        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            parts.append(f"Context: {context_str}")

        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")

        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "suggestion": self.suggestion,
        }


class ConfigFileError(ConfigError):
    """Raised when the YAML settings file cannot be read or parsed."""

    def __init__(
        self,
        message: str,
        file_path: Path,
        line: Optional[int] = None,
        suggestion: Optional[str] = None,
    ):
        self.file_path = file_path
        self.line = line

        context: Dict[str, Any] = {"file": str(file_path)}
        if line is not None:
            context["line"] = line

        super().__init__(
            message,
            context=context,
            suggestion=suggestion or "Check the YAML syntax of the settings file",
        )


class ConfigValidationError(ConfigError):
    """Raised when settings values fail schema validation."""

    def __init__(
        self,
        message: str,
        field_path: Optional[str] = None,
        actual_value: Any = None,
        source: Optional[str] = None,
    ):
        self.field_path = field_path
        self.actual_value = actual_value
        self.source = source

        context: Dict[str, Any] = {}
        if field_path:
            context["field"] = field_path
        if actual_value is not None:
            context["value"] = actual_value
        if source:
            context["source"] = source

        super().__init__(
            message,
            context=context,
            suggestion="Remove unknown keys and check value types in tracebuild.yaml",
        )
