"""
go-scaffold Exceptions

Custom exception types for better error handling and remediation suggestions.
"""

from typing import Optional


class ScaffoldError(Exception):
    """Base exception for all go-scaffold errors."""

    def __init__(
        self,
        message: str,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        """Initialize the error.

        Args:
            message: Human-readable error message
            remediation: Suggested fix for the user
            details: Technical details for debugging
        """
        super().__init__(message)
        self.message = message
        self.remediation = remediation
        self.details = details

    def __str__(self) -> str:
        parts = [self.message]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.remediation:
            parts.append(f"To fix: {self.remediation}")
        return "\n".join(parts)


class ConfigError(ScaffoldError):
    """Configuration-related errors (bad config file, template dir, catalog)."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.config_key = config_key
        if not remediation and config_key:
            remediation = f"Check the '{config_key}' setting in your go-scaffold config file or environment"
        super().__init__(message, remediation, details)


class ValidationError(ScaffoldError):
    """A wizard text field failed its format check."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        expected_format: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.field = field
        self.expected_format = expected_format
        if not remediation and field and expected_format:
            remediation = f"The {field} should be in format: {expected_format}"
        super().__init__(message, remediation, details)


class ConflictError(ScaffoldError):
    """The target project directory already exists."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.path = path
        if not remediation:
            remediation = "Choose a different project name or target path, or remove the existing directory"
        super().__init__(message, remediation, details)


class MaterializeError(ScaffoldError):
    """Filesystem failure while building the project (triggers rollback)."""

    def __init__(
        self,
        message: str,
        step: Optional[str] = None,
        partial_path: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.step = step
        self.partial_path = partial_path
        if not remediation and partial_path:
            remediation = f"Check permissions and free space for {partial_path}, then run the wizard again"
        super().__init__(message, remediation, details)


class ManifestError(ScaffoldError):
    """A feature manifest is missing or malformed."""

    def __init__(
        self,
        message: str,
        feature_id: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.feature_id = feature_id
        if not remediation and feature_id:
            remediation = f"Check templates/features/{feature_id}/feature.json"
        super().__init__(message, remediation, details)


class VCSError(ScaffoldError):
    """A version-control command failed."""

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.command = command
        if not remediation and command:
            remediation = f"Run '{command}' manually inside the generated project"
        super().__init__(message, remediation, details)


# Error code mapping for CLI exit codes
ERROR_CODES = {
    ConfigError: 10,
    ValidationError: 14,
    ConflictError: 15,
    MaterializeError: 16,
    ManifestError: 17,
    VCSError: 18,
    ScaffoldError: 1,
}


def get_error_code(error: Exception) -> int:
    """Get the exit code for an error type."""
    for error_type, code in ERROR_CODES.items():
        if isinstance(error, error_type):
            return code
    return 1
