"""
Configuration-related exceptions.

All exceptions related to configuration parsing, validation, and management.
"""

from typing import Any, List, Optional

from .base import CrowError, ExceptionContext
from .templates import ErrorCodes, ErrorMessageTemplates


class ConfigurationError(CrowError):
    """Base class for configuration-related errors."""

    def __init__(self, message: str, help_text: Optional[str] = None, error_code: Optional[str] = None):
        context = ExceptionContext(
            help_text=help_text,
            error_code=error_code or ErrorCodes.CONFIG_FILE_ERROR,
        )
        super().__init__(message, context)


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration contains invalid values."""

    def __init__(self, field: str, value: Any, expected: str):
        self.field = field
        self.value = value
        self.expected = expected
        message = ErrorMessageTemplates.CONFIG_INVALID.format(
            field=field, value=value, expected=expected
        )
        help_text = f"Please check the configuration for '{field}' and ensure it matches the expected format: {expected}"
        super().__init__(message, help_text, ErrorCodes.CONFIG_INVALID)


class MissingConfigurationError(ConfigurationError):
    """Raised when required configuration is missing."""

    def __init__(self, field: str, config_location: Optional[str] = None):
        self.field = field
        message = ErrorMessageTemplates.CONFIG_MISSING.format(field=field)
        env_name = "CROW_" + field.upper().replace(".", "_")
        help_text = f"Set {env_name} in the environment"
        if config_location:
            help_text += f" or add it to {config_location}"
        super().__init__(message, help_text, ErrorCodes.CONFIG_MISSING)


class ConfigurationValidationError(ConfigurationError):
    """Raised when configuration fails validation."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        message = "Configuration validation failed:"
        for error in errors:
            message += f"\n  - {error}"

        help_text = "Please check your configuration file and fix the validation errors listed above"
        super().__init__(message, help_text, ErrorCodes.CONFIG_VALIDATION_ERROR)
