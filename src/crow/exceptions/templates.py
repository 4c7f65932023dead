"""
Standardized error message templates and recovery suggestions.

Keeps the wording of user-facing errors consistent across the client,
the session providers and the CLI.
"""

from typing import List


class ErrorMessageTemplates:
    """Standardized error message templates for consistent formatting."""

    # Session error templates
    SESSION_UNAVAILABLE = "Failed to get session: {details}"
    NO_CREDENTIAL = "No access token available"
    SESSION_EXPIRED = "Session expired"
    INVALID_CREDENTIALS = "Sign in failed: {details}"
    PROVIDER_ERROR = "Session provider error: {details}"
    STORE_ERROR = "Session store error at {path}: {details}"

    # Transport error templates
    NETWORK_ERROR = "{method} {url} failed: {details}"

    # API error templates
    API_ERROR = "API request failed with HTTP {status_code}: {message}"
    VALIDATION_ERROR = "Invalid {field}: {reason}"

    # Configuration error templates
    CONFIG_INVALID = "Invalid configuration for '{field}': got {value!r}, expected {expected}"
    CONFIG_MISSING = "Missing required configuration: '{field}'"


class RecoverySuggestions:
    """Standard recovery suggestions for common error scenarios."""

    LOGIN_AGAIN = "Please login again."
    LOGIN_ACTION = "Run: crow login"
    TRY_AGAIN_LATER = "Check your internet connection and try again later."

    @staticmethod
    def for_session_error() -> List[str]:
        """Get recovery suggestions for session errors."""
        return [
            "Please login again.",
            "Run: crow login",
            "Run: crow config --show to verify the auth URL and anon key",
        ]

    @staticmethod
    def for_network_error() -> List[str]:
        """Get recovery suggestions for transport failures."""
        return [
            "Check your internet connection and try again later.",
            "Verify the functions URL is reachable",
            "Check firewall and proxy settings",
        ]

    @staticmethod
    def for_config_error(field: str) -> List[str]:
        """Get recovery suggestions for configuration errors."""
        return [
            f"Check the '{field}' configuration setting",
            "Run: crow config --show to view current configuration",
            f"Set it in the configuration file or through CROW_{field.upper().replace('.', '_')}",
        ]


class ErrorCodes:
    """Standardized error codes for consistent error categorization."""

    # Session errors (AUTH_xxx)
    AUTH_SESSION_UNAVAILABLE = "AUTH_001"
    AUTH_NO_CREDENTIAL = "AUTH_002"
    AUTH_SESSION_EXPIRED = "AUTH_003"
    AUTH_INVALID_CREDENTIALS = "AUTH_004"
    AUTH_PROVIDER_ERROR = "AUTH_005"
    AUTH_STORE_ERROR = "AUTH_006"

    # Transport errors (NETWORK_xxx)
    NETWORK_FAILED = "NETWORK_001"

    # API errors (API_xxx)
    API_REQUEST_FAILED = "API_001"
    API_VALIDATION_FAILED = "API_002"

    # Configuration errors (CONFIG_xxx)
    CONFIG_MISSING = "CONFIG_001"
    CONFIG_INVALID = "CONFIG_002"
    CONFIG_FILE_ERROR = "CONFIG_003"
    CONFIG_VALIDATION_ERROR = "CONFIG_004"

    # CLI errors (CLI_xxx)
    CLI_INVALID_ARGUMENT = "CLI_001"
    CLI_USER_ABORT = "CLI_002"
