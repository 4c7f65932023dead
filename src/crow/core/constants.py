"""
Application constants and configuration values.

Centralizes magic numbers and hardcoded values shared by the client,
the session providers and the API layer.
"""


class NetworkConstants:
    """Constants for network operations."""

    DEFAULT_REQUEST_TIMEOUT = 30
    MAX_REQUEST_TIMEOUT = 300
    DEFAULT_CONTENT_TYPE = "application/json"
    USER_AGENT = "crow-client"

    # HTTP Status Codes
    HTTP_OK = 200
    HTTP_BAD_REQUEST = 400
    HTTP_UNAUTHORIZED = 401
    HTTP_FORBIDDEN = 403
    HTTP_NOT_FOUND = 404
    HTTP_SERVER_ERROR = 500


class AuthConstants:
    """Constants for the GoTrue auth service."""

    TOKEN_ENDPOINT = "/auth/v1/token"
    LOGOUT_ENDPOINT = "/auth/v1/logout"
    PASSWORD_GRANT = "password"
    REFRESH_TOKEN_GRANT = "refresh_token"
    BEARER_PREFIX = "Bearer "


class ApiConstants:
    """Constants for the social backend."""

    FUNCTIONS_PATH = "/functions/v1"
    FUNCTION_NAME = "make-server-b017b546"
    MAX_POST_LENGTH = 280


class ConfigConstants:
    """Constants for configuration files."""

    CONFIG_DIR_NAME = "crow"
    CONFIG_FILE_NAME = "config.toml"
    SESSION_FILE_NAME = "session.json"
    DEFAULT_LOG_FILE_SIZE_BYTES = 5 * 1024 * 1024
    MIN_LOG_FILE_SIZE_BYTES = 64 * 1024
    DEFAULT_LOG_BACKUP_COUNT = 3
