"""
Configuration management for Crow.

Usage:
    from crow.core.config import ConfigManager

    config = ConfigManager().load_config()
    print(config.api_base_url)
"""

from ...exceptions.config import (
    ConfigurationError,
    ConfigurationValidationError,
    InvalidConfigurationError,
    MissingConfigurationError,
)
from .manager import ConfigManager
from .models import (
    ApiConfig,
    AuthConfig,
    CrowConfig,
    CrowSettings,
    HttpConfig,
    LoggingConfig,
    LogLevel,
    SessionConfig,
)

__all__ = [
    "CrowConfig",
    "CrowSettings",
    "AuthConfig",
    "ApiConfig",
    "HttpConfig",
    "SessionConfig",
    "LoggingConfig",
    "LogLevel",
    "ConfigManager",
    "ConfigurationError",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "ConfigurationValidationError",
]
