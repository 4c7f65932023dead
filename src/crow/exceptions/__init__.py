"""
Crow Exception Hierarchy

Exception Hierarchy:
    CrowError (base)
    ├── AuthError
    │   ├── SessionUnavailable
    │   ├── NoCredential
    │   ├── SessionExpired
    │   └── InvalidCredentialsError
    ├── SessionProviderError
    │   └── SessionStoreError
    ├── CrowNetworkError
    ├── ApiError
    │   └── ValidationError
    ├── ConfigurationError
    │   ├── InvalidConfigurationError
    │   ├── MissingConfigurationError
    │   └── ConfigurationValidationError
    └── CLIError
        ├── InvalidCommandError
        └── UserAbortError

Non-401 HTTP statuses are not errors for the request client; they only
become ApiError in the typed API layer.
"""

from .base import CrowError, ExceptionContext

# Session exceptions
from .auth import (
    AuthError,
    InvalidCredentialsError,
    NoCredential,
    SessionExpired,
    SessionProviderError,
    SessionStoreError,
    SessionUnavailable,
)

# Transport exceptions
from .network import CrowNetworkError

# Backend API exceptions
from .api import ApiError, ValidationError

# Configuration exceptions
from .config import (
    ConfigurationError,
    ConfigurationValidationError,
    InvalidConfigurationError,
    MissingConfigurationError,
)

# CLI exceptions
from .cli import CLIError, InvalidCommandError, UserAbortError

__all__ = [
    # Base
    "CrowError",
    "ExceptionContext",
    # Session
    "AuthError",
    "SessionUnavailable",
    "NoCredential",
    "SessionExpired",
    "InvalidCredentialsError",
    "SessionProviderError",
    "SessionStoreError",
    # Transport
    "CrowNetworkError",
    # API
    "ApiError",
    "ValidationError",
    # Configuration
    "ConfigurationError",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "ConfigurationValidationError",
    # CLI
    "CLIError",
    "InvalidCommandError",
    "UserAbortError",
]
