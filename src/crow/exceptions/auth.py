"""
Session and authentication exceptions.

Raised by the authenticated request client and the session providers when
a bearer credential cannot be obtained, refreshed or used.
"""

from typing import Optional

from .base import CrowError, ExceptionContext
from .templates import ErrorCodes, ErrorMessageTemplates, RecoverySuggestions


class AuthError(CrowError):
    """Base class for errors that leave the caller unauthenticated."""


class SessionUnavailable(AuthError):
    """Raised when the session provider could not be queried."""

    def __init__(self, details: Optional[str] = None):
        message = ErrorMessageTemplates.SESSION_UNAVAILABLE.format(
            details=details or "unknown error"
        )
        context = ExceptionContext(
            help_text=RecoverySuggestions.LOGIN_AGAIN,
            error_code=ErrorCodes.AUTH_SESSION_UNAVAILABLE,
            user_action=RecoverySuggestions.LOGIN_ACTION,
        )
        super().__init__(message, context)


class NoCredential(AuthError):
    """Raised when the session carries no usable access token."""

    def __init__(self):
        context = ExceptionContext(
            help_text=RecoverySuggestions.LOGIN_AGAIN,
            error_code=ErrorCodes.AUTH_NO_CREDENTIAL,
            user_action=RecoverySuggestions.LOGIN_ACTION,
        )
        super().__init__(ErrorMessageTemplates.NO_CREDENTIAL, context)


class SessionExpired(AuthError):
    """Raised when a credential refresh failed and the session was terminated."""

    def __init__(self, details: Optional[str] = None):
        context = ExceptionContext(
            help_text=RecoverySuggestions.LOGIN_AGAIN,
            error_code=ErrorCodes.AUTH_SESSION_EXPIRED,
            user_action=RecoverySuggestions.LOGIN_ACTION,
            technical_details=details,
        )
        super().__init__(ErrorMessageTemplates.SESSION_EXPIRED, context)


class InvalidCredentialsError(AuthError):
    """Raised when the auth service rejects an email/password sign in."""

    def __init__(self, details: Optional[str] = None, http_code: Optional[int] = None):
        message = ErrorMessageTemplates.INVALID_CREDENTIALS.format(
            details=details or "invalid email or password"
        )
        technical_details = None
        if http_code == 400:
            technical_details = "HTTP 400 Bad Request - Invalid login credentials"
        elif http_code == 401:
            technical_details = "HTTP 401 Unauthorized - Invalid API key"
        elif http_code == 429:
            technical_details = "HTTP 429 Too Many Requests - Sign in rate limited"

        context = ExceptionContext(
            help_text="Verify your email and password",
            error_code=ErrorCodes.AUTH_INVALID_CREDENTIALS,
            context={"http_code": http_code} if http_code else {},
            technical_details=technical_details,
        )
        super().__init__(message, context)


class SessionProviderError(CrowError):
    """Raised by a session provider when it cannot complete an operation."""

    def __init__(self, details: str, error_code: Optional[str] = None):
        message = ErrorMessageTemplates.PROVIDER_ERROR.format(details=details)
        context = ExceptionContext(
            help_text=RecoverySuggestions.TRY_AGAIN_LATER,
            error_code=error_code or ErrorCodes.AUTH_PROVIDER_ERROR,
        )
        super().__init__(message, context)


class SessionStoreError(SessionProviderError):
    """Raised when persisted session data cannot be read or written."""

    def __init__(self, path: str, details: str):
        self.path = path
        message = ErrorMessageTemplates.STORE_ERROR.format(path=path, details=details)
        context = ExceptionContext(
            help_text=f"Remove {path} and login again",
            error_code=ErrorCodes.AUTH_STORE_ERROR,
            context={"path": path},
        )
        CrowError.__init__(self, message, context)
