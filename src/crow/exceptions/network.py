"""
Transport-level exceptions.

A network error is never retried by the client; it is raised to the caller
as soon as the transport reports it.
"""

from typing import Optional

from .base import CrowError, ExceptionContext
from .templates import ErrorCodes, ErrorMessageTemplates, RecoverySuggestions


class CrowNetworkError(CrowError):
    """Raised when an HTTP request fails below the HTTP layer (DNS, refused, timeout)."""

    def __init__(self, method: str, url: str, details: Optional[str] = None):
        self.method = method
        self.url = url
        message = ErrorMessageTemplates.NETWORK_ERROR.format(
            method=method, url=url, details=details or "connection failed"
        )
        context = ExceptionContext(
            help_text=RecoverySuggestions.TRY_AGAIN_LATER,
            error_code=ErrorCodes.NETWORK_FAILED,
            context={"method": method, "url": url},
        )
        super().__init__(message, context)
