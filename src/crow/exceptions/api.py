"""
Backend API exceptions.

Raised by the typed API layer when the backend answers with a non-2xx
status, or before a request is sent when the input is invalid.
"""

from typing import Optional

from .base import CrowError, ExceptionContext
from .templates import ErrorCodes, ErrorMessageTemplates


class ApiError(CrowError):
    """Raised when the backend rejects a request.

    Attributes:
        status_code: HTTP status of the rejected request, None for client-side errors
    """

    def __init__(self, status_code: Optional[int], message: str, error_code: Optional[str] = None):
        self.status_code = status_code
        self.reason = message
        if status_code is not None:
            full_message = ErrorMessageTemplates.API_ERROR.format(
                status_code=status_code, message=message
            )
        else:
            full_message = message
        context = ExceptionContext(
            error_code=error_code or ErrorCodes.API_REQUEST_FAILED,
            context={"status_code": status_code} if status_code is not None else {},
        )
        super().__init__(full_message, context)


class ValidationError(ApiError):
    """Raised when input fails client-side validation; no request is sent."""

    def __init__(self, field: str, reason: str):
        self.field = field
        super().__init__(
            None,
            ErrorMessageTemplates.VALIDATION_ERROR.format(field=field, reason=reason),
            error_code=ErrorCodes.API_VALIDATION_FAILED,
        )
