"""
Base exception classes for Crow.

Every Crow error carries a correlation ID that also appears in its log
entries, so a message shown by the CLI can be matched with the log.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class ExceptionContext:
    """Context information for Crow exceptions."""

    help_text: Optional[str] = None
    error_code: Optional[str] = None
    context: Dict[str, Any] = field(default_factory=dict)
    user_action: Optional[str] = None
    technical_details: Optional[str] = None
    correlation_id: Optional[str] = None


class CrowError(Exception):
    """Base exception for all Crow-related errors.

    ``str(error)`` is the message alone; help text and the suggested action
    are rendered by the CLI error handler.

    Attributes:
        message: The error message
        help_text: Optional actionable guidance for the user
        error_code: Optional error code for programmatic handling
        correlation_id: Unique ID for tracking this error across logs
        context: Additional context information
        user_action: Suggested user action to resolve the issue
        technical_details: Technical information for debugging
    """

    def __init__(self, message: str, context: Optional[ExceptionContext] = None):
        self.message = message
        context = context or ExceptionContext()

        self.help_text = context.help_text
        self.error_code = context.error_code
        self.context = dict(context.context)
        self.user_action = context.user_action
        self.technical_details = context.technical_details
        self.correlation_id = context.correlation_id or str(uuid.uuid4())[:8]

        super().__init__(message)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Fields worth logging; unset ones are left out."""
        data = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "correlation_id": self.correlation_id,
            "context": self.context,
            "technical_details": self.technical_details,
        }
        return {key: value for key, value in data.items() if value}
