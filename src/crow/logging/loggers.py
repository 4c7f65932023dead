"""
Enhanced logger classes with correlation IDs and structured context.

Provides CrowLogger with correlation tracking and context management.
"""

import logging
from typing import Any, Dict, Optional
from uuid import uuid4


class CrowLogger:
    """Logger wrapper adding a correlation ID and structured key/value context."""

    def __init__(self, name: str, correlation_id: Optional[str] = None):
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id or str(uuid4())[:8]
        self.extra_context = {}

    def _log(self, level: int, msg: str, exc_info: bool = False, **kwargs):
        """Internal logging method with correlation ID and context."""
        extra: Dict[str, Any] = {"correlation_id": self.correlation_id}
        context = self.extra_context.copy()
        context.update(kwargs)
        if context:
            extra["extra_context"] = context

        self.logger.log(level, msg, exc_info=exc_info, extra=extra)

    def debug(self, msg: str, **kwargs):
        """Log debug message."""
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs):
        """Log info message."""
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs):
        """Log warning message."""
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, **kwargs):
        """Log error message."""
        self._log(logging.ERROR, msg, **kwargs)

    def exception(self, msg: str, **kwargs):
        """Log exception with traceback."""
        self._log(logging.ERROR, msg, exc_info=True, **kwargs)

    def with_context(self, **kwargs) -> "CrowLogger":
        """Create a copy of this logger with additional context."""
        new_logger = CrowLogger(self.logger.name, self.correlation_id)
        new_logger.extra_context = self.extra_context.copy()
        new_logger.extra_context.update(kwargs)
        return new_logger


def get_logger(name: str, correlation_id: Optional[str] = None) -> CrowLogger:
    """Get a CrowLogger instance."""
    return CrowLogger(name, correlation_id)
