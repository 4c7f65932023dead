"""
Logging context management.

Provides a context manager that logs entry, success and failure messages
around a block of work.
"""

import logging
from typing import Optional, Union

from .loggers import CrowLogger, get_logger


class LoggingContext:
    """Context manager for structured logging with entry/exit messages."""

    def __init__(
        self,
        entry_msg: Optional[str] = None,
        success_msg: Optional[str] = None,
        failure_msg: Optional[str] = None,
        logger: Union[CrowLogger, logging.Logger, None] = None,
        entry_level: int = logging.DEBUG,
        success_level: int = logging.INFO,
        failure_level: int = logging.ERROR,
    ):
        self.entry_msg = entry_msg
        self.success_msg = success_msg
        self.failure_msg = failure_msg

        if isinstance(logger, CrowLogger):
            self.logger = logger
        else:
            logger_name = logger.name if logger else __name__
            self.logger = get_logger(logger_name)

        self.entry_level = entry_level
        self.success_level = success_level
        self.failure_level = failure_level

    def _emit(self, level: int, msg: str, **kwargs):
        level_name = logging.getLevelName(level).lower()
        getattr(self.logger, level_name)(msg, **kwargs)

    def __enter__(self):
        if self.entry_msg:
            self._emit(self.entry_level, self.entry_msg)
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if exc_type is None:
            if self.success_msg:
                self._emit(self.success_level, self.success_msg)
        elif self.failure_msg:
            self._emit(
                self.failure_level,
                self.failure_msg,
                error_type=exc_type.__name__,
                error=str(exc_value).splitlines()[0] if str(exc_value) else "",
            )
        return False
