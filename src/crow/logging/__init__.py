"""
Crow Logging Package

Structured logging with correlation IDs and configurable outputs:
- formatters: Log formatting (JSON, console, rich)
- loggers: CrowLogger with correlation IDs and key/value context
- config: Logging configuration built from the CLI settings
- manager: Handler installation
- context: Entry/exit logging context manager
"""

from .config import LoggingConfig
from .context import LoggingContext
from .formatters import StructuredFormatter
from .loggers import CrowLogger, get_logger
from .manager import configure_logging

__all__ = [
    "LoggingConfig",
    "configure_logging",
    "CrowLogger",
    "get_logger",
    "LoggingContext",
    "StructuredFormatter",
]
