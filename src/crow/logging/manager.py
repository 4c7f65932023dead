"""
Handler installation for Crow logging.

configure_logging may be called again at any time; it replaces the handlers
it installed before and leaves handlers owned by others (pytest's caplog,
an embedding application) alone.
"""

import logging
import logging.handlers
import sys
from typing import List, Optional

from .config import CHATTY_LIBRARIES, LoggingConfig
from .formatters import (
    StructuredFormatter,
    create_console_formatter,
    create_rich_handler,
)


class LoggingManager:
    """Owns the handlers Crow installs on the root logger."""

    def __init__(self):
        self.config: Optional[LoggingConfig] = None
        self.handlers: List[logging.Handler] = []

    def configure(self, config: LoggingConfig):
        """Install the handlers ``config`` asks for, replacing Crow's previous ones."""
        self.reset()
        self.config = config

        for output in config.output:
            if output == "console":
                handler = self._console_handler(config)
            elif output == "file":
                handler = self._file_handler(config)
            else:
                continue
            handler.setLevel(config.level)
            logging.getLogger().addHandler(handler)
            self.handlers.append(handler)

        logging.getLogger().setLevel(config.level)
        logging.getLogger("crow").setLevel(config.level)

        library_level = logging.DEBUG if config.level <= logging.DEBUG else logging.WARNING
        for name in CHATTY_LIBRARIES:
            logging.getLogger(name).setLevel(library_level)

    def reset(self):
        """Remove and close every handler installed by this manager."""
        root_logger = logging.getLogger()
        for handler in self.handlers:
            root_logger.removeHandler(handler)
            handler.close()
        self.handlers.clear()

    def _console_handler(self, config: LoggingConfig) -> logging.Handler:
        if config.format_type == "rich":
            handler = create_rich_handler()
            handler.setFormatter(logging.Formatter("%(message)s"))
            return handler

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(self._formatter(config))
        return handler

    def _file_handler(self, config: LoggingConfig) -> logging.Handler:
        config.file_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            config.file_path,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
        )
        handler.setFormatter(self._formatter(config))
        return handler

    @staticmethod
    def _formatter(config: LoggingConfig) -> logging.Formatter:
        if config.format_type == "json":
            return StructuredFormatter(config.service_name, config.version)
        return create_console_formatter()


logging_manager = LoggingManager()


def configure_logging(config: LoggingConfig):
    """Configure the global logging system."""
    logging_manager.configure(config)
