"""
Logging configuration for Crow.

Library code never installs handlers. The CLI builds a LoggingConfig from
the ``[logging]`` section of its configuration and the ``-v`` count.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

DEFAULT_LOG_FILE = Path("logs/crow.log")

# Loggers of libraries Crow talks through; they stay at WARNING unless
# Crow itself logs at DEBUG.
CHATTY_LIBRARIES = ("urllib3",)


def verbosity_level(verbose: int) -> Optional[int]:
    """Level forced by ``-v`` (INFO) or ``-vv`` (DEBUG), None without the flag."""
    if verbose > 1:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return None


class LoggingConfig:
    """Configuration for the logging system."""

    def __init__(
        self,
        level: Union[str, int] = logging.WARNING,
        format_type: str = "console",  # "console", "json", "rich"
        output: Union[str, List[str]] = "console",  # "console", "file" or both
        file_path: Optional[Path] = None,
        max_file_size: int = 5 * 1024 * 1024,
        backup_count: int = 3,
        service_name: str = "crow",
        version: str = "unknown",
    ):
        self.level = (
            level if isinstance(level, int) else getattr(logging, level.upper())
        )
        self.format_type = format_type
        self.output = output if isinstance(output, list) else [output]
        self.file_path = Path(file_path) if file_path else DEFAULT_LOG_FILE
        self.max_file_size = max_file_size
        self.backup_count = backup_count
        self.service_name = service_name
        self.version = version

    @classmethod
    def for_cli(cls, settings=None, verbose: int = 0, version: str = "unknown") -> "LoggingConfig":
        """Build the CLI's logging setup.

        Args:
            settings: The ``[logging]`` section of the Crow configuration, or
                None when the configuration could not be loaded
            verbose: Number of ``-v`` flags; overrides the configured level
            version: Version reported by JSON log entries
        """
        forced = verbosity_level(verbose)
        if settings is None:
            return cls(
                level=forced or logging.WARNING,
                service_name="crow-cli",
                version=version,
            )
        return cls(
            level=forced or settings.level.value,
            format_type=settings.format,
            output=settings.output,
            file_path=settings.file_path,
            max_file_size=settings.max_file_size,
            backup_count=settings.backup_count,
            service_name="crow-cli",
            version=version,
        )
