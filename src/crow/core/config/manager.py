"""
Configuration manager for Crow.

Loads the TOML configuration file, applies environment variable overrides
and validates the result into a CrowConfig.
"""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

from crow.core.constants import ConfigConstants
from crow.exceptions.config import (
    ConfigurationError,
    ConfigurationValidationError,
    InvalidConfigurationError,
    MissingConfigurationError,
)

from .models import CrowConfig, CrowSettings, default_config_directory


@dataclass
class EnvironmentOverride:
    """Helper for applying environment variable overrides."""
    config_section: Dict[str, Any]
    settings: CrowSettings

    def apply_if_set(self, setting_name: str, config_key: str) -> None:
        """Apply setting if it's set in environment."""
        value = getattr(self.settings, setting_name, None)
        if value is not None:
            self.config_section[config_key] = value

    def apply_string_if_set(self, setting_name: str, config_key: str) -> None:
        """Apply string setting if it's set and non-empty in environment."""
        value = getattr(self.settings, setting_name, None)
        if value:
            self.config_section[config_key] = value


class ConfigManager:
    """Configuration manager with TOML persistence and environment overrides."""

    def __init__(self, config_file: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config_file: Path to custom config file. If None, uses ~/.config/crow/config.toml.
        """
        if config_file:
            self.config_file = Path(config_file)
        else:
            self.config_file = default_config_directory() / ConfigConstants.CONFIG_FILE_NAME

        self._config: Optional[CrowConfig] = None

    @property
    def config_directory(self) -> Path:
        """Get the configuration directory."""
        return self.config_file.parent

    def load_config(self) -> CrowConfig:
        """Load and validate configuration from file and environment."""
        if self._config is not None:
            return self._config

        config_data: Dict[str, Any] = {}
        if self.config_file.exists():
            config_data = self._load_toml_file()

        config_data = self._apply_env_overrides(config_data)

        try:
            self._config = CrowConfig(**config_data)
        except (ValueError, TypeError) as e:
            raise ConfigurationValidationError([f"Configuration validation failed: {e}"]) from e

        return self._config

    def _load_toml_file(self) -> Dict[str, Any]:
        """Load configuration from TOML file."""
        try:
            with open(self.config_file, "rb") as f:
                return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise InvalidConfigurationError(
                str(self.config_file),
                f"Invalid TOML syntax: {e}",
                "valid TOML format"
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read configuration file: {self.config_file}",
                help_text="Check file permissions and path"
            ) from e

    def _apply_env_overrides(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration."""
        settings = CrowSettings()

        for section in ("auth", "api", "http", "session", "logging"):
            config_data.setdefault(section, {})

        auth = EnvironmentOverride(config_data["auth"], settings)
        auth.apply_string_if_set("crow_auth_url", "url")
        auth.apply_string_if_set("crow_anon_key", "anon_key")

        EnvironmentOverride(config_data["api"], settings).apply_string_if_set(
            "crow_functions_url", "functions_url"
        )
        EnvironmentOverride(config_data["http"], settings).apply_if_set(
            "crow_http_timeout", "timeout"
        )
        EnvironmentOverride(config_data["session"], settings).apply_string_if_set(
            "crow_session_file", "file"
        )

        self._apply_logging_env_overrides(config_data["logging"], settings)
        return config_data

    def _apply_logging_env_overrides(self, logging_config: Dict[str, Any], settings: CrowSettings) -> None:
        """Apply logging environment variable overrides."""
        if settings.crow_logging_level:
            logging_config["level"] = settings.crow_logging_level.upper()
        if settings.crow_logging_format:
            logging_config["format"] = settings.crow_logging_format
        if settings.crow_logging_output:
            # Parse comma-separated outputs
            outputs = [o.strip() for o in settings.crow_logging_output.split(",")]
            logging_config["output"] = outputs
        if settings.crow_logging_file_path:
            logging_config["file_path"] = settings.crow_logging_file_path

    def save_config(self, config: Optional[CrowConfig] = None) -> None:
        """Save configuration to TOML file."""
        if config is None:
            config = self.load_config()

        self.config_file.parent.mkdir(parents=True, exist_ok=True)

        config_dict = self._remove_none_values(config.model_dump(mode="json"))

        try:
            with open(self.config_file, "wb") as f:
                tomli_w.dump(config_dict, f)
        except OSError as e:
            raise ConfigurationError(
                f"Cannot write configuration file: {self.config_file}",
                help_text="Check file permissions and path"
            ) from e

        self._config = config

    def _remove_none_values(self, data):
        """Recursively remove None values; TOML has no null."""
        if isinstance(data, dict):
            return {k: self._remove_none_values(v) for k, v in data.items() if v is not None}
        elif isinstance(data, list):
            return [self._remove_none_values(item) for item in data if item is not None]
        else:
            return data

    def require(self, *fields: str) -> CrowConfig:
        """Load configuration and ensure the dotted ``fields`` are set.

        Raises:
            MissingConfigurationError: for the first field that is unset
        """
        config = self.load_config()
        for dotted in fields:
            value: Any = config
            for part in dotted.split("."):
                value = getattr(value, part)
            if value in (None, ""):
                raise MissingConfigurationError(dotted, str(self.config_file))
        return config

    def reset_config(self) -> None:
        """Reset configuration to defaults."""
        self._config = None
        self.save_config(CrowConfig())
