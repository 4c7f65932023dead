"""
Configuration models for Crow.

Pydantic models providing validation, type safety and documentation for
the client configuration, plus the environment-variable settings that can
override it.
"""

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from crow.core.constants import ApiConstants, ConfigConstants, NetworkConstants


class LogLevel(str, Enum):
    """Valid logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


def default_config_directory() -> Path:
    return Path.home() / ".config" / ConfigConstants.CONFIG_DIR_NAME


class AuthConfig(BaseModel):
    """Supabase project settings used by the session provider."""

    url: Optional[str] = Field(None, description="Supabase project URL")
    anon_key: Optional[str] = Field(None, description="Public anon API key")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        if not v.startswith(("http://", "https://")):
            raise ValueError("url must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("anon_key")
    @classmethod
    def validate_anon_key(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v.strip()) == 0:
            return None
        return v


class ApiConfig(BaseModel):
    """Backend function settings."""

    functions_url: Optional[str] = Field(
        None, description="Edge functions base URL (defaults to <auth.url>/functions/v1)"
    )
    function_name: str = Field(
        ApiConstants.FUNCTION_NAME, min_length=1, description="Backend function name"
    )

    @field_validator("functions_url")
    @classmethod
    def validate_functions_url(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.rstrip("/")


class HttpConfig(BaseModel):
    """Transport settings."""

    timeout: int = Field(
        NetworkConstants.DEFAULT_REQUEST_TIMEOUT,
        ge=1,
        le=NetworkConstants.MAX_REQUEST_TIMEOUT,
        description="Request timeout in seconds",
    )


class SessionConfig(BaseModel):
    """Session persistence settings."""

    file: Path = Field(
        default_factory=lambda: default_config_directory() / ConfigConstants.SESSION_FILE_NAME,
        description="Where the signed-in session is stored",
    )

    @field_validator("file")
    @classmethod
    def expand_file(cls, v: Path) -> Path:
        return Path(v).expanduser()


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.WARNING, description="Logging level")
    format: str = Field("console", description="Log format: console, json, rich")
    output: List[str] = Field(["console"], description="Log outputs: console, file")
    file_path: Optional[Path] = Field(None, description="Log file path")
    max_file_size: int = Field(
        ConfigConstants.DEFAULT_LOG_FILE_SIZE_BYTES,
        ge=ConfigConstants.MIN_LOG_FILE_SIZE_BYTES,
        description="Maximum log file size in bytes",
    )
    backup_count: int = Field(
        ConfigConstants.DEFAULT_LOG_BACKUP_COUNT,
        ge=1,
        le=20,
        description="Number of backup log files to keep",
    )

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v not in ["console", "json", "rich"]:
            raise ValueError("format must be one of: console, json, rich")
        return v

    @field_validator("output")
    @classmethod
    def validate_output(cls, v: List[str]) -> List[str]:
        valid_outputs = {"console", "file"}
        for output in v:
            if output not in valid_outputs:
                raise ValueError(
                    f"output must contain only: {', '.join(sorted(valid_outputs))}"
                )
        return v


class CrowConfig(BaseModel):
    """Main Crow configuration model."""

    auth: AuthConfig = Field(default_factory=AuthConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "extra": "forbid",
        "validate_assignment": True,
        "str_strip_whitespace": True,
    }

    @model_validator(mode="after")
    def fill_functions_url(self) -> "CrowConfig":
        if self.api.functions_url is None and self.auth.url is not None:
            self.api.functions_url = self.auth.url + ApiConstants.FUNCTIONS_PATH
        return self

    @property
    def api_base_url(self) -> Optional[str]:
        """Base URL of the social backend, or None when not configured."""
        if not self.api.functions_url:
            return None
        return f"{self.api.functions_url}/{self.api.function_name}"


class CrowSettings(BaseSettings):
    """Settings that can be overridden by environment variables."""

    crow_auth_url: Optional[str] = Field(None, alias="CROW_AUTH_URL")
    crow_anon_key: Optional[str] = Field(None, alias="CROW_ANON_KEY")
    crow_functions_url: Optional[str] = Field(None, alias="CROW_FUNCTIONS_URL")
    crow_http_timeout: Optional[int] = Field(None, alias="CROW_HTTP_TIMEOUT")
    crow_session_file: Optional[str] = Field(None, alias="CROW_SESSION_FILE")

    crow_logging_level: Optional[str] = Field(None, alias="CROW_LOGGING_LEVEL")
    crow_logging_format: Optional[str] = Field(None, alias="CROW_LOGGING_FORMAT")
    crow_logging_output: Optional[str] = Field(None, alias="CROW_LOGGING_OUTPUT")
    crow_logging_file_path: Optional[str] = Field(None, alias="CROW_LOGGING_FILE_PATH")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )
