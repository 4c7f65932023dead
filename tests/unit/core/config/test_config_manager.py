"""
Unit tests for the Crow configuration models and manager.
"""

import sys
from pathlib import Path

import pytest

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from crow.core.config import (
    ConfigManager,
    ConfigurationValidationError,
    CrowConfig,
    InvalidConfigurationError,
    LogLevel,
    MissingConfigurationError,
)


@pytest.mark.unit
class TestCrowConfig:

    def test_default_config(self):
        config = CrowConfig()

        assert config.auth.url is None
        assert config.api.function_name == "make-server-b017b546"
        assert config.http.timeout == 30
        assert config.session.file == Path.home() / ".config" / "crow" / "session.json"
        assert config.logging.level == LogLevel.WARNING
        assert config.api_base_url is None

    def test_functions_url_defaults_from_auth_url(self):
        config = CrowConfig(auth={"url": "https://project.supabase.co/", "anon_key": "k"})

        assert config.auth.url == "https://project.supabase.co"
        assert config.api.functions_url == "https://project.supabase.co/functions/v1"
        assert config.api_base_url == "https://project.supabase.co/functions/v1/make-server-b017b546"

    def test_explicit_functions_url_wins(self):
        config = CrowConfig(
            auth={"url": "https://project.supabase.co"},
            api={"functions_url": "http://localhost:54321/functions/v1/"},
        )
        assert config.api_base_url == "http://localhost:54321/functions/v1/make-server-b017b546"

    @pytest.mark.parametrize("data", [
        {"auth": {"url": "project.supabase.co"}},
        {"http": {"timeout": 0}},
        {"http": {"timeout": 301}},
        {"logging": {"format": "xml"}},
        {"logging": {"output": ["syslog"]}},
        {"unknown": {}},
    ])
    def test_invalid_values_rejected(self, data):
        with pytest.raises(ValueError):
            CrowConfig(**data)

    def test_session_file_is_expanded(self):
        config = CrowConfig(session={"file": "~/crow-session.json"})
        assert config.session.file == Path.home() / "crow-session.json"


@pytest.mark.unit
class TestConfigManager:

    def test_missing_file_gives_defaults(self, config_manager):
        config = config_manager.load_config()

        assert config.model_dump() == CrowConfig().model_dump()
        assert not config_manager.config_file.exists()

    def test_load_toml(self, config_file):
        config_file.write_text(
            '[auth]\nurl = "https://project.supabase.co"\nanon_key = "anon"\n'
            '[http]\ntimeout = 10\n'
        )

        config = ConfigManager(config_file).load_config()

        assert config.auth.anon_key == "anon"
        assert config.http.timeout == 10

    def test_load_is_cached(self, config_manager):
        assert config_manager.load_config() is config_manager.load_config()

    def test_environment_overrides_file(self, config_file, monkeypatch):
        config_file.write_text('[auth]\nurl = "https://file.supabase.co"\n[http]\ntimeout = 10\n')
        monkeypatch.setenv("CROW_AUTH_URL", "https://env.supabase.co")
        monkeypatch.setenv("CROW_ANON_KEY", "env-key")
        monkeypatch.setenv("CROW_HTTP_TIMEOUT", "45")
        monkeypatch.setenv("CROW_LOGGING_LEVEL", "debug")
        monkeypatch.setenv("CROW_LOGGING_OUTPUT", "console, file")

        config = ConfigManager(config_file).load_config()

        assert config.auth.url == "https://env.supabase.co"
        assert config.auth.anon_key == "env-key"
        assert config.http.timeout == 45
        assert config.logging.level == LogLevel.DEBUG
        assert config.logging.output == ["console", "file"]

    def test_invalid_toml(self, config_file):
        config_file.write_text("[auth\nurl = ")

        with pytest.raises(InvalidConfigurationError):
            ConfigManager(config_file).load_config()

    def test_invalid_values(self, config_file):
        config_file.write_text("[http]\ntimeout = -1\n")

        with pytest.raises(ConfigurationValidationError):
            ConfigManager(config_file).load_config()

    def test_save_round_trip(self, config_manager, config_file):
        config = CrowConfig(auth={"url": "https://project.supabase.co", "anon_key": "anon"})

        config_manager.save_config(config)

        with open(config_file, "rb") as f:
            data = tomllib.load(f)
        assert data["auth"]["url"] == "https://project.supabase.co"
        assert "file_path" not in data["logging"]
        assert ConfigManager(config_file).load_config().auth.anon_key == "anon"

    def test_require_reports_first_missing_field(self, config_manager):
        with pytest.raises(MissingConfigurationError) as exc_info:
            config_manager.require("auth.url", "auth.anon_key")

        assert exc_info.value.field == "auth.url"
        assert "CROW_AUTH_URL" in exc_info.value.help_text

    def test_require_passes_when_set(self, config_manager, monkeypatch):
        monkeypatch.setenv("CROW_AUTH_URL", "https://project.supabase.co")
        monkeypatch.setenv("CROW_ANON_KEY", "anon")

        config = config_manager.require("auth.url", "auth.anon_key")

        assert config.auth.anon_key == "anon"

    def test_reset_config(self, config_manager, config_file):
        config_manager.save_config(CrowConfig(http={"timeout": 5}))

        config_manager.reset_config()

        assert ConfigManager(config_file).load_config().http.timeout == 30
