"""
Pytest configuration and shared fixtures for Crow tests.
"""

import json
from typing import Any, Dict, List, Optional
from unittest.mock import Mock

import pytest
import requests

from crow.core.config import ConfigManager
from crow.infrastructure.session import Session


def make_response(
    status_code: int = 200,
    body: Any = None,
    headers: Optional[Dict[str, str]] = None,
    reason: str = "",
) -> requests.Response:
    """Build a real requests.Response with a JSON (or raw) body."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    if body is None:
        response._content = b""
    elif isinstance(body, bytes):
        response._content = body
    elif isinstance(body, str):
        response._content = body.encode("utf-8")
    else:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    if headers:
        response.headers.update(headers)
    return response


class FakeSessionProvider:
    """Session provider recording every call.

    ``refresh_result`` is returned by refresh_session; an exception instance
    is raised instead. ``get_error``/``terminate_error`` work the same way.
    """

    def __init__(
        self,
        session: Optional[Session] = None,
        refresh_result: Any = None,
        get_error: Optional[Exception] = None,
        terminate_error: Optional[Exception] = None,
    ):
        self.session = session
        self.refresh_result = refresh_result
        self.get_error = get_error
        self.terminate_error = terminate_error
        self.calls: List[str] = []

    def get_session(self) -> Optional[Session]:
        self.calls.append("get_session")
        if self.get_error is not None:
            raise self.get_error
        return self.session

    def refresh_session(self) -> Optional[Session]:
        self.calls.append("refresh_session")
        if isinstance(self.refresh_result, Exception):
            raise self.refresh_result
        if self.refresh_result is not None:
            self.session = self.refresh_result
        return self.refresh_result

    def terminate_session(self) -> None:
        self.calls.append("terminate_session")
        if self.terminate_error is not None:
            raise self.terminate_error
        self.session = None

    def count(self, name: str) -> int:
        return self.calls.count(name)


@pytest.fixture
def session():
    """A signed-in session with an access and a refresh token."""
    return Session(
        access_token="access-token-1",
        user_id="user-1",
        refresh_token="refresh-token-1",
        expires_at=2_000_000_000,
        email="alice@example.com",
    )


@pytest.fixture
def refreshed_session():
    return Session(
        access_token="access-token-2",
        user_id="user-1",
        refresh_token="refresh-token-2",
        expires_at=2_000_003_600,
        email="alice@example.com",
    )


@pytest.fixture
def mock_http_session():
    """Mock requests.Session; set ``request.side_effect`` to script responses."""
    return Mock(spec=requests.Session)


@pytest.fixture
def config_file(tmp_path):
    """Create a temporary config file path."""
    config_dir = tmp_path / ".config" / "crow"
    config_dir.mkdir(parents=True)
    return config_dir / "config.toml"


@pytest.fixture
def config_manager(config_file):
    """Create a ConfigManager instance for testing."""
    return ConfigManager(config_file)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Ensure CROW_* environment variables do not leak into tests."""
    env_vars = [
        "CROW_AUTH_URL", "CROW_ANON_KEY", "CROW_FUNCTIONS_URL",
        "CROW_HTTP_TIMEOUT", "CROW_SESSION_FILE", "CROW_LOGGING_LEVEL",
        "CROW_LOGGING_FORMAT", "CROW_LOGGING_OUTPUT", "CROW_LOGGING_FILE_PATH",
    ]
    for var in env_vars:
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture
def response_factory():
    """Factory building real responses; see make_response."""
    return make_response


@pytest.fixture
def provider_factory():
    """Factory building FakeSessionProvider instances."""
    return FakeSessionProvider
