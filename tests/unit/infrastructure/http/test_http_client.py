"""
Unit tests for the HTTP client and the authenticated request client.
"""

import json
import logging

import pytest
import requests
from unittest.mock import Mock

from crow.exceptions import (
    CrowNetworkError,
    NoCredential,
    SessionExpired,
    SessionProviderError,
    SessionUnavailable,
)
from crow.infrastructure.http.client import (
    AuthenticatedRequestClient,
    HttpClient,
    RequestOptions,
)
from crow.infrastructure.session import Session

BASE_URL = "https://api.example.com/functions/v1/make-server-b017b546"


def sent_headers(mock_http_session, index=0):
    return mock_http_session.request.call_args_list[index].kwargs["headers"]


class TestHttpClient:
    """Test the base HttpClient class."""

    @pytest.fixture
    def http_client(self, mock_http_session):
        return HttpClient("https://api.example.com/", session=mock_http_session)

    def test_client_initialization(self):
        client = HttpClient("https://api.example.com/", timeout=60)

        assert client.base_url == "https://api.example.com"  # Trailing slash removed
        assert client.timeout == 60
        assert client.session.headers["User-Agent"] == "crow-client"

    def test_default_headers_are_set_on_session(self):
        client = HttpClient(default_headers={"apikey": "anon"})
        assert client.session.headers["apikey"] == "anon"

    def test_client_with_existing_session(self, mock_http_session):
        client = HttpClient("https://api.example.com", session=mock_http_session)
        assert client.session is mock_http_session

    def test_build_url_relative(self, http_client):
        assert http_client._build_url("/posts") == "https://api.example.com/posts"
        assert http_client._build_url("posts") == "https://api.example.com/posts"

    def test_build_url_keeps_base_path(self):
        client = HttpClient(BASE_URL)
        assert client._build_url("/posts/1/like") == f"{BASE_URL}/posts/1/like"

    def test_build_url_absolute(self, http_client):
        url = http_client._build_url("https://other.example.com/data")
        assert url == "https://other.example.com/data"

    def test_build_url_without_base(self):
        assert HttpClient()._build_url("/relative") == "/relative"

    def test_get_request(self, http_client, mock_http_session, response_factory):
        mock_http_session.request.return_value = response_factory(200, {"ok": True})

        response = http_client.get("/health", params={"q": "x"})

        assert response.status_code == 200
        mock_http_session.request.assert_called_once_with(
            "GET",
            "https://api.example.com/health",
            params={"q": "x"},
            json=None,
            data=None,
            headers=None,
            timeout=30,
        )

    def test_post_request_with_json(self, http_client, mock_http_session, response_factory):
        mock_http_session.request.return_value = response_factory(201, {"id": "1"})

        http_client.post("/posts", json={"content": "hi"}, timeout=5)

        kwargs = mock_http_session.request.call_args.kwargs
        assert kwargs["json"] == {"content": "hi"}
        assert kwargs["timeout"] == 5

    def test_non_2xx_is_returned_not_raised(self, http_client, mock_http_session, response_factory):
        mock_http_session.request.return_value = response_factory(404, {"error": "Not found"})
        assert http_client.get("/missing").status_code == 404

    @pytest.mark.parametrize("error,fragment", [
        (requests.exceptions.ConnectionError("refused"), "connection failed"),
        (requests.exceptions.Timeout("slow"), "timed out after 30s"),
        (requests.exceptions.TooManyRedirects("loop"), "loop"),
    ])
    def test_transport_errors_become_network_error(self, http_client, mock_http_session, error, fragment):
        mock_http_session.request.side_effect = error

        with pytest.raises(CrowNetworkError) as exc_info:
            http_client.get("/posts")

        assert fragment in exc_info.value.message
        assert exc_info.value.method == "GET"
        assert exc_info.value.url == "https://api.example.com/posts"
        mock_http_session.request.assert_called_once()

    def test_close_closes_session(self, http_client, mock_http_session):
        http_client.close()
        mock_http_session.close.assert_called_once()

    def test_context_manager_closes_session(self, mock_http_session):
        with HttpClient(session=mock_http_session) as client:
            assert client.session is mock_http_session
        mock_http_session.close.assert_called_once()


@pytest.mark.unit
class TestAuthenticatedRequestClient:
    """Single refresh-and-retry behaviour on HTTP 401."""

    @pytest.fixture
    def make_client(self, mock_http_session):
        def _make(provider):
            return AuthenticatedRequestClient(provider, BASE_URL, session=mock_http_session)
        return _make

    def test_success_passes_through(self, make_client, provider_factory, session,
                                    mock_http_session, response_factory):
        provider = provider_factory(session=session)
        ok = response_factory(200, {"posts": []})
        mock_http_session.request.return_value = ok

        response = make_client(provider).request("/posts")

        assert response is ok
        assert mock_http_session.request.call_count == 1
        assert provider.calls == ["get_session"]
        assert sent_headers(mock_http_session)["Authorization"] == "Bearer access-token-1"
        assert sent_headers(mock_http_session)["Content-Type"] == "application/json"

    @pytest.mark.parametrize("status", [200, 201, 400, 403, 404, 500, 503])
    def test_non_401_statuses_are_returned_without_refresh(self, make_client, provider_factory, session,
                                                           mock_http_session, response_factory, status):
        provider = provider_factory(session=session)
        mock_http_session.request.return_value = response_factory(status, {"error": "x"})

        response = make_client(provider).request("/posts")

        assert response.status_code == status
        assert mock_http_session.request.call_count == 1
        assert provider.count("refresh_session") == 0
        assert provider.count("terminate_session") == 0

    def test_401_then_refresh_then_retry(self, make_client, provider_factory, session, refreshed_session,
                                         mock_http_session, response_factory):
        provider = provider_factory(session=session, refresh_result=refreshed_session)
        ok = response_factory(200, {"liked": True})
        mock_http_session.request.side_effect = [response_factory(401, {"error": "Unauthorized"}), ok]

        response = make_client(provider).request(
            "/posts/p1/like", RequestOptions(method="POST")
        )

        assert response is ok
        assert mock_http_session.request.call_count == 2
        assert provider.count("refresh_session") == 1
        assert provider.count("terminate_session") == 0
        assert sent_headers(mock_http_session, 0)["Authorization"] == "Bearer access-token-1"
        assert sent_headers(mock_http_session, 1)["Authorization"] == "Bearer access-token-2"

    def test_retry_keeps_method_url_and_body(self, make_client, provider_factory, session, refreshed_session,
                                             mock_http_session, response_factory):
        provider = provider_factory(session=session, refresh_result=refreshed_session)
        mock_http_session.request.side_effect = [
            response_factory(401), response_factory(201, {"post": {}}),
        ]

        make_client(provider).post("/posts", {"content": "hello"})

        first, second = mock_http_session.request.call_args_list
        assert first.args == second.args == ("POST", f"{BASE_URL}/posts")
        assert first.kwargs["data"] == second.kwargs["data"] == json.dumps({"content": "hello"})

    def test_second_401_is_returned_without_another_refresh(self, make_client, provider_factory, session,
                                                           refreshed_session, mock_http_session,
                                                           response_factory):
        provider = provider_factory(session=session, refresh_result=refreshed_session)
        mock_http_session.request.side_effect = [response_factory(401), response_factory(401)]

        response = make_client(provider).request("/posts")

        assert response.status_code == 401
        assert mock_http_session.request.call_count == 2
        assert provider.count("refresh_session") == 1
        assert provider.count("terminate_session") == 0

    def test_retry_returns_server_error_untouched(self, make_client, provider_factory, session,
                                                  refreshed_session, mock_http_session, response_factory):
        provider = provider_factory(session=session, refresh_result=refreshed_session)
        mock_http_session.request.side_effect = [response_factory(401), response_factory(500)]

        assert make_client(provider).request("/posts").status_code == 500

    def test_refresh_returning_none_terminates_and_raises(self, make_client, provider_factory, session,
                                                         mock_http_session, response_factory):
        provider = provider_factory(session=session, refresh_result=None)
        mock_http_session.request.return_value = response_factory(401)

        with pytest.raises(SessionExpired):
            make_client(provider).request("/posts")

        assert mock_http_session.request.call_count == 1
        assert provider.count("terminate_session") == 1
        assert provider.calls == ["get_session", "refresh_session", "terminate_session"]

    def test_refresh_raising_terminates_and_raises(self, make_client, provider_factory, session,
                                                  mock_http_session, response_factory):
        provider = provider_factory(
            session=session, refresh_result=SessionProviderError("auth service unreachable")
        )
        mock_http_session.request.return_value = response_factory(401)

        with pytest.raises(SessionExpired) as exc_info:
            make_client(provider).request("/posts")

        assert mock_http_session.request.call_count == 1
        assert provider.count("terminate_session") == 1
        assert "auth service unreachable" in exc_info.value.technical_details
        assert isinstance(exc_info.value.__cause__, SessionProviderError)

    def test_refresh_without_token_counts_as_failure(self, make_client, provider_factory, session,
                                                    mock_http_session, response_factory):
        provider = provider_factory(session=session, refresh_result=Session(access_token="", user_id="user-1"))
        mock_http_session.request.return_value = response_factory(401)

        with pytest.raises(SessionExpired):
            make_client(provider).request("/posts")

        assert provider.count("terminate_session") == 1

    def test_termination_failure_still_raises_session_expired(self, make_client, provider_factory, session,
                                                             mock_http_session, response_factory):
        provider = provider_factory(
            session=session, refresh_result=None, terminate_error=RuntimeError("disk full")
        )
        mock_http_session.request.return_value = response_factory(401)

        with pytest.raises(SessionExpired):
            make_client(provider).request("/posts")

        assert provider.count("terminate_session") == 1

    def test_session_error_raises_unavailable(self, make_client, provider_factory, mock_http_session):
        provider = provider_factory(get_error=RuntimeError("keychain locked"))

        with pytest.raises(SessionUnavailable) as exc_info:
            make_client(provider).request("/posts")

        assert "keychain locked" in exc_info.value.message
        mock_http_session.request.assert_not_called()

    def test_missing_session_raises_no_credential(self, make_client, provider_factory, mock_http_session):
        with pytest.raises(NoCredential):
            make_client(provider_factory(session=None)).request("/posts")
        mock_http_session.request.assert_not_called()

    def test_empty_token_raises_no_credential(self, make_client, provider_factory, mock_http_session):
        provider = provider_factory(session=Session(access_token="", user_id="user-1"))

        with pytest.raises(NoCredential):
            make_client(provider).request("/posts")
        mock_http_session.request.assert_not_called()

    def test_injected_headers_override_caller_headers(self, make_client, provider_factory, session,
                                                     mock_http_session, response_factory):
        provider = provider_factory(session=session)
        mock_http_session.request.return_value = response_factory(200)
        caller_headers = {"authorization": "Basic abc", "CONTENT-TYPE": "text/plain", "X-Trace": "t-1"}

        make_client(provider).request("/posts", RequestOptions(headers=caller_headers))

        assert sent_headers(mock_http_session) == {
            "X-Trace": "t-1",
            "Authorization": "Bearer access-token-1",
            "Content-Type": "application/json",
        }
        assert caller_headers["authorization"] == "Basic abc"

    def test_network_error_is_not_retried(self, make_client, provider_factory, session, mock_http_session):
        provider = provider_factory(session=session)
        mock_http_session.request.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(CrowNetworkError):
            make_client(provider).request("/posts")

        assert mock_http_session.request.call_count == 1
        assert provider.count("refresh_session") == 0

    def test_network_error_on_retry_propagates(self, make_client, provider_factory, session, refreshed_session,
                                               mock_http_session, response_factory):
        provider = provider_factory(session=session, refresh_result=refreshed_session)
        mock_http_session.request.side_effect = [
            response_factory(401), requests.exceptions.Timeout("slow"),
        ]

        with pytest.raises(CrowNetworkError):
            make_client(provider).request("/posts")

        assert provider.count("terminate_session") == 0

    def test_calls_do_not_share_state(self, make_client, provider_factory, session, refreshed_session,
                                      mock_http_session, response_factory):
        provider = provider_factory(session=session, refresh_result=refreshed_session)
        client = make_client(provider)
        mock_http_session.request.side_effect = [
            response_factory(401), response_factory(200), response_factory(200),
        ]

        client.request("/posts")
        client.request("/posts")

        assert provider.calls == ["get_session", "refresh_session", "get_session"]
        assert sent_headers(mock_http_session, 2)["Authorization"] == "Bearer access-token-2"

    @pytest.mark.parametrize("body,expected", [
        (None, None),
        (b"raw-bytes", b"raw-bytes"),
        ('{"already": "encoded"}', '{"already": "encoded"}'),
        ({"content": "hi"}, '{"content": "hi"}'),
        ([1, 2], "[1, 2]"),
    ])
    def test_body_encoding(self, make_client, provider_factory, session, mock_http_session,
                           response_factory, body, expected):
        mock_http_session.request.return_value = response_factory(200)

        make_client(provider_factory(session=session)).request(
            "/posts", RequestOptions(method="POST", body=body)
        )

        assert mock_http_session.request.call_args.kwargs["data"] == expected

    def test_method_is_upper_cased(self, make_client, provider_factory, session, mock_http_session,
                                   response_factory):
        mock_http_session.request.return_value = response_factory(200)

        make_client(provider_factory(session=session)).request("/posts", RequestOptions(method="delete"))

        assert mock_http_session.request.call_args.args[0] == "DELETE"

    def test_verb_helpers(self, make_client, provider_factory, session, mock_http_session, response_factory):
        mock_http_session.request.return_value = response_factory(200)
        client = make_client(provider_factory(session=session))

        client.get("/a")
        client.post("/b", {"x": 1})
        client.put("/c", {"y": 2})
        client.delete("/d")

        methods = [c.args[0] for c in mock_http_session.request.call_args_list]
        urls = [c.args[1] for c in mock_http_session.request.call_args_list]
        assert methods == ["GET", "POST", "PUT", "DELETE"]
        assert urls == [f"{BASE_URL}/a", f"{BASE_URL}/b", f"{BASE_URL}/c", f"{BASE_URL}/d"]

    def test_absolute_url_ignores_base(self, make_client, provider_factory, session, mock_http_session,
                                       response_factory):
        mock_http_session.request.return_value = response_factory(200)

        make_client(provider_factory(session=session)).request("https://other.example.com/x")

        assert mock_http_session.request.call_args.args[1] == "https://other.example.com/x"

    def test_access_tokens_are_not_logged_in_clear(self, make_client, provider_factory, session, refreshed_session,
                                                   mock_http_session, response_factory, caplog):
        provider = provider_factory(session=session, refresh_result=refreshed_session)
        mock_http_session.request.side_effect = [response_factory(401), response_factory(200)]

        with caplog.at_level(logging.DEBUG, logger="crow"):
            make_client(provider).request("/posts")

        messages = [record.getMessage() for record in caplog.records]
        assert "Got access token" in messages
        assert "Session refreshed, retrying request" in messages
        logged = " ".join(
            f"{record.getMessage()} {getattr(record, 'extra_context', {})}" for record in caplog.records
        )
        assert "access-token-1" not in logged
        assert "access-token-2" not in logged


@pytest.mark.unit
class TestRequestScenarios:
    """End-to-end request flows with literal tokens."""

    @pytest.fixture
    def client_for(self, mock_http_session):
        def _make(provider):
            return AuthenticatedRequestClient(provider, BASE_URL, session=mock_http_session)
        return _make

    def test_created_on_first_try(self, client_for, provider_factory, mock_http_session, response_factory):
        provider = provider_factory(session=Session(access_token="tokA", user_id="user-1"))
        created = response_factory(201, {"post": {"id": "post-1"}})
        mock_http_session.request.return_value = created

        response = client_for(provider).request(
            "/posts", RequestOptions(method="POST", body={"content": "hello"})
        )

        assert response is created
        assert response.status_code == 201
        assert mock_http_session.request.call_count == 1
        call = mock_http_session.request.call_args
        assert call.args == ("POST", f"{BASE_URL}/posts")
        assert json.loads(call.kwargs["data"]) == {"content": "hello"}
        assert call.kwargs["headers"]["Authorization"] == "Bearer tokA"

    def test_unauthorized_then_refreshed(self, client_for, provider_factory, mock_http_session, response_factory):
        provider = provider_factory(
            session=Session(access_token="tokA", user_id="user-1", refresh_token="r1"),
            refresh_result=Session(access_token="tokB", user_id="user-1", refresh_token="r2"),
        )
        ok = response_factory(200, {"posts": []})
        mock_http_session.request.side_effect = [response_factory(401), ok]

        response = client_for(provider).request("/posts")

        assert response is ok
        assert mock_http_session.request.call_count == 2
        assert sent_headers(mock_http_session, 1)["Authorization"] == "Bearer tokB"

    def test_refresh_without_session_expires(self, client_for, provider_factory, mock_http_session,
                                             response_factory):
        provider = provider_factory(session=Session(access_token="tokA", user_id="user-1"), refresh_result=None)
        mock_http_session.request.return_value = response_factory(401)

        with pytest.raises(SessionExpired):
            client_for(provider).request("/posts")

        assert provider.count("terminate_session") == 1
        assert mock_http_session.request.call_count == 1

    def test_get_session_failure_makes_no_network_call(self, client_for, provider_factory, mock_http_session):
        provider = provider_factory(get_error=RuntimeError("storage unavailable"))

        with pytest.raises(SessionUnavailable):
            client_for(provider).request("/posts", RequestOptions(method="POST", body={"content": "hello"}))

        assert mock_http_session.request.call_count == 0


@pytest.mark.unit
class TestSessionProviderProtocol:
    def test_fake_provider_satisfies_protocol(self, provider_factory):
        from crow.infrastructure.session import SessionProvider
        assert isinstance(provider_factory(), SessionProvider)

    def test_object_without_methods_is_not_a_provider(self):
        from crow.infrastructure.session import SessionProvider
        assert not isinstance(Mock(spec=[]), SessionProvider)
