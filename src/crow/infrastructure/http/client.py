"""
HTTP client abstraction for separating HTTP concerns from business logic.

HttpClient owns the requests session, URL building, response logging and
the translation of transport failures into CrowNetworkError.
AuthenticatedRequestClient adds the bearer credential and the single
refresh-and-retry cycle on HTTP 401.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests

from crow.core.constants import AuthConstants, NetworkConstants
from crow.core.security import SensitiveDataSanitizer
from crow.exceptions import (
    CrowNetworkError,
    NoCredential,
    SessionExpired,
    SessionUnavailable,
)
from crow.infrastructure.session.models import Session
from crow.infrastructure.session.protocol import SessionProvider
from crow.logging import CrowLogger, get_logger


def _first_line(error: Exception) -> str:
    """First line of an error message, short enough for a log field."""
    text = getattr(error, "message", None) or str(error)
    return text.splitlines()[0] if text else type(error).__name__


class HttpClient:
    """Base HTTP client with common functionality.

    No transport-level retries are configured: a failed connection is
    reported to the caller immediately.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: int = NetworkConstants.DEFAULT_REQUEST_TIMEOUT,
        default_headers: Optional[Dict[str, str]] = None,
    ):
        """Initialize HTTP client with configuration.

        Args:
            base_url: Base URL for relative endpoints; absolute URLs are used as given
            session: Optional existing session to use
            timeout: Request timeout in seconds
            default_headers: Headers sent with every request from this client
        """
        self.base_url = base_url.rstrip("/") if base_url else None
        self.timeout = timeout
        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}")
        self.session = session or self._create_session(default_headers)

    def _create_session(self, default_headers: Optional[Dict[str, str]] = None) -> requests.Session:
        """Create a plain session with the client's default headers."""
        session = requests.Session()
        session.headers.update({"User-Agent": NetworkConstants.USER_AGENT})
        if default_headers:
            session.headers.update(default_headers)
        return session

    def send(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
        data: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Perform a single HTTP request.

        Args:
            method: HTTP method
            endpoint: API endpoint (relative to base_url) or absolute URL
            params: Query parameters
            json: JSON-serializable body
            data: Raw body (bytes, str or form dict)
            headers: Additional headers
            timeout: Per-request timeout override

        Returns:
            Response object, whatever its status code

        Raises:
            CrowNetworkError: on DNS failure, refused connection, timeout or
                any other transport-level error
        """
        url = self._build_url(endpoint)

        self.logger.debug(
            f"{method} {url}",
            headers=SensitiveDataSanitizer.sanitize_headers(headers or {}),
        )

        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                data=data,
                headers=headers,
                timeout=timeout or self.timeout,
            )
        except requests.exceptions.Timeout as e:
            self.logger.warning("Request timed out", method=method, url=url, timeout=timeout or self.timeout)
            raise CrowNetworkError(method, url, f"timed out after {timeout or self.timeout}s") from e
        except requests.exceptions.ConnectionError as e:
            self.logger.warning("Connection failed", method=method, url=url)
            raise CrowNetworkError(method, url, "connection failed") from e
        except requests.exceptions.RequestException as e:
            self.logger.warning("Request failed", method=method, url=url, error=str(e))
            raise CrowNetworkError(method, url, str(e)) from e

        self._log_response(response)
        return response

    def get(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs
    ) -> requests.Response:
        """Perform GET request."""
        return self.send("GET", endpoint, params=params, headers=headers, **kwargs)

    def post(
        self,
        endpoint: str,
        data: Optional[Any] = None,
        json: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs
    ) -> requests.Response:
        """Perform POST request."""
        return self.send("POST", endpoint, data=data, json=json, headers=headers, **kwargs)

    def _build_url(self, endpoint: str) -> str:
        """Build full URL from endpoint."""
        if endpoint.startswith(("http://", "https://")) or not self.base_url:
            return endpoint
        return urljoin(self.base_url + "/", endpoint.lstrip("/"))

    def _log_response(self, response: requests.Response) -> None:
        """Log response details."""
        self.logger.debug(
            f"Response: {response.status_code} - "
            f"{len(response.content)} bytes"
        )

    def close(self) -> None:
        """Close the HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False


@dataclass
class RequestOptions:
    """Per-call request descriptor.

    ``body`` may be bytes or str (sent verbatim) or any JSON-serializable
    value (encoded before sending). None means no body.
    """

    method: str = "GET"
    headers: Dict[str, str] = field(default_factory=dict)
    body: Any = None


class AuthenticatedRequestClient(HttpClient):
    """HTTP client attaching the session's bearer credential.

    On an HTTP 401 from the first attempt the session provider is asked to
    refresh the credential and the request is reissued exactly once. If the
    refresh fails the session is terminated and SessionExpired is raised.
    Every other status, including other 4xx/5xx, is returned untouched.

    The client keeps no state between calls; concurrent calls that both see
    a 401 each ask the provider for their own refresh.
    """

    INJECTED_HEADERS = ("authorization", "content-type")

    def __init__(
        self,
        session_provider: SessionProvider,
        base_url: Optional[str] = None,
        **kwargs
    ):
        """Initialize authenticated HTTP client.

        Args:
            session_provider: Owner of the session and its refresh/termination
            base_url: Base URL for relative endpoints
            **kwargs: Additional arguments for HttpClient
        """
        super().__init__(base_url, **kwargs)
        self.session_provider = session_provider

    def request(self, url: str, options: Optional[RequestOptions] = None) -> requests.Response:
        """Issue an authenticated request, refreshing the credential at most once.

        Args:
            url: Absolute URL, or endpoint relative to base_url
            options: Method, extra headers and optional body

        Returns:
            The response of the last attempt

        Raises:
            SessionUnavailable: the session provider could not be queried
            NoCredential: there is no session or it has no access token
            SessionExpired: the refresh after a 401 failed; the session was terminated
            CrowNetworkError: a transport-level failure on any attempt
        """
        options = options or RequestOptions()
        method = options.method.upper()
        full_url = self._build_url(url)
        log = self.logger.with_context(method=method, url=full_url)

        session = self._current_session(log)
        data = self._encode_body(options.body)

        response = self.send(
            method, full_url, data=data,
            headers=self._build_headers(options.headers, session.access_token),
        )
        if response.status_code != NetworkConstants.HTTP_UNAUTHORIZED:
            return response

        log.info("Got 401, attempting to refresh session")
        refreshed = self._refresh_or_terminate(log)

        log.info(
            "Session refreshed, retrying request",
            token=SensitiveDataSanitizer.mask_credential(refreshed.access_token),
        )
        response = self.send(
            method, full_url, data=data,
            headers=self._build_headers(options.headers, refreshed.access_token),
        )
        if response.status_code == NetworkConstants.HTTP_UNAUTHORIZED:
            log.warning("Retry with refreshed credential was still unauthorized")
        return response

    def get(self, url: str, headers: Optional[Dict[str, str]] = None) -> requests.Response:
        """Authenticated GET."""
        return self.request(url, RequestOptions("GET", headers or {}))

    def post(self, url: str, body: Any = None, headers: Optional[Dict[str, str]] = None) -> requests.Response:
        """Authenticated POST with an optional JSON body."""
        return self.request(url, RequestOptions("POST", headers or {}, body))

    def put(self, url: str, body: Any = None, headers: Optional[Dict[str, str]] = None) -> requests.Response:
        """Authenticated PUT with an optional JSON body."""
        return self.request(url, RequestOptions("PUT", headers or {}, body))

    def delete(self, url: str, headers: Optional[Dict[str, str]] = None) -> requests.Response:
        """Authenticated DELETE."""
        return self.request(url, RequestOptions("DELETE", headers or {}))

    def _current_session(self, log: CrowLogger) -> Session:
        try:
            session = self.session_provider.get_session()
        except Exception as e:
            log.error("Session error", error=_first_line(e))
            raise SessionUnavailable(_first_line(e)) from e

        if session is None or not session.has_credential:
            log.error("No access token available")
            raise NoCredential()

        log.debug(
            "Got access token",
            token=SensitiveDataSanitizer.mask_credential(session.access_token),
        )
        return session

    def _refresh_or_terminate(self, log: CrowLogger) -> Session:
        """Refresh the credential, or terminate the session and raise SessionExpired."""
        error: Optional[Exception] = None
        try:
            refreshed = self.session_provider.refresh_session()
        except Exception as e:
            refreshed, error = None, e

        if refreshed is not None and refreshed.has_credential:
            return refreshed

        details = _first_line(error) if error else "refresh returned no session"
        log.warning("Failed to refresh session, forcing logout", error=details)
        try:
            self.session_provider.terminate_session()
        except Exception:
            log.exception("Failed to terminate session after refresh failure")
        raise SessionExpired(details) from error

    def _build_headers(self, headers: Optional[Dict[str, str]], access_token: str) -> Dict[str, str]:
        """Merge caller headers with the injected auth and content-type headers.

        Injected headers replace caller headers of the same name, compared
        case-insensitively.
        """
        merged = {
            key: value
            for key, value in (headers or {}).items()
            if key.lower() not in self.INJECTED_HEADERS
        }
        merged["Authorization"] = f"{AuthConstants.BEARER_PREFIX}{access_token}"
        merged["Content-Type"] = NetworkConstants.DEFAULT_CONTENT_TYPE
        return merged

    @staticmethod
    def _encode_body(body: Any) -> Optional[Any]:
        if body is None or isinstance(body, (bytes, str)):
            return body
        return json.dumps(body)
