"""
Supabase session provider.

Talks to the GoTrue REST API of a Supabase project to sign in, refresh and
sign out, and keeps the resulting session in a SessionStore.
"""

import threading
from typing import Any, Dict, Optional

import requests

from crow.core.constants import AuthConstants, NetworkConstants
from crow.core.security import SensitiveDataSanitizer
from crow.exceptions import (
    CrowNetworkError,
    InvalidCredentialsError,
    SessionProviderError,
    SessionStoreError,
)
from crow.infrastructure.http.client import HttpClient
from crow.logging import LoggingContext, get_logger

from .models import Session
from .store import MemorySessionStore, SessionStore


class SupabaseSessionProvider:
    """Session provider backed by Supabase Auth (GoTrue).

    Refreshes are serialized: concurrent callers each perform their refresh
    one after the other against the stored refresh token.
    """

    def __init__(
        self,
        auth_url: str,
        anon_key: str,
        store: Optional[SessionStore] = None,
        http_client: Optional[HttpClient] = None,
        timeout: int = NetworkConstants.DEFAULT_REQUEST_TIMEOUT,
    ):
        self.auth_url = auth_url.rstrip("/")
        self.store = store or MemorySessionStore()
        self.http = http_client or HttpClient(
            self.auth_url,
            timeout=timeout,
            default_headers={"apikey": anon_key},
        )
        self.logger = get_logger(__name__)
        self._refresh_lock = threading.Lock()

    def sign_in(self, email: str, password: str) -> Session:
        """Sign in with email and password and store the new session.

        Raises:
            InvalidCredentialsError: the auth service rejected the credentials
            SessionProviderError: the auth service could not be reached or failed
        """
        with LoggingContext(
            entry_msg="Signing in ...",
            success_msg="Signed in.",
            failure_msg="Sign in failed",
            logger=self.logger,
        ):
            response = self._post_token(
                AuthConstants.PASSWORD_GRANT, {"email": email, "password": password}
            )
            if response.status_code >= NetworkConstants.HTTP_SERVER_ERROR:
                raise SessionProviderError(
                    f"sign in failed with HTTP {response.status_code}"
                )
            if response.status_code >= NetworkConstants.HTTP_BAD_REQUEST:
                raise InvalidCredentialsError(
                    self._error_message(response), response.status_code
                )

            session = self._parse_session(response)
            self.store.save(session)
            return session

    def get_session(self) -> Optional[Session]:
        """Return the stored session."""
        return self.store.load()

    def refresh_session(self) -> Optional[Session]:
        """Exchange the stored refresh token for a new session.

        Returns None when nothing can be refreshed: no stored session, no
        refresh token, or the auth service rejected the refresh token.
        """
        with self._refresh_lock:
            current = self.store.load()
            if current is None or not current.refresh_token:
                self.logger.info("No refresh token available")
                return None

            response = self._post_token(
                AuthConstants.REFRESH_TOKEN_GRANT,
                {"refresh_token": current.refresh_token},
            )
            if response.status_code >= NetworkConstants.HTTP_SERVER_ERROR:
                raise SessionProviderError(
                    f"refresh failed with HTTP {response.status_code}"
                )
            if response.status_code >= NetworkConstants.HTTP_BAD_REQUEST:
                self.logger.warning(
                    "Refresh token rejected",
                    status_code=response.status_code,
                    reason=self._error_message(response),
                )
                return None

            session = self._parse_session(response)
            self.store.save(session)
            self.logger.info(
                "Session refreshed",
                user_id=session.user_id,
                token=SensitiveDataSanitizer.mask_credential(session.access_token),
            )
            return session

    def terminate_session(self) -> None:
        """Sign out remotely (best effort) and always clear the local session."""
        try:
            current = self.store.load()
        except SessionStoreError as e:
            self.logger.warning("Discarding unreadable session", error=e.message)
            current = None

        if current is not None and current.access_token:
            self._revoke(current.access_token)

        self.store.clear()
        self.logger.info("Session terminated")

    def _revoke(self, access_token: str) -> None:
        try:
            response = self.http.post(
                AuthConstants.LOGOUT_ENDPOINT,
                headers={"Authorization": f"{AuthConstants.BEARER_PREFIX}{access_token}"},
            )
        except CrowNetworkError as e:
            self.logger.warning("Remote sign out failed", error=e.message)
            return
        if response.status_code >= NetworkConstants.HTTP_BAD_REQUEST:
            self.logger.debug("Remote sign out rejected", status_code=response.status_code)

    def _post_token(self, grant_type: str, payload: Dict[str, Any]) -> requests.Response:
        try:
            return self.http.post(
                AuthConstants.TOKEN_ENDPOINT,
                params={"grant_type": grant_type},
                json=payload,
            )
        except CrowNetworkError as e:
            raise SessionProviderError(f"auth service unreachable: {e.message}") from e

    def _parse_session(self, response: requests.Response) -> Session:
        try:
            return Session.from_token_response(response.json())
        except (ValueError, KeyError, TypeError) as e:
            raise SessionProviderError(f"malformed token response: {e}") from e

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Extract the human readable error from a GoTrue error body."""
        try:
            body = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        if not isinstance(body, dict):
            return f"HTTP {response.status_code}"
        for key in ("error_description", "msg", "message", "error"):
            if body.get(key):
                return str(body[key])
        return f"HTTP {response.status_code}"
