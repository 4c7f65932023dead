"""
Session provider protocol.

Defines the interface the authenticated request client depends on. Any
object with these three methods can be injected into the client; the
concrete Supabase provider is one implementation.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import Session


@runtime_checkable
class SessionProvider(Protocol):
    """Owner of credential storage, refresh and termination."""

    def get_session(self) -> Optional[Session]:
        """Return the current session, or None when signed out.

        Raises:
            SessionProviderError: if the session could not be read
        """
        ...

    def refresh_session(self) -> Optional[Session]:
        """Exchange the current credential for a new one.

        Returns:
            The refreshed session, or None when no refresh is possible

        Raises:
            SessionProviderError: if the refresh could not be attempted
        """
        ...

    def terminate_session(self) -> None:
        """Destroy the current session (force logout).

        Raises:
            SessionProviderError: if the session could not be cleared
        """
        ...
