"""
Session value object.

A Session is owned by a session provider. The request client reads the
access token from it and never mutates it; a refresh produces a new Session.
"""

import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Session:
    """Signed-in session holding the bearer credential."""

    access_token: str
    user_id: str
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None
    email: Optional[str] = None

    @property
    def has_credential(self) -> bool:
        return bool(self.access_token)

    def is_expired(self, now: Optional[float] = None, leeway: int = 0) -> bool:
        """True when ``expires_at`` is known and has passed (minus ``leeway`` seconds)."""
        if self.expires_at is None:
            return False
        current = time.time() if now is None else now
        return current >= self.expires_at - leeway

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Session":
        """Build a Session from its ``to_dict`` form."""
        return cls(
            access_token=data["access_token"],
            user_id=data["user_id"],
            refresh_token=data.get("refresh_token"),
            expires_at=data.get("expires_at"),
            email=data.get("email"),
        )

    @classmethod
    def from_token_response(cls, payload: Dict[str, Any], now: Optional[float] = None) -> "Session":
        """Build a Session from a GoTrue token endpoint response.

        GoTrue returns ``expires_at`` (epoch seconds) on recent versions and only
        ``expires_in`` on older ones.

        Raises:
            KeyError: if the payload has no access token or user id
        """
        user = payload.get("user") or {}
        expires_at = payload.get("expires_at")
        if expires_at is None and payload.get("expires_in") is not None:
            current = time.time() if now is None else now
            expires_at = int(current) + int(payload["expires_in"])

        return cls(
            access_token=payload["access_token"],
            user_id=user["id"],
            refresh_token=payload.get("refresh_token"),
            expires_at=int(expires_at) if expires_at is not None else None,
            email=user.get("email"),
        )
