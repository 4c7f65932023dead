"""Session model, provider protocol and stores.

The Supabase provider depends on the HTTP client and is imported from
``crow.infrastructure.session.supabase`` directly.
"""

from .models import Session
from .protocol import SessionProvider
from .store import FileSessionStore, MemorySessionStore, SessionStore

__all__ = [
    "Session",
    "SessionProvider",
    "SessionStore",
    "MemorySessionStore",
    "FileSessionStore",
]
