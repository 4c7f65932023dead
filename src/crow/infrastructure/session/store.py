"""
Session persistence.

Stores keep at most one session. The file store writes JSON readable only
by the owner, since it contains the refresh token.
"""

import json
import os
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from crow.exceptions.auth import SessionStoreError
from crow.logging import get_logger

from .models import Session


class SessionStore(ABC):
    """Abstract single-session store."""

    @abstractmethod
    def load(self) -> Optional[Session]:
        """Return the stored session, or None."""

    @abstractmethod
    def save(self, session: Session) -> None:
        """Replace the stored session."""

    @abstractmethod
    def clear(self) -> None:
        """Remove the stored session, if any."""


class MemorySessionStore(SessionStore):
    """In-process store, used by tests and short-lived scripts."""

    def __init__(self, session: Optional[Session] = None):
        self._session = session
        self._lock = threading.Lock()

    def load(self) -> Optional[Session]:
        with self._lock:
            return self._session

    def save(self, session: Session) -> None:
        with self._lock:
            self._session = session

    def clear(self) -> None:
        with self._lock:
            self._session = None


class FileSessionStore(SessionStore):
    """JSON file store.

    Writes go to a temporary sibling file which then replaces the target,
    so a crash never leaves a half-written session behind.
    """

    FILE_MODE = 0o600

    def __init__(self, path: Path):
        self.path = Path(path).expanduser()
        self._lock = threading.Lock()
        self.logger = get_logger(__name__)

    def load(self) -> Optional[Session]:
        with self._lock:
            if not self.path.exists():
                return None
            try:
                data = json.loads(self.path.read_text(encoding="utf-8"))
                return Session.from_dict(data)
            except OSError as e:
                raise SessionStoreError(str(self.path), f"cannot read file: {e}") from e
            except (ValueError, KeyError, TypeError) as e:
                raise SessionStoreError(str(self.path), f"corrupt session data: {e}") from e

    def save(self, session: Session) -> None:
        with self._lock:
            tmp_path = self.path.with_name(self.path.name + ".tmp")
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, self.FILE_MODE)
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(session.to_dict(), f)
                os.replace(tmp_path, self.path)
            except OSError as e:
                raise SessionStoreError(str(self.path), f"cannot write file: {e}") from e
            self.logger.debug("Session saved", path=str(self.path), user_id=session.user_id)

    def clear(self) -> None:
        with self._lock:
            try:
                self.path.unlink()
            except FileNotFoundError:
                return
            except OSError as e:
                raise SessionStoreError(str(self.path), f"cannot remove file: {e}") from e
            self.logger.debug("Session cleared", path=str(self.path))
