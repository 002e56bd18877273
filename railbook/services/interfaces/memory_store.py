"""
In-memory session store - nothing survives the process.
"""

from typing import Optional

from railbook.schemas.user import Session
from railbook.services.interfaces.session_store import SessionStore


class MemorySessionStore(SessionStore):
    """
    Use when:
    - Running tests
    - Embedding the client in a process that owns its own session lifetime
    """

    def __init__(self, session: Optional[Session] = None):
        self._session = session

    def load(self) -> Optional[Session]:
        return self._session

    def save(self, session: Session) -> None:
        self._session = session

    def clear(self) -> None:
        self._session = None
