"""
Session persistence interface.
A store holds exactly one session record: token and identity together.
"""

from abc import ABC, abstractmethod
from typing import Optional

from railbook.schemas.user import Session


class SessionStore(ABC):
    """
    Interface for session persistence backends.

    Implementations:
    - MemorySessionStore: process lifetime only
    - FileSessionStore: JSON file, survives restarts of the client
    - RedisSessionStore: shared key with TTL
    """

    @abstractmethod
    def load(self) -> Optional[Session]:
        """
        Read the persisted session.

        Returns:
            The session, or None when nothing usable is stored. A record
            missing either half must come back as None.
        """
        pass

    @abstractmethod
    def save(self, session: Session) -> None:
        """Persist token and identity in one write."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove token and identity in one write."""
        pass
