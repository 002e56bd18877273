"""
Session guard: the only writer of the persisted session.

Lifecycle
=========
  establish()  - after a successful login
  require()    - on every role-gated view mount
  invalidate() - on logout or on a 401 from any authenticated call

Each teardown bumps `generation`. Views hold a SessionLease taken at mount
time; once the generation moves on, the lease goes inactive and late
responses are dropped instead of written into a view nobody is looking at.
"""

from typing import Optional

from railbook.core.exceptions import ENTRY_POINT, RedirectRequired
from railbook.core.logging import get_logger
from railbook.core.notifications import Notifier
from railbook.core.metrics import record_session_invalidation
from railbook.schemas.user import Identity, Role, Session
from railbook.services.interfaces.session_store import SessionStore

logger = get_logger(__name__)


class SessionLease:
    """Ties view state to the session that was active when the view mounted."""

    def __init__(self, guard: "SessionGuard", generation: int):
        self._guard = guard
        self._generation = generation

    @property
    def active(self) -> bool:
        return self._guard.generation == self._generation and self._guard.current is not None


class SessionGuard:
    def __init__(self, store: SessionStore, notifier: Optional[Notifier] = None):
        self._store = store
        self._notifier = notifier
        self._session: Optional[Session] = store.load()
        self.generation = 0

    @property
    def current(self) -> Optional[Session]:
        return self._session

    @property
    def identity(self) -> Optional[Identity]:
        return self._session.identity if self._session else None

    def token(self) -> Optional[str]:
        return self._session.token if self._session else None

    def establish(self, token: str, identity: Identity) -> Session:
        session = Session(token=token, identity=identity)
        self._store.save(session)
        self._session = session
        self.generation += 1
        logger.info("session_established", username=identity.username, role=identity.role.value)
        return session

    def require(self, role: Role) -> Session:
        """
        Re-read the persisted session and check the role claim.
        Raises RedirectRequired when there is no session or the role differs.
        """
        self._session = self._store.load()
        if self._session is None:
            logger.info("guard_redirect", reason="no_session", required=role.value)
            raise RedirectRequired(ENTRY_POINT, reason="no_session")
        if self._session.identity.role != role:
            logger.info(
                "guard_redirect",
                reason="role_mismatch",
                required=role.value,
                actual=self._session.identity.role.value,
            )
            raise RedirectRequired(ENTRY_POINT, reason="role_mismatch")
        return self._session

    def lease(self) -> SessionLease:
        return SessionLease(self, self.generation)

    def invalidate(self, reason: str) -> None:
        """Clear token and identity together."""
        self._store.clear()
        self._session = None
        self.generation += 1
        record_session_invalidation(reason)
        logger.info("session_invalidated", reason=reason)

    def handle_unauthorized(self) -> None:
        self.invalidate("unauthorized")

    def logout(self) -> str:
        """Synchronous total clear. Never calls the server."""
        self.invalidate("logout")
        if self._notifier:
            self._notifier.info("Logged out successfully")
        return ENTRY_POINT
