"""
Redis-backed session store.

The session is one JSON value under "<namespace>:session", so token and
identity are set and deleted by a single command. The TTL mirrors a token
lifetime; an expired key reads as "no session".
"""

from typing import Optional

import redis
from pydantic import ValidationError as SchemaError

from railbook.core.config import get_settings
from railbook.core.logging import get_logger
from railbook.infrastructure.redis_client import get_redis
from railbook.schemas.user import Session
from railbook.services.interfaces.session_store import SessionStore

logger = get_logger(__name__)


class RedisSessionStore(SessionStore):
    def __init__(self, client: Optional[redis.Redis] = None, namespace: Optional[str] = None,
                 ttl: Optional[int] = None):
        settings = get_settings()
        self.redis = client if client is not None else get_redis()
        self.key = f"{namespace or settings.SESSION_NAMESPACE}:session"
        self.ttl = ttl if ttl is not None else settings.REDIS_SESSION_TTL

    def load(self) -> Optional[Session]:
        raw = self.redis.get(self.key)
        if not raw:
            return None
        try:
            return Session.model_validate_json(raw)
        except SchemaError as e:
            logger.warning("session_record_invalid", key=self.key, error=str(e))
            self.clear()
            return None

    def save(self, session: Session) -> None:
        self.redis.set(self.key, session.model_dump_json(), ex=self.ttl)

    def clear(self) -> None:
        self.redis.delete(self.key)
