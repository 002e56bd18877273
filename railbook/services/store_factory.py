"""
Session store factory.
Configures which persistence backend the session guard uses.
"""

from typing import Optional

from railbook.core.config import Settings, get_settings
from railbook.services.interfaces.session_store import SessionStore
from railbook.services.interfaces.memory_store import MemorySessionStore


def get_session_store(settings: Optional[Settings] = None) -> SessionStore:
    """
    Get configured session store.

    - file (default): survives between console invocations
    - memory: process lifetime only
    - redis: shared across machines, expires with REDIS_SESSION_TTL
    """
    settings = settings or get_settings()
    backend = settings.SESSION_BACKEND.lower()

    if backend == "redis":
        from railbook.services.redis_store import RedisSessionStore
        from railbook.infrastructure.redis_client import get_redis
        return RedisSessionStore(
            client=get_redis(settings.REDIS_URL),
            namespace=settings.SESSION_NAMESPACE,
            ttl=settings.REDIS_SESSION_TTL,
        )
    if backend == "memory":
        return MemorySessionStore()
    if backend == "file":
        from railbook.services.file_store import FileSessionStore
        return FileSessionStore(settings.SESSION_FILE)
    raise ValueError(f"Unknown SESSION_BACKEND: {settings.SESSION_BACKEND}")
