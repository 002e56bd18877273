"""
Redis connections for the shared session backend.

One client per URL. Building a client opens no socket; the pool connects
on the first command, so a misconfigured URL only fails when the session
is actually read or written.
"""

from typing import Dict, Optional

import redis

from railbook.core.config import get_settings

_clients: Dict[str, redis.Redis] = {}


def get_redis(url: Optional[str] = None) -> redis.Redis:
    """Get (or create) the client for `url`, defaulting to REDIS_URL."""
    url = url or get_settings().REDIS_URL
    client = _clients.get(url)
    if client is None:
        client = redis.Redis.from_url(
            url,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
            health_check_interval=30,
        )
        _clients[url] = client
    return client


def close_redis() -> None:
    """Close every client opened by get_redis."""
    while _clients:
        _, client = _clients.popitem()
        client.close()
