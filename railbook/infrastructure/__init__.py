"""
Infrastructure layer - external system integrations.
"""

from .redis_client import close_redis, get_redis

__all__ = ['close_redis', 'get_redis']
