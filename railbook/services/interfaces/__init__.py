"""
Service interfaces for dependency inversion.
Allows swapping session persistence without changing the guard.
"""

from .session_store import SessionStore
from .memory_store import MemorySessionStore

__all__ = ['SessionStore', 'MemorySessionStore']
