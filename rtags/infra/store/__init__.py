"""Store adapters (Redis)."""

from .redis import RedisTagStore

__all__ = [
    "RedisTagStore",
]
