"""
rtags - bidirectional tag index on Redis sets.

This package contains:
- index/: TagIndex and its lazy queries
- infra/: settings and the Redis store adapter
- common/: errors, logging, store port
"""

from rtags.common.exceptions import (
    InvalidInputError,
    RtagsError,
    StaleReadError,
    StoreError,
)
from rtags.common.ports import TagStorePort
from rtags.index import ObjectPairQuery, ObjectQuery, QueryState, TagIndex, TagQuery
from rtags.infra.config import Settings
from rtags.infra.store import RedisTagStore

__version__ = "0.1.0"


def create_index(key: str, store: TagStorePort | None = None, settings: Settings | None = None) -> TagIndex:
    """
    Build a TagIndex for namespace `key`.

    Without `store`, a new RedisTagStore is created from settings; the
    caller owns it and should close it (index.store.close()).
    """
    if settings is None:
        from rtags.infra.config import settings
    if store is None:
        store = RedisTagStore.from_config(settings.store)
    return TagIndex(key, store, settings.index)


__all__ = [
    "__version__",
    "create_index",
    "TagIndex",
    "ObjectQuery",
    "ObjectPairQuery",
    "TagQuery",
    "QueryState",
    "RedisTagStore",
    "TagStorePort",
    "Settings",
    "RtagsError",
    "InvalidInputError",
    "StoreError",
    "StaleReadError",
]
