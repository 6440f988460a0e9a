"""In-memory cache provider using cachetools.TTLCache.

Suitable for development and single-process deployments; entries are not
shared between workers.
"""

from __future__ import annotations

import threading
from typing import Any

import structlog
from cachetools import TTLCache

from tunematch.interfaces.cache_provider import ICacheProvider

logger = structlog.get_logger(logger_name=__name__)


class MemoryCacheProvider(ICacheProvider):
    """In-memory TTL cache backed by ``cachetools.TTLCache``.

    Parameters
    ----------
    max_size:
        Maximum number of entries before the least-recently-used entry
        is evicted.
    ttl:
        Time-to-live in seconds applied to every entry.
    """

    def __init__(self, max_size: int = 10_000, ttl: int = 3600) -> None:
        self._default_ttl = ttl
        self._cache: TTLCache[str, Any] = TTLCache(maxsize=max_size, ttl=ttl)
        # TTLCache is not thread-safe; scorers may run in worker threads.
        self._lock = threading.Lock()

    async def get(self, key: str) -> Any | None:
        with self._lock:
            value = self._cache.get(key)
        logger.debug("cache_hit" if value is not None else "cache_miss", key=key)
        return value

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store *value* under *key*.

        ``TTLCache`` applies one TTL to all entries, so a per-item *ttl*
        different from the default is ignored.
        """
        if ttl is not None and ttl != self._default_ttl:
            logger.debug("cache_ttl_ignored", key=key, ttl=ttl, default_ttl=self._default_ttl)
        with self._lock:
            self._cache[key] = value

    async def delete(self, key: str) -> None:
        with self._lock:
            self._cache.pop(key, None)
        logger.debug("cache_delete", key=key)

    async def exists(self, key: str) -> bool:
        with self._lock:
            return key in self._cache
