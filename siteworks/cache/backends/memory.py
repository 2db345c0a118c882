"""
Siteworks - Memory Cache Backend

In-process cache with LRU eviction and per-key TTL.
Suitable for single-process deployments and tests.
"""

import asyncio
import logging
import time
from collections import OrderedDict
from typing import Any

from ..interface import CacheInterface

logger = logging.getLogger(__name__)


class MemoryCacheBackend(CacheInterface):
    """
    In-memory cache backend with LRU eviction.

    Features:
    - LRU eviction when max_size is reached
    - Per-key TTL support
    - asyncio.Lock around every mutation
    """

    def __init__(
        self,
        max_size: int = 1000,
        default_ttl: int = 3600,
        namespace: str = "siteworks",
    ):
        """
        Initialize memory cache backend.

        Args:
            max_size: Maximum number of entries (LRU eviction when exceeded)
            default_ttl: Default TTL in seconds (0 = no expiry)
            namespace: Cache key namespace/prefix
        """
        self.max_size = max_size
        self.default_ttl = default_ttl
        self.namespace = namespace

        # key -> (value, expiry_time)
        self._cache: OrderedDict[str, tuple[Any, float | None]] = OrderedDict()

        self._hits = 0
        self._misses = 0
        self._sets = 0
        self._removes = 0
        self._evictions = 0

        self._lock = asyncio.Lock()

    def _make_key(self, key: str) -> str:
        """Create namespaced cache key."""
        return f"{self.namespace}:{key}"

    def _expiry_for(self, ttl: int | None) -> float | None:
        if ttl is None:
            ttl = self.default_ttl
        return time.time() + ttl if ttl > 0 else None

    @staticmethod
    def _is_expired(expiry: float | None) -> bool:
        return expiry is not None and time.time() > expiry

    def _lookup(self, cache_key: str) -> tuple[bool, Any]:
        """Return (found, value), dropping the entry if it has expired. Caller holds the lock."""
        entry = self._cache.get(cache_key)
        if entry is None:
            self._misses += 1
            return False, None

        value, expiry = entry
        if self._is_expired(expiry):
            del self._cache[cache_key]
            self._misses += 1
            return False, None

        self._cache.move_to_end(cache_key)
        self._hits += 1
        return True, value

    def _store(self, cache_key: str, value: Any, expiry: float | None) -> None:
        """Insert or replace an entry, evicting the LRU entry when full. Caller holds the lock."""
        if cache_key not in self._cache and len(self._cache) >= self.max_size:
            evicted_key, _ = self._cache.popitem(last=False)
            self._evictions += 1
            logger.debug(f"Evicted key from memory cache: {evicted_key}")

        self._cache[cache_key] = (value, expiry)
        self._cache.move_to_end(cache_key)
        self._sets += 1

    async def get(self, key: str) -> Any | None:
        """Retrieve value from cache."""
        if not key:
            logger.warning("Attempted to get cache value with empty key")
            return None

        async with self._lock:
            _, value = self._lookup(self._make_key(key))
            return value

    async def set(
        self,
        key: str,
        value: Any,
        ttl: int | None = None,
    ) -> bool:
        """Store value in cache."""
        if not key:
            logger.warning("Attempted to set cache value with empty key")
            return False

        async with self._lock:
            self._store(self._make_key(key), value, self._expiry_for(ttl))
            return True

    async def remove(self, key: str) -> bool:
        """Remove key from cache."""
        if not key:
            logger.warning("Attempted to remove cache value with empty key")
            return False

        async with self._lock:
            cache_key = self._make_key(key)

            if cache_key in self._cache:
                del self._cache[cache_key]
                self._removes += 1
                return True

            return False

    async def exists(self, key: str) -> bool:
        """Check if key exists and is not expired."""
        if not key:
            return False

        async with self._lock:
            cache_key = self._make_key(key)
            entry = self._cache.get(cache_key)

            if entry is None:
                return False

            if self._is_expired(entry[1]):
                del self._cache[cache_key]
                return False

            return True

    async def clear(self) -> bool:
        """Clear all entries from cache."""
        async with self._lock:
            size = len(self._cache)
            self._cache.clear()
            logger.info(f"Cleared {size} entries from memory cache namespace '{self.namespace}'")
            return True

    async def get_stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        async with self._lock:
            total_requests = self._hits + self._misses
            hit_rate = (self._hits / total_requests * 100) if total_requests > 0 else 0.0

            return {
                "backend": "memory",
                "size": len(self._cache),
                "max_size": self.max_size,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(hit_rate, 2),
                "sets": self._sets,
                "removes": self._removes,
                "evictions": self._evictions,
                "namespace": self.namespace,
            }

    async def close(self) -> None:
        """Close cache and release resources."""
        # Nothing to release; entries live in-process
        logger.debug(f"Memory cache backend closed for namespace '{self.namespace}'")

    async def get_many(self, keys: list[str]) -> dict[str, Any]:
        """Retrieve multiple values under a single lock acquisition."""
        if not keys:
            return {}

        async with self._lock:
            result = {}
            for key in keys:
                if not key:
                    continue
                found, value = self._lookup(self._make_key(key))
                if found:
                    result[key] = value
            return result

    async def set_many(
        self,
        items: dict[str, Any],
        ttl: int | None = None,
    ) -> int:
        """Store multiple values under a single lock acquisition."""
        if not items:
            return 0

        async with self._lock:
            expiry = self._expiry_for(ttl)
            count = 0

            for key, value in items.items():
                if not key:
                    continue
                self._store(self._make_key(key), value, expiry)
                count += 1

            return count

    async def remove_many(self, keys: list[str]) -> int:
        """Remove multiple keys under a single lock acquisition."""
        if not keys:
            return 0

        async with self._lock:
            count = 0

            for key in keys:
                if not key:
                    continue
                cache_key = self._make_key(key)
                if cache_key in self._cache:
                    del self._cache[cache_key]
                    self._removes += 1
                    count += 1

            return count
