"""
Siteworks - Cache Interface

Defines the abstract interface that all cache backends must implement.

Values handed to a backend must be JSON-compatible (dicts, lists, strings,
numbers, booleans, None) so that every backend returns the same shape.
"""

from abc import ABC, abstractmethod
from typing import Any


class CacheInterface(ABC):
    """
    Abstract base class for cache backends.

    Keys are opaque strings. Lifetime and eviction are the backend's
    concern; callers own their key naming conventions.
    """

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """
        Retrieve a value from the cache.

        Args:
            key: Cache key

        Returns:
            Cached value if found and not expired, None otherwise
        """
        pass

    @abstractmethod
    async def set(
        self,
        key: str,
        value: Any,
        ttl: int | None = None,
    ) -> bool:
        """
        Store a value in the cache.

        Args:
            key: Cache key
            value: JSON-compatible value to cache
            ttl: Time-to-live in seconds (None = use default, 0 = no expiry)

        Returns:
            True if stored successfully, False otherwise
        """
        pass

    @abstractmethod
    async def remove(self, key: str) -> bool:
        """
        Remove a key from the cache.

        Args:
            key: Cache key to remove

        Returns:
            True if key was removed, False if key didn't exist
        """
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """
        Check if a key exists in the cache.

        Args:
            key: Cache key to check

        Returns:
            True if key exists and is not expired, False otherwise
        """
        pass

    @abstractmethod
    async def clear(self) -> bool:
        """
        Clear all entries from the cache.

        Returns:
            True if cache was cleared successfully
        """
        pass

    @abstractmethod
    async def get_stats(self) -> dict[str, Any]:
        """
        Get cache statistics.

        Returns:
            Dictionary with cache statistics (hits, misses, size, etc.)
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """
        Close the cache backend and release resources.

        Should be called during graceful shutdown.
        """
        pass

    async def get_many(self, keys: list[str]) -> dict[str, Any]:
        """
        Retrieve multiple values from the cache.

        Default implementation calls get() for each key.
        Backends can override for better performance.

        Args:
            keys: List of cache keys

        Returns:
            Dictionary mapping keys to values (missing keys are omitted)
        """
        result = {}
        for key in keys:
            value = await self.get(key)
            if value is not None:
                result[key] = value
        return result

    async def set_many(
        self,
        items: dict[str, Any],
        ttl: int | None = None,
    ) -> int:
        """
        Store multiple values in the cache.

        Default implementation calls set() for each item.
        Backends can override for better performance.

        Args:
            items: Dictionary mapping keys to values
            ttl: Time-to-live in seconds (applies to all items)

        Returns:
            Number of items successfully stored
        """
        count = 0
        for key, value in items.items():
            if await self.set(key, value, ttl):
                count += 1
        return count

    async def remove_many(self, keys: list[str]) -> int:
        """
        Remove multiple keys from the cache.

        Default implementation calls remove() for each key.
        Backends can override for better performance.

        Args:
            keys: List of cache keys to remove

        Returns:
            Number of keys actually removed
        """
        count = 0
        for key in keys:
            if await self.remove(key):
                count += 1
        return count
