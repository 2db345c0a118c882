"""
Siteworks - Redis Cache Backend

Asynchronous Redis cache shared between processes:
- JSON serialization for values
- Per-key TTL support
- Namespace prefixing so several deployments can share one server
- Batch operations via MGET, pipelines and variadic DEL

Requires: redis>=5 with asyncio support

Example:
    cache = RedisCacheBackend(redis_url="redis://localhost:6379", namespace="siteworks")
    await cache.set("Site_Mappings", [{"id": "...", "hostnames": "example.com"}])
    mappings = await cache.get("Site_Mappings")
"""

from __future__ import annotations

import json
import logging
from typing import Any

from redis.asyncio import Redis

from ..interface import CacheInterface

logger = logging.getLogger(__name__)


class RedisCacheBackend(CacheInterface):
    """
    Redis cache backend with JSON serialization and TTL.

    Notes:
    - Keys are prefixed with the configured namespace.
    - Values are stored as UTF-8 JSON strings.
    - TTL is applied via EX seconds (None -> default_ttl, 0 -> no expiry).
    """

    def __init__(
        self,
        redis_url: str,
        namespace: str = "siteworks",
        default_ttl: int = 3600,
        max_connections: int = 10,
        socket_timeout: int = 5,
    ) -> None:
        """
        Initialize Redis cache backend.

        Args:
            redis_url: Connection URL, e.g. redis://localhost:6379/0 or rediss:// for TLS
            namespace: Prefix for all keys
            default_ttl: Default TTL in seconds (0 => no expiry)
            max_connections: Connection pool size
            socket_timeout: Socket timeout in seconds
        """
        if not redis_url:
            raise ValueError("redis_url is required")

        self.namespace = namespace.strip() or "siteworks"
        self.default_ttl = max(0, int(default_ttl))
        self._hits = 0
        self._misses = 0
        self._sets = 0
        self._removes = 0

        # Connects lazily on first command
        self._client = Redis.from_url(  # type: ignore[call-overload]
            url=redis_url,
            decode_responses=True,
            max_connections=max_connections,
            socket_timeout=socket_timeout,
        )

    # ------------ Helpers ------------

    def _make_key(self, key: str) -> str:
        """Create namespaced key."""
        return f"{self.namespace}:{key}"

    @staticmethod
    def _to_json(value: Any) -> str:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))

    @staticmethod
    def _from_json(data: str | bytes | None) -> Any | None:
        """Deserialize a stored payload. Returns None if data is None."""
        if data is None:
            return None
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        try:
            return json.loads(data)
        except ValueError as e:
            logger.warning(
                f"Failed to decode JSON from cache, returning raw data: {e}",
                extra={"data_preview": data[:100], "error": str(e)},
            )
            return data

    def _ttl_seconds(self, ttl: int | None) -> int | None:
        """None -> default_ttl; 0 or negative -> no expiry."""
        if ttl is None:
            ttl = self.default_ttl
        ttl = int(ttl)
        return ttl if ttl > 0 else None

    # ------------ Core Interface ------------

    async def get(self, key: str) -> Any | None:
        """Retrieve a value by key."""
        try:
            data = await self._client.get(self._make_key(key))
        except Exception as e:
            logger.error(
                f"Failed to get key '{key}' from Redis: {e}",
                extra={"key": key, "namespace": self.namespace, "error": str(e)},
                exc_info=True,
            )
            self._misses += 1
            return None

        if data is None:
            self._misses += 1
            return None

        self._hits += 1
        return self._from_json(data)

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store a value with optional TTL."""
        try:
            payload = self._to_json(value)
        except (TypeError, ValueError) as e:
            logger.error(
                f"Failed to serialize value for key '{key}': {e}",
                extra={"key": key, "value_type": type(value).__name__, "error": str(e)},
            )
            return False

        try:
            res = await self._client.set(name=self._make_key(key), value=payload, ex=self._ttl_seconds(ttl))
        except Exception as e:
            logger.error(
                f"Failed to set key '{key}' in Redis: {e}",
                extra={"key": key, "namespace": self.namespace, "ttl": ttl, "error": str(e)},
                exc_info=True,
            )
            return False

        success = bool(res)
        if success:
            self._sets += 1
        return success

    async def remove(self, key: str) -> bool:
        """Remove a single key."""
        try:
            removed = await self._client.delete(self._make_key(key))
        except Exception as e:
            logger.error(
                f"Failed to remove key '{key}' from Redis: {e}",
                extra={"key": key, "namespace": self.namespace, "error": str(e)},
                exc_info=True,
            )
            return False

        if removed:
            self._removes += 1
        return bool(removed)

    async def exists(self, key: str) -> bool:
        """Check if a key exists."""
        try:
            return bool(await self._client.exists(self._make_key(key)))
        except Exception as e:
            logger.error(
                f"Failed to check existence of key '{key}' in Redis: {e}",
                extra={"key": key, "namespace": self.namespace, "error": str(e)},
                exc_info=True,
            )
            return False

    async def clear(self) -> bool:
        """
        Clear all entries under the namespace.

        SCANs "<namespace>:*" and deletes each batch.
        """
        pattern = f"{self.namespace}:*"
        cursor = 0
        total_removed = 0

        try:
            while True:
                cursor, keys = await self._client.scan(cursor=cursor, match=pattern, count=1000)
                if keys:
                    total_removed += await self._client.delete(*keys)
                if cursor == 0:
                    break
        except Exception as e:
            logger.error(
                f"Failed to clear cache for namespace '{self.namespace}': {e}",
                extra={"namespace": self.namespace, "error": str(e)},
                exc_info=True,
            )
            return False

        self._removes += total_removed
        logger.info(f"Cleared {total_removed} keys from namespace '{self.namespace}'")
        return True

    async def get_stats(self) -> dict[str, Any]:
        """Return cache statistics and basic server info."""
        total_requests = self._hits + self._misses
        stats: dict[str, Any] = {
            "backend": "redis",
            "namespace": self.namespace,
            "default_ttl": self.default_ttl,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round((self._hits / total_requests) * 100, 2) if total_requests else 0.0,
            "sets": self._sets,
            "removes": self._removes,
            "connected": False,
        }

        try:
            stats["connected"] = bool(await self._client.ping())
            info = await self._client.info(section="server")
            stats["redis_version"] = info.get("redis_version")
        except Exception as e:
            # INFO may be restricted on managed servers
            logger.warning(f"Failed to get Redis INFO: {e}", extra={"error": str(e)})

        return stats

    async def close(self) -> None:
        """Close the Redis client and release resources."""
        try:
            await self._client.aclose()
            logger.info(f"Closed Redis cache backend for namespace '{self.namespace}'")
        except Exception as e:
            logger.error(
                f"Error closing Redis client: {e}", extra={"namespace": self.namespace, "error": str(e)}, exc_info=True
            )

    # ------------ Batch operations ------------

    async def get_many(self, keys: list[str]) -> dict[str, Any]:
        """Retrieve multiple values in one round-trip using MGET."""
        if not keys:
            return {}

        try:
            values = await self._client.mget([self._make_key(k) for k in keys])
        except Exception as e:
            logger.error(
                f"Failed to get multiple keys from Redis: {e}",
                extra={"key_count": len(keys), "namespace": self.namespace, "error": str(e)},
                exc_info=True,
            )
            return {}

        result: dict[str, Any] = {}
        for key, raw in zip(keys, values, strict=False):
            if raw is None:
                self._misses += 1
                continue
            self._hits += 1
            result[key] = self._from_json(raw)
        return result

    async def set_many(self, items: dict[str, Any], ttl: int | None = None) -> int:
        """Store multiple values using a non-transactional pipeline."""
        if not items:
            return 0

        try:
            ex = self._ttl_seconds(ttl)
            pipe = self._client.pipeline(transaction=False)
            for key, value in items.items():
                pipe.set(self._make_key(key), self._to_json(value), ex=ex)
            results = await pipe.execute()
        except Exception as e:
            logger.error(
                f"Failed to set multiple keys in Redis: {e}",
                extra={"key_count": len(items), "namespace": self.namespace, "ttl": ttl, "error": str(e)},
                exc_info=True,
            )
            return 0

        success_count = sum(1 for r in results if r in (True, "OK", b"OK"))
        self._sets += success_count
        return success_count

    async def remove_many(self, keys: list[str]) -> int:
        """Remove multiple keys with a single variadic DEL."""
        if not keys:
            return 0

        try:
            removed = int(await self._client.delete(*[self._make_key(k) for k in keys]))
        except Exception as e:
            logger.error(
                f"Failed to remove multiple keys from Redis: {e}",
                extra={"key_count": len(keys), "namespace": self.namespace, "error": str(e)},
                exc_info=True,
            )
            return 0

        self._removes += removed
        return removed
