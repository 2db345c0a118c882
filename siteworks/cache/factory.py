"""
Siteworks - Cache Factory

Builds the model cache from configuration and keeps one backend per name,
so the services of one process share a single store.

- cache.backend selects memory (default) or redis
- redis needs cache.redis_url and the redis client; the client is only
  imported when a redis backend is actually built
- cache_level "none" means no model cache at all (create_model_cache
  returns None)

Examples:
    from siteworks.cache import create_model_cache

    cache = create_model_cache(get_config())   # None when caching is off

    from siteworks.config import CacheConfig
    isolated = create_cache(CacheConfig(namespace="preview"), name="preview")
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..config import CacheBackend, CacheConfig, SiteworksConfig, get_config
from ..errors import ConfigurationError
from .backends.memory import MemoryCacheBackend
from .interface import CacheInterface

logger = logging.getLogger(__name__)

DEFAULT_CACHE_NAME = "default"

_instances: dict[str, CacheInterface] = {}


def _build_memory(config: CacheConfig) -> CacheInterface:
    return MemoryCacheBackend(
        max_size=config.max_size,
        default_ttl=config.ttl_seconds,
        namespace=config.namespace,
    )


def _build_redis(config: CacheConfig) -> CacheInterface:
    if not config.redis_url:
        raise ConfigurationError(
            "REDIS_URL is required for the redis cache backend",
            details={"env": "REDIS_URL", "backend": CacheBackend.REDIS.value},
        )

    try:
        from .backends.redis import RedisCacheBackend
    except ImportError as e:
        logger.error(
            "The redis cache backend needs the redis client",
            extra={"requirement": "redis>=5.0.0", "error": str(e)},
        )
        raise ConfigurationError(
            "The redis cache backend needs the redis client: pip install 'redis>=5.0.0'",
            details={"requirement": "redis>=5.0.0", "error": str(e), "backend": CacheBackend.REDIS.value},
        ) from e

    return RedisCacheBackend(
        redis_url=config.redis_url,
        namespace=config.namespace,
        default_ttl=config.ttl_seconds,
        max_connections=config.redis_max_connections,
        socket_timeout=config.redis_socket_timeout,
    )


_BUILDERS: dict[CacheBackend, Callable[[CacheConfig], CacheInterface]] = {
    CacheBackend.MEMORY: _build_memory,
    CacheBackend.REDIS: _build_redis,
}


def create_cache(
    config: CacheConfig | None = None,
    name: str = DEFAULT_CACHE_NAME,
) -> CacheInterface:
    """
    Get the cache registered under `name`, building it on first use.

    Args:
        config: Cache section to build from (global config if omitted);
            ignored when `name` is already registered
        name: Instance name

    Returns:
        The cache backend

    Raises:
        ConfigurationError: If the backend is unknown or can't be built
    """
    existing = _instances.get(name)
    if existing is not None:
        return existing

    config = config or get_config().cache
    builder = _BUILDERS.get(config.backend)

    if builder is None:
        raise ConfigurationError(
            f"Unsupported cache backend: {config.backend}",
            details={"backend": str(config.backend), "supported": [b.value for b in CacheBackend]},
        )

    cache = builder(config)
    _instances[name] = cache

    logger.info(
        "Model cache '%s' created",
        name,
        extra={"cache_name": name, "backend": config.backend.value, "namespace": config.namespace},
    )
    return cache


def create_model_cache(config: SiteworksConfig | None = None, name: str = DEFAULT_CACHE_NAME) -> CacheInterface | None:
    """
    Build the model cache for the configured cache level.

    Returns:
        The cache, or None when the cache level is "none"
    """
    config = config or get_config()

    if not config.cache_level.enabled:
        logger.debug("Model cache disabled", extra={"cache_level": config.cache_level.value})
        return None
    return create_cache(config.cache, name=name)


def get_cache(name: str = DEFAULT_CACHE_NAME) -> CacheInterface:
    """Get a registered cache, building it from the global configuration if missing."""
    return _instances.get(name) or create_cache(name=name)


async def close_cache(cache: CacheInterface) -> None:
    """
    Close a cache and unregister every name it is registered under.

    A cache that wasn't built by the factory is just closed.
    """
    names = [name for name, instance in _instances.items() if instance is cache]
    for name in names:
        del _instances[name]

    await cache.close()
    logger.debug("Closed model cache", extra={"cache_names": names})


async def close_all_caches() -> None:
    """
    Close every registered cache and forget it.

    Call on shutdown. A failing close is logged and doesn't stop the others.
    """
    while _instances:
        name, cache = _instances.popitem()
        try:
            await cache.close()
        except Exception as e:
            logger.error(
                "Failed to close model cache '%s': %s",
                name,
                e,
                extra={"cache_name": name, "error": str(e)},
                exc_info=True,
            )
        else:
            logger.debug("Closed model cache '%s'", name)


def reset_cache_factory() -> None:
    """Forget registered caches without closing them (tests only)."""
    _instances.clear()


def list_cache_instances() -> list[str]:
    """Names of the registered caches, in creation order."""
    return list(_instances)
