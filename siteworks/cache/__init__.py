"""
Siteworks - Cache Module

Model cache with pluggable backends.

- factory.py: creates and tracks cache instances
- interface.py: abstract interface all backends implement
- backends/: memory (always available) and redis (lazy-loaded)

Usage:
    from siteworks.cache import create_cache

    cache = create_cache()
    await cache.set("key", {"title": "value"}, ttl=3600)
    value = await cache.get("key")
"""

from .factory import (
    close_all_caches,
    close_cache,
    create_cache,
    create_model_cache,
    get_cache,
    list_cache_instances,
    reset_cache_factory,
)
from .interface import CacheInterface

__all__ = [
    "create_cache",
    "create_model_cache",
    "get_cache",
    "close_all_caches",
    "close_cache",
    "list_cache_instances",
    "reset_cache_factory",
    "CacheInterface",
]
