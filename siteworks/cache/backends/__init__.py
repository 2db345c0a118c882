"""
Siteworks - Cache Backends

Redis backend is lazy-loaded via factory.py so the redis client is only
imported when it is configured.
"""

from .memory import MemoryCacheBackend

__all__ = [
    "MemoryCacheBackend",
]
