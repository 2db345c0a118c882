"""
Siteworks - Configuration Module

Provides typed configuration loading and validation.
"""

from .loader import get_config, load_config, reload_config, reset_config
from .schemas import (
    CacheBackend,
    CacheConfig,
    CacheLevel,
    Environment,
    LogLevel,
    SiteworksConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "get_config",
    "reload_config",
    "reset_config",
    # Main config
    "SiteworksConfig",
    # Enums
    "Environment",
    "CacheBackend",
    "CacheLevel",
    "LogLevel",
    # Config sections
    "CacheConfig",
]
