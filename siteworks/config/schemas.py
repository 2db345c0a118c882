"""
Siteworks - Configuration Schemas

Defines typed configuration models using Pydantic for validation and type safety.
All configuration must be defined here and validated at startup.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Environment(str, Enum):
    """Runtime environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


class CacheBackend(str, Enum):
    """Supported cache backends."""

    MEMORY = "memory"
    REDIS = "redis"


class CacheLevel(str, Enum):
    """
    How much the services cache.

    NONE disables the model cache entirely; any level above it hands
    the configured cache to the services.
    """

    NONE = "none"
    BASIC = "basic"
    FULL = "full"

    @property
    def enabled(self) -> bool:
        return self is not CacheLevel.NONE


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class CacheConfig(BaseModel):
    """Cache configuration."""

    backend: CacheBackend = Field(default=CacheBackend.MEMORY, description="Cache backend to use")
    ttl_seconds: int = Field(default=3600, ge=0, description="Default TTL in seconds (0 = no expiry)")
    max_size: int = Field(default=1000, ge=1, description="Max cache entries (memory backend)")
    namespace: str = Field(default="siteworks", description="Cache key namespace/prefix")

    # Redis-specific settings (only used when backend=redis)
    redis_url: str | None = Field(default=None, description="Redis connection URL")
    redis_max_connections: int = Field(default=10, ge=1, description="Redis connection pool size")
    redis_socket_timeout: int = Field(default=5, ge=1, description="Redis socket timeout in seconds")

    @field_validator("redis_url")
    @classmethod
    def validate_redis_url(cls, v: str | None, info: Any) -> str | None:
        """Ensure redis_url is provided when backend is redis."""
        backend = info.data.get("backend")
        if backend == CacheBackend.REDIS and not v:
            raise ValueError("redis_url is required when cache backend is 'redis'")
        return v


class SiteworksConfig(BaseModel):
    """Root configuration for siteworks."""

    environment: Environment = Field(default=Environment.DEVELOPMENT, description="Runtime environment")
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON log records")

    cache_level: CacheLevel = Field(default=CacheLevel.FULL, description="Model cache level")
    cache: CacheConfig = Field(default_factory=CacheConfig)

    model_config = ConfigDict(validate_assignment=True)
