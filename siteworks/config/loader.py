"""
Siteworks - Configuration Loader

Loads and validates configuration from environment variables and .env files.
Provides a singleton configuration instance for the runtime.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigurationError
from .schemas import SiteworksConfig

logger = logging.getLogger(__name__)

_config_instance: SiteworksConfig | None = None


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def load_config(
    env_file: str | None = None,
    reload: bool = False,
) -> SiteworksConfig:
    """
    Load configuration from environment variables and .env file.

    Args:
        env_file: Path to .env file (default: .env in working directory)
        reload: Force reload even if config already loaded

    Returns:
        Validated SiteworksConfig instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    global _config_instance

    if _config_instance is not None and not reload:
        return _config_instance

    if env_file:
        env_path = Path(env_file)
    else:
        env_path = Path.cwd() / ".env"

    if env_path.exists():
        logger.info(f"Loading environment from {env_path}")
        try:
            load_dotenv(env_path, override=True)
        except Exception as e:
            logger.error(
                f"Failed to load .env file from {env_path}: {e}",
                extra={"path": str(env_path), "error": str(e)},
                exc_info=True,
            )
            raise ConfigurationError(
                f"Failed to load environment file: {e}",
                details={"path": str(env_path), "error": str(e)},
            ) from e
    else:
        logger.debug("No .env file found, using environment variables only")

    # Redis is selected automatically when REDIS_URL is set
    redis_url = os.getenv("REDIS_URL")
    cache_backend = "redis" if redis_url else "memory"

    try:
        config_dict = {
            "environment": os.getenv("ENVIRONMENT", "development"),
            "log_level": os.getenv("LOG_LEVEL", "INFO").upper(),
            "log_json": _env_bool("LOG_JSON", "true"),
            "cache_level": os.getenv("CACHE_LEVEL", "full").lower(),
            "cache": {
                "backend": os.getenv("CACHE_BACKEND", cache_backend),
                "ttl_seconds": int(os.getenv("CACHE_TTL_SECONDS", "3600")),
                "max_size": int(os.getenv("CACHE_MAX_SIZE", "1000")),
                "namespace": os.getenv("CACHE_NAMESPACE", "siteworks"),
                "redis_url": redis_url,
                "redis_max_connections": int(os.getenv("REDIS_MAX_CONNECTIONS", "10")),
                "redis_socket_timeout": int(os.getenv("REDIS_SOCKET_TIMEOUT", "5")),
            },
        }
    except ValueError as e:
        logger.error(f"Invalid numeric configuration value: {e}", extra={"error": str(e)})
        raise ConfigurationError(
            f"Invalid numeric configuration value: {e}",
            details={"error": str(e)},
        ) from e

    try:
        _config_instance = SiteworksConfig(**config_dict)  # type: ignore[arg-type]
        logger.info(
            f"Configuration loaded successfully (environment: {_config_instance.environment.value})",
            extra={
                "environment": _config_instance.environment.value,
                "cache_level": _config_instance.cache_level.value,
                "cache_backend": _config_instance.cache.backend.value,
            },
        )
        return _config_instance
    except ValidationError as e:
        logger.error(
            f"Configuration validation failed: {e}",
            extra={"validation_errors": e.errors(), "config_dict_keys": list(config_dict.keys())},
        )
        raise ConfigurationError(
            "Configuration validation failed. Check your environment variables and configuration.",
            details={"validation_errors": e.errors()},
        ) from e


def get_config() -> SiteworksConfig:
    """
    Get the current configuration instance.

    Loads the configuration on first access.

    Returns:
        Current SiteworksConfig instance
    """
    if _config_instance is None:
        return load_config()

    return _config_instance


def reload_config(env_file: str | None = None) -> SiteworksConfig:
    """
    Force reload configuration.

    Args:
        env_file: Optional path to .env file

    Returns:
        Reloaded SiteworksConfig instance
    """
    return load_config(env_file=env_file, reload=True)


def reset_config() -> None:
    """Drop the loaded configuration instance (testing only)."""
    global _config_instance

    _config_instance = None
