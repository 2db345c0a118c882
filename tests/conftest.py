"""
Siteworks - Test Configuration and Shared Fixtures

Provides pytest configuration and shared fixtures for unit and integration tests.
"""

import logging
import os
from collections.abc import Generator

import pytest

from siteworks.cache.backends.memory import MemoryCacheBackend
from siteworks.config import CacheLevel
from siteworks.content import ContentFactory, ContentTypeRegistry
from siteworks.hooks import HookRegistry
from siteworks.models import FieldType, RegionType, SiteType
from siteworks.repositories import MemorySiteRepository
from siteworks.services import SiteService

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "DEBUG"


@pytest.fixture
def test_redis_url() -> str:
    """Get Redis URL for testing (database 15 for isolation)."""
    return os.environ.get("TEST_REDIS_URL", "redis://localhost:6379/15")


@pytest.fixture
def memory_cache() -> MemoryCacheBackend:
    """A fresh memory cache with no expiry."""
    return MemoryCacheBackend(max_size=1000, default_ttl=0, namespace="test")


@pytest.fixture
def corporate_type() -> SiteType:
    """Site type used by the content tests."""
    return SiteType(
        id="CorporateContent",
        title="Corporate",
        regions=[
            RegionType(
                id="header",
                fields=[FieldType(id="title", type="string"), FieldType(id="body", type="html")],
            ),
            RegionType(id="footer_text", fields=[FieldType(id="text", type="text")]),
            RegionType(id="links", collection=True, fields=[FieldType(id="url", type="string")]),
        ],
    )


@pytest.fixture
def site_types(corporate_type: SiteType) -> ContentTypeRegistry:
    return ContentTypeRegistry([corporate_type])


@pytest.fixture
def hooks() -> HookRegistry:
    return HookRegistry()


@pytest.fixture
def repository() -> MemorySiteRepository:
    return MemorySiteRepository()


@pytest.fixture
def service(
    repository: MemorySiteRepository,
    memory_cache: MemoryCacheBackend,
    site_types: ContentTypeRegistry,
    hooks: HookRegistry,
) -> SiteService:
    """Site service with the memory cache enabled."""
    return SiteService(repository, ContentFactory(), site_types, hooks, cache=memory_cache)


@pytest.fixture
def uncached_service(
    repository: MemorySiteRepository,
    memory_cache: MemoryCacheBackend,
    site_types: ContentTypeRegistry,
    hooks: HookRegistry,
) -> SiteService:
    """Site service handed a cache but configured not to use it."""
    return SiteService(
        repository,
        ContentFactory(),
        site_types,
        hooks,
        cache=memory_cache,
        cache_level=CacheLevel.NONE,
    )


@pytest.fixture(autouse=True)
def reset_global_state() -> Generator[None, None, None]:
    """Reset cache factory, config and package logger after each test to prevent state leakage."""
    package_logger = logging.getLogger("siteworks")
    handlers, level = list(package_logger.handlers), package_logger.level

    yield

    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)

    from siteworks.cache.factory import reset_cache_factory
    from siteworks.config import reset_config

    reset_cache_factory()
    reset_config()
