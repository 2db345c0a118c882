"""
Siteworks - Api Integration Tests

Wiring of configuration, cache, registries and services through the
api facade.
"""

import logging
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from siteworks import Api, create_api
from siteworks.cache import close_all_caches, get_cache, list_cache_instances
from siteworks.cache.backends.memory import MemoryCacheBackend
from siteworks.config import CacheLevel, LogLevel, SiteworksConfig
from siteworks.content import ContentTypeRegistry
from siteworks.hooks import HookPoint, HookRegistry
from siteworks.models import DynamicSiteContent, Site, SiteType
from siteworks.observability import JSONFormatter
from siteworks.repositories import MemorySiteRepository


@pytest.fixture(autouse=True)
async def cleanup() -> AsyncGenerator[None, None]:
    yield
    await close_all_caches()


class TestCreateApi:
    async def test_cached_api(self, site_types: ContentTypeRegistry) -> None:
        api = create_api(MemorySiteRepository(), config=SiteworksConfig(), site_types=site_types)

        assert api.is_cached is True
        assert list_cache_instances() == ["default"]
        assert api.site_types is site_types

        site = Site(title="Default", hostnames="example.com")
        await api.sites.save(site)

        loaded = await api.sites.get_by_hostname("example.com")
        assert loaded is not None
        assert loaded.id == site.id

        content = api.sites.create_content(DynamicSiteContent, "CorporateContent")
        assert content is not None
        await api.sites.save_content(site.id, content)
        assert await api.sites.get_content_by_id(site.id) is not None

        await api.close()

    async def test_cache_level_none_creates_no_cache(self) -> None:
        api = create_api(MemorySiteRepository(), config=SiteworksConfig(cache_level=CacheLevel.NONE))

        assert api.is_cached is False
        assert list_cache_instances() == []

        await api.close()

    async def test_uses_global_config(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("REDIS_URL", raising=False)
        monkeypatch.delenv("CACHE_BACKEND", raising=False)
        monkeypatch.setenv("CACHE_LEVEL", "none")

        api = create_api(MemorySiteRepository())

        assert api.config.cache_level == CacheLevel.NONE
        assert api.is_cached is False

    async def test_configures_json_logging(self) -> None:
        create_api(MemorySiteRepository(), config=SiteworksConfig(log_level=LogLevel.WARNING, log_json=True))

        package_logger = logging.getLogger("siteworks")
        assert package_logger.level == logging.WARNING
        assert len(package_logger.handlers) == 1
        assert isinstance(package_logger.handlers[0].formatter, JSONFormatter)

    async def test_configures_plain_logging(self) -> None:
        create_api(MemorySiteRepository(), config=SiteworksConfig(log_level=LogLevel.DEBUG, log_json=False))

        package_logger = logging.getLogger("siteworks")
        assert package_logger.level == logging.DEBUG
        assert not isinstance(package_logger.handlers[0].formatter, JSONFormatter)

    async def test_close_unregisters_cache(self) -> None:
        """A closed api's cache is never handed to the next api."""
        api = create_api(MemorySiteRepository(), config=SiteworksConfig())
        closed = get_cache()

        await api.close()

        assert list_cache_instances() == []

        fresh = create_api(MemorySiteRepository(), config=SiteworksConfig())
        site = Site(title="Default")
        await fresh.sites.save(site)
        await fresh.sites.get_by_id(site.id)

        assert get_cache() is not closed
        assert (await get_cache().get_stats())["size"] > 0
        assert (await closed.get_stats())["size"] == 0

        await fresh.close()

    async def test_close_twice(self) -> None:
        api = create_api(MemorySiteRepository(), config=SiteworksConfig())

        await api.close()
        await api.close()

        assert list_cache_instances() == []

    async def test_hooks_reach_service(self) -> None:
        hooks = HookRegistry()
        saved: list[str] = []
        hooks.register(Site, HookPoint.AFTER_SAVE, lambda site: saved.append(site.title))

        api = create_api(MemorySiteRepository(), config=SiteworksConfig(), hooks=hooks)
        await api.sites.save(Site(title="Default"))

        assert api.hooks is hooks
        assert saved == ["Default"]


class TestApi:
    async def test_defaults(self) -> None:
        api = Api(MemorySiteRepository(), config=SiteworksConfig())

        assert api.is_cached is False
        assert len(api.site_types) == 0
        assert api.sites.create_content(DynamicSiteContent, "Missing") is None

    async def test_explicit_cache(self) -> None:
        cache = MemoryCacheBackend(namespace="api")
        site_types = ContentTypeRegistry([SiteType(id="Blog")])

        api = Api(MemorySiteRepository(), cache=cache, config=SiteworksConfig(), site_types=site_types)
        site = Site(title="Default")
        await api.sites.save(site)
        await api.sites.get_by_id(site.id)

        assert api.is_cached is True
        assert (await cache.get_stats())["size"] > 0
        assert api.sites.create_content(DynamicSiteContent, "Blog") is not None

        await api.close()
