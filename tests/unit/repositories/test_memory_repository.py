"""
Siteworks - Memory Site Repository Tests
"""

from uuid import uuid4

import pytest

from siteworks.models import DynamicSiteContent, Site, SiteContent, Sitemap, SitemapItem
from siteworks.repositories import MemorySiteRepository


class NewsContent(SiteContent):
    headline: str | None = None
    tags: list[str] | None = None


def _site(title: str, **fields: object) -> Site:
    return Site(id=uuid4(), title=title, **fields)


class TestSites:
    async def test_seeded(self) -> None:
        site = _site("Default", is_default=True)
        repository = MemorySiteRepository([site])

        loaded = await repository.get_by_id(site.id)
        assert loaded == site

    def test_seed_requires_id(self) -> None:
        with pytest.raises(ValueError):
            MemorySiteRepository([Site(title="No id")])

    async def test_reads_return_copies(self) -> None:
        site = _site("Default")
        repository = MemorySiteRepository([site])

        loaded = await repository.get_by_id(site.id)
        assert loaded is not None
        loaded.title = "Changed"

        again = await repository.get_by_id(site.id)
        assert again is not None
        assert again.title == "Default"

    async def test_save_stores_copy_and_stamps_dates(self) -> None:
        repository = MemorySiteRepository()
        site = _site("Default")

        await repository.save(site)
        created = site.created
        site.title = "Changed locally"

        stored = await repository.get_by_id(site.id)
        assert stored is not None
        assert stored.title == "Default"
        assert created is not None
        assert stored.created == created

        await repository.save(site)
        assert site.created == created
        assert site.last_modified is not None
        assert site.last_modified >= created

    async def test_save_requires_id(self) -> None:
        with pytest.raises(ValueError):
            await MemorySiteRepository().save(Site(title="No id"))

    async def test_lookups(self) -> None:
        default = _site("Default", internal_id="Main", is_default=True)
        other = _site("Other", internal_id="Other")
        repository = MemorySiteRepository([default, other])

        assert [s.id for s in await repository.get_all()] == [default.id, other.id]
        assert (await repository.get_by_internal_id("Other")).id == other.id
        assert await repository.get_by_internal_id("Missing") is None
        assert (await repository.get_default()).id == default.id
        assert await repository.get_by_id(uuid4()) is None

    async def test_no_default(self) -> None:
        assert await MemorySiteRepository([_site("Other")]).get_default() is None

    async def test_delete_removes_everything(self) -> None:
        site = _site("Default")
        repository = MemorySiteRepository([site])
        repository.set_sitemap(site.id, Sitemap(site_id=site.id, items=[SitemapItem(id=uuid4(), title="Home")]))
        await repository.save_content(site.id, NewsContent(headline="Hi"))

        await repository.delete(site.id)

        assert await repository.get_by_id(site.id) is None
        assert await repository.get_content_by_id(site.id) is None
        sitemap = await repository.get_sitemap(site.id, only_published=False)
        assert sitemap is not None
        assert sitemap.items == []

    async def test_delete_unknown_is_noop(self) -> None:
        await MemorySiteRepository().delete(uuid4())


class TestContent:
    async def test_typed_round_trip(self) -> None:
        repository = MemorySiteRepository()
        site_id = uuid4()

        await repository.save_content(
            site_id, NewsContent(type_id="News", title="News", headline="Hi", tags=["a", "b"])
        )
        loaded = await repository.get_content_by_id(site_id, NewsContent)

        assert isinstance(loaded, NewsContent)
        assert loaded.id == site_id
        assert loaded.type_id == "News"
        assert loaded.title == "News"
        assert loaded.headline == "Hi"
        assert loaded.tags == ["a", "b"]

    async def test_typed_save_loads_as_dynamic(self) -> None:
        repository = MemorySiteRepository()
        site_id = uuid4()
        await repository.save_content(site_id, NewsContent(type_id="News", headline="Hi"))

        loaded = await repository.get_content_by_id(site_id)

        assert isinstance(loaded, DynamicSiteContent)
        assert loaded.regions == {"headline": "Hi", "tags": None}

    async def test_dynamic_class_loads_as_dynamic(self) -> None:
        repository = MemorySiteRepository()
        site_id = uuid4()
        await repository.save_content(site_id, DynamicSiteContent(type_id="News", regions={"headline": "Hi"}))

        loaded = await repository.get_content_by_id(site_id, DynamicSiteContent)

        assert isinstance(loaded, DynamicSiteContent)
        assert loaded.regions == {"headline": "Hi"}

    async def test_missing(self) -> None:
        assert await MemorySiteRepository().get_content_by_id(uuid4()) is None


class TestSitemaps:
    async def test_missing_sitemap_is_empty(self) -> None:
        site_id = uuid4()

        sitemap = await MemorySiteRepository().get_sitemap(site_id)

        assert sitemap == Sitemap(site_id=site_id)

    async def test_only_published_filters(self) -> None:
        site_id = uuid4()
        repository = MemorySiteRepository()
        repository.set_sitemap(
            site_id,
            Sitemap(site_id=site_id, items=[SitemapItem(id=uuid4(), title="Draft")]),
        )

        published = await repository.get_sitemap(site_id)
        full = await repository.get_sitemap(site_id, only_published=False)

        assert published is not None and published.items == []
        assert full is not None and [i.title for i in full.items] == ["Draft"]
