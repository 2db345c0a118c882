"""
Siteworks - Sitemap Model Tests
"""

from datetime import UTC, datetime
from uuid import uuid4

from siteworks.models import Site, SiteMapping, Sitemap, SitemapItem, split_hostnames

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


def _item(title: str, published: datetime | None, *children: SitemapItem) -> SitemapItem:
    return SitemapItem(id=uuid4(), title=title, published=published, items=list(children))


class TestSitemapItem:
    def test_unpublished(self) -> None:
        assert _item("Draft", None).is_published(NOW) is False

    def test_published_in_past(self) -> None:
        assert _item("Page", datetime(2024, 1, 1, tzinfo=UTC)).is_published(NOW) is True

    def test_published_at_now(self) -> None:
        assert _item("Page", NOW).is_published(NOW) is True

    def test_scheduled(self) -> None:
        assert _item("Page", datetime(2025, 1, 1, tzinfo=UTC)).is_published(NOW) is False

    def test_naive_dates_are_utc(self) -> None:
        assert _item("Page", datetime(2024, 6, 1, 11, 59)).is_published(NOW) is True
        assert _item("Page", datetime(2024, 6, 1, 12, 1)).is_published(NOW) is False


class TestSitemap:
    def test_published_only_prunes_subtrees(self) -> None:
        past = datetime(2024, 1, 1, tzinfo=UTC)
        sitemap = Sitemap(
            site_id=uuid4(),
            items=[
                _item("Home", past, _item("About", past), _item("Hidden parent", None, _item("Child", past))),
                _item("Draft", None),
            ],
        )

        published = sitemap.published_only(NOW)

        assert [i.title for i in published.flatten()] == ["Home", "About"]
        # The source tree is untouched
        assert len(sitemap.flatten()) == 5

    def test_flatten_is_depth_first(self) -> None:
        sitemap = Sitemap(
            site_id=uuid4(),
            items=[
                _item("A", None, _item("A1", None, _item("A1a", None)), _item("A2", None)),
                _item("B", None),
            ],
        )

        assert [i.title for i in sitemap.flatten()] == ["A", "A1", "A1a", "A2", "B"]

    def test_json_round_trip_keeps_tree(self) -> None:
        sitemap = Sitemap(site_id=uuid4(), items=[_item("Home", NOW, _item("About", NOW))])

        restored = Sitemap.model_validate(sitemap.model_dump(mode="json"))

        assert restored == sitemap


class TestHostnames:
    def test_split_hostnames(self) -> None:
        assert split_hostnames(" Example.com,WWW.example.com ") == ["example.com", "www.example.com"]
        assert split_hostnames(None) == []
        assert split_hostnames("") == []

    def test_site_hostname_list(self) -> None:
        assert Site(title="Default", hostnames="a.com, b.com").hostname_list() == ["a.com", "b.com"]

    def test_mapping_matches_exactly(self) -> None:
        mapping = SiteMapping(id=uuid4(), hostnames="example.com")

        assert mapping.matches("example.com") is True
        assert mapping.matches("www.example.com") is False
        # The lookup side is not normalized
        assert mapping.matches("EXAMPLE.COM") is False
