"""
Siteworks - Memory Site Repository

In-process SiteRepository for tests and local wiring. Every read and
write copies the model so callers never share state with the store,
which is how a real database behaves.
"""

import logging
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from ..models import DynamicSiteContent, Site, SiteContentBase, Sitemap
from .interface import SiteRepository

logger = logging.getLogger(__name__)

_CONTENT_BASE_FIELDS = frozenset(("id", "type_id", "title", "kind"))


class MemorySiteRepository(SiteRepository):
    """Dict-backed site repository."""

    def __init__(self, sites: list[Site] | None = None) -> None:
        self._sites: dict[UUID, Site] = {}
        self._content: dict[UUID, dict[str, Any]] = {}
        self._sitemaps: dict[UUID, Sitemap] = {}

        for site in sites or ():
            if site.id is None:
                raise ValueError("Seeded sites must have an id")
            self._sites[site.id] = site.model_copy(deep=True)

    async def get_all(self) -> list[Site]:
        return [site.model_copy(deep=True) for site in self._sites.values()]

    async def get_by_id(self, id: UUID) -> Site | None:
        site = self._sites.get(id)
        return site.model_copy(deep=True) if site else None

    async def get_by_internal_id(self, internal_id: str) -> Site | None:
        for site in self._sites.values():
            if site.internal_id == internal_id:
                return site.model_copy(deep=True)
        return None

    async def get_default(self) -> Site | None:
        for site in self._sites.values():
            if site.is_default:
                return site.model_copy(deep=True)
        return None

    async def get_content_by_id(
        self, id: UUID, model_cls: type[SiteContentBase] | None = None
    ) -> SiteContentBase | None:
        stored = self._content.get(id)
        if stored is None:
            return None

        base = {"id": id, "type_id": stored["type_id"], "title": stored["title"]}
        regions = stored["regions"]

        if model_cls is None or model_cls is DynamicSiteContent:
            return DynamicSiteContent.model_validate({**base, "regions": dict(regions)})
        return model_cls.model_validate({**base, **regions})

    async def get_sitemap(self, id: UUID, only_published: bool = True) -> Sitemap | None:
        sitemap = self._sitemaps.get(id)
        if sitemap is None:
            return Sitemap(site_id=id)
        return sitemap.published_only() if only_published else sitemap.model_copy(deep=True)

    async def save(self, model: Site) -> None:
        if model.id is None:
            raise ValueError("Site id must be assigned before saving")

        now = datetime.now(UTC)
        existing = self._sites.get(model.id)
        stored = model.model_copy(deep=True)
        stored.created = existing.created if existing and existing.created else (model.created or now)
        stored.last_modified = now
        self._sites[model.id] = stored

        model.created = stored.created
        model.last_modified = stored.last_modified

    async def save_content(self, site_id: UUID, model: SiteContentBase) -> None:
        if isinstance(model, DynamicSiteContent):
            regions = dict(model.model_dump(mode="json")["regions"])
        else:
            regions = model.model_dump(mode="json", exclude=set(_CONTENT_BASE_FIELDS))

        self._content[site_id] = {"type_id": model.type_id, "title": model.title, "regions": regions}

    async def delete(self, id: UUID) -> None:
        self._sites.pop(id, None)
        self._content.pop(id, None)
        self._sitemaps.pop(id, None)

    def set_sitemap(self, site_id: UUID, sitemap: Sitemap) -> None:
        """Store the full (unfiltered) sitemap of a site."""
        self._sitemaps[site_id] = sitemap.model_copy(deep=True)
