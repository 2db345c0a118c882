"""
Sitemap models.
"""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import UUID

from pydantic import BaseModel, Field


class SitemapItem(BaseModel):
    """A page node in the sitemap tree."""

    id: UUID
    parent_id: UUID | None = None
    title: str
    permalink: str | None = None
    published: datetime | None = None
    is_hidden: bool = False
    items: list[SitemapItem] = Field(default_factory=list)

    def is_published(self, now: datetime | None = None) -> bool:
        if self.published is None:
            return False
        now = now or datetime.now(UTC)
        published = self.published
        if published.tzinfo is None:
            published = published.replace(tzinfo=UTC)
        return published <= now


class Sitemap(BaseModel):
    """Hierarchical page structure of a site."""

    site_id: UUID
    items: list[SitemapItem] = Field(default_factory=list)

    def published_only(self, now: datetime | None = None) -> Sitemap:
        """
        Return a copy without unpublished nodes.

        Dropping a node drops its whole subtree.
        """
        now = now or datetime.now(UTC)

        def prune(items: list[SitemapItem]) -> list[SitemapItem]:
            return [
                item.model_copy(update={"items": prune(item.items)}) for item in items if item.is_published(now)
            ]

        return Sitemap(site_id=self.site_id, items=prune(self.items))

    def flatten(self) -> list[SitemapItem]:
        """All nodes in depth-first order."""
        result: list[SitemapItem] = []
        stack = list(reversed(self.items))
        while stack:
            item = stack.pop()
            result.append(item)
            stack.extend(reversed(item.items))
        return result
