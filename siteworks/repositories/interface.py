"""
Siteworks - Site Repository Interface

Persistence contract consumed by the site service. Implementations own
storage; they hold no caching or invariant logic and their failures are
propagated by the service unchanged.
"""

from abc import ABC, abstractmethod
from typing import TypeVar, overload
from uuid import UUID

from ..models import DynamicSiteContent, Site, SiteContentBase, Sitemap

T = TypeVar("T", bound=SiteContentBase)


class SiteRepository(ABC):
    """Abstract base class for site persistence."""

    @abstractmethod
    async def get_all(self) -> list[Site]:
        """
        Get all sites.

        Returns:
            Every site, in the repository's enumeration order
        """
        pass

    @abstractmethod
    async def get_by_id(self, id: UUID) -> Site | None:
        """Get the site with the given id, or None."""
        pass

    @abstractmethod
    async def get_by_internal_id(self, internal_id: str) -> Site | None:
        """Get the site with the given internal id, or None."""
        pass

    @abstractmethod
    async def get_default(self) -> Site | None:
        """Get the default site, or None if there is none."""
        pass

    @overload
    async def get_content_by_id(self, id: UUID) -> DynamicSiteContent | None: ...

    @overload
    async def get_content_by_id(self, id: UUID, model_cls: type[T]) -> T | None: ...

    @abstractmethod
    async def get_content_by_id(
        self, id: UUID, model_cls: type[SiteContentBase] | None = None
    ) -> SiteContentBase | None:
        """
        Get the content of the site with the given id.

        Args:
            id: Site id
            model_cls: Content class to load as (DynamicSiteContent if None)

        Returns:
            The content, or None if the site has none
        """
        pass

    @abstractmethod
    async def get_sitemap(self, id: UUID, only_published: bool = True) -> Sitemap | None:
        """
        Get the sitemap of the site with the given id.

        Args:
            id: Site id
            only_published: Leave out pages that aren't published
        """
        pass

    @abstractmethod
    async def save(self, model: Site) -> None:
        """Insert or update the given site."""
        pass

    @abstractmethod
    async def save_content(self, site_id: UUID, model: SiteContentBase) -> None:
        """Insert or update the content of the given site."""
        pass

    @abstractmethod
    async def delete(self, id: UUID) -> None:
        """Delete the site with the given id."""
        pass
