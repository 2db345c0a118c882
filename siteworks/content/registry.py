"""
Siteworks - Content Type Registry

Shared lookup of site types by id. One registry is created at startup,
populated once and injected into the services that need it; it is
read-only for the rest of the process lifetime. `clear()` is the
teardown used by tests and hot reloads.
"""

import logging
from collections.abc import Iterable

from ..models import SiteType

logger = logging.getLogger(__name__)


class ContentTypeRegistry:
    """Registry of SiteType definitions keyed by id."""

    def __init__(self, site_types: Iterable[SiteType] | None = None) -> None:
        self._types: dict[str, SiteType] = {}
        for site_type in site_types or ():
            self.register(site_type)

    def register(self, site_type: SiteType) -> SiteType:
        """
        Register a site type, replacing any definition with the same id.

        Args:
            site_type: The definition to register

        Returns:
            The registered definition
        """
        if site_type.id in self._types:
            logger.warning(
                f"Replacing registered site type: {site_type.id}",
                extra={"type_id": site_type.id},
            )
        self._types[site_type.id] = site_type
        logger.debug(f"Registered site type: {site_type.id}", extra={"type_id": site_type.id})
        return site_type

    def get_by_id(self, type_id: str | None) -> SiteType | None:
        """Get the site type with the given id, or None if it isn't registered."""
        if not type_id:
            return None
        return self._types.get(type_id)

    def remove(self, type_id: str) -> bool:
        return self._types.pop(type_id, None) is not None

    def all(self) -> list[SiteType]:
        return list(self._types.values())

    def clear(self) -> None:
        count = len(self._types)
        self._types.clear()
        logger.debug("Cleared %d site type(s)", count)

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._types

    def __len__(self) -> int:
        return len(self._types)
