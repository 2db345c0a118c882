"""
Siteworks - Site Service

Mediates between the site repository and the application:

- read-through caching of sites under several keys at once (id,
  internal id, default-site sentinel) so every lookup pattern can hit
- hostname resolution through a cached `{id, hostnames}` projection
- published-only sitemap caching
- the write path: validation, internal id derivation and uniqueness,
  the single-default invariant, lifecycle hooks and cache invalidation

Cache keys (shared with other services, must not change):

    {id}                    site by id
    SiteId_{internal_id}    site id by internal id
    Site_{NIL_ID}           the default site
    Site_Mappings           hostname projection of all sites
    Sitemap_{id}            published-only sitemap
    SiteContent_{id}        typed site content

No locking is done here. Two concurrent saves that both claim the
default can both persist as default; the next save reconciles it.
"""

import logging
from datetime import UTC, datetime
from typing import Any, TypeVar, cast, overload
from uuid import UUID, uuid4

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..cache import CacheInterface
from ..config import CacheLevel
from ..content import ContentFactory, ContentTypeRegistry
from ..errors import UniquenessError, ValidationError
from ..hooks import HookRegistry
from ..models import (
    NIL_ID,
    DynamicSiteContent,
    Site,
    SiteContentBase,
    SiteMapping,
    Sitemap,
    is_empty_id,
)
from ..repositories import SiteRepository
from ..utils import generate_internal_id

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)
T = TypeVar("T", bound=SiteContentBase)

SITE_MAPPINGS = "Site_Mappings"
DEFAULT_SITE_KEY = f"Site_{NIL_ID}"
INTERNAL_ID_MAX_LENGTH = 64


def site_key(id: UUID) -> str:
    return str(id)


def internal_id_key(internal_id: str | None) -> str:
    return f"SiteId_{internal_id}"


def sitemap_key(id: UUID) -> str:
    return f"Sitemap_{id}"


def content_key(id: UUID) -> str:
    return f"SiteContent_{id}"


class SiteService:
    """Site access with caching, validation and lifecycle hooks."""

    def __init__(
        self,
        repo: SiteRepository,
        factory: ContentFactory,
        site_types: ContentTypeRegistry,
        hooks: HookRegistry,
        cache: CacheInterface | None = None,
        cache_level: CacheLevel = CacheLevel.FULL,
    ) -> None:
        """
        Initialize the service.

        Args:
            repo: Site repository
            factory: Factory used to initialize site content
            site_types: Registry of site types
            hooks: Lifecycle hook dispatcher
            cache: Optional model cache
            cache_level: Configured cache level; NONE disables the cache
                even when one is supplied
        """
        self._repo = repo
        self._factory = factory
        self._site_types = site_types
        self._hooks = hooks

        # Decided once; every cache access below branches on is_cached
        self.is_cached = cache is not None and CacheLevel(cache_level).enabled
        self._cache = cache if self.is_cached else None

        logger.debug(
            "Site service created",
            extra={"cached": self.is_cached, "cache_level": CacheLevel(cache_level).value},
        )

    # ------------ Reads ------------

    async def get_all(self) -> list[Site]:
        """Get all sites."""
        return await self._repo.get_all()

    async def get_by_id(self, id: UUID) -> Site | None:
        """
        Get the site with the given id.

        Args:
            id: The unique id

        Returns:
            The site, or None if it doesn't exist
        """
        model = await self._cache_get_model(Site, site_key(id))

        if model is None:
            model = await self._repo.get_by_id(id)
            await self._on_load(model)
        return model

    async def get_by_internal_id(self, internal_id: str) -> Site | None:
        """
        Get the site with the given internal id.

        A cached internal id resolves through get_by_id so the site
        itself is still served from its primary key.
        """
        cached_id = await self._cache_get(internal_id_key(internal_id))

        if cached_id is not None:
            return await self.get_by_id(UUID(str(cached_id)))

        model = await self._repo.get_by_internal_id(internal_id)
        await self._on_load(model)
        return model

    async def get_by_hostname(self, hostname: str) -> Site | None:
        """
        Get the site answering to the given hostname.

        Stored hostnames are trimmed and lowercased before comparison;
        the given hostname is compared as is. When several sites list
        the same hostname the first in repository order wins.

        Args:
            hostname: Normalized hostname, e.g. "www.example.com"

        Returns:
            The site, or None if no site lists the hostname
        """
        mappings = await self._get_mappings()

        for mapping in mappings:
            if mapping.matches(hostname):
                return await self.get_by_id(mapping.id)

        logger.debug("No site found for hostname", extra={"hostname": hostname})
        return None

    async def get_default(self) -> Site | None:
        """Get the default site, or None if there is none."""
        model = await self._cache_get_model(Site, DEFAULT_SITE_KEY)

        if model is None:
            model = await self._repo.get_default()
            await self._on_load(model)
        return model

    @overload
    async def get_content_by_id(self, id: UUID) -> DynamicSiteContent | None: ...

    @overload
    async def get_content_by_id(self, id: UUID, model_cls: type[T]) -> T | None: ...

    async def get_content_by_id(
        self, id: UUID, model_cls: type[SiteContentBase] | None = None
    ) -> SiteContentBase | None:
        """
        Get the content of the site with the given id.

        Without a model class the content is loaded as DynamicSiteContent
        and never cached, because the cache entry holds the typed shape.

        Args:
            id: Site id
            model_cls: Content class to load as

        Returns:
            The initialized content, or None if the site has none
        """
        if model_cls is None:
            dynamic = await self._repo.get_content_by_id(id)
            self._init_content(dynamic)
            return dynamic

        model = await self._cache_get_model(model_cls, content_key(id))

        if model is None:
            model = await self._repo.get_content_by_id(id, model_cls)
            self._init_content(model)
            if model is not None:
                await self._cache_set(content_key(id), model.model_dump(mode="json"))
        return model

    async def get_sitemap(self, id: UUID | None = None, only_published: bool = True) -> Sitemap | None:
        """
        Get the hierarchical sitemap of a site.

        Only the published-only sitemap is cached; sitemaps that include
        unpublished pages are always read from the repository and never
        stored, so drafts can't leak through the shared cache entry.

        Args:
            id: Site id; the default site is used when omitted
            only_published: Leave out unpublished pages

        Returns:
            The sitemap, or None if no id was given and there is no default site
        """
        if id is None:
            site = await self.get_default()
            if site is None or site.id is None:
                return None
            id = site.id

        use_cache = only_published and self.is_cached

        if use_cache:
            sitemap = await self._cache_get_model(Sitemap, sitemap_key(id))
            if sitemap is not None:
                return sitemap

        sitemap = await self._repo.get_sitemap(id, only_published)

        if use_cache and sitemap is not None:
            await self._cache_set(sitemap_key(id), sitemap.model_dump(mode="json"))
        return sitemap

    # ------------ Writes ------------

    async def save(self, model: Site) -> None:
        """
        Add or update the given site.

        Raises:
            ValidationError: If the site breaks a field rule
            UniquenessError: If another site already has its internal id
        """
        if is_empty_id(model.id):
            model.id = uuid4()
        site_id = cast(UUID, model.id)

        self._validate(model)

        if not model.internal_id or not model.internal_id.strip():
            model.internal_id = generate_internal_id(model.title)[:INTERNAL_ID_MAX_LENGTH]
            if not model.internal_id:
                raise ValidationError(
                    "The internal_id field could not be derived from the title",
                    details={"field": "internal_id", "title": model.title},
                )

        owner = await self._repo.get_by_internal_id(model.internal_id)
        if owner is not None and owner.id != site_id:
            logger.warning(
                "Rejected site with duplicate internal id",
                extra={"site_id": str(site_id), "internal_id": model.internal_id, "owner_id": str(owner.id)},
            )
            raise UniquenessError("internal_id", model.internal_id, str(owner.id))

        # Keys of the persisted version go stale too, e.g. a renamed internal id
        previous = await self._repo.get_by_id(site_id) if self.is_cached else None

        demoted: Site | None = None
        if model.is_default:
            current = await self.get_default()

            if current is not None and current.id != site_id:
                current.is_default = False
                await self._repo.save(current)
                demoted = current
                logger.info(
                    "Demoted previous default site",
                    extra={"site_id": str(current.id), "new_default_id": str(site_id)},
                )
        else:
            current = await self._repo.get_default()
            if current is None or current.id == site_id:
                model.is_default = True

        self._hooks.on_before_save(Site, model)
        await self._repo.save(model)
        self._hooks.on_after_save(Site, model)

        logger.info(
            "Saved site",
            extra={"site_id": str(site_id), "internal_id": model.internal_id, "is_default": model.is_default},
        )

        await self._remove_from_cache(model, previous, demoted)

    async def save_content(self, site_id: UUID, model: SiteContentBase) -> None:
        """
        Save the given content to the site with the given id.

        The model's id is overwritten with the site id.

        Raises:
            ValidationError: If the site id is empty or the content breaks a field rule
        """
        if model.id != site_id:
            model.id = site_id
        if is_empty_id(model.id):
            raise ValidationError("The id field is required for this operation", details={"field": "id"})

        self._validate(model)

        self._hooks.on_before_save(SiteContentBase, model)
        await self._repo.save_content(site_id, model)
        self._hooks.on_after_save(SiteContentBase, model)

        logger.info("Saved site content", extra={"site_id": str(site_id), "type_id": model.type_id})

        await self._cache_remove(content_key(site_id))

    def create_content(self, model_cls: type[T], type_id: str | None = None) -> T | None:
        """
        Create and initialize new site content of the given class.

        Args:
            model_cls: SiteContent subclass or DynamicSiteContent
            type_id: Site type id, defaults to the class name

        Returns:
            The content, or None if the site type isn't registered
        """
        if not type_id:
            type_id = model_cls.__name__

        site_type = self._site_types.get_by_id(type_id)

        if site_type is None:
            logger.debug("Site type not registered", extra={"type_id": type_id})
            return None
        return self._factory.create(model_cls, site_type)

    async def invalidate_sitemap(self, id: UUID, update_last_modified: bool = True) -> None:
        """
        Drop the cached sitemap of the given site.

        Args:
            id: Site id
            update_last_modified: Stamp the site's content_last_modified
                and save it before dropping the sitemap
        """
        if update_last_modified:
            site = await self.get_by_id(id)

            if site is not None:
                site.content_last_modified = datetime.now(UTC)
                await self.save(site)

        await self._cache_remove(sitemap_key(id))
        logger.info("Invalidated sitemap", extra={"site_id": str(id)})

    async def delete(self, model: Site | UUID) -> None:
        """
        Delete the given site, or the site with the given id.

        Deleting an id that doesn't exist is a no-op.
        """
        if isinstance(model, UUID):
            site = await self.get_by_id(model)
            if site is None:
                return
            model = site

        self._hooks.on_before_delete(Site, model)
        await self._repo.delete(cast(UUID, model.id))
        self._hooks.on_after_delete(Site, model)

        logger.info("Deleted site", extra={"site_id": str(model.id), "internal_id": model.internal_id})

        await self._remove_from_cache(model)

    # ------------ Internals ------------

    def _validate(self, model: BaseModel) -> None:
        """Re-run the declared field rules, which plain attribute assignment bypasses."""
        try:
            type(model).model_validate(model.model_dump())
        except PydanticValidationError as e:
            error = ValidationError.from_pydantic(type(model).__name__, e)
            logger.warning(
                error.message,
                extra={"validation_errors": error.details["validation_errors"]},
            )
            raise error from e

    async def _get_mappings(self) -> list[SiteMapping]:
        if self.is_cached:
            cached = await self._cache_get(SITE_MAPPINGS)
            if cached is not None:
                try:
                    return [SiteMapping.model_validate(item) for item in cached]
                except PydanticValidationError:
                    logger.warning("Discarding unreadable cache entry", extra={"key": SITE_MAPPINGS})

        sites = await self.get_all()
        mappings = [
            SiteMapping(id=site.id, hostnames=site.hostnames)
            for site in sites
            if site.hostnames is not None and site.id is not None
        ]

        if self.is_cached:
            await self._cache_set(SITE_MAPPINGS, [m.model_dump(mode="json") for m in mappings])
        return mappings

    async def _on_load(self, model: Site | None) -> None:
        """Run load hooks and cache a site under every key it is looked up by."""
        if model is None:
            return

        self._hooks.on_load(Site, model)

        if self.is_cached:
            data = model.model_dump(mode="json")
            entries: dict[str, Any] = {site_key(cast(UUID, model.id)): data}
            if model.internal_id:
                entries[internal_id_key(model.internal_id)] = str(model.id)
            if model.is_default:
                entries[DEFAULT_SITE_KEY] = data
            await cast(CacheInterface, self._cache).set_many(entries)

    def _init_content(self, model: SiteContentBase | None) -> None:
        if model is None:
            return

        self._factory.initialize(model, self._site_types.get_by_id(model.type_id))
        self._hooks.on_load(SiteContentBase, model)

    async def _remove_from_cache(self, *models: Site | None) -> None:
        if not self.is_cached:
            return

        keys: list[str] = []
        for model in models:
            if model is None:
                continue
            keys.append(site_key(cast(UUID, model.id)))
            if model.internal_id:
                keys.append(internal_id_key(model.internal_id))
            if model.is_default:
                keys.append(DEFAULT_SITE_KEY)
        # Any site's hostnames may have changed
        keys.append(SITE_MAPPINGS)

        await cast(CacheInterface, self._cache).remove_many(list(dict.fromkeys(keys)))

    async def _cache_get(self, key: str) -> Any | None:
        if not self.is_cached:
            return None

        value = await cast(CacheInterface, self._cache).get(key)
        logger.debug("Cache %s: %s", "hit" if value is not None else "miss", key)
        return value

    async def _cache_get_model(self, model_cls: type[M], key: str) -> M | None:
        data = await self._cache_get(key)
        if data is None:
            return None

        try:
            return model_cls.model_validate(data)
        except PydanticValidationError:
            # Written by an older model version; treat as a miss
            logger.warning("Discarding unreadable cache entry", extra={"key": key})
            await self._cache_remove(key)
            return None

    async def _cache_set(self, key: str, value: Any) -> None:
        if self.is_cached:
            await cast(CacheInterface, self._cache).set(key, value)

    async def _cache_remove(self, key: str) -> None:
        if self.is_cached:
            await cast(CacheInterface, self._cache).remove(key)
