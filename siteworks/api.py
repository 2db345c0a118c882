"""
Siteworks - Api

Application facade. Wires configuration, the model cache, the site type
registry, lifecycle hooks and the content factory into the services and
owns their shutdown.

Usage:
    api = create_api(MemorySiteRepository())
    site = await api.sites.get_by_hostname("www.example.com")
    await api.close()
"""

import logging

from .cache import CacheInterface, close_cache, create_model_cache
from .config import SiteworksConfig, get_config
from .content import ContentFactory, ContentTypeRegistry
from .hooks import HookRegistry
from .observability import setup_logging
from .repositories import SiteRepository
from .services import SiteService

logger = logging.getLogger(__name__)


class Api:
    """The main application api."""

    def __init__(
        self,
        site_repository: SiteRepository,
        cache: CacheInterface | None = None,
        config: SiteworksConfig | None = None,
        site_types: ContentTypeRegistry | None = None,
        hooks: HookRegistry | None = None,
        factory: ContentFactory | None = None,
    ) -> None:
        """
        Create the api from its collaborators.

        Args:
            site_repository: Site persistence
            cache: Optional model cache shared by the services
            config: Runtime configuration (global config if omitted)
            site_types: Site type registry (a new, empty one if omitted)
            hooks: Hook dispatcher (a new, empty one if omitted)
            factory: Content factory (the default one if omitted)
        """
        self.config = config or get_config()
        self.site_types = site_types or ContentTypeRegistry()
        self.hooks = hooks or HookRegistry()
        self.factory = factory or ContentFactory()
        self._cache = cache

        self.sites = SiteService(
            site_repository,
            self.factory,
            self.site_types,
            self.hooks,
            cache=cache,
            cache_level=self.config.cache_level,
        )

    @property
    def is_cached(self) -> bool:
        """Whether the services use the model cache."""
        return self.sites.is_cached

    async def close(self) -> None:
        """Release the cache and drop it from the cache factory."""
        if self._cache is not None:
            await close_cache(self._cache)
            self._cache = None
            logger.debug("Api closed")


def create_api(
    site_repository: SiteRepository,
    config: SiteworksConfig | None = None,
    site_types: ContentTypeRegistry | None = None,
    hooks: HookRegistry | None = None,
) -> Api:
    """
    Create an api with the cache backend selected by configuration.

    Package logging is configured from `log_level` and `log_json`. No cache
    is created when the cache level is "none".
    """
    config = config or get_config()
    setup_logging(config.log_level.value, config.log_json)
    cache = create_model_cache(config)

    logger.info(
        "Creating api",
        extra={"cache_level": config.cache_level.value, "cache_backend": config.cache.backend.value},
    )
    return Api(site_repository, cache=cache, config=config, site_types=site_types, hooks=hooks)
