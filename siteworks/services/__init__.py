"""
Siteworks - Services
"""

from .site_service import (
    DEFAULT_SITE_KEY,
    SITE_MAPPINGS,
    SiteService,
    content_key,
    internal_id_key,
    site_key,
    sitemap_key,
)

__all__ = [
    "SiteService",
    "SITE_MAPPINGS",
    "DEFAULT_SITE_KEY",
    "site_key",
    "internal_id_key",
    "sitemap_key",
    "content_key",
]
