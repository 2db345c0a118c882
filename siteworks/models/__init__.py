"""
Siteworks - Models

Pydantic models for sites, site content, content types and sitemaps.
"""

from .content import DYNAMIC, STATIC, DynamicSiteContent, SiteContent, SiteContentBase
from .site import NIL_ID, Site, SiteMapping, is_empty_id, split_hostnames
from .site_type import FieldType, RegionType, SiteType
from .sitemap import Sitemap, SitemapItem

__all__ = [
    "NIL_ID",
    "is_empty_id",
    "split_hostnames",
    "Site",
    "SiteMapping",
    "STATIC",
    "DYNAMIC",
    "SiteContentBase",
    "SiteContent",
    "DynamicSiteContent",
    "FieldType",
    "RegionType",
    "SiteType",
    "Sitemap",
    "SitemapItem",
]
