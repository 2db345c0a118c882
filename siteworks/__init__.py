"""
Siteworks - Site & Content Service Core

Site resolution, sitemaps and site content with a read-through model
cache, lifecycle hooks and typed content initialization.
"""

__version__ = "1.0.0"

from .api import Api, create_api
from .services import SiteService

__all__ = ["Api", "create_api", "SiteService"]
