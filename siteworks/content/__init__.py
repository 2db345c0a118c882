"""
Siteworks - Content Types

Registry of site types and the factory that shapes site content by them.
"""

from .factory import FIELD_DEFAULTS, ContentFactory
from .registry import ContentTypeRegistry

__all__ = [
    "ContentFactory",
    "ContentTypeRegistry",
    "FIELD_DEFAULTS",
]
