"""
Siteworks - Repositories
"""

from .interface import SiteRepository
from .memory import MemorySiteRepository

__all__ = [
    "SiteRepository",
    "MemorySiteRepository",
]
