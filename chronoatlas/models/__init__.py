"""
Database models for the ChronoAtlas payload cache.
"""

from chronoatlas.models.base import Base
from chronoatlas.models.historical_cache import HistoricalCacheEntry

__all__ = [
    "Base",
    "HistoricalCacheEntry",
]
