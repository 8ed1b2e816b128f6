from chronoatlas.db_handlers.base import BaseDBHandler, check_local_db
from chronoatlas.db_handlers.historical_cache import HistoricalCacheDBHandler

__all__ = [
    "BaseDBHandler",
    "check_local_db",
    "HistoricalCacheDBHandler",
]
