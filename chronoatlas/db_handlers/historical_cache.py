from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from chronoatlas.db import close_db
from chronoatlas.db_handlers.base import BaseDBHandler, check_local_db
from chronoatlas.exceptions import StorageError
from chronoatlas.models import HistoricalCacheEntry
from chronoatlas.services.cache_gateway import CacheGateway, CachedPayload
from chronoatlas.utils.logger import setup_logger

logger = setup_logger("historical_cache_db_handler")


class HistoricalCacheDBHandler(BaseDBHandler, CacheGateway):
    """SQL-backed cache gateway, one row per cache key."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        engine: AsyncEngine | None = None,
    ):
        super().__init__(session_factory)
        self.engine = engine

    @check_local_db
    async def get_entry(
        self, key: str, *, db: AsyncSession = None
    ) -> HistoricalCacheEntry | None:
        stmt = select(HistoricalCacheEntry).where(HistoricalCacheEntry.key == key)
        result = await db.execute(stmt)
        return result.scalars().first()

    @check_local_db
    async def save_entry(
        self, key: str, payload: CachedPayload, *, db: AsyncSession = None
    ) -> HistoricalCacheEntry:
        # merge() keeps a duplicate write for the same key last-writer-wins
        entry = await db.merge(
            HistoricalCacheEntry(
                key=key, payload=payload, created_at=datetime.now(UTC)
            )
        )
        await db.flush()
        return entry

    async def get(self, key: str) -> CachedPayload | None:
        try:
            entry = await self.get_entry(key)
        except (SQLAlchemyError, OSError) as e:
            raise StorageError(
                f"Failed to read cache entry {key}: {e}", details={"key": key}
            ) from e
        if entry is None:
            return None
        return list(entry.payload or [])

    async def put(self, key: str, payload: CachedPayload) -> None:
        try:
            await self.save_entry(key, payload)
        except (SQLAlchemyError, OSError) as e:
            raise StorageError(
                f"Failed to write cache entry {key}: {e}", details={"key": key}
            ) from e
        logger.debug(f"Stored {len(payload)} records under {key}")

    async def close(self):
        if self.engine is not None:
            await close_db(self.engine)
