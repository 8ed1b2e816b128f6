"""
Historic Events Orchestrator - read-through / write-through caching around
the two-stage generation pipeline.

Flow: cache lookup -> (hit) stored payload, or (miss) resolve entities ->
enrich each entity -> store -> payload. Nothing is stored unless the whole
pipeline succeeded.
"""

import time

from pydantic import ValidationError

from chronoatlas.exceptions import StorageError
from chronoatlas.schemas import EntityRecord, HistoricalQuery
from chronoatlas.services.cache_gateway import CacheGateway
from chronoatlas.services.entity_resolver import EntityResolver
from chronoatlas.services.event_enricher import EventEnricher
from chronoatlas.utils.logger import setup_logger

logger = setup_logger("historic_events_orchestrator")


class HistoricEventsOrchestrator:
    """Answers one HistoricalQuery, generating and caching the payload on a miss."""

    def __init__(
        self,
        cache: CacheGateway,
        entity_resolver: EntityResolver,
        event_enricher: EventEnricher,
    ):
        self.cache = cache
        self.entity_resolver = entity_resolver
        self.event_enricher = event_enricher

    async def _lookup(self, cache_key: str) -> list[EntityRecord] | None:
        try:
            cached_payload = await self.cache.get(cache_key)
        except StorageError as e:
            logger.error(f"Cache read failed for {cache_key}, treating as miss: {e}")
            return None
        if cached_payload is None:
            return None
        try:
            return [EntityRecord.model_validate(record) for record in cached_payload]
        except (ValidationError, TypeError) as e:
            # Regenerated on this request and overwritten by the store
            logger.error(f"Malformed cache entry for {cache_key}, treating as miss: {e}")
            return None

    async def _store(self, cache_key: str, records: list[EntityRecord]):
        try:
            await self.cache.put(
                cache_key, [record.model_dump() for record in records]
            )
        except StorageError as e:
            # The computed payload is still returned to the caller
            logger.error(f"Cache write failed for {cache_key}: {e}", exc_info=True)

    async def get_historic_events(self, query: HistoricalQuery) -> list[EntityRecord]:
        cache_key = query.cache_key

        cached_records = await self._lookup(cache_key)
        if cached_records is not None:
            logger.info(f"Cache HIT for: {cache_key}")
            return cached_records

        logger.info(f"Cache MISS for: {cache_key}. Fetching from AI.")
        start_time = time.perf_counter()

        entity_names = await self.entity_resolver.resolve(query.year, query.continent)

        if not entity_names:
            logger.info(f"No entities for {cache_key}; caching empty payload")
            await self._store(cache_key, [])
            return []

        records = await self.event_enricher.enrich_all(entity_names, query.year)

        without_details = sum(
            1 for record in records if record == EntityRecord.degraded(record.name)
        )
        logger.info(
            f"Generated {len(records)} records for {cache_key} in "
            f"{time.perf_counter() - start_time:.2f}s ({without_details} without code or events)"
        )

        await self._store(cache_key, records)
        return records
