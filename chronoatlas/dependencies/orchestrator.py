from fastapi import HTTPException, Request, status

from chronoatlas.config import Settings
from chronoatlas.db import (
    check_db_connection,
    create_db_engine,
    create_session_factory,
    init_db,
)
from chronoatlas.db_handlers import HistoricalCacheDBHandler
from chronoatlas.services.cache_gateway import CacheGateway, InMemoryCacheGateway
from chronoatlas.services.entity_resolver import EntityResolver
from chronoatlas.services.event_enricher import EventEnricher
from chronoatlas.services.historic_events_orchestrator import HistoricEventsOrchestrator
from chronoatlas.services.llm_interface import LLMInterface
from chronoatlas.utils.logger import setup_logger

logger = setup_logger("dependencies")


async def build_cache_gateway(config: Settings) -> CacheGateway:
    """Create the configured cache backend, creating its table when needed."""
    if config.cache_backend == "memory":
        logger.warning("Using in-memory cache; payloads are lost on restart.")
        return InMemoryCacheGateway()

    engine = create_db_engine(config.app_database_url)
    await init_db(engine)
    if not await check_db_connection(engine):
        await engine.dispose()
        raise RuntimeError("Database connection failed.")
    return HistoricalCacheDBHandler(create_session_factory(engine), engine=engine)


def build_orchestrator(
    config: Settings, llm_client: LLMInterface, cache: CacheGateway
) -> HistoricEventsOrchestrator:
    return HistoricEventsOrchestrator(
        cache=cache,
        entity_resolver=EntityResolver(llm_client, temperature=config.llm_temperature),
        event_enricher=EventEnricher(
            llm_client,
            temperature=config.llm_temperature,
            max_concurrency=config.enrichment_max_concurrency,
        ),
    )


def get_orchestrator(request: Request) -> HistoricEventsOrchestrator:
    """FastAPI dependency returning the orchestrator wired at startup."""
    orchestrator = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        logger.critical(
            "Orchestrator requested, but it is not available. This indicates a startup configuration issue."
        )
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Historic events service is not available.",
        )
    return orchestrator
