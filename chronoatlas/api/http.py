"""
HTTP API Routes - historic political entities and events by year and continent.
"""

from fastapi import APIRouter, Depends

from chronoatlas.dependencies import get_orchestrator
from chronoatlas.schemas import EntityRecord, HistoricalQuery
from chronoatlas.services.historic_events_orchestrator import HistoricEventsOrchestrator
from chronoatlas.utils.logger import setup_logger

logger = setup_logger("api")

router = APIRouter()


@router.get("/api/")
async def read_root():
    """API health check endpoint."""
    return {"message": "ChronoAtlas API is running!"}


@router.get("/api/historic-events", response_model=list[EntityRecord])
@router.get("/getHistoricEvents", response_model=list[EntityRecord])
async def get_historic_events(
    year: str | None = None,
    continent: str | None = None,
    orchestrator: HistoricEventsOrchestrator = Depends(get_orchestrator),
):
    """
    Political entities on ``continent`` in ``year`` with their notable events.

    Served from the cache when the same query was answered before; otherwise
    generated by the model and cached. Failures are turned into plain-text
    responses by the application's exception handlers.
    """
    query = HistoricalQuery.from_params(year, continent)
    logger.info(
        f"Historic events requested for year={query.year}, continent={query.continent}"
    )
    return await orchestrator.get_historic_events(query)
