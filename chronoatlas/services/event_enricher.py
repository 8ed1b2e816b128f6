"""
Event Enricher - fetches the flag code and notable events of one entity in
one year.

A response that cannot be read as a JSON object degrades that single entity
to a placeholder record; it never fails the request. Transport failures do.
"""

import asyncio

from pydantic import ValidationError

from chronoatlas.prompts import ENTITY_EVENTS_PROMPT
from chronoatlas.schemas import EntityRecord
from chronoatlas.services.llm_interface import LLMInterface
from chronoatlas.utils.json_parser import JSONExtractionError, extract_json_object
from chronoatlas.utils.logger import setup_logger

logger = setup_logger("event_enricher")


def build_entity_events_prompt(entity_name: str, year: int | str) -> str:
    return ENTITY_EVENTS_PROMPT.format(entity_name=entity_name, year=year)


def parse_entity_record(entity_name: str, response_text: str) -> EntityRecord:
    """Merge the parsed ``{...}`` span into a record, or degrade to the placeholder."""
    try:
        details = extract_json_object(response_text)
    except JSONExtractionError as e:
        logger.warning(f"Degraded record for '{entity_name}': {e}")
        return EntityRecord.degraded(entity_name)

    if details is None:
        logger.warning(
            f"Degraded record for '{entity_name}': no JSON object in model response"
        )
        return EntityRecord.degraded(entity_name)
    if not isinstance(details, dict):
        logger.warning(
            f"Degraded record for '{entity_name}': expected an object, got {type(details).__name__}"
        )
        return EntityRecord.degraded(entity_name)

    try:
        return EntityRecord.model_validate({**details, "name": entity_name})
    except ValidationError as e:
        logger.warning(f"Degraded record for '{entity_name}': {e}")
        return EntityRecord.degraded(entity_name)


class EventEnricher:
    """Builds one EntityRecord per resolved entity name."""

    def __init__(
        self,
        llm_client: LLMInterface,
        temperature: float = 0.7,
        max_concurrency: int = 1,
    ):
        self.llm_client = llm_client
        self.temperature = temperature
        self.max_concurrency = max(1, max_concurrency)

    async def enrich(self, entity_name: str, year: int | str) -> EntityRecord:
        prompt = build_entity_events_prompt(entity_name, year)
        response_text = await self.llm_client.generate_text(
            prompt, temperature=self.temperature
        )
        return parse_entity_record(entity_name, response_text)

    async def enrich_all(
        self, entity_names: list[str], year: int | str
    ) -> list[EntityRecord]:
        """
        Enrich every entity, keeping the input order.

        With ``max_concurrency`` of 1 the calls run strictly one after another.
        Otherwise up to ``max_concurrency`` calls are in flight; the first
        upstream failure cancels the rest and propagates.
        """
        if self.max_concurrency == 1:
            records = []
            for entity_name in entity_names:
                records.append(await self.enrich(entity_name, year))
            return records

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def _bounded(entity_name: str) -> EntityRecord:
            async with semaphore:
                return await self.enrich(entity_name, year)

        tasks = [asyncio.ensure_future(_bounded(name)) for name in entity_names]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
