"""
Entity Resolver - asks the model which political entities existed on a
continent in a given year.
"""

from chronoatlas.exceptions import ParseError
from chronoatlas.prompts import ENTITY_LIST_PROMPT
from chronoatlas.services.llm_interface import LLMInterface
from chronoatlas.utils.json_parser import JSONExtractionError, extract_json_array
from chronoatlas.utils.logger import setup_logger

logger = setup_logger("entity_resolver")


def build_entity_list_prompt(year: int | str, continent: str) -> str:
    return ENTITY_LIST_PROMPT.format(year=year, continent=continent)


def parse_entity_names(response_text: str) -> list[str]:
    """
    Turn the model's free-text answer into an ordered list of entity names.

    The greedy ``[...]`` span is parsed as JSON. Ordering and uniqueness are
    left exactly as the model produced them.
    """
    try:
        entity_names = extract_json_array(response_text)
    except JSONExtractionError as e:
        raise ParseError(
            f"Model returned a malformed JSON array for the entity list: {e}"
        ) from e

    if entity_names is None:
        raise ParseError(
            "Model did not return a JSON array for the entity list.",
            details={"response_preview": (response_text or "")[:200]},
        )
    if not isinstance(entity_names, list):
        raise ParseError(
            f"Entity list must be a JSON array, got {type(entity_names).__name__}."
        )

    return [name if isinstance(name, str) else str(name) for name in entity_names]


class EntityResolver:
    """Resolves (year, continent) into the names of its political entities."""

    def __init__(self, llm_client: LLMInterface, temperature: float = 0.7):
        self.llm_client = llm_client
        self.temperature = temperature

    async def resolve(self, year: int | str, continent: str) -> list[str]:
        """
        One model call; UpstreamCallError from the client and ParseError
        from the response both propagate to the caller.
        """
        prompt = build_entity_list_prompt(year, continent)
        response_text = await self.llm_client.generate_text(
            prompt, temperature=self.temperature
        )
        entity_names = parse_entity_names(response_text)
        logger.info(
            f"Resolved {len(entity_names)} entities for {continent} in {year}"
        )
        return entity_names
