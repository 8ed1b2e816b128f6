import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chronoatlas.exceptions import QueryValidationError
from chronoatlas.utils.logger import setup_logger

logger = setup_logger("schemas")

UNKNOWN_MODERN_CODE = "xx"


def make_cache_key(year: int | str, continent: str) -> str:
    """
    Build the storage key for a (year, continent) query.

    Spaces in the continent become underscores; case and every other
    character are kept, so "South America" and "South_America" share a key.
    """
    return f"{year}_{continent.replace(' ', '_')}"


class HistoricalQuery(BaseModel):
    """A request for the political map of one continent in one year."""

    year: str
    continent: str

    model_config = ConfigDict(frozen=True)

    @field_validator("year", mode="before")
    @classmethod
    def stringify_year(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @classmethod
    def from_params(
        cls, year: int | str | None, continent: str | None
    ) -> "HistoricalQuery":
        """Build a query from raw request parameters, rejecting missing ones."""
        if year is None or year == "" or not continent:
            raise QueryValidationError(
                "Missing required query parameters 'year' and 'continent'.",
                details={"year": year, "continent": continent},
            )
        return cls(year=year, continent=continent)

    @property
    def cache_key(self) -> str:
        return make_cache_key(self.year, self.continent)


class EntityRecord(BaseModel):
    """One political entity with its flag code and notable events for a year."""

    name: str
    representative_modern_code: str = UNKNOWN_MODERN_CODE
    events: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    @field_validator("representative_modern_code", mode="before")
    @classmethod
    def normalize_modern_code(cls, v: Any) -> str:
        """Lower-case the code; anything unusable becomes the sentinel."""
        if not isinstance(v, str) or not v.strip():
            return UNKNOWN_MODERN_CODE
        return v.strip().lower()

    @field_validator("events", mode="before")
    @classmethod
    def normalize_events(cls, v: Any) -> list[str]:
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        if not isinstance(v, list | tuple):
            logger.debug(f"Discarding non-list events value: {v!r}")
            return []
        events = []
        for item in v:
            if item is None:
                continue
            if isinstance(item, dict | list):
                # Structured items are kept as JSON text
                events.append(json.dumps(item, ensure_ascii=False))
            else:
                events.append(item if isinstance(item, str) else str(item))
        return events

    @classmethod
    def degraded(cls, name: str) -> "EntityRecord":
        """Placeholder record for an entity whose details could not be parsed."""
        return cls(name=name, representative_modern_code=UNKNOWN_MODERN_CODE, events=[])


AggregatePayload = list[EntityRecord]
