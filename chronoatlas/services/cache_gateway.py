"""
Cache Gateway - keyed storage of generated payloads.

A payload is the JSON-ready list of entity records produced for one
(year, continent) query. Entries are written once and never expire.
"""

import asyncio
import copy
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import Any

from chronoatlas.utils.logger import setup_logger

logger = setup_logger("cache_gateway")

CachedPayload = list[dict[str, Any]]


class CacheGateway(ABC):
    """
    Storage contract used by the orchestrator.

    ``get`` returns None for an unknown key; both methods raise StorageError
    when the underlying store fails.
    """

    @abstractmethod
    async def get(self, key: str) -> CachedPayload | None:
        """Return the payload stored under ``key``, or None."""

    @abstractmethod
    async def put(self, key: str, payload: CachedPayload) -> None:
        """Store ``payload`` under ``key`` with a creation timestamp, replacing any existing entry."""

    async def close(self):
        return


class InMemoryCacheGateway(CacheGateway):
    """Process-local cache for development and tests."""

    def __init__(self):
        self._entries: dict[str, dict[str, Any]] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> CachedPayload | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        return copy.deepcopy(entry["payload"])

    async def put(self, key: str, payload: CachedPayload) -> None:
        async with self._lock:
            self._entries[key] = {
                "payload": copy.deepcopy(payload),
                "created_at": datetime.now(UTC),
            }
        logger.debug(f"Stored {len(payload)} records in memory under {key}")

    def created_at(self, key: str) -> datetime | None:
        entry = self._entries.get(key)
        return entry["created_at"] if entry else None

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
