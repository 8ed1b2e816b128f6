"""
LLM Validation Script: Entity resolution and enrichment

This script calls the configured Gemini or OpenAI provider for real to
observe how well the prompts hold up. It is skipped unless that provider's
API key is present.
"""

import pytest

from chronoatlas.config import settings
from chronoatlas.services.entity_resolver import EntityResolver
from chronoatlas.services.event_enricher import EventEnricher
from chronoatlas.services.llm_service import close_all_llm_clients, get_llm_client

_PROVIDER_KEYS = {
    "gemini": settings.gemini_api_key,
    "openai": settings.openai_api_key,
}

pytestmark = pytest.mark.skipif(
    not _PROVIDER_KEYS.get(settings.default_llm_provider.lower()),
    reason="No API key configured for the default LLM provider",
)


@pytest.mark.asyncio
async def test_llm_entity_resolution_and_enrichment():
    """
    Resolves Asia in 1916 and enriches the first few entities, printing the
    result for qualitative review.
    """
    llm_client = get_llm_client()
    try:
        names = await EntityResolver(llm_client).resolve(1916, "Asia")
        print(f"\nResolved {len(names)} entities: {names}")
        assert names, "Asia in 1916 should have at least one political entity."

        records = await EventEnricher(llm_client).enrich_all(names[:3], 1916)
        print("\n" + "=" * 25 + " LLM Enrichment Results " + "=" * 25)
        for record in records:
            print(
                f"- {record.name} [{record.representative_modern_code}]: {record.events}"
            )

        assert [record.name for record in records] == names[:3]
        assert all(
            len(record.representative_modern_code) == 2 for record in records
        )
    finally:
        await close_all_llm_clients()
