import pytest

from chronoatlas.services.cache_gateway import InMemoryCacheGateway


@pytest.mark.asyncio
async def test_get_returns_independent_copies(memory_cache):
    await memory_cache.put(
        "1916_Asia",
        [{"name": "Siam", "representative_modern_code": "th", "events": ["e"]}],
    )

    first = await memory_cache.get("1916_Asia")
    first[0]["events"].append("MUTATED")

    assert (await memory_cache.get("1916_Asia"))[0]["events"] == ["e"]


@pytest.mark.asyncio
async def test_put_does_not_keep_caller_references():
    cache = InMemoryCacheGateway()
    payload = [{"name": "Siam", "representative_modern_code": "th", "events": ["e"]}]

    await cache.put("1916_Asia", payload)
    payload[0]["events"].append("MUTATED")
    payload.append({"name": "Persia"})

    assert await cache.get("1916_Asia") == [
        {"name": "Siam", "representative_modern_code": "th", "events": ["e"]}
    ]


@pytest.mark.asyncio
async def test_created_at_is_recorded_for_empty_payload():
    cache = InMemoryCacheGateway()

    await cache.put("1000_Antarctica", [])

    assert "1000_Antarctica" in cache
    assert cache.created_at("1000_Antarctica") is not None
    assert await cache.get("1000_Antarctica") == []
