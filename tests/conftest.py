"""
This file contains shared fixtures and configuration for the test suite.

Pytest will automatically discover and use the fixtures defined in this file.
The model is replaced by FakeLLMClient and the cache by the in-memory
gateway, so no test needs network access or a database server.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from chronoatlas.config import Settings
from chronoatlas.services.cache_gateway import InMemoryCacheGateway
from tests.fakes import FakeLLMClient


@pytest.fixture
def test_settings() -> Settings:
    return Settings(cache_backend="memory", enrichment_max_concurrency=1)


@pytest.fixture
def memory_cache() -> InMemoryCacheGateway:
    return InMemoryCacheGateway()


@pytest.fixture
def fake_llm() -> FakeLLMClient:
    return FakeLLMClient(
        entity_list='["British Raj","Qing Dynasty"]',
        events={
            "British Raj": '{"representative_modern_code":"in","events":["Event A"]}',
            "Qing Dynasty": "not json at all",
        },
    )


@pytest.fixture
def app(
    test_settings: Settings,
    fake_llm: FakeLLMClient,
    memory_cache: InMemoryCacheGateway,
) -> FastAPI:
    """
    Create a new application instance wired to the fake model and memory cache.
    """
    from main import create_app

    return create_app(test_settings, llm_client=fake_llm, cache_gateway=memory_cache)


@pytest.fixture
def client(app: FastAPI):
    """
    Test client for making API requests.
    The TestClient handles the application's lifespan events (startup/shutdown).
    """
    with TestClient(app) as c:
        yield c
