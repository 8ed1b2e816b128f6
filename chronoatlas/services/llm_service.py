"""
LLM Service Manager - Centralized management of LLM providers.

Builds Gemini, OpenAI or Ollama clients from settings, caches them per
provider and closes them on shutdown.
"""

from typing import Any

from chronoatlas.config import Settings, settings
from chronoatlas.services.llm_interface import LLMInterface
from chronoatlas.services.llm_providers.gemini_client import GeminiClient
from chronoatlas.services.llm_providers.ollama_client import OllamaClient
from chronoatlas.services.llm_providers.openai_client import OpenAIClient
from chronoatlas.utils.logger import setup_logger

logger = setup_logger("llm_service_manager")

# Client instances cache
_initialized_clients: dict[str, LLMInterface] = {}

# Mapping of provider names to their constructor classes
_client_constructors: dict[str, type[LLMInterface]] = {
    "openai": OpenAIClient,
    "gemini": GeminiClient,
    "ollama": OllamaClient,
}


def _mask(secret: str | None) -> str:
    return secret[:5] + "..." if secret else "None"


def _get_client_config(provider_name: str, config: Settings) -> dict[str, Any]:
    """Constructor arguments for ``provider_name``; missing values are dropped."""
    if provider_name == "openai":
        client_config = {
            "api_key": config.openai_api_key,
            "base_url": config.openai_base_url,
            "default_model": config.default_openai_model,
            "request_timeout": config.llm_timeout_seconds,
        }
        logger.debug(
            f"OpenAI config - base_url: {client_config['base_url']}, model: {client_config['default_model']}, api_key: {_mask(client_config['api_key'])}"
        )
    elif provider_name == "gemini":
        client_config = {
            "api_key": config.gemini_api_key,
            "default_model": config.default_gemini_model,
        }
        logger.debug(
            f"Gemini config - model: {client_config['default_model']}, api_key: {_mask(client_config['api_key'])}"
        )
    elif provider_name == "ollama":
        client_config = {
            "base_url": config.ollama_base_url,
            "default_model": config.default_ollama_model,
            "request_timeout": config.llm_timeout_seconds,
        }
        logger.debug(
            f"Ollama config - base_url: {client_config['base_url']}, model: {client_config['default_model']}"
        )
    else:
        raise ValueError(
            f"Unknown provider name: {provider_name}. Available providers: {list(_client_constructors.keys())}"
        )
    return {k: v for k, v in client_config.items() if v is not None}


def create_llm_client(
    config: Settings = settings, provider_name: str | None = None
) -> LLMInterface:
    """
    Build a new client for ``provider_name`` (default: the configured provider).

    Raises ValueError when the provider is unknown or lacks its credentials.
    """
    provider_name = (provider_name or config.default_llm_provider).lower()
    client_config = _get_client_config(provider_name, config)

    if provider_name in ("openai", "gemini") and not client_config.get("api_key"):
        raise ValueError(
            f"Cannot initialize {provider_name} client: API key missing."
        )

    client = _client_constructors[provider_name](**client_config)
    logger.info(f"{provider_name.capitalize()} client successfully initialized.")
    return client


def get_llm_client(
    provider_name: str | None = None, config: Settings = settings
) -> LLMInterface:
    """Return the shared client for ``provider_name``, creating it on first use."""
    provider_name = (provider_name or config.default_llm_provider).lower()
    client = _initialized_clients.get(provider_name)
    if client:
        logger.debug(f"Returning cached {provider_name} client")
        return client

    client = create_llm_client(config, provider_name)
    _initialized_clients[provider_name] = client
    return client


async def close_all_llm_clients():
    """Close all initialized LLM clients."""
    if not _initialized_clients:
        logger.info("No LLM clients to close.")
        return

    for provider_name, client_instance in _initialized_clients.items():
        try:
            await client_instance.close()
            logger.info(f"{provider_name.capitalize()} client closed successfully.")
        except Exception as e:
            logger.error(f"Error closing {provider_name} client: {e}", exc_info=True)

    _initialized_clients.clear()
