import time
from typing import Any

import httpx

from chronoatlas.config import settings
from chronoatlas.exceptions import UpstreamCallError
from chronoatlas.services.llm_interface import LLMInterface
from chronoatlas.utils.logger import setup_logger

logger = setup_logger("ollama_client")


class OllamaClient(LLMInterface):
    """
    LLM Client implementation for a local Ollama API.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        default_model: str = settings.default_ollama_model,
        request_timeout: float = settings.llm_timeout_seconds,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.default_model = default_model
        self.request_timeout = request_timeout

        self._client = httpx.AsyncClient(
            base_url=self.base_url, timeout=self.request_timeout, transport=transport
        )
        logger.info(
            f"Ollama client initialized successfully. Base URL: {self.base_url}, Default Model: {self.default_model}, Timeout: {self.request_timeout}s"
        )

    async def generate_text(
        self,
        prompt: str,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> str:
        model_name = self.default_model
        if max_tokens is None:
            max_tokens = settings.llm_default_max_tokens

        payload = {
            "model": model_name,
            "prompt": prompt,
            "stream": False,
            "options": {"temperature": temperature, "num_predict": max_tokens, **kwargs},
        }

        start_time = time.perf_counter()
        try:
            response = await self._client.post("/api/generate", json=payload)
            response.raise_for_status()
            response_json = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Ollama HTTP Status Error for model {model_name}: "
                f"Status {e.response.status_code} - {e.response.text}",
                exc_info=True,
            )
            raise UpstreamCallError(
                f"Ollama returned status {e.response.status_code}",
                details={"model": model_name},
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            duration = time.perf_counter() - start_time
            logger.error(
                f"Ollama request error for model {model_name} after {duration:.4f}s: "
                f"{type(e).__name__}: {e}",
                exc_info=True,
            )
            raise UpstreamCallError(
                f"Ollama request failed: {e}", details={"model": model_name}
            ) from e

        result_text = response_json.get("response") if isinstance(response_json, dict) else None
        if not isinstance(result_text, str):
            logger.error(f"Unexpected Ollama response envelope: {response_json}")
            raise UpstreamCallError(
                "Ollama response contained no text completion",
                details={"model": model_name},
            )

        duration = time.perf_counter() - start_time
        logger.info(
            f"Ollama generate_text completed for model {model_name} in {duration:.4f}s, "
            f"output: {len(result_text)} chars"
        )
        if duration > 30:
            logger.warning(f"Slow Ollama response: {duration:.4f}s")

        return result_text

    async def close(self):
        await self._client.aclose()
        logger.info("Ollama client closed.")
