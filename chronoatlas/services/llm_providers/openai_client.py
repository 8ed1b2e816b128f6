import time
from typing import Any

from openai import AsyncOpenAI, OpenAIError

from chronoatlas.config import settings
from chronoatlas.exceptions import UpstreamCallError
from chronoatlas.services.llm_interface import LLMInterface
from chronoatlas.utils.logger import setup_logger

logger = setup_logger("openai_client")


class OpenAIClient(LLMInterface):
    """
    LLM Client implementation for OpenAI-compatible chat completion APIs.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        default_model: str = settings.default_openai_model,
        request_timeout: float = settings.llm_timeout_seconds,
    ):
        if not api_key:
            logger.error("OpenAI API key is required but not provided")
            raise ValueError("OpenAI API key is required.")

        self.api_key = api_key
        self.base_url = base_url
        self.default_model = default_model

        client_args: dict[str, Any] = {
            "api_key": self.api_key,
            "timeout": request_timeout,
        }
        if self.base_url:
            client_args["base_url"] = self.base_url

        try:
            self._client = AsyncOpenAI(**client_args)
            logger.info(
                f"OpenAI client initialized successfully. Base URL: {self.base_url or 'Default'}, Default Model: {self.default_model}"
            )
        except Exception as e:
            logger.error(f"Failed to initialize OpenAI client: {e}", exc_info=True)
            raise

    async def generate_text(
        self,
        prompt: str,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> str:
        effective_model = self.default_model
        if max_tokens is None:
            max_tokens = settings.llm_default_max_tokens

        prompt_length = len(prompt)
        logger.debug(
            f"generate_text called with prompt length: {prompt_length}, temperature: {temperature}, max_tokens: {max_tokens}, model: {effective_model}"
        )

        start_time = time.perf_counter()
        try:
            response = await self._client.chat.completions.create(
                model=effective_model,
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
                max_tokens=max_tokens,
                **kwargs,
            )
        except OpenAIError as e:
            duration = time.perf_counter() - start_time
            logger.error(
                f"OpenAI API error during text generation for model {effective_model} after {duration:.4f}s: "
                f"{type(e).__name__}: {e}",
                exc_info=True,
            )
            raise UpstreamCallError(
                f"OpenAI request failed: {e}", details={"model": effective_model}
            ) from e

        if not response.choices or response.choices[0].message.content is None:
            logger.error("No text returned in OpenAI chat completion response")
            raise UpstreamCallError(
                "OpenAI response contained no text completion",
                details={"model": effective_model},
            )

        result_text = response.choices[0].message.content
        duration = time.perf_counter() - start_time
        logger.info(
            f"OpenAI generate_text completed successfully for model {effective_model} in {duration:.4f}s, "
            f"input: {prompt_length} chars, output: {len(result_text)} chars"
        )
        if duration > 30:
            logger.warning(f"Slow API response: {duration:.4f}s for generate_text")

        return result_text

    async def close(self):
        await self._client.close()
        logger.info("OpenAI client closed.")
