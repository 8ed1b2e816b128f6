import time
from typing import Any

from google import genai
from google.genai import types

from chronoatlas.config import settings
from chronoatlas.exceptions import UpstreamCallError
from chronoatlas.services.llm_interface import LLMInterface
from chronoatlas.utils.logger import setup_logger

logger = setup_logger("gemini_client")


class GeminiClient(LLMInterface):
    """
    LLM Client implementation for Google Gemini API.
    """

    def __init__(
        self, api_key: str, default_model: str = settings.default_gemini_model
    ):
        if not api_key:
            logger.error("Gemini API key is required but not provided")
            raise ValueError("Gemini API key is required.")

        self.api_key = api_key
        self.default_model = default_model

        logger.debug(f"Initializing Gemini client with model: {default_model}")

        try:
            self._client = genai.Client(api_key=self.api_key)
            logger.info(
                f"Gemini client initialized successfully with api_key: {self.api_key[:5]}..., model: {self.default_model}"
            )
        except Exception as e:
            logger.error(f"Failed to configure Gemini SDK: {e}", exc_info=True)
            raise

    @staticmethod
    def _text_from_candidates(response: Any) -> str | None:
        """Rebuild the completion from the first candidate when response.text is empty."""
        if not response.candidates:
            logger.error("No candidates found in response, cannot reconstruct text")
            return None

        candidate = response.candidates[0]
        finish_reason = getattr(candidate, "finish_reason", None)
        if finish_reason is not None:
            logger.debug(f"Gemini candidate.finish_reason: {finish_reason}")
            if finish_reason == "MAX_TOKENS":
                logger.warning("Response truncated due to max_tokens limit")
            elif finish_reason == "SAFETY":
                logger.warning("Response blocked due to safety filters")

        if not candidate.content or not candidate.content.parts:
            logger.warning("No parts found in candidate content to reconstruct text")
            return None

        parts_with_text = [
            part.text
            for part in candidate.content.parts
            if getattr(part, "text", None) is not None
        ]
        if not parts_with_text:
            return None
        return "".join(parts_with_text)

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

        prompt_length = len(prompt)
        logger.debug(
            f"generate_text called with prompt length: {prompt_length}, temperature: {temperature}, max_tokens: {max_tokens}"
        )

        start_time = time.perf_counter()
        try:
            response = await self._client.aio.models.generate_content(
                model=model_name,
                contents=[prompt],
                config=types.GenerateContentConfig(
                    temperature=temperature, max_output_tokens=max_tokens, **kwargs
                ),
            )
        except Exception as e:
            duration = time.perf_counter() - start_time
            logger.error(
                f"Gemini API error during text generation for model {model_name} after {duration:.4f}s: "
                f"{type(e).__name__}: {e}",
                exc_info=True,
            )
            raise UpstreamCallError(
                f"Gemini request failed: {e}", details={"model": model_name}
            ) from e

        result_text = response.text
        if result_text is None:
            logger.warning("response.text is None, attempting to reconstruct from parts")
            result_text = self._text_from_candidates(response)

        if result_text is None:
            raise UpstreamCallError(
                "Gemini response contained no text completion",
                details={"model": model_name},
            )

        duration = time.perf_counter() - start_time
        logger.info(
            f"Gemini generate_text completed successfully for model {model_name} in {duration:.4f}s, "
            f"input: {prompt_length} chars, output: {len(result_text)} chars"
        )
        if duration > 30:
            logger.warning(f"Slow API response: {duration:.4f}s for generate_text")

        return result_text
