"""
Abstract interface for Large Language Model (LLM) services.

Defines the standard interface that all LLM providers must implement
for consistent interaction patterns across different language model services.
"""

from abc import ABC, abstractmethod
from typing import Any


class LLMInterface(ABC):
    """
    Abstract Base Class for Large Language Model services.

    The only contract the rest of the service relies on is prompt in, text
    out. Providers raise UpstreamCallError when the call fails or the
    response carries no text.
    """

    @abstractmethod
    async def generate_text(
        self,
        prompt: str,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> str:
        """Generates text based on a given prompt."""

    async def close(self):
        """
        Optional method to close any underlying connections or clients.
        Providers that don't need explicit closing can have an empty implementation.
        """
        return
