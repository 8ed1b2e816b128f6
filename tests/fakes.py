"""
Test doubles for the generative text provider.

FakeLLMClient answers entity-list and entity-events prompts from canned text
and records every prompt it receives.
"""

import re
from typing import Any

from chronoatlas.exceptions import UpstreamCallError
from chronoatlas.services.llm_interface import LLMInterface

_ENTITY_NAME_PATTERN = re.compile(r'For the historical entity "(.*)" in the year')


class FakeLLMClient(LLMInterface):
    """
    Scripted stand-in for a generative text provider.

    ``entity_list`` answers the entity-list prompt; ``events`` maps an entity
    name to the answer for its events prompt. An Exception instance in
    either place is raised instead of returned.
    """

    def __init__(
        self,
        entity_list: Any = "[]",
        events: dict[str, Any] | None = None,
        default_event: Any = '{"representative_modern_code": "zz", "events": []}',
    ):
        self.entity_list = entity_list
        self.events = events or {}
        self.default_event = default_event
        self.prompts: list[str] = []
        self.closed = False

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    @property
    def entity_calls(self) -> list[str]:
        names = []
        for prompt in self.prompts:
            match = _ENTITY_NAME_PATTERN.search(prompt)
            if match:
                names.append(match.group(1))
        return names

    async def generate_text(
        self,
        prompt: str,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> str:
        self.prompts.append(prompt)
        match = _ENTITY_NAME_PATTERN.search(prompt)
        answer = (
            self.events.get(match.group(1), self.default_event)
            if match
            else self.entity_list
        )
        if isinstance(answer, Exception):
            raise answer
        return answer

    async def close(self):
        self.closed = True


def upstream_failure() -> UpstreamCallError:
    return UpstreamCallError("simulated transport failure")
