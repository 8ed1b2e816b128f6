"""
JSON parsing utilities for extracting structured data from LLM responses.

Models are asked for bare JSON but often wrap it in prose or markdown fences.
Extraction is deliberately loose: the span from the first opening bracket to
the last closing bracket of the requested kind is taken as the candidate.
"""

import json
import re
from typing import Any

_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")
_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


class JSONExtractionError(ValueError):
    """Raised when a bracketed span was found but is not valid JSON."""


def find_json_array_span(text: str | None) -> str | None:
    """Return the greedy ``[...]`` span of ``text``, or None."""
    if not text:
        return None
    match = _ARRAY_PATTERN.search(text)
    return match.group(0) if match else None


def find_json_object_span(text: str | None) -> str | None:
    """Return the greedy ``{...}`` span of ``text``, or None."""
    if not text:
        return None
    match = _OBJECT_PATTERN.search(text)
    return match.group(0) if match else None


def _loads(json_str: str) -> Any:
    try:
        return json.loads(json_str)
    except json.JSONDecodeError as e:
        raise JSONExtractionError(f"Invalid JSON in model response: {e}") from e


def extract_json_array(text: str | None) -> Any | None:
    """
    Extract the bracket-delimited JSON value embedded in ``text``.

    Returns None when the text holds no ``[...]`` span at all and raises
    JSONExtractionError when the span does not parse.
    """
    json_str = find_json_array_span(text)
    if json_str is None:
        return None
    return _loads(json_str)


def extract_json_object(text: str | None) -> Any | None:
    """
    Extract the brace-delimited JSON value embedded in ``text``.

    Returns None when the text holds no ``{...}`` span at all and raises
    JSONExtractionError when the span does not parse.
    """
    json_str = find_json_object_span(text)
    if json_str is None:
        return None
    return _loads(json_str)
