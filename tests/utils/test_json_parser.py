import pytest

from chronoatlas.utils.json_parser import (
    JSONExtractionError,
    extract_json_array,
    extract_json_object,
    find_json_array_span,
    find_json_object_span,
)


def test_array_span_is_greedy_from_first_to_last_bracket():
    text = 'Sure! ["A", "B"] and also ["C"] done'
    assert find_json_array_span(text) == '["A", "B"] and also ["C"]'


def test_array_inside_markdown_fence_is_found():
    text = '```json\n["Ottoman Empire", "Persia"]\n```'
    assert extract_json_array(text) == ["Ottoman Empire", "Persia"]


def test_array_spanning_multiple_lines():
    text = 'Here you go:\n[\n  "Empire of Japan",\n  "Korea"\n]\nThanks.'
    assert extract_json_array(text) == ["Empire of Japan", "Korea"]


def test_missing_array_returns_none():
    assert extract_json_array("I cannot answer that.") is None
    assert extract_json_array("") is None
    assert extract_json_array(None) is None


def test_unparseable_array_span_raises():
    with pytest.raises(JSONExtractionError):
        extract_json_array("[not, valid json]")


def test_object_with_surrounding_prose():
    text = 'Answer: {"representative_modern_code": "fr", "events": ["Verdun"]} hope it helps'
    assert extract_json_object(text) == {
        "representative_modern_code": "fr",
        "events": ["Verdun"],
    }


def test_object_span_keeps_nested_braces():
    text = '{"a": {"b": 1}}'
    assert find_json_object_span(text) == text
    assert extract_json_object(text) == {"a": {"b": 1}}


def test_missing_object_returns_none():
    assert extract_json_object("not json at all") is None


def test_unparseable_object_span_raises():
    with pytest.raises(JSONExtractionError):
        extract_json_object("{representative_modern_code: in}")
