import pytest

from chronoatlas.exceptions import ParseError, UpstreamCallError
from chronoatlas.services.entity_resolver import (
    EntityResolver,
    build_entity_list_prompt,
    parse_entity_names,
)
from tests.fakes import FakeLLMClient, upstream_failure


def test_prompt_names_year_and_continent():
    prompt = build_entity_list_prompt(1916, "Asia")
    assert "**Asia**" in prompt
    assert "**1916**" in prompt
    assert "must start with '[' and end with ']'" in prompt


def test_parse_keeps_model_order_and_duplicates():
    names = parse_entity_names('["Qing Dynasty", "British Raj", "Qing Dynasty"]')
    assert names == ["Qing Dynasty", "British Raj", "Qing Dynasty"]


def test_parse_tolerates_surrounding_prose():
    text = 'Here is the list:\n["Empire of Japan", "Siam"]\nLet me know!'
    assert parse_entity_names(text) == ["Empire of Japan", "Siam"]


def test_parse_empty_array():
    assert parse_entity_names("[]") == []


def test_parse_without_array_raises():
    with pytest.raises(ParseError, match="did not return a JSON array"):
        parse_entity_names("There were many empires.")


def test_parse_malformed_array_raises():
    with pytest.raises(ParseError):
        parse_entity_names("[British Raj, Qing Dynasty]")


def test_parse_stringifies_non_string_items():
    assert parse_entity_names('["Siam", 42]') == ["Siam", "42"]


@pytest.mark.asyncio
async def test_resolve_makes_one_call():
    llm = FakeLLMClient(entity_list='["British Raj", "Qing Dynasty"]')
    resolver = EntityResolver(llm)

    names = await resolver.resolve("1916", "Asia")

    assert names == ["British Raj", "Qing Dynasty"]
    assert llm.call_count == 1
    assert "**Asia**" in llm.prompts[0]


@pytest.mark.asyncio
async def test_resolve_propagates_upstream_errors():
    resolver = EntityResolver(FakeLLMClient(entity_list=upstream_failure()))
    with pytest.raises(UpstreamCallError):
        await resolver.resolve("1916", "Asia")
