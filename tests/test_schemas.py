import pytest

from chronoatlas.exceptions import QueryValidationError
from chronoatlas.schemas import (
    UNKNOWN_MODERN_CODE,
    EntityRecord,
    HistoricalQuery,
    make_cache_key,
)


class TestCacheKey:
    def test_year_and_continent_joined_with_underscore(self):
        assert make_cache_key(1916, "Asia") == "1916_Asia"

    def test_spaces_become_underscores(self):
        assert make_cache_key("1916", "South America") == "1916_South_America"

    def test_space_and_underscore_forms_share_a_key(self):
        assert make_cache_key(1916, "South America") == make_cache_key(
            1916, "South_America"
        )

    def test_case_is_preserved(self):
        assert make_cache_key(1916, "south america") == "1916_south_america"
        assert make_cache_key(1916, "south america") != make_cache_key(
            1916, "South America"
        )

    def test_every_space_is_replaced(self):
        assert make_cache_key(-500, "North  Africa ") == "-500_North__Africa_"

    def test_integer_and_string_year_match(self):
        assert make_cache_key(1916, "Europe") == make_cache_key("1916", "Europe")


class TestHistoricalQuery:
    def test_from_params(self):
        query = HistoricalQuery.from_params("1916", "South America")
        assert query.year == "1916"
        assert query.continent == "South America"
        assert query.cache_key == "1916_South_America"

    def test_integer_year_is_stringified(self):
        assert HistoricalQuery(year=1916, continent="Asia").year == "1916"

    @pytest.mark.parametrize(
        "year, continent",
        [(None, "Asia"), ("", "Asia"), ("1916", None), ("1916", ""), (None, None)],
    )
    def test_missing_parameters_are_rejected(self, year, continent):
        with pytest.raises(QueryValidationError) as exc_info:
            HistoricalQuery.from_params(year, continent)
        assert exc_info.value.status_code == 400


class TestEntityRecord:
    def test_degraded_record(self):
        record = EntityRecord.degraded("Qing Dynasty")
        assert record.model_dump() == {
            "name": "Qing Dynasty",
            "representative_modern_code": "xx",
            "events": [],
        }

    def test_missing_fields_get_defaults(self):
        record = EntityRecord.model_validate({"name": "Persia"})
        assert record.representative_modern_code == UNKNOWN_MODERN_CODE
        assert record.events == []

    def test_null_events_become_empty_list(self):
        record = EntityRecord.model_validate(
            {"name": "Persia", "representative_modern_code": "ir", "events": None}
        )
        assert record.events == []

    def test_code_is_lowercased(self):
        record = EntityRecord.model_validate(
            {"name": "British Raj", "representative_modern_code": " IN "}
        )
        assert record.representative_modern_code == "in"

    def test_non_string_code_falls_back_to_sentinel(self):
        record = EntityRecord.model_validate(
            {"name": "Siam", "representative_modern_code": None}
        )
        assert record.representative_modern_code == UNKNOWN_MODERN_CODE

    def test_extra_keys_are_dropped(self):
        record = EntityRecord.model_validate(
            {"name": "Siam", "representative_modern_code": "th", "capital": "Bangkok"}
        )
        assert "capital" not in record.model_dump()

    def test_non_string_events_are_stringified(self):
        record = EntityRecord.model_validate(
            {"name": "Siam", "events": ["Joined the war", 1917]}
        )
        assert record.events == ["Joined the war", "1917"]

    def test_structured_events_are_serialized_as_json(self):
        record = EntityRecord.model_validate(
            {
                "name": "Siam",
                "events": [{"date": "1917", "event": "Joins WWI"}, ["a", "b"], None],
            }
        )
        assert record.events == [
            '{"date": "1917", "event": "Joins WWI"}',
            '["a", "b"]',
        ]
