"""
Tests for the filter query language: tokenizer, parser and serializer.
"""

from datetime import date, datetime, timezone
from typing import List, Optional

import pytest
from pydantic import BaseModel

from filter_query.codec import ParseResult, deserialize, render_value, serialize_column_filters, tokenize
from filter_query.delimiters import ARRAY_DELIMITER, RANGE_DELIMITER, SLIDER_DELIMITER
from filter_query.fields import DataTableFilterField
from table_schema.models import FilterType


class SearchParams(BaseModel):
    q: Optional[str] = None
    page: int = 1


class StrictParams(BaseModel):
    page: int


FIELDS = [
    DataTableFilterField(label="Level", value="level", type=FilterType.checkbox),
    DataTableFilterField(label="Latency", value="latency", type=FilterType.slider, min=0, max=5000),
    DataTableFilterField(label="Date", value="date", type=FilterType.timerange),
    DataTableFilterField(label="Host", value="host", type=FilterType.input),
    DataTableFilterField(label="Secret", value="secret", type=FilterType.input, command_disabled=True),
]


class TestDelimiters:
    """The separators are a wire contract."""

    def test_values(self):
        assert ARRAY_DELIMITER == "|"
        assert SLIDER_DELIMITER == "~"
        assert RANGE_DELIMITER == "_"


class TestTokenize:
    """Splitting a query into name/value pairs."""

    @pytest.mark.parametrize("text,expected", [
        ("nocolon q:hello page:1", {"q": "hello", "page": "1"}),
        (":orphan q:search page:1", {"q": "search", "page": "1"}),
        ("q:hello q2: page:3", {"q": "hello", "page": "3"}),
        ("  q:a   q:b ", {"q": "b"}),
        ("url:http://example.com", {"url": "http://example.com"}),
        ("", {}),
        (None, {}),
    ])
    def test_tokenize(self, text, expected):
        assert tokenize(text) == expected


class TestDeserialize:
    """Parsing never raises; validation failures are reported."""

    @pytest.mark.parametrize("text,q,page", [
        ("nocolon q:hello page:1", "hello", 1),
        (":orphan q:search page:1", "search", 1),
        ("q:hello q2: page:3", "hello", 3),
        ("", None, 1),
    ])
    def test_parse(self, text, q, page):
        result = deserialize(SearchParams)(text)
        assert isinstance(result, ParseResult)
        assert result.success
        assert result.error is None
        assert result.data.q == q
        assert result.data.page == page

    def test_validation_failure(self):
        result = deserialize(SearchParams)("page:abc")
        assert not result.success
        assert result.data is None
        assert result.error.errors()[0]["loc"] == ("page",)

    def test_missing_required_field(self):
        result = deserialize(StrictParams)("q:hello")
        assert not result.success
        assert result.error.errors()[0]["type"] == "missing"

    def test_delimited_values_pass_through_as_text(self):
        class Levels(BaseModel):
            level: Optional[str] = None

        result = deserialize(Levels)("level:error|warn")
        assert result.data.level == "error|warn"


class TestRenderValue:
    """Scalar and list rendering per filter type."""

    @pytest.mark.parametrize("value,filter_type,expected", [
        (["error", "warn"], FilterType.checkbox, "error|warn"),
        ([0, 500], FilterType.slider, "0~500"),
        ([0.0, 2.5], FilterType.slider, "0~2.5"),
        ([date(2024, 1, 1), date(2024, 1, 31)], FilterType.timerange, "2024-01-01_2024-01-31"),
        ([True, False], FilterType.checkbox, "true|false"),
        (["a", "b"], FilterType.input, "a|b"),
        ("api", FilterType.input, "api"),
        (42, FilterType.input, "42"),
        (1.0, FilterType.input, "1"),
    ])
    def test_render_value(self, value, filter_type, expected):
        assert render_value(value, filter_type) == expected

    def test_datetime_as_unix_ms(self):
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        end = datetime(2024, 1, 31, tzinfo=timezone.utc)
        assert render_value([start, end], FilterType.timerange) == "1704067200000_1706659200000"

    def test_naive_datetime_is_utc(self):
        assert render_value(datetime(2024, 1, 1), FilterType.input) == "1704067200000"


class TestSerializeColumnFilters:
    """Encoding table filter state as a query string."""

    def test_checkbox(self):
        out = serialize_column_filters([{"id": "level", "value": ["error", "warn"]}], FIELDS)
        assert out == "level:error|warn "

    def test_slider(self):
        out = serialize_column_filters([{"id": "latency", "value": [0, 500]}], FIELDS)
        assert out == "latency:0~500 "

    def test_timerange(self):
        out = serialize_column_filters(
            [{"id": "date", "value": [date(2024, 1, 1), date(2024, 1, 31)]}], FIELDS,
        )
        assert out == "date:2024-01-01_2024-01-31 "

    def test_multiple_in_order(self):
        out = serialize_column_filters(
            [
                {"id": "host", "value": "api"},
                {"id": "level", "value": ["error"]},
            ],
            FIELDS,
        )
        assert out == "host:api level:error "

    def test_exclusion_rule(self):
        out = serialize_column_filters(
            [
                {"id": "unknown", "value": "x"},
                {"id": "secret", "value": "hunter2"},
                {"id": "host", "value": None},
                {"id": "host", "value": "api"},
            ],
            FIELDS,
        )
        assert out == "host:api "

    def test_tuple_entries(self):
        assert serialize_column_filters([("host", "api")], FIELDS) == "host:api "

    def test_no_fields(self):
        assert serialize_column_filters([{"id": "host", "value": "api"}]) == ""

    def test_first_matching_field_wins(self):
        fields = [
            DataTableFilterField(label="A", value="x", type=FilterType.slider),
            DataTableFilterField(label="B", value="x", type=FilterType.checkbox),
        ]
        assert serialize_column_filters([{"id": "x", "value": [1, 2]}], fields) == "x:1~2 "

    def test_serialized_query_tokenizes_back(self):
        out = serialize_column_filters(
            [
                {"id": "level", "value": ["error", "warn"]},
                {"id": "latency", "value": [0, 500]},
            ],
            FIELDS,
        )
        assert tokenize(out) == {"level": "error|warn", "latency": "0~500"}
