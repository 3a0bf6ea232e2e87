"""
Tests for schema inference from sample records and DataFrames.
"""

from datetime import date, datetime, timezone

import numpy as np
import pandas as pd
import pytest

from table_schema.infer import (
    ENUM_MAX_DISTINCT,
    collect_values,
    infer_column,
    infer_schema_from_dataframe,
    infer_schema_from_json,
    is_iso8601,
    is_unix_ms,
)
from table_schema.schema import TableSchema
from table_schema.utils import key_to_label


def _column(records, key):
    for column in infer_schema_from_json(records).to_dict()["columns"]:
        if column["key"] == key:
            return column
    raise AssertionError(f"no column {key!r}")


class TestKeyToLabel:
    """Display labels derived from keys."""

    @pytest.mark.parametrize("key,expected", [
        ("host", "Host"),
        ("trace_id", "Trace id"),
        ("statusCode", "Status Code"),
        ("http_statusCode", "Http status Code"),
        ("", ""),
    ])
    def test_key_to_label(self, key, expected):
        assert key_to_label(key) == expected


class TestPredicates:
    """Timestamp detection helpers."""

    @pytest.mark.parametrize("value,expected", [
        ("2024-01-15", True),
        ("2024-01-15T10:30:00Z", True),
        ("2024-01-15T10:30:00.123+02:00", True),
        ("2024-13-40", False),
        ("15/01/2024", False),
        ("2024-01-15 extra", False),
    ])
    def test_is_iso8601(self, value, expected):
        assert is_iso8601(value) is expected

    @pytest.mark.parametrize("value,expected", [
        (1_704_067_200_000, True),
        (1_000_000_000_000, True),
        (9_999_999_999_999, True),
        (999_999_999_999, False),
        (10_000_000_000_000, False),
        (1_704_067_200_000.5, False),
        (True, False),
        ("1704067200000", False),
    ])
    def test_is_unix_ms(self, value, expected):
        assert is_unix_ms(value) is expected


class TestClassification:
    """Rule precedence for a single key."""

    def test_all_null_is_string_input(self):
        column = infer_column("x", [None, None]).model_dump(by_alias=True)
        assert column["dataType"] == "string"
        assert column["filter"]["type"] == "input"

    def test_iso_strings_are_timestamps(self):
        column = _column([{"date": "2024-01-01"}, {"date": "2024-02-01T00:00:00Z"}], "date")
        assert column["dataType"] == "timestamp"
        assert column["display"] == {"type": "timestamp"}
        assert column["filter"]["type"] == "timerange"

    def test_invalid_iso_falls_through(self):
        column = _column([{"date": "2024-13-40"}], "date")
        assert column["dataType"] == "enum"

    def test_datetime_objects_are_timestamps(self):
        records = [
            {"at": datetime(2024, 1, 1, tzinfo=timezone.utc)},
            {"at": date(2024, 1, 2)},
        ]
        assert _column(records, "at")["dataType"] == "timestamp"

    def test_unix_ms_is_timestamp(self):
        column = _column([{"ts": 1_704_067_200_000}, {"ts": 1_706_659_200_000}], "ts")
        assert column["dataType"] == "timestamp"
        assert column["filter"] == {"type": "timerange", "defaultOpen": False, "commandDisabled": False}

    def test_booleans(self):
        column = _column([{"ok": True}, {"ok": False}, {"ok": None}], "ok")
        assert column["dataType"] == "boolean"
        assert column["display"] == {"type": "boolean"}
        assert column["filter"]["type"] == "checkbox"

    def test_booleans_are_not_numbers(self):
        column = _column([{"v": True}, {"v": 1}], "v")
        assert column["dataType"] == "string"
        assert column["filter"]["type"] == "input"

    def test_constant_number_gets_input_filter(self):
        column = _column([{"n": 5}, {"n": 5}], "n")
        assert column["dataType"] == "number"
        assert column["filter"] == {"type": "input", "defaultOpen": False, "commandDisabled": False}

    def test_number_range_gets_slider(self):
        column = _column([{"n": 5}, {"n": 10}, {"n": 7}], "n")
        assert column["filter"] == {
            "type": "slider",
            "defaultOpen": False,
            "commandDisabled": False,
            "min": 5,
            "max": 10,
        }

    def test_array_of_strings(self):
        column = _column([{"tags": ["api", "db"]}, {"tags": ["api", "cache"]}], "tags")
        assert column["dataType"] == "array"
        assert column["display"] == {"type": "badge"}
        assert column["arrayItemType"] == {"dataType": "enum", "enumValues": ["api", "db", "cache"]}
        assert [o["value"] for o in column["filter"]["options"]] == ["api", "db", "cache"]

    def test_array_with_too_many_distinct_items(self):
        items = [f"t{i}" for i in range(ENUM_MAX_DISTINCT + 1)]
        column = _column([{"tags": items}], "tags")
        assert column["dataType"] == "array"
        assert column["filter"] is None
        assert "arrayItemType" not in column

    def test_array_of_numbers_not_filterable(self):
        column = _column([{"xs": [1, 2]}, {"xs": []}], "xs")
        assert column["dataType"] == "array"
        assert column["filter"] is None

    def test_mappings_are_records(self):
        column = _column([{"headers": {"a": "1"}}, {"headers": {}}], "headers")
        assert column["dataType"] == "record"
        assert column["display"] == {"type": "text"}
        assert column["filter"] is None

    def test_enum_at_boundary(self):
        records = [{"s": f"v{i}"} for i in range(ENUM_MAX_DISTINCT)]
        column = _column(records, "s")
        assert column["dataType"] == "enum"
        assert column["enumValues"] == [f"v{i}" for i in range(ENUM_MAX_DISTINCT)]
        assert column["display"] == {"type": "badge"}
        assert column["filter"]["options"][0] == {"label": "v0", "value": "v0"}

    def test_string_above_boundary(self):
        records = [{"s": f"v{i}"} for i in range(ENUM_MAX_DISTINCT + 1)]
        column = _column(records, "s")
        assert column["dataType"] == "string"
        assert column["filter"]["type"] == "input"
        assert "enumValues" not in column

    def test_mixed_types_fall_back_to_string(self):
        column = _column([{"m": "a"}, {"m": 1}], "m")
        assert column["dataType"] == "string"


class TestInferSchema:
    """Whole-document behavior."""

    @pytest.mark.parametrize("records", [[], None, "not rows", {"a": 1}])
    def test_empty_or_invalid_input(self, records):
        assert infer_schema_from_json(records).to_dict() == {"columns": []}

    def test_key_union_in_first_seen_order(self):
        records = [{"b": 1, "a": 2}, {"c": 3}, {"a": 4, "d": 5}]
        keys = [c["key"] for c in infer_schema_from_json(records).to_dict()["columns"]]
        assert keys == ["b", "a", "c", "d"]

    def test_non_mapping_rows_ignored(self):
        assert collect_values([{"a": 1}, 3, "x", None, {"a": 2}]) == {"a": [1, 2]}

    def test_missing_key_not_counted_as_null(self):
        records = [{"n": 1}, {}, {"n": 3}]
        assert _column(records, "n")["filter"]["type"] == "slider"

    def test_labels_and_defaults(self):
        column = _column([{"statusCode": 200}], "statusCode")
        assert column["label"] == "Status Code"
        assert column["optional"] is False
        assert column["hidden"] is False
        assert column["sortable"] is False
        assert column["sheet"] is None

    def test_deterministic(self):
        records = [
            {"level": "error", "latency": 12, "ts": "2024-01-01T00:00:00Z", "tags": ["a"]},
            {"level": "warn", "latency": 40, "ts": "2024-01-02T00:00:00Z", "tags": ["b"]},
        ]
        assert infer_schema_from_json(records).to_dict() == infer_schema_from_json(records).to_dict()

    def test_inferred_schema_loads(self):
        records = [
            {"level": "error", "latency": 12, "ok": True, "headers": {"a": "b"}},
            {"level": "info", "latency": 40, "ok": False, "headers": {}},
        ]
        schema = TableSchema.from_json(infer_schema_from_json(records))
        assert list(schema) == ["level", "latency", "ok", "headers"]


class TestInferFromDataFrame:
    """DataFrame ingestion (CSV uploads)."""

    def test_nan_and_inf_become_null(self):
        df = pd.DataFrame({
            "latency": [1.5, np.nan, 3.0, np.inf],
            "level": ["a", "b", "a", "b"],
        })
        columns = {c["key"]: c for c in infer_schema_from_dataframe(df).to_dict()["columns"]}
        assert columns["latency"]["dataType"] == "number"
        assert columns["latency"]["filter"]["min"] == 1.5
        assert columns["latency"]["filter"]["max"] == 3.0
        assert columns["level"]["enumValues"] == ["a", "b"]

    def test_datetime_column(self):
        df = pd.DataFrame({"at": pd.date_range("2024-01-01", periods=3)})
        column = infer_schema_from_dataframe(df).to_dict()["columns"][0]
        assert column["dataType"] == "timestamp"

    def test_max_rows(self):
        df = pd.DataFrame({"s": [f"v{i}" for i in range(20)]})
        assert infer_schema_from_dataframe(df).to_dict()["columns"][0]["dataType"] == "string"
        assert infer_schema_from_dataframe(df, max_rows=5).to_dict()["columns"][0]["dataType"] == "enum"

    def test_non_string_column_names(self):
        df = pd.DataFrame({0: [1, 2], 1: ["x", "y"]})
        keys = [c["key"] for c in infer_schema_from_dataframe(df).to_dict()["columns"]]
        assert keys == ["0", "1"]

    def test_empty_frame(self):
        assert infer_schema_from_dataframe(pd.DataFrame()).to_dict() == {"columns": []}
