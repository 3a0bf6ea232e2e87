"""
Schema inference from untyped sample records.

Walks every record, collects the values seen for each key (first-seen key
order), and classifies each key with the first matching rule:

1. no non-null values            -> string    (input)
2. ISO-8601 strings / datetimes  -> timestamp (timerange)
3. 13-digit Unix-ms integers     -> timestamp (timerange)
4. strict booleans               -> boolean   (checkbox)
5. numbers                       -> number    (slider over the observed range,
                                                input when min == max)
6. arrays                        -> array of enum (checkbox) when every item is
                                    a string and there are <= 10 distinct items,
                                    otherwise array (not filterable)
7. mappings                      -> record    (not filterable)
8. strings with <= 10 distinct   -> enum      (checkbox)
9. anything else                 -> string    (input)

This is a heuristic: it aims for a good-enough schema from a JSON sample that
callers then refine.
"""

from __future__ import annotations

import logging
import numbers
import re
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd

from table_schema.models import (
    ArrayItemType,
    ColKind,
    ColumnDescriptor,
    DisplayDescriptor,
    FilterDescriptor,
    FilterType,
    Option,
    SchemaJSON,
)
from table_schema.serialize import default_display_type
from table_schema.utils import df_to_records_safe, distinct, key_to_label

logger = logging.getLogger("uvicorn.error")

# Unix ms timestamps are 13-digit numbers (> Sep 2001, < Nov 2286)
UNIX_MS_MIN = 1_000_000_000_000
UNIX_MS_MAX = 9_999_999_999_999

ENUM_MAX_DISTINCT = 10

_ISO_8601 = re.compile(r"\d{4}-\d{2}-\d{2}(T[\d:.Z+\-]+)?")


# ---------------------------------------------------------------------------
# Value predicates
# ---------------------------------------------------------------------------

def is_iso8601(value: str) -> bool:
    """ISO date shape *and* a real calendar date ("2024-13-40" is rejected)."""
    if not _ISO_8601.fullmatch(value):
        return False
    return not pd.isna(pd.to_datetime(value, errors="coerce"))


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def is_unix_ms(value: Any) -> bool:
    if not _is_number(value) or not float(value).is_integer():
        return False
    return UNIX_MS_MIN <= value <= UNIX_MS_MAX


def _is_temporal(value: Any) -> bool:
    if isinstance(value, str):
        return is_iso8601(value)
    return isinstance(value, date)


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


# ---------------------------------------------------------------------------
# Descriptor construction
# ---------------------------------------------------------------------------

def _filter(filter_type: FilterType, **extra: Any) -> FilterDescriptor:
    return FilterDescriptor(type=filter_type, default_open=False, command_disabled=False, **extra)


def _enum_options(values: List[str]) -> List[Option]:
    return [Option(label=v, value=v) for v in values]


def _descriptor(
    key: str,
    kind: ColKind,
    filter: Optional[FilterDescriptor],
    **extra: Any,
) -> ColumnDescriptor:
    return ColumnDescriptor(
        key=key,
        label=key_to_label(key),
        data_type=kind.value,
        optional=False,
        hidden=False,
        sortable=False,
        display=DisplayDescriptor(type=default_display_type(kind).value),
        filter=filter,
        sheet=None,
        **extra,
    )


def infer_column(key: str, values: List[Any]) -> ColumnDescriptor:
    """Classify one key from every value observed for it (nulls included)."""
    non_null = [v for v in values if v is not None]

    if not non_null:
        return _descriptor(key, ColKind.string, _filter(FilterType.input))

    if all(_is_temporal(v) for v in non_null):
        return _descriptor(key, ColKind.timestamp, _filter(FilterType.timerange))

    if all(is_unix_ms(v) for v in non_null):
        return _descriptor(key, ColKind.timestamp, _filter(FilterType.timerange))

    if all(isinstance(v, bool) for v in non_null):
        return _descriptor(key, ColKind.boolean, _filter(FilterType.checkbox))

    if all(_is_number(v) for v in non_null):
        lo, hi = min(non_null), max(non_null)
        if lo != hi:
            number_filter = _filter(FilterType.slider, min=lo, max=hi)
        else:
            number_filter = _filter(FilterType.input)
        return _descriptor(key, ColKind.number, number_filter)

    if all(_is_array(v) for v in non_null):
        items = [item for v in non_null for item in v if item is not None]
        if items and all(isinstance(item, str) for item in items):
            enum_values = distinct(items)
            if len(enum_values) <= ENUM_MAX_DISTINCT:
                return _descriptor(
                    key,
                    ColKind.array,
                    _filter(FilterType.checkbox, options=_enum_options(enum_values)),
                    array_item_type=ArrayItemType(
                        data_type=ColKind.enum.value, enum_values=enum_values,
                    ),
                )
        return _descriptor(key, ColKind.array, None)

    if all(isinstance(v, Mapping) for v in non_null):
        return _descriptor(key, ColKind.record, None)

    if all(isinstance(v, str) for v in non_null):
        enum_values = distinct(non_null)
        if len(enum_values) <= ENUM_MAX_DISTINCT:
            return _descriptor(
                key,
                ColKind.enum,
                _filter(FilterType.checkbox, options=_enum_options(enum_values)),
                enum_values=enum_values,
            )

    return _descriptor(key, ColKind.string, _filter(FilterType.input))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def collect_values(records: Iterable[Any]) -> Dict[str, List[Any]]:
    """Per-key value lists in first-seen key order; non-mapping rows are skipped."""
    key_values: Dict[str, List[Any]] = {}
    for row in records:
        if not isinstance(row, Mapping):
            continue
        for key, value in row.items():
            key_values.setdefault(str(key), []).append(value)
    return key_values


def infer_schema_from_json(records: Iterable[Any]) -> SchemaJSON:
    """Infer a SchemaJSON from plain records. Deterministic for a given input."""
    if records is None or isinstance(records, (str, bytes, Mapping)):
        return SchemaJSON(columns=[])

    columns: List[ColumnDescriptor] = []
    for key, values in collect_values(records).items():
        descriptor = infer_column(key, values)
        logger.debug(
            "Inferred %r as %s (filter=%s)",
            key,
            descriptor.data_type,
            descriptor.filter.type.value if descriptor.filter else None,
        )
        columns.append(descriptor)
    return SchemaJSON(columns=columns)


def infer_schema_from_dataframe(df: pd.DataFrame, max_rows: Optional[int] = None) -> SchemaJSON:
    """
    Infer a SchemaJSON from a DataFrame.

    NaN / inf become null before classification. ``max_rows`` keeps the first
    rows only so large uploads stay cheap.
    """
    work_df = df.head(max_rows) if max_rows is not None and len(df) > max_rows else df
    work_df = work_df.rename(columns=str)
    return infer_schema_from_json(df_to_records_safe(work_df))
