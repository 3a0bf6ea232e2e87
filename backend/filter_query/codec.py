"""
Filter query language.

A filter set is written as one line of space separated ``name:value`` tokens,
with the delimiters from ``filter_query.delimiters`` inside multi-valued
values:

    level:error|warn latency:0~500 date:1704067200000_1706659200000 host:api

``deserialize(model)`` returns a parser that never raises: malformed tokens are
dropped and only the final model validation can fail, reported through
``ParseResult``. ``serialize_column_filters`` is the inverse used for command
palettes and shareable links.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Sequence, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from filter_query.delimiters import ARRAY_DELIMITER, RANGE_DELIMITER, SLIDER_DELIMITER
from filter_query.fields import DataTableFilterField
from table_schema.models import FilterType
from table_schema.utils import format_number

logger = logging.getLogger("uvicorn.error")

_DELIMITERS = {
    FilterType.slider: SLIDER_DELIMITER,
    FilterType.checkbox: ARRAY_DELIMITER,
    FilterType.timerange: RANGE_DELIMITER,
}


class ParseResult(BaseModel):
    """Tagged outcome of a parse: ``data`` on success, ``error`` otherwise."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    success: bool
    data: Optional[Any] = None
    error: Optional[ValidationError] = None


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def tokenize(text: Optional[str]) -> Dict[str, str]:
    """
    Split a query into ``{name: raw value}``.

    Tokens without a colon, with an empty name, or with an empty value are
    skipped. Only the first colon separates; a repeated name keeps the last
    value.
    """
    values: Dict[str, str] = {}
    for token in (text or "").strip().split():
        name, sep, value = token.partition(":")
        if not sep or not name or not value:
            continue
        values[name] = value
    return values


def deserialize(model: Type[BaseModel]) -> Callable[[Optional[str]], ParseResult]:
    """Build a parser validating tokens against ``model``."""

    def parse(text: Optional[str]) -> ParseResult:
        values = tokenize(text)
        try:
            data = model.model_validate(values)
        except ValidationError as e:
            logger.debug("Filter query %r rejected: %s", text, e)
            return ParseResult(success=False, error=e)
        return ParseResult(success=True, data=data)

    return parse


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

ColumnFilter = Union[Mapping[str, Any], Tuple[str, Any]]


def _entry(column_filter: ColumnFilter) -> Tuple[str, Any]:
    if isinstance(column_filter, Mapping):
        return column_filter["id"], column_filter["value"]
    key, value = column_filter
    return key, value


def _render_scalar(value: Any) -> str:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return str(int(value.timestamp() * 1000))
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (bool, int, float)):
        return format_number(value)
    return str(value)


def render_value(value: Any, filter_type: FilterType) -> str:
    """Render a filter value; lists are joined with the delimiter of ``filter_type``."""
    if isinstance(value, (list, tuple)):
        delimiter = _DELIMITERS.get(filter_type, ARRAY_DELIMITER)
        return delimiter.join(_render_scalar(v) for v in value)
    return _render_scalar(value)


def serialize_column_filters(
    column_filters: Iterable[ColumnFilter],
    filter_fields: Optional[Sequence[DataTableFilterField]] = None,
) -> str:
    """
    Encode filters as ``key:value `` tokens (each with a trailing space).

    Filters without a matching field, whose field is ``command_disabled``, or
    whose value is None are left out.
    """
    fields: Dict[str, DataTableFilterField] = {}
    for field in filter_fields or ():
        fields.setdefault(field.value, field)

    out = []
    for column_filter in column_filters:
        key, value = _entry(column_filter)
        field = fields.get(key)
        if field is None or field.command_disabled or value is None:
            continue
        out.append(f"{key}:{render_value(value, field.type)} ")
    return "".join(out)
