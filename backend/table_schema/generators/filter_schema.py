"""
Filter-parsing model derived from a schema.

Each filterable column becomes an optional field of a dynamically created
pydantic model that turns raw query values into typed filter state:

    string    + input     -> str
    number    + input     -> number
    number    + slider    -> [number]   split on SLIDER_DELIMITER
    number    + checkbox  -> [number]   split on ARRAY_DELIMITER
    boolean   + checkbox  -> [bool]     split on ARRAY_DELIMITER
    timestamp + timerange -> [datetime] split on RANGE_DELIMITER
    enum / array(enum) + checkbox -> [Literal[...]] split on ARRAY_DELIMITER

Plug the result into ``filter_query.codec.deserialize``. Pagination or UI
state fields are added by subclassing the generated model.
"""

from __future__ import annotations

import keyword
import re
from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Mapping, Optional, Tuple, Type

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, create_model

from filter_query.delimiters import ARRAY_DELIMITER, RANGE_DELIMITER, SLIDER_DELIMITER
from table_schema.col import ColBuilder
from table_schema.models import ColConfig, ColKind, FilterType, Number


def _splitter(delimiter: str) -> BeforeValidator:
    def split(value: Any) -> Any:
        if isinstance(value, str):
            return [part for part in value.split(delimiter) if part]
        return value
    return BeforeValidator(split)


def _delimited(item_type: Any, delimiter: str) -> Any:
    return Annotated[List[item_type], _splitter(delimiter)]


def _literal(values: Tuple[str, ...]) -> Any:
    return Literal[values] if values else str


def field_type(c: ColConfig) -> Optional[Any]:
    """Python type for a column's filter value, or None when it has no query form."""
    f = c.filter
    if f is None:
        return None
    if f.type == FilterType.input:
        if c.kind == ColKind.string:
            return str
        if c.kind == ColKind.number:
            return Number
        return None
    if f.type == FilterType.slider:
        return _delimited(Number, SLIDER_DELIMITER)
    if f.type == FilterType.timerange:
        return _delimited(datetime, RANGE_DELIMITER)
    # checkbox
    if c.kind == ColKind.enum and c.enum_values is not None:
        return _delimited(_literal(c.enum_values), ARRAY_DELIMITER)
    if c.kind == ColKind.number:
        return _delimited(Number, ARRAY_DELIMITER)
    if c.kind == ColKind.boolean:
        return _delimited(bool, ARRAY_DELIMITER)
    item = c.array_item
    if c.kind == ColKind.array and item is not None and item.kind == ColKind.enum and item.enum_values is not None:
        return _delimited(_literal(item.enum_values), ARRAY_DELIMITER)
    return None


def _attribute_name(key: str) -> str:
    name = re.sub(r"\W", "_", key)
    if not name.isidentifier() or keyword.iskeyword(name) or name.startswith(("_", "model_")):
        name = f"field_{name}"
    return name


def generate_filter_schema(
    definition: Mapping[str, ColBuilder],
    model_name: str = "FilterSchema",
) -> Type[BaseModel]:
    """Create a pydantic model; fields are keyed by column key (as alias)."""
    fields: Dict[str, Any] = {}
    for key, builder in definition.items():
        annotation = field_type(builder.config)
        if annotation is None:
            continue
        fields[_attribute_name(key)] = (Optional[annotation], Field(None, alias=key))

    return create_model(
        model_name,
        __config__=ConfigDict(populate_by_name=True),
        **fields,
    )
