"""
Generate Python source for a schema from its JSON form.

The output rebuilds the schema with ``col.*`` chains and is ready to paste
into a module:

    source = schema_to_python(schema.to_json())
"""

from __future__ import annotations

import json
from typing import Any, List, Mapping, Optional, Tuple, Union

from table_schema.models import (
    ArrayItemType,
    ColKind,
    ColumnDescriptor,
    DisplayType,
    FilterType,
    SchemaJSON,
)
from table_schema.serialize import default_display_type
from table_schema.utils import format_number

_BUILTIN_DISPLAYS = {t.value for t in DisplayType} - {DisplayType.custom.value}


def _lit(value: Any) -> str:
    """Python literal for a JSON scalar."""
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, (int, float)):
        return format_number(value)
    return json.dumps(value)


def _enum_call(values: List[str]) -> str:
    return f"col.enum([{', '.join(_lit(v) for v in values)}])"


_PLAIN_KINDS = {
    ColKind.string.value,
    ColKind.number.value,
    ColKind.boolean.value,
    ColKind.timestamp.value,
    ColKind.record.value,
}


def _item_call(item: Optional[ArrayItemType]) -> str:
    """Item factory with the same fallbacks as the deserializer."""
    if item is None:
        return "col.string()"
    if item.data_type == ColKind.enum.value and item.enum_values is not None:
        return _enum_call(item.enum_values)
    if item.data_type == ColKind.array.value:
        return "col.array(col.string())"
    if item.data_type in _PLAIN_KINDS:
        return f"col.{item.data_type}()"
    return "col.string()"


def _factory_call(c: ColumnDescriptor) -> Tuple[str, ColKind]:
    if c.data_type == ColKind.enum.value and c.enum_values is not None:
        return _enum_call(c.enum_values), ColKind.enum
    if c.data_type == ColKind.array.value:
        return f"col.array({_item_call(c.array_item_type)})", ColKind.array
    if c.data_type in _PLAIN_KINDS:
        return f"col.{c.data_type}()", ColKind(c.data_type)
    return "col.string()", ColKind.string


def build_chain(c: ColumnDescriptor) -> str:
    """The ``col.*`` factory call and method chain for one column."""
    factory, kind = _factory_call(c)
    parts: List[str] = [factory]

    parts.append(f".label({_lit(c.label)})")
    if c.description:
        parts.append(f".description({_lit(c.description)})")

    # the factory already sets the kind default; "custom" cannot be rebuilt
    dt = c.display.type
    if dt == DisplayType.number.value and c.display.unit:
        parts.append(f'.display("number", unit={_lit(c.display.unit)})')
    elif dt in _BUILTIN_DISPLAYS and dt != default_display_type(kind).value:
        parts.append(f".display({_lit(dt)})")

    if c.filter is None:
        parts.append(".not_filterable()")
    else:
        f = c.filter
        if f.type == FilterType.slider and f.min is not None and f.max is not None:
            parts.append(f'.filterable("slider", min={_lit(f.min)}, max={_lit(f.max)})')
        elif f.type == FilterType.checkbox:
            if f.options is not None:
                opts = ", ".join(
                    f'{{"label": {_lit(o.label)}, "value": {_lit(o.value)}}}' for o in f.options
                )
                parts.append(f'.filterable("checkbox", options=[{opts}])')
            else:
                parts.append('.filterable("checkbox")')
        else:
            parts.append(f".filterable({_lit(f.type.value)})")
        if f.default_open:
            parts.append(".default_open()")
        if f.command_disabled:
            parts.append(".command_disabled()")

    if c.sortable:
        parts.append(".sortable()")
    if c.hidden:
        parts.append(".hidden()")
    if c.optional:
        parts.append(".optional()")
    if c.size is not None:
        parts.append(f".size({c.size})")

    if c.sheet is not None:
        args: List[str] = []
        if c.sheet.label:
            args.append(f"label={_lit(c.sheet.label)}")
        if c.sheet.class_name:
            args.append(f"class_name={_lit(c.sheet.class_name)}")
        if c.sheet.skeleton_class_name:
            args.append(f"skeleton_class_name={_lit(c.sheet.skeleton_class_name)}")
        parts.append(f".sheet({', '.join(args)})")

    return "\n        ".join(parts)


def schema_to_python(json_schema: Union[SchemaJSON, Mapping[str, Any]]) -> str:
    """Python module source that recreates ``json_schema`` with ``create_table_schema``."""
    schema_json = (
        json_schema if isinstance(json_schema, SchemaJSON) else SchemaJSON.model_validate(json_schema)
    )
    lines = [
        "from table_schema import col",
        "from table_schema.schema import create_table_schema",
        "",
        "schema = create_table_schema({",
    ]
    for descriptor in schema_json.columns:
        lines.append(f"    {_lit(descriptor.key)}: (\n        {build_chain(descriptor)}\n    ),")
    lines.append("})")
    return "\n".join(lines) + "\n"
