"""
Schema <-> JSON conversion.

``serialize_schema`` copies the plain-data part of every column into a
``ColumnDescriptor``. Renderer callbacks (``display.cell``,
``filter.component``, ``sheet.component``, ``sheet.condition``) and timerange
presets are dropped.

``deserialize_schema`` replays a descriptor through the ``col`` builders.
Dropped callbacks cannot come back: a ``"custom"`` display falls back to the
kind's default display, and callers re-attach renderers on the returned
builders. For built-in renderers the round trip is exact:

    serialize_schema(deserialize_schema(serialize_schema(d))) == serialize_schema(d)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Union

from table_schema import col
from table_schema.col import ColBuilder
from table_schema.models import (
    ArrayItemType,
    ColConfig,
    ColKind,
    ColumnDescriptor,
    DisplayDescriptor,
    DisplayType,
    FilterConfig,
    FilterDescriptor,
    FilterType,
    SchemaJSON,
    SheetConfig,
    SheetDescriptor,
)
from table_schema.validate import validate_schema

logger = logging.getLogger("uvicorn.error")

Definition = Dict[str, ColBuilder]


# ---------------------------------------------------------------------------
# Serialization (schema -> JSON)
# ---------------------------------------------------------------------------

def _serialize_display(c: ColConfig) -> DisplayDescriptor:
    if c.display.type == DisplayType.number and c.display.unit:
        return DisplayDescriptor(type=DisplayType.number.value, unit=c.display.unit)
    return DisplayDescriptor(type=c.display.type.value)


def _serialize_filter(f: Optional[FilterConfig]) -> Optional[FilterDescriptor]:
    if f is None:
        return None
    fields: Dict[str, Any] = {
        "type": f.type,
        "default_open": f.default_open,
        "command_disabled": f.command_disabled,
    }
    if f.options is not None:
        fields["options"] = list(f.options)
    if f.min is not None:
        fields["min"] = f.min
    if f.max is not None:
        fields["max"] = f.max
    # component and presets are not data
    return FilterDescriptor(**fields)


def _serialize_sheet(s: Optional[SheetConfig]) -> Optional[SheetDescriptor]:
    if s is None:
        return None
    fields: Dict[str, Any] = {}
    if s.label:
        fields["label"] = s.label
    if s.class_name:
        fields["class_name"] = s.class_name
    if s.skeleton_class_name:
        fields["skeleton_class_name"] = s.skeleton_class_name
    return SheetDescriptor(**fields)


def serialize_column(key: str, c: ColConfig) -> ColumnDescriptor:
    fields: Dict[str, Any] = {
        "key": key,
        "label": c.label,
        "data_type": c.kind.value,
        "optional": c.optional,
        "hidden": c.hidden,
        "sortable": c.sortable,
        "display": _serialize_display(c),
        "filter": _serialize_filter(c.filter),
        "sheet": _serialize_sheet(c.sheet),
    }
    if c.description:
        fields["description"] = c.description
    if c.enum_values is not None:
        fields["enum_values"] = list(c.enum_values)
    if c.array_item is not None:
        item: Dict[str, Any] = {"data_type": c.array_item.kind.value}
        if c.array_item.enum_values is not None:
            item["enum_values"] = list(c.array_item.enum_values)
        fields["array_item_type"] = ArrayItemType(**item)
    if c.size is not None:
        fields["size"] = c.size
    return ColumnDescriptor(**fields)


def serialize_schema(definition: Mapping[str, ColBuilder]) -> SchemaJSON:
    return SchemaJSON(
        columns=[serialize_column(key, builder.config) for key, builder in definition.items()]
    )


# ---------------------------------------------------------------------------
# Deserialization (JSON -> schema)
# ---------------------------------------------------------------------------

_DEFAULT_DISPLAY = {
    ColKind.enum: DisplayType.badge,
    ColKind.array: DisplayType.badge,
    ColKind.boolean: DisplayType.boolean,
    ColKind.timestamp: DisplayType.timestamp,
    ColKind.number: DisplayType.number,
}

_PLAIN_FACTORIES = {
    ColKind.string.value: col.string,
    ColKind.number.value: col.number,
    ColKind.boolean.value: col.boolean,
    ColKind.timestamp.value: col.timestamp,
    ColKind.record.value: col.record,
}

_BUILTIN_DISPLAYS = {t.value for t in DisplayType} - {DisplayType.custom.value}


def default_display_type(kind: Union[ColKind, str]) -> DisplayType:
    """Canonical display for a data kind (text for string, record and unknowns)."""
    try:
        return _DEFAULT_DISPLAY.get(ColKind(kind), DisplayType.text)
    except ValueError:
        return DisplayType.text


def _item_builder(item: Optional[ArrayItemType]) -> ColBuilder:
    if item is None:
        return col.string()
    if item.data_type == ColKind.enum.value and item.enum_values is not None:
        return col.enum(item.enum_values)
    if item.data_type == ColKind.array.value:
        # the wire format stops at one level of item type
        return col.array(col.string())
    return _PLAIN_FACTORIES.get(item.data_type, col.string)()


def _factory_for(desc: ColumnDescriptor) -> ColBuilder:
    data_type = desc.data_type
    if data_type == ColKind.enum.value and desc.enum_values is not None:
        return col.enum(desc.enum_values)
    if data_type == ColKind.array.value:
        return col.array(_item_builder(desc.array_item_type))
    factory = _PLAIN_FACTORIES.get(data_type)
    if factory is None:
        logger.debug("Column %r: unknown dataType %r, using string", desc.key, data_type)
        return col.string()
    return factory()


def _replay_display(builder: ColBuilder, desc: ColumnDescriptor) -> ColBuilder:
    display_type = desc.display.type
    if display_type == DisplayType.custom.value:
        display_type = default_display_type(builder.kind).value
        logger.debug(
            "Column %r: custom renderer not reconstructable, falling back to %r display",
            desc.key, display_type,
        )
    if display_type == DisplayType.number.value and desc.display.unit:
        return builder.display(DisplayType.number, unit=desc.display.unit)
    if display_type in _BUILTIN_DISPLAYS:
        return builder.display(display_type)
    logger.debug("Column %r: unknown display %r, keeping kind default", desc.key, display_type)
    return builder


def _replay_filter(builder: ColBuilder, f: Optional[FilterDescriptor]) -> ColBuilder:
    if f is None:
        return builder.not_filterable()

    if f.type == FilterType.slider:
        builder = builder.filterable(FilterType.slider, min=f.min, max=f.max)
    elif f.type == FilterType.checkbox:
        builder = builder.filterable(FilterType.checkbox, options=f.options)
    elif f.type == FilterType.timerange:
        builder = builder.filterable(FilterType.timerange)
    else:
        builder = builder.filterable(FilterType.input)

    if f.default_open:
        builder = builder.default_open()
    if f.command_disabled:
        builder = builder.command_disabled()
    return builder


def deserialize_column(desc: ColumnDescriptor) -> ColBuilder:
    builder = _factory_for(desc).label(desc.label)
    if desc.description:
        builder = builder.description(desc.description)

    builder = _replay_display(builder, desc)
    builder = _replay_filter(builder, desc.filter)

    if desc.hidden:
        builder = builder.hidden()
    if desc.sortable:
        builder = builder.sortable()
    if desc.optional:
        builder = builder.optional()
    if desc.size is not None:
        builder = builder.size(desc.size)

    if desc.sheet is not None:
        builder = builder.sheet(
            label=desc.sheet.label or None,
            class_name=desc.sheet.class_name or None,
            skeleton_class_name=desc.sheet.skeleton_class_name or None,
        )
    return builder


def deserialize_schema(json: Union[SchemaJSON, Mapping[str, Any]]) -> Definition:
    """
    Rebuild a definition from its JSON form and validate it.

    Raises SchemaValidationError (bad label / slider bounds),
    FilterNotAllowedError (filter illegal for the column kind) or
    pydantic.ValidationError (malformed document).
    """
    schema_json = json if isinstance(json, SchemaJSON) else SchemaJSON.model_validate(json)
    definition: Definition = {}
    for desc in schema_json.columns:
        definition[desc.key] = deserialize_column(desc)
    validate_schema(definition)
    return definition
