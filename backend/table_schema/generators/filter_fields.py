"""
Filter sidebar fields derived from a schema.

Only filterable columns are included, in definition order. Checkbox options
fall back to the enum values, Yes/No for booleans, or the item enum values of
an array column when the filter does not set them.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from filter_query.fields import DataTableFilterField
from table_schema.col import BOOLEAN_OPTIONS, ColBuilder
from table_schema.models import ColConfig, ColKind, FilterType, Option

SLIDER_DEFAULT_MIN = 0
SLIDER_DEFAULT_MAX = 100


def _derived_options(c: ColConfig) -> Optional[List[Option]]:
    if c.kind == ColKind.enum and c.enum_values is not None:
        return [Option(label=v, value=v) for v in c.enum_values]
    if c.kind == ColKind.boolean:
        return list(BOOLEAN_OPTIONS)
    item = c.array_item
    if c.kind == ColKind.array and item is not None and item.kind == ColKind.enum and item.enum_values is not None:
        return [Option(label=v, value=v) for v in item.enum_values]
    return None


def generate_filter_fields(definition: Mapping[str, ColBuilder]) -> List[DataTableFilterField]:
    result: List[DataTableFilterField] = []
    for key, builder in definition.items():
        c = builder.config
        f = c.filter
        if f is None:
            continue

        fields: Dict[str, Any] = {
            "label": c.label,
            "value": key,
            "type": f.type,
            "default_open": f.default_open or None,
            "command_disabled": f.command_disabled or None,
        }
        if f.type == FilterType.timerange:
            fields["presets"] = list(f.presets) if f.presets is not None else None
        elif f.type == FilterType.checkbox:
            fields["options"] = list(f.options) if f.options is not None else _derived_options(c)
            fields["component"] = f.component
        elif f.type == FilterType.slider:
            fields["min"] = f.min if f.min is not None else SLIDER_DEFAULT_MIN
            fields["max"] = f.max if f.max is not None else SLIDER_DEFAULT_MAX

        result.append(DataTableFilterField(**fields))
    return result
