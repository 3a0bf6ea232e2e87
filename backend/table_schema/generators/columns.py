"""
Rendering column definitions derived from a schema.

Rules:
- dotted keys (``timing.dns``) get an ``id`` and an accessor reading the flat
  row key; plain keys get ``accessor_key``
- ``filter_fn`` names the row predicate the table layer must provide:
  ``inDateRange`` and ``arrSome`` are custom, the others are built in
- ``size`` also fixes ``min_size``
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Callable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from table_schema.col import ColBuilder
from table_schema.models import ColConfig, ColKind, DisplayConfig, DisplayType, FilterType
from table_schema.utils import format_number


class ColumnMeta(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    hidden: bool = False


class ColumnDef(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    accessor_key: Optional[str] = None
    accessor_fn: Optional[Callable[[Mapping[str, Any]], Any]] = None
    header: str
    sortable: bool = False
    filter_fn: Optional[str] = None
    display: DisplayConfig
    size: Optional[int] = None
    min_size: Optional[int] = None
    meta: ColumnMeta

    def get_value(self, row: Mapping[str, Any]) -> Any:
        if self.accessor_fn is not None:
            return self.accessor_fn(row)
        return row.get(self.accessor_key or self.id)

    def cell(self, row: Mapping[str, Any]) -> Any:
        return render_cell(self.display, self.get_value(row), row)


def get_filter_fn(config: ColConfig) -> Optional[str]:
    """Predicate name for the column's filter, or None when unfilterable."""
    f = config.filter
    if f is None:
        return None
    if f.type == FilterType.timerange:
        return "inDateRange"
    if f.type == FilterType.slider:
        return "inNumberRange"
    if f.type == FilterType.input:
        if config.kind == ColKind.string:
            return "includesString"
        if config.kind == ColKind.number:
            return "equals"
        return None
    # checkbox: arrays match any selected item, scalars must be one of the selection
    if config.kind == ColKind.array:
        return "arrIncludesSome"
    return "arrSome"


def render_cell(display: DisplayConfig, value: Any, row: Any) -> Any:
    """Plain-text rendering; ``custom`` delegates to the attached renderer."""
    if display.type == DisplayType.custom and display.cell is not None:
        return display.cell(value, row)
    if value is None:
        return ""
    if display.type == DisplayType.boolean:
        return "yes" if value else "no"
    if display.type == DisplayType.number:
        text = format_number(value)
        return f"{text} {display.unit}" if display.unit else text
    if display.type == DisplayType.timestamp and isinstance(value, (datetime, date)):
        return value.isoformat()
    if display.type == DisplayType.badge and isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


def _dotted_accessor(key: str) -> Callable[[Mapping[str, Any]], Any]:
    def accessor(row: Mapping[str, Any]) -> Any:
        return row.get(key)
    return accessor


def generate_columns(definition: Mapping[str, ColBuilder]) -> List[ColumnDef]:
    columns: List[ColumnDef] = []
    for key, builder in definition.items():
        c = builder.config
        dotted = "." in key
        columns.append(
            ColumnDef(
                id=key,
                accessor_key=None if dotted else key,
                accessor_fn=_dotted_accessor(key) if dotted else None,
                header=c.label,
                sortable=c.sortable,
                filter_fn=get_filter_fn(c),
                display=c.display,
                size=c.size,
                min_size=c.size,
                meta=ColumnMeta(label=c.label, hidden=c.hidden),
            )
        )
    return columns
