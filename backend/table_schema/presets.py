"""
Pre-configured column builders for log and observability tables.

Every preset is a regular builder; chain further calls to override any default.

    create_table_schema({
        "level": presets.log_level(LEVELS).description("Log severity"),
        "date": presets.timestamp().label("Date").size(200).sheet(),
        "latency": presets.duration("ms").label("Latency").sortable().sheet(),
        "status": presets.http_status().size(60),
        "method": presets.http_method(METHODS).size(69),
        "path": presets.pathname().label("Path").sheet(),
        "trace_id": presets.trace_id().label("Request ID").hidden().sheet(),
    })
"""

from __future__ import annotations

from typing import Optional, Sequence

from table_schema import col
from table_schema.col import ColBuilder
from table_schema.models import Number

DEFAULT_HTTP_STATUS_CODES = (
    200, 201, 204, 301, 302, 400, 401, 403, 404, 422, 429, 500, 502, 503, 504,
)


def _options(values: Sequence[str]):
    return [{"label": v, "value": v} for v in values]


def log_level(values: Sequence[str]) -> ColBuilder:
    """Enum + badge + checkbox options derived from ``values``, open by default."""
    return (
        col.enum(values)
        .label("Level")
        .filterable("checkbox", options=_options(values))
        .default_open()
    )


def http_method(values: Sequence[str]) -> ColBuilder:
    return (
        col.enum(values)
        .label("Method")
        .display("text")
        .filterable("checkbox", options=_options(values))
    )


def http_status(codes: Optional[Sequence[int]] = None) -> ColBuilder:
    """Number column with a checkbox filter over common status codes."""
    codes = DEFAULT_HTTP_STATUS_CODES if codes is None else codes
    return (
        col.number()
        .label("Status")
        .filterable("checkbox", options=[{"label": str(c), "value": c} for c in codes])
    )


def duration(unit: Optional[str] = None, min: Number = 0, max: Number = 5000) -> ColBuilder:
    """Number + unit display + slider filter (0..5000 unless overridden)."""
    return (
        col.number()
        .label("Duration")
        .display("number", unit=unit)
        .filterable("slider", min=min, max=max)
    )


def timestamp() -> ColBuilder:
    return col.timestamp().label("Timestamp").display("timestamp").sortable()


def trace_id() -> ColBuilder:
    """Monospace ID column, not filterable; usually hidden and shown in the sheet."""
    return col.string().label("Trace ID").display("code").not_filterable()


def pathname() -> ColBuilder:
    return col.string().label("Pathname").filterable("input")
