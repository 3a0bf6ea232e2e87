"""
Schema validation.

Catches what the builder cannot check on its own:

- missing label (``.label()`` was never called)
- slider filter without bounds, or with ``min`` greater than ``max``

Runs for both the builder path (``create_table_schema``) and the JSON path
(``TableSchema.from_json``) so both get identical guarantees.
"""

from __future__ import annotations

from typing import Mapping

from table_schema.col import ColBuilder
from table_schema.errors import SchemaValidationError
from table_schema.models import FilterType
from table_schema.utils import capitalize_first, format_number

_PREFIX = "[create_table_schema]"


def validate_schema(definition: Mapping[str, ColBuilder]) -> None:
    """Raise SchemaValidationError on the first violation, in definition order."""
    for key, builder in definition.items():
        c = builder.config

        if not c.label:
            raise SchemaValidationError(
                f'{_PREFIX} Column "{key}" is missing a label.\n'
                f'  Fix: .label("{capitalize_first(key)}")',
                key=key,
            )

        if c.filter is not None and c.filter.type == FilterType.slider:
            lo, hi = c.filter.min, c.filter.max
            if lo is None or hi is None:
                raise SchemaValidationError(
                    f'{_PREFIX} Column "{key}": slider filter is missing min/max bounds.\n'
                    f'  Fix: .filterable("slider", min=0, max=100)',
                    key=key,
                )
            if lo > hi:
                lo_s, hi_s = format_number(lo), format_number(hi)
                raise SchemaValidationError(
                    f'{_PREFIX} Column "{key}": slider min ({lo_s}) must be less than max ({hi_s}).\n'
                    f'  Fix: swap the values: .filterable("slider", min={hi_s}, max={lo_s})',
                    key=key,
                )
