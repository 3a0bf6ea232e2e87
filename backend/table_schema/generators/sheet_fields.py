"""Row detail (sheet) fields derived from a schema."""

from __future__ import annotations

from typing import List, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from table_schema.col import ColBuilder
from table_schema.models import RowCondition, RowRenderer


class SheetField(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    type: str                             # filter type, or "readonly"
    component: Optional[RowRenderer] = None
    condition: Optional[RowCondition] = None
    class_name: Optional[str] = None
    skeleton_class_name: Optional[str] = None


def generate_sheet_fields(definition: Mapping[str, ColBuilder]) -> List[SheetField]:
    """Columns that called ``.sheet()``; the sheet label falls back to the column label."""
    result: List[SheetField] = []
    for key, builder in definition.items():
        c = builder.config
        if c.sheet is None:
            continue
        result.append(
            SheetField(
                id=key,
                label=c.sheet.label or c.label,
                type=c.filter.type.value if c.filter is not None else "readonly",
                component=c.sheet.component,
                condition=c.sheet.condition,
                class_name=c.sheet.class_name,
                skeleton_class_name=c.sheet.skeleton_class_name,
            )
        )
    return result
