"""Filter field descriptors consumed by the filter UI and the query serializer."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from table_schema.models import DatePreset, FilterType, Number, Option, OptionRenderer


class DataTableFilterField(BaseModel):
    """One filterable column as the filter sidebar and command palette see it."""
    model_config = ConfigDict(frozen=True)

    label: str
    value: str                            # column key
    type: FilterType
    default_open: Optional[bool] = None
    command_disabled: Optional[bool] = None
    options: Optional[List[Option]] = None
    component: Optional[OptionRenderer] = None
    min: Optional[Number] = None
    max: Optional[Number] = None
    presets: Optional[List[DatePreset]] = None
