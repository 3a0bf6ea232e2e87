"""
Core Pydantic models for the table schema toolkit.

Two families live here:

* builder-side configuration (``ColConfig`` and its parts), which may carry
  renderer callbacks and is never sent over the wire;
* the JSON descriptors (``SchemaJSON`` / ``ColumnDescriptor``), which are the
  callback-free wire format read and written by the serializer.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ColKind(str, Enum):
    string = "string"
    number = "number"
    boolean = "boolean"
    timestamp = "timestamp"
    enum = "enum"
    array = "array"
    record = "record"


class FilterType(str, Enum):
    input = "input"
    checkbox = "checkbox"
    slider = "slider"
    timerange = "timerange"


class DisplayType(str, Enum):
    text = "text"
    code = "code"
    boolean = "boolean"
    badge = "badge"
    timestamp = "timestamp"
    number = "number"
    custom = "custom"


Number = Union[int, float]
OptionValue = Union[bool, int, float, str]


class Option(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    value: OptionValue


class DatePreset(BaseModel):
    """Quick-pick range for timerange filters (builder only, not serialized)."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    label: str
    from_: datetime = Field(..., alias="from")
    to: datetime
    shortcut: Optional[str] = None


# ---------------------------------------------------------------------------
# Builder-side configuration
# ---------------------------------------------------------------------------

CellRenderer = Callable[[Any, Any], Any]
OptionRenderer = Callable[[Option], Any]
RowRenderer = Callable[[Any], Any]
RowCondition = Callable[[Any], bool]


class DisplayConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: DisplayType
    unit: Optional[str] = None            # number only
    cell: Optional[CellRenderer] = None   # custom only


class FilterConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: FilterType
    default_open: bool = False
    command_disabled: bool = False
    options: Optional[Tuple[Option, ...]] = None
    component: Optional[OptionRenderer] = None
    min: Optional[Number] = None
    max: Optional[Number] = None
    presets: Optional[Tuple[DatePreset, ...]] = None


class SheetConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: Optional[str] = None
    component: Optional[RowRenderer] = None
    condition: Optional[RowCondition] = None
    class_name: Optional[str] = None
    skeleton_class_name: Optional[str] = None


class ColConfig(BaseModel):
    """Immutable configuration of one column; copy with ``model_copy(update=...)``."""
    model_config = ConfigDict(frozen=True)

    kind: ColKind
    enum_values: Optional[Tuple[str, ...]] = None
    array_item: Optional[ColConfig] = None
    optional: bool = False
    label: str = ""
    description: Optional[str] = None
    display: DisplayConfig
    size: Optional[int] = None
    hidden: bool = False
    sortable: bool = False
    filter: Optional[FilterConfig] = None
    sheet: Optional[SheetConfig] = None


# ---------------------------------------------------------------------------
# JSON descriptors (function-free wire format)
# ---------------------------------------------------------------------------
#
# Presence matters on the wire: optional fields are left unset (and therefore
# omitted by ``to_dict``), while ``filter`` / ``sheet`` are always set and may
# be null.

class _Descriptor(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class FilterDescriptor(_Descriptor):
    type: FilterType
    default_open: bool = Field(False, alias="defaultOpen")
    command_disabled: bool = Field(False, alias="commandDisabled")
    options: Optional[List[Option]] = None
    min: Optional[Number] = None
    max: Optional[Number] = None


class SheetDescriptor(_Descriptor):
    label: Optional[str] = None
    class_name: Optional[str] = Field(None, alias="className")
    skeleton_class_name: Optional[str] = Field(None, alias="skeletonClassName")


class DisplayDescriptor(_Descriptor):
    type: str                             # "custom" marks a dropped renderer
    unit: Optional[str] = None


class ArrayItemType(_Descriptor):
    data_type: str = Field(..., alias="dataType")
    enum_values: Optional[List[str]] = Field(None, alias="enumValues")


class ColumnDescriptor(_Descriptor):
    key: str
    label: str
    description: Optional[str] = None
    data_type: str = Field(..., alias="dataType")
    enum_values: Optional[List[str]] = Field(None, alias="enumValues")
    array_item_type: Optional[ArrayItemType] = Field(None, alias="arrayItemType")
    optional: bool = False
    hidden: bool = False
    sortable: bool = False
    size: Optional[int] = None
    display: DisplayDescriptor
    filter: Optional[FilterDescriptor] = None
    sheet: Optional[SheetDescriptor] = None


class SchemaJSON(_Descriptor):
    columns: List[ColumnDescriptor]

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation: camelCase keys, unset optional fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
