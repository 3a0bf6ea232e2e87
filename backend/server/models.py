"""Request bodies for the schema API."""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, Field

from table_schema.models import SchemaJSON


class InferRequest(BaseModel):
    rows: List[Any] = Field(default_factory=list)


class ColumnFilterIn(BaseModel):
    id: str
    value: Any


class SerializeFiltersRequest(BaseModel):
    table_schema: SchemaJSON = Field(..., alias="schema")
    filters: List[ColumnFilterIn] = Field(default_factory=list)

    model_config = {
        "populate_by_name": True,
    }


class ParseFiltersRequest(BaseModel):
    table_schema: SchemaJSON = Field(..., alias="schema")
    query: str = ""

    model_config = {
        "populate_by_name": True,
    }
