"""
Schema API routes, mounted as a sub-router on the main FastAPI app.

Thin JSON wrappers around the table_schema and filter_query operations:
inference, validation / normalization, source generation, and the filter
query codec.
"""

from __future__ import annotations

import io
import json
import logging
from typing import Any, Dict

import pandas as pd
from fastapi import APIRouter, File, HTTPException, UploadFile
from pydantic import ValidationError

from filter_query.codec import deserialize, serialize_column_filters
from server import settings
from server.models import InferRequest, ParseFiltersRequest, SerializeFiltersRequest
from table_schema.errors import TableSchemaError
from table_schema.generators.filter_fields import generate_filter_fields
from table_schema.generators.filter_schema import generate_filter_schema
from table_schema.infer import infer_schema_from_dataframe, infer_schema_from_json
from table_schema.models import SchemaJSON
from table_schema.schema import TableSchema
from table_schema.to_source import schema_to_python

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/api", tags=["schema"])


def _load_schema(schema_json: SchemaJSON) -> TableSchema:
    """Rebuild and validate a schema, mapping failures to 422."""
    try:
        return TableSchema.from_json(schema_json)
    except TableSchemaError as e:
        logger.info("Rejected schema: %s", e)
        raise HTTPException(status_code=422, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=json.loads(e.json(include_url=False)))


# ---------------------------------------------------------------------------
# Schema endpoints
# ---------------------------------------------------------------------------

@router.post("/schema/infer")
async def infer_schema(body: InferRequest) -> Dict[str, Any]:
    """Infer a schema from sample rows."""
    result = infer_schema_from_json(body.rows)
    logger.info("Inferred %d columns from %d rows", len(result.columns), len(body.rows))
    return result.to_dict()


@router.post("/schema/infer/csv")
async def infer_schema_csv(file: UploadFile = File(...)) -> Dict[str, Any]:
    """Infer a schema from an uploaded CSV (first rows only)."""
    content = await file.read()
    try:
        df = pd.read_csv(io.BytesIO(content))
    except Exception as e:
        logger.exception("Failed to read CSV")
        raise HTTPException(status_code=400, detail=f"Failed to read CSV: {e}")

    result = infer_schema_from_dataframe(df, max_rows=settings.max_upload_rows())
    logger.info(
        "Inferred %d columns from %s (%d rows)",
        len(result.columns), file.filename or "upload", len(df),
    )
    return result.to_dict()


@router.post("/schema/validate")
async def validate_schema_json(body: SchemaJSON) -> Dict[str, Any]:
    """Validate a schema document and return its normalized form."""
    return _load_schema(body).to_json().to_dict()


@router.post("/schema/source")
async def schema_source(body: SchemaJSON) -> Dict[str, str]:
    """Python source that recreates the (validated) schema."""
    schema = _load_schema(body)
    return {"source": schema_to_python(schema.to_json())}


# ---------------------------------------------------------------------------
# Filter query endpoints
# ---------------------------------------------------------------------------

@router.post("/filters/serialize")
async def serialize_filters(body: SerializeFiltersRequest) -> Dict[str, str]:
    schema = _load_schema(body.table_schema)
    fields = generate_filter_fields(schema.definition)
    query = serialize_column_filters(
        [{"id": f.id, "value": f.value} for f in body.filters],
        fields,
    )
    return {"query": query}


@router.post("/filters/parse")
async def parse_filters(body: ParseFiltersRequest) -> Dict[str, Any]:
    """Parse a filter query; invalid input is reported, never raised."""
    schema = _load_schema(body.table_schema)
    parse = deserialize(generate_filter_schema(schema.definition))
    result = parse(body.query)
    if not result.success:
        return {
            "success": False,
            "errors": json.loads(result.error.json(include_url=False)),
        }
    return {
        "success": True,
        "data": result.data.model_dump(mode="json", by_alias=True, exclude_none=True),
    }
