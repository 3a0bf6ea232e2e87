"""
Table schema entry point.

    schema = create_table_schema({
        "level": presets.log_level(LEVELS),
        "host": col.string().label("Host").sheet(),
        "latency": presets.duration("ms").label("Latency").sortable(),
    })
    payload = schema.to_json().to_dict()
    restored = TableSchema.from_json(payload)
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Union

from table_schema.col import ColBuilder
from table_schema.models import SchemaJSON
from table_schema.serialize import deserialize_schema, serialize_schema
from table_schema.validate import validate_schema


class TableSchema:
    """A validated, ordered mapping of column key -> builder."""

    __slots__ = ("_definition",)

    def __init__(self, definition: Mapping[str, ColBuilder]):
        # Callers go through create_table_schema / from_json, which validate.
        self._definition: Dict[str, ColBuilder] = dict(definition)

    def __repr__(self) -> str:
        return f"TableSchema({list(self._definition)!r})"

    def __len__(self) -> int:
        return len(self._definition)

    def __iter__(self):
        return iter(self._definition)

    @property
    def definition(self) -> Dict[str, ColBuilder]:
        return self._definition

    def to_json(self) -> SchemaJSON:
        return serialize_schema(self._definition)

    @classmethod
    def from_json(cls, json: Union[SchemaJSON, Mapping[str, Any]]) -> TableSchema:
        """Reconstruct a schema from its JSON form; validation runs in the deserializer."""
        return cls(deserialize_schema(json))


def create_table_schema(definition: Mapping[str, ColBuilder]) -> TableSchema:
    """Validate a builder definition and wrap it. Raises SchemaValidationError."""
    validate_schema(definition)
    return TableSchema(definition)


def get_default_column_visibility(
    definition: Union[TableSchema, Mapping[str, ColBuilder]],
) -> Dict[str, bool]:
    """Initial visibility map: ``{key: False}`` for hidden columns only."""
    if isinstance(definition, TableSchema):
        definition = definition.definition
    return {key: False for key, builder in definition.items() if builder.config.hidden}
