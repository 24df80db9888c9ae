"""Field Projection & Mapping."""

from catalog.application.mapping.field_map import (
    FieldMap,
    entity_fields,
    entity_from_row,
    project_fields,
    to_camel,
)

__all__ = [
    "FieldMap",
    "entity_fields",
    "entity_from_row",
    "project_fields",
    "to_camel",
]
