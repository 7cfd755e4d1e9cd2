"""Schema layer.

Parses schema JSON into tagged definitions once, then answers path
lookups, type checks and default-value synthesis against them.
"""

from pydatalayer.schema.definitions import (
    Definition,
    ImplicitGroup,
    SchemaDocument,
    SchemaType,
    TypedDefinition,
    empty_schema,
    parse_definition,
    parse_schema,
)
from pydatalayer.schema.index import (
    build_default,
    declared_type,
    path_exists,
    resolve_definition,
    type_of,
    validate_value,
)

__all__ = [
    "Definition",
    "ImplicitGroup",
    "SchemaDocument",
    "SchemaType",
    "TypedDefinition",
    "build_default",
    "declared_type",
    "empty_schema",
    "parse_definition",
    "parse_schema",
    "path_exists",
    "resolve_definition",
    "type_of",
    "validate_value",
]
