"""Path lookup, type checks and default synthesis over parsed schemas."""

from __future__ import annotations

import copy
import math
from collections.abc import Mapping
from typing import Any

from pydatalayer.schema.definitions import Definition, ImplicitGroup, SchemaType, TypedDefinition


def resolve_definition(schema: Definition | None, path: Any) -> Definition | None:
    """Return the definition declared at *path*, or ``None`` if any segment is undeclared."""
    if schema is None or not isinstance(path, str):
        return None
    current: Definition = schema
    for key in path.split("."):
        child = current.children.get(key)
        if child is None:
            return None
        current = child
    return current


def path_exists(schema: Definition | None, path: Any) -> bool:
    return resolve_definition(schema, path) is not None


def type_of(value: Any) -> str:
    """Classify *value* using JSON type names.

    ``None``, lists and mappings get their own names so that ``"object"``
    only ever means a mapping.
    """
    if value is None:
        return "null"
    # bool is an int subclass; check it first.
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__.lower()


def _is_integral(value: Any) -> bool:
    if type_of(value) != "number":
        return False
    if isinstance(value, int):
        return True
    return math.isfinite(value) and float(value).is_integer()


def validate_value(value: Any, definition: Definition | None) -> bool:
    """Check *value* against the definition's declared ``type``.

    A definition without a type accepts anything.
    """
    if not isinstance(definition, TypedDefinition) or not definition.type:
        return True
    if definition.type == SchemaType.INTEGER:
        return _is_integral(value)
    return type_of(value) == definition.type


def declared_type(definition: Definition | None) -> str | None:
    if isinstance(definition, TypedDefinition):
        return definition.type
    return None


def build_default(definition: Definition) -> Any:
    """Synthesize a fully-populated default value for *definition*.

    An explicit ``default`` wins (deep-copied).  Otherwise the declared type
    picks a placeholder, recursing through ``properties`` for objects.
    Implicit groups recurse through every child.
    """
    if isinstance(definition, ImplicitGroup):
        return {key: build_default(child) for key, child in definition.children.items()}

    if definition.has_default:
        return copy.deepcopy(definition.default)

    declared = definition.type
    if declared == SchemaType.OBJECT or (declared is None and definition.properties):
        return {key: build_default(child) for key, child in definition.properties.items()}
    if declared == SchemaType.ARRAY:
        return []
    if declared == SchemaType.STRING:
        return ""
    if declared in (SchemaType.NUMBER, SchemaType.INTEGER):
        return 0
    if declared == SchemaType.BOOLEAN:
        return False
    return None
