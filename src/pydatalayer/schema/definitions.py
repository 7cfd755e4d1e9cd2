"""Parsed schema definitions.

A schema node is resolved once, at parse time, into one of two shapes:

* :class:`TypedDefinition` for any mapping node with a string (or union
  list) ``type``, a mapping ``properties``, or a ``default``.  ``type``
  may still be absent; such nodes validate permissively.
* :class:`ImplicitGroup` for any other mapping node, even one with a child
  field named ``items`` or ``type``.
  Every key is a child definition, which lets a schema skip the
  ``{"type": "object", "properties": ...}`` boilerplate.

Lookups never have to re-infer which shape a node is.
"""

from __future__ import annotations

import copy
import json
from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pydatalayer.exceptions import DataLayerSchemaError

_TYPE_VALUE_SHAPES = (str, list)


class SchemaType(StrEnum):
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"


class TypedDefinition(BaseModel):
    """A schema node with explicit keywords."""

    model_config = ConfigDict(frozen=True)

    type: str | None = None
    properties: dict[str, Definition] = Field(default_factory=dict)
    items: Definition | None = None
    default: Any = None
    has_default: bool = False
    """``True`` when the node declared ``default``, even as ``null``."""

    @property
    def children(self) -> dict[str, Definition]:
        return self.properties


class ImplicitGroup(BaseModel):
    """A schema node without keywords whose keys are child definitions."""

    model_config = ConfigDict(frozen=True)

    children: dict[str, Definition] = Field(default_factory=dict)


Definition = TypedDefinition | ImplicitGroup

TypedDefinition.model_rebuild()
ImplicitGroup.model_rebuild()


class SchemaDocument(BaseModel):
    """Root definition plus the JSON it was parsed from."""

    model_config = ConfigDict(frozen=True)

    root: Definition = Field(default_factory=ImplicitGroup)
    raw: dict[str, Any] = Field(default_factory=dict)


def _is_typed_node(node: Mapping[Any, Any]) -> bool:
    # A child field may itself be called "type", "properties" or "items";
    # only keyword-shaped values mark the node as typed.
    return (
        isinstance(node.get("type"), _TYPE_VALUE_SHAPES)
        or isinstance(node.get("properties"), Mapping)
        or "default" in node
    )


def parse_definition(node: Any) -> Definition:
    """Resolve a raw schema node into a :data:`Definition`."""
    if not isinstance(node, Mapping):
        # Stray scalars (e.g. "description": "...") inside an implicit group.
        return TypedDefinition()

    if not _is_typed_node(node):
        return ImplicitGroup(children={str(key): parse_definition(value) for key, value in node.items()})

    declared_type = node.get("type")
    properties = node.get("properties")
    items = node.get("items")
    return TypedDefinition(
        # Union types such as ["string", "null"] are not supported: treat as untyped.
        type=declared_type if isinstance(declared_type, str) else None,
        properties=(
            {str(key): parse_definition(value) for key, value in properties.items()}
            if isinstance(properties, Mapping)
            else {}
        ),
        items=parse_definition(items) if isinstance(items, Mapping) else None,
        default=copy.deepcopy(node["default"]) if "default" in node else None,
        has_default="default" in node,
    )


def parse_schema(source: str | Mapping[str, Any] | None) -> SchemaDocument:
    """Parse schema JSON text (or an already-decoded mapping).

    Blank text is treated as ``{}``.

    Raises
    ------
    DataLayerSchemaError
        If the text is not valid JSON, nests too deeply, or its root is not
        an object.
    """
    if source is None or (isinstance(source, str) and not source.strip()):
        source = "{}"

    if isinstance(source, str):
        try:
            raw = json.loads(source)
        except (ValueError, RecursionError) as exc:
            raise DataLayerSchemaError(f"Failed to parse schema JSON: {exc}") from exc
    else:
        try:
            raw = copy.deepcopy(dict(source))
        except RecursionError as exc:
            raise DataLayerSchemaError("Schema is nested too deeply") from exc

    if not isinstance(raw, dict):
        raise DataLayerSchemaError(f"Schema root must be a JSON object, got {type(raw).__name__}")

    try:
        root = parse_definition(raw)
    except RecursionError as exc:
        raise DataLayerSchemaError("Schema is nested too deeply") from exc
    return SchemaDocument(root=root, raw=raw)


def empty_schema() -> SchemaDocument:
    """Schema that declares nothing; every path lookup against it fails."""
    return SchemaDocument()
