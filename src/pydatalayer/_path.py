"""Structural get/set of values at dot-delimited paths.

No schema awareness here: these helpers only know about nested dicts.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any


def read_path(tree: Any, path: Any) -> Any:
    """Return the value at *path* inside *tree*, or ``None`` if any segment is missing."""
    if tree is None or not isinstance(path, str):
        return None
    current = tree
    for key in path.split("."):
        if not isinstance(current, Mapping) or key not in current:
            return None
        current = current[key]
    return current


def write_path(tree: MutableMapping[str, Any], path: Any, value: Any) -> MutableMapping[str, Any]:
    """Assign *value* at *path*, creating (or replacing) intermediate dicts as needed.

    Mutates *tree* in place and returns it.
    """
    if not isinstance(path, str) or path == "":
        return tree
    *parents, leaf = path.split(".")
    current = tree
    for key in parents:
        child = current.get(key)
        if not isinstance(child, MutableMapping):
            child = {}
            current[key] = child
        current = child
    current[leaf] = value
    return tree
