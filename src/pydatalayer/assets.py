"""Named asset list upsert.

Assets are stored as an ordered list of ``{"name": ..., "value": ...}``
records but addressed by name, so they are the one place where writes
are list-shaped rather than path-shaped.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

ASSETS_KEY = "assets"


def upsert_assets(existing: Any, updates: Mapping[str, Any]) -> list[dict[str, Any]]:
    """Merge *updates* into *existing* by name and return a new list.

    Existing names keep their position and get their value replaced;
    new names are appended in the order *updates* supplies them.
    Entries in *existing* that are not mappings with a ``name`` key are dropped.
    """
    by_name: dict[Any, Any] = {}
    if isinstance(existing, list):
        for entry in existing:
            if isinstance(entry, Mapping) and "name" in entry:
                by_name[entry["name"]] = entry.get("value")

    # dict assignment keeps an existing key's position
    for name, value in updates.items():
        by_name[name] = copy.deepcopy(value)

    return [{"name": name, "value": value} for name, value in by_name.items()]
