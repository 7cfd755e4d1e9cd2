"""Explicit registry of published data layers.

The host owns one registry and hands it to every store it initializes and
to every collaborator that needs to find a store by object name.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydatalayer.exceptions import DataLayerNotFoundError

if TYPE_CHECKING:
    from pydatalayer.store import DataLayerStore

_logger = logging.getLogger(__name__)


class DataLayerRegistry:
    """Name → store map shared by the host and its callers."""

    def __init__(self) -> None:
        self._stores: dict[str, DataLayerStore] = {}

    def publish(self, name: str, store: DataLayerStore) -> None:
        existing = self._stores.get(name)
        if existing is not None and existing is not store:
            _logger.warning("Data Layer: replacing object already published as %r", name)
        self._stores[name] = store

    def lookup(self, name: str) -> DataLayerStore:
        """Return the store published under *name*.

        Raises
        ------
        DataLayerNotFoundError
            If nothing is published under *name*.
        """
        store = self._stores.get(name)
        if store is None:
            raise DataLayerNotFoundError(f"Data layer object {name!r} not found", object_name=name)
        return store

    def get(self, name: str) -> DataLayerStore | None:
        return self._stores.get(name)

    def names(self) -> list[str]:
        return list(self._stores)

    def __contains__(self, name: object) -> bool:
        return name in self._stores

    def __len__(self) -> int:
        return len(self._stores)
