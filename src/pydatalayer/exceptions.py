"""Custom exception hierarchy for pydatalayer.

These are raised by the building blocks (schema parsing, configuration
checks, registry lookups).  The public :class:`~pydatalayer.store.DataLayerStore`
methods catch them, log, and report a falsy result instead.
"""

from __future__ import annotations


class DataLayerError(Exception):
    """Base exception for all pydatalayer errors."""


class DataLayerConfigError(DataLayerError):
    """Invalid or missing configuration (object or tenant name)."""

    def __init__(self, message: str, *, field: str = "") -> None:
        self.field = field
        super().__init__(message)


class DataLayerSchemaError(DataLayerError):
    """Schema text could not be parsed into a schema document."""


class DataLayerNotFoundError(DataLayerError):
    """No data layer is published under the requested object name."""

    def __init__(self, message: str, *, object_name: str = "") -> None:
        self.object_name = object_name
        super().__init__(message)
