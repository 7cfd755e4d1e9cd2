"""Schema-governed data layer store.

Every write goes through the schema: the path must be declared and the
value must match the declared type.  Public methods never raise; they
log through the injected logger and return ``False`` (or ``None`` for
:meth:`DataLayerStore.get`).
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping, MutableMapping
from typing import Any

from pydatalayer._path import read_path, write_path
from pydatalayer._redact import redact_for_log
from pydatalayer.assets import ASSETS_KEY, upsert_assets
from pydatalayer.config import DEFAULT_OBJECT_NAME, DataLayerConfig
from pydatalayer.exceptions import DataLayerConfigError, DataLayerSchemaError
from pydatalayer.registry import DataLayerRegistry
from pydatalayer.schema import (
    Definition,
    SchemaDocument,
    build_default,
    declared_type,
    empty_schema,
    parse_schema,
    resolve_definition,
    type_of,
    validate_value,
)

_logger = logging.getLogger(__name__)

_TOUCHPOINT_PATH = "application.touchpoint"
_KPI_PATH = "application.kpi"
_VIEW_NAME_PATH = "page.view_name"


def _is_settable(value: Any) -> bool:
    """Only non-empty scalars may go through :meth:`DataLayerStore.set`."""
    if not isinstance(value, (str, int, float, bool)):
        return False
    return value != ""


def _non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


class DataLayerStore:
    """In-memory, schema-validated state tree published under an object name.

    The store starts uninitialized; every method fails until
    :meth:`initialize` has run with a valid tenant property name.
    Instances are closed-shape: ``__slots__`` prevents adding or
    replacing attributes and methods after construction.
    """

    __slots__ = (
        "_logger",
        "_registry",
        "_schema",
        "_state",
        "_object_name",
        "_tenant",
        "_initialized",
    )

    def __init__(
        self,
        *,
        registry: DataLayerRegistry | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._logger = logger or _logger
        self._registry = registry
        self._schema: SchemaDocument = empty_schema()
        self._state: dict[str, Any] = {}
        self._object_name = DEFAULT_OBJECT_NAME
        self._tenant: str | None = None
        self._initialized = False

    def __repr__(self) -> str:
        return f"<DataLayerStore {self._object_name!r} tenant={self._tenant!r} initialized={self._initialized}>"

    @property
    def object_name(self) -> str:
        return self._object_name

    @property
    def tenant_property_name(self) -> str | None:
        return self._tenant

    @property
    def initialized(self) -> bool:
        return self._initialized

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self, config: DataLayerConfig) -> None:
        """Parse the schema, seed the tenant subtree and publish the store.

        Runs once; later calls are ignored so configuration cannot be
        swapped mid-process.  Configuration problems are logged and leave
        the store degraded (empty schema, or every method failing) rather
        than raising.
        """
        if self._initialized:
            self._logger.debug("Data Layer (%s): already initialized, ignoring", self._object_name)
            return

        self._object_name = config.resolved_object_name()
        if config.object_name and self._object_name != config.object_name:
            self._logger.warning(
                "Data Layer: invalid Data Object Name %r, using %r",
                config.object_name,
                self._object_name,
            )

        try:
            self._tenant = config.require_tenant()
        except DataLayerConfigError as exc:
            self._logger.error("Data Layer: %s", exc)
            self._tenant = None

        try:
            self._schema = parse_schema(config.initial_schema_json)
        except DataLayerSchemaError as exc:
            self._logger.error("Data Layer: %s. Using empty schema {}.", exc)
            self._schema = empty_schema()

        if self._tenant is not None:
            self._state[self._tenant] = build_default(self._schema.root)
            self._logger.info("Data Layer: Initial state built from schema.")

        if self._registry is not None:
            self._registry.publish(self._object_name, self)
            self._logger.info("Data Layer: Object %r published.", self._object_name)

        self._initialized = True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ready(self) -> bool:
        return self._initialized and self._tenant is not None

    def _error(self, message: str, *args: Any) -> None:
        self._logger.error("Data Layer (%s): " + message, self._object_name, *args)

    def _full_path(self, path: str) -> str:
        return f"{self._tenant}.{path}"

    def _set_value(self, path: str, value: Any) -> bool:
        """Schema-checked write without the public scalar-only restriction."""
        if not self._ready():
            return False

        definition = resolve_definition(self._schema.root, path)
        if definition is None:
            self._error('Set failed. Path "%s" does not exist in the configured schema.', path)
            return False

        if not validate_value(value, definition):
            self._error(
                'Set failed for path "%s". Invalid type provided. Expected "%s" but received "%s".',
                path,
                declared_type(definition),
                type_of(value),
            )
            return False

        write_path(self._state, self._full_path(path), value)
        self._logger.info("Data Layer (%s): Set successful: %s", self._object_name, path)
        return True

    def _schema_merge(self, target: Any, source: Mapping[Any, Any], definition: Definition) -> None:
        if not isinstance(target, MutableMapping):
            self._error("Merge skipped. Target is a %s, not an object.", type_of(target))
            return

        allowed = definition.children
        for key, source_value in source.items():
            child = allowed.get(key)
            if child is None:
                self._logger.debug("Data Layer (%s): Merge ignored undeclared key %r", self._object_name, key)
                continue

            target_value = target.get(key)
            if type_of(source_value) == "object" and type_of(target_value) == "object":
                self._schema_merge(target_value, source_value, child)
            elif validate_value(source_value, child):
                target[key] = copy.deepcopy(source_value)
            else:
                self._error(
                    'Merge failed for property "%s". Invalid type provided. Expected "%s" but received "%s".',
                    key,
                    declared_type(child),
                    type_of(source_value),
                )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get(self, path: str) -> Any:
        """Return a copy of the value at *path*, or ``None`` when absent."""
        if not self._ready() or not isinstance(path, str):
            return None
        return copy.deepcopy(read_path(self._state, self._full_path(path)))

    def set(self, path: str, value: Any) -> bool:
        """Write a non-empty scalar to a schema-declared path.

        Structured values (mappings, lists) must go through :meth:`merge`.
        """
        if not self._ready():
            return False

        if not _is_settable(value):
            self._error(
                'Set failed for path "%s". Value cannot be null, an empty string, or an object/array.',
                path,
            )
            return False

        return self._set_value(path, value)

    def merge(self, target_path: str | None, source: Mapping[str, Any]) -> bool:
        """Recursively merge *source* into the subtree at *target_path*.

        With no *target_path* the merge starts at the tenant root.  Keys
        not declared in the schema are skipped.  A key whose value fails
        type validation is logged and skipped; the remaining keys still
        apply and the call returns ``True``.
        """
        if not self._ready():
            return False

        if type_of(source) != "object":
            self._error("Merge failed. Invalid object provided.")
            return False

        base = self._state[self._tenant]
        target: Any = base
        definition: Definition = self._schema.root

        if target_path:
            resolved = resolve_definition(self._schema.root, target_path)
            if resolved is None:
                self._error('Merge failed. Target path "%s" does not exist in the configured schema.', target_path)
                return False
            definition = resolved
            target = read_path(base, target_path)
            if target is None and isinstance(base, MutableMapping):
                write_path(base, target_path, {})
                target = read_path(base, target_path)

        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(
                "Data Layer (%s): Merge payload: %s",
                self._object_name,
                redact_for_log(source),
            )

        self._schema_merge(target, source, definition)
        self._logger.info(
            "Data Layer (%s): Merge successful%s.",
            self._object_name,
            f" at path: {target_path}" if target_path else "",
        )
        return True

    def set_view(self, view_name: str, touchpoint: str | None = None) -> bool:
        """Set ``page.view_name``, optionally setting the touchpoint first.

        The result reflects the view name write only.
        """
        if not _non_empty_string(view_name):
            self._error("setView failed. View name must be a non-empty string.")
            return False

        if _non_empty_string(touchpoint):
            self.set(_TOUCHPOINT_PATH, touchpoint)
        elif touchpoint is not None:
            self._logger.warning(
                'Data Layer (%s): setView optional parameter "touchpoint" ignored. '
                "Touchpoint must be a non-empty string.",
                self._object_name,
            )
        return self.set(_VIEW_NAME_PATH, view_name)

    def set_kpi(self, kpi_name: str) -> bool:
        if not _non_empty_string(kpi_name):
            self._error("setKPI failed. KPI name must be a non-empty string.")
            return False
        return self.set(_KPI_PATH, kpi_name)

    def set_touchpoint(self, touchpoint: str) -> bool:
        if not _non_empty_string(touchpoint):
            self._error("setTouchpoint failed. Touchpoint name must be a non-empty string.")
            return False
        return self.set(_TOUCHPOINT_PATH, touchpoint)

    def clear_touchpoint(self) -> bool:
        """Blank ``application.touchpoint``; the only sanctioned empty-string write."""
        return self._set_value(_TOUCHPOINT_PATH, "")

    # Section setters take the object first, unlike merge(path, obj).

    def set_form(self, obj: Mapping[str, Any]) -> bool:
        return self.merge("form", obj)

    def set_page(self, obj: Mapping[str, Any]) -> bool:
        return self.merge("page", obj)

    def set_user(self, obj: Mapping[str, Any]) -> bool:
        return self.merge("user", obj)

    def set_search(self, obj: Mapping[str, Any]) -> bool:
        return self.merge("search", obj)

    def set_assets(self, path: str, assets: Mapping[str, Any]) -> bool:
        """Upsert name → value pairs into the asset list at ``<path>.assets``.

        Existing names are updated in place; new names are appended.
        """
        if not _non_empty_string(path):
            self._error("setAssets failed. Path must be a valid string to the parent object.")
            return False
        if type_of(assets) != "object":
            self._error("setAssets failed. The second argument must be an object of key-value pairs.")
            return False
        if not self._ready():
            return False

        asset_path = f"{path}.{ASSETS_KEY}"
        current = read_path(self._state, self._full_path(asset_path))
        return self._set_value(asset_path, upsert_assets(current, assets))

    def get_state_snapshot(self) -> dict[str, Any]:
        """Deep copy of the whole state tree, tenant root included."""
        return copy.deepcopy(self._state)

    def get_schema_snapshot(self) -> dict[str, Any]:
        """Deep copy of the schema document as it was supplied."""
        return copy.deepcopy(self._schema.raw)


def initialize_data_layer(
    config: DataLayerConfig,
    *,
    registry: DataLayerRegistry | None = None,
    logger: logging.Logger | None = None,
) -> DataLayerStore:
    """Create, initialize and (when *registry* is given) publish a store."""
    store = DataLayerStore(registry=registry, logger=logger)
    store.initialize(config)
    return store
