"""pydatalayer - Schema-governed, path-addressed data layer store."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pydatalayer")
except PackageNotFoundError:
    __version__ = "0+local"
from pydatalayer.assets import upsert_assets
from pydatalayer.config import DataLayerConfig, is_valid_identifier, validate_schema_json
from pydatalayer.elements import GetDataSettings, get_data_value
from pydatalayer.exceptions import (
    DataLayerConfigError,
    DataLayerError,
    DataLayerNotFoundError,
    DataLayerSchemaError,
)
from pydatalayer.registry import DataLayerRegistry
from pydatalayer.schema import (
    ImplicitGroup,
    SchemaDocument,
    SchemaType,
    TypedDefinition,
    build_default,
    parse_schema,
    path_exists,
    resolve_definition,
    type_of,
    validate_value,
)
from pydatalayer.store import DataLayerStore, initialize_data_layer

__all__ = [
    "__version__",
    "DataLayerConfig",
    "DataLayerConfigError",
    "DataLayerError",
    "DataLayerNotFoundError",
    "DataLayerRegistry",
    "DataLayerSchemaError",
    "DataLayerStore",
    "GetDataSettings",
    "ImplicitGroup",
    "SchemaDocument",
    "SchemaType",
    "TypedDefinition",
    "build_default",
    "get_data_value",
    "initialize_data_layer",
    "is_valid_identifier",
    "parse_schema",
    "path_exists",
    "resolve_definition",
    "type_of",
    "upsert_assets",
    "validate_schema_json",
]
