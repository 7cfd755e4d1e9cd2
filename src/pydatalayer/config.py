"""Data layer configuration."""

from __future__ import annotations

import dataclasses
import json
import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydatalayer.exceptions import DataLayerConfigError

DEFAULT_OBJECT_NAME = "digitalData"

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

# Host settings keys (as saved by the extension configuration screen).
SETTING_OBJECT_NAME = "dataObjectName"
SETTING_TENANT_PROPERTY = "tenantPropertyName"
SETTING_SCHEMA_JSON = "initialSchemaJson"


def is_valid_identifier(name: Any) -> bool:
    """Return ``True`` when *name* can be used as an object or tenant name."""
    return isinstance(name, str) and _IDENTIFIER_RE.fullmatch(name) is not None


def validate_schema_json(text: str | None) -> bool:
    """Check schema text the way the configuration screen does.

    Empty text is accepted and treated as ``{}``.
    """
    try:
        json.loads(text or "{}")
    except (ValueError, RecursionError):
        return False
    return True


@dataclasses.dataclass(frozen=True)
class DataLayerConfig:
    """Startup configuration supplied by the host.

    Parameters
    ----------
    object_name : str
        Name the store is published under. Must match
        ``^[A-Za-z_$][A-Za-z0-9_$]*$``; an invalid name falls back to
        ``"digitalData"``.
    tenant_property_name : str
        Top-level key all schema-declared data lives under. Required:
        a missing or invalid tenant disables every store method.
    initial_schema_json : str
        Schema document as JSON text. Unparsable text leaves the store
        running with an empty schema.
    """

    object_name: str = DEFAULT_OBJECT_NAME
    tenant_property_name: str = ""
    initial_schema_json: str = "{}"

    def require_tenant(self) -> str:
        """Return the tenant property name.

        Raises
        ------
        DataLayerConfigError
            If the name is missing or not a valid identifier.
        """
        if not is_valid_identifier(self.tenant_property_name):
            raise DataLayerConfigError(
                "Invalid or missing Tenant Property Name in configuration. Methods will fail.",
                field="tenant_property_name",
            )
        return self.tenant_property_name

    def resolved_object_name(self) -> str:
        """Object name to publish under, falling back to the default."""
        if is_valid_identifier(self.object_name):
            return self.object_name
        return DEFAULT_OBJECT_NAME

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> DataLayerConfig:
        """Build configuration from the host's extension settings mapping."""
        return cls(
            object_name=settings.get(SETTING_OBJECT_NAME) or DEFAULT_OBJECT_NAME,
            tenant_property_name=settings.get(SETTING_TENANT_PROPERTY) or "",
            initial_schema_json=settings.get(SETTING_SCHEMA_JSON) or "{}",
        )

    @classmethod
    def from_env(cls, **overrides: Any) -> DataLayerConfig:
        """Create configuration from environment variables.

        Reads ``DATALAYER_OBJECT_NAME``, ``DATALAYER_TENANT_PROPERTY`` and
        ``DATALAYER_SCHEMA_JSON``.  When no inline schema is set,
        ``DATALAYER_SCHEMA_FILE`` names a file to read it from.  Explicit
        keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "DATALAYER_OBJECT_NAME": "object_name",
            "DATALAYER_TENANT_PROPERTY": "tenant_property_name",
            "DATALAYER_SCHEMA_JSON": "initial_schema_json",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        schema_file = env.get("DATALAYER_SCHEMA_FILE")
        if schema_file and "initial_schema_json" not in config_kwargs and "initial_schema_json" not in overrides:
            config_kwargs["initial_schema_json"] = Path(schema_file).read_text(encoding="utf-8")

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
