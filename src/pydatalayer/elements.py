"""Host data elements backed by a published data layer."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from pydatalayer.config import SETTING_OBJECT_NAME
from pydatalayer.exceptions import DataLayerNotFoundError
from pydatalayer.registry import DataLayerRegistry

_logger = logging.getLogger(__name__)

_ELEMENT_NAME = 'Data Element "Get Data Layer Value"'


class GetDataSettings(BaseModel):
    """Settings saved by the "Get Data Layer Value" configuration view."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    path: str

    @field_validator("path")
    @classmethod
    def _strip_path(cls, value: str) -> str:
        path = value.strip()
        if not path:
            raise ValueError("path must be non-empty")
        return path


def get_data_value(
    settings: Mapping[str, Any],
    *,
    extension_settings: Mapping[str, Any],
    registry: DataLayerRegistry,
) -> Any:
    """Resolve the configured path against the published data layer.

    Returns ``None`` (after logging) whenever the element is misconfigured
    or the data layer is not available.
    """
    try:
        element = GetDataSettings.model_validate(dict(settings))
    except ValidationError:
        _logger.warning("%s: Path is not configured.", _ELEMENT_NAME)
        return None

    object_name = extension_settings.get(SETTING_OBJECT_NAME)
    if not object_name:
        _logger.error("%s: Data layer object name is not configured in the extension settings.", _ELEMENT_NAME)
        return None

    try:
        store = registry.lookup(object_name)
    except DataLayerNotFoundError:
        _logger.warning('%s: Data layer object "%s" or its "get" method not found.', _ELEMENT_NAME, object_name)
        return None

    return store.get(element.path)
