from __future__ import annotations

import json
import logging

import pytest

from pydatalayer.config import DataLayerConfig
from pydatalayer.elements import get_data_value
from pydatalayer.exceptions import DataLayerNotFoundError
from pydatalayer.registry import DataLayerRegistry
from pydatalayer.store import initialize_data_layer

_EXTENSION_SETTINGS = {"dataObjectName": "digitalData"}


def _registry() -> DataLayerRegistry:
    registry = DataLayerRegistry()
    store = initialize_data_layer(
        DataLayerConfig(
            object_name="digitalData",
            tenant_property_name="acme",
            initial_schema_json=json.dumps({"user": {"id": {"type": "string"}}}),
        ),
        registry=registry,
    )
    store.set("user.id", "u-42")
    return registry


def test_get_data_value_reads_published_store() -> None:
    value = get_data_value({"path": " user.id "}, extension_settings=_EXTENSION_SETTINGS, registry=_registry())

    assert value == "u-42"


@pytest.mark.parametrize("settings", [{}, {"path": ""}, {"path": "   "}])
def test_missing_path_returns_none(settings: dict, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        value = get_data_value(settings, extension_settings=_EXTENSION_SETTINGS, registry=_registry())

    assert value is None
    assert "Path is not configured" in caplog.text


def test_missing_object_name_returns_none(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR):
        value = get_data_value({"path": "user.id"}, extension_settings={}, registry=_registry())

    assert value is None
    assert "object name is not configured" in caplog.text


def test_unpublished_object_returns_none(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        value = get_data_value(
            {"path": "user.id"},
            extension_settings={"dataObjectName": "otherLayer"},
            registry=_registry(),
        )

    assert value is None
    assert "otherLayer" in caplog.text


def test_registry_lookup_raises_for_unknown_name() -> None:
    registry = DataLayerRegistry()

    with pytest.raises(DataLayerNotFoundError) as excinfo:
        registry.lookup("nope")

    assert excinfo.value.object_name == "nope"
    assert registry.get("nope") is None
    assert len(registry) == 0


def test_registry_replacement_logs_warning(caplog: pytest.LogCaptureFixture) -> None:
    registry = DataLayerRegistry()
    config = DataLayerConfig(tenant_property_name="acme")
    first = initialize_data_layer(config, registry=registry)

    with caplog.at_level(logging.WARNING):
        second = initialize_data_layer(config, registry=registry)

    assert first is not second
    assert registry.lookup("digitalData") is second
    assert registry.names() == ["digitalData"]
    assert "replacing" in caplog.text
