"""Property path proxies.

A proxy stands in for an entity (or a nested property) inside builder
clauses. Accessing a declared property returns another proxy that records the
step instead of reading data, so ``lambda b: b.author.name`` yields the
``PropertyInfo`` for ``author.name``. :func:`proxy_target` recovers it.
"""

from __future__ import annotations

from typing import Any

from .errors import ConfigurationError
from .metadata import TypeMetadata
from .property_info import PropertyInfo


def _step(type_metadata: TypeMetadata, name: str, parent: PropertyInfo | None) -> PropertyInfoProxy:
    property_metadata = type_metadata.property_metadata(name)
    if property_metadata is None:
        raise AttributeError(
            f"Property '{name}' not declared on {type_metadata.type_name}. "
            f"Available properties: {list(type_metadata.property_metadatas)}"
        )

    path = name if parent is None else f"{parent.path}.{name}"
    property_info = PropertyInfo(path, property_metadata, property_metadata.type_metadata, parent)
    return PropertyInfoProxy(property_info)


class EntityInfoProxy:
    """Root proxy for an entity type."""

    __slots__ = ("_type_metadata",)

    def __init__(self, type_metadata: TypeMetadata) -> None:
        self._type_metadata = type_metadata

    def __getattr__(self, name: str) -> PropertyInfoProxy:
        if name.startswith("_"):
            raise AttributeError(f"No attribute {name}")
        return _step(self._type_metadata, name, None)

    def __repr__(self) -> str:
        return f"EntityInfoProxy({self._type_metadata.type_name})"


class PropertyInfoProxy:
    """Proxy for a property reached through a path of accesses."""

    __slots__ = ("_property_info",)

    def __init__(self, property_info: PropertyInfo) -> None:
        self._property_info = property_info

    def __getattr__(self, name: str) -> PropertyInfoProxy:
        if name.startswith("_"):
            raise AttributeError(f"No attribute {name}")
        return _step(self._property_info.type_metadata, name, self._property_info)

    def __repr__(self) -> str:
        return f"PropertyInfoProxy({self._property_info.path!r})"


def proxy_target(proxy: Any) -> PropertyInfo:
    """Return the ``PropertyInfo`` recorded by a property proxy."""
    if isinstance(proxy, PropertyInfoProxy):
        return proxy._property_info
    if isinstance(proxy, EntityInfoProxy):
        raise ConfigurationError(
            f"Clause must select a property of {proxy._type_metadata.type_name}, not the entity itself"
        )
    raise TypeError(f"Expected a property proxy, got {type(proxy).__name__}")
