from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from .metadata import PropertyMetadata, TypeMetadata, get_type_metadata

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class EntityInfo(Generic[T]):
    """Root entity a command works on."""

    entity_type: type[T]
    type_metadata: TypeMetadata = field(repr=False)

    @classmethod
    def of(cls, entity_type: type[T]) -> EntityInfo[T]:
        return cls(entity_type, get_type_metadata(entity_type))


@dataclass(slots=True, frozen=True)
class PropertyInfo:
    """One step of a property access path.

    ``path`` is the dot-joined chain of segment names from the root entity.
    ``type_metadata`` is the type the step resolves to; for the element step of
    a collection it is the element type, not the collection type.
    """

    path: str
    property_metadata: PropertyMetadata = field(repr=False)
    type_metadata: TypeMetadata = field(repr=False)
    parent_property_info: PropertyInfo | None = field(default=None, repr=False)

    @property
    def name(self) -> str:
        return self.property_metadata.name

    def ancestors(self) -> list[PropertyInfo]:
        """Parent chain, nearest first."""
        result = []
        parent = self.parent_property_info
        while parent is not None:
            result.append(parent)
            parent = parent.parent_property_info
        return result
