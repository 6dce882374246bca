from __future__ import annotations

import reprlib
import threading
from typing import Any, ClassVar

from .metaclass import EntityMetaclass
from .metadata import TypeMetadata

_comparing = threading.local()


class Entity(metaclass=EntityMetaclass):
    """Base class for domain objects mapped by an entity provider.

    Properties are declared with annotations; each one may be given a plain
    default or a :class:`~entity_bridge.metadata.Field`::

        class Book(Entity, name="books"):
            id: int
            title: str
            author: Author | None = None
    """

    __type_metadata__: ClassVar[TypeMetadata]

    def __init__(self, **kwargs: Any) -> None:
        property_metadatas = self.__type_metadata__.property_metadatas

        unknown = [name for name in kwargs if name not in property_metadatas]
        if unknown:
            raise TypeError(f"{type(self).__name__} has no properties {', '.join(sorted(unknown))}")

        for name, property_metadata in property_metadatas.items():
            if name in kwargs:
                setattr(self, name, kwargs[name])
            else:
                setattr(self, name, property_metadata.make_default())

    @classmethod
    def type_metadata(cls) -> TypeMetadata:
        return cls.__type_metadata__

    @reprlib.recursive_repr()
    def __repr__(self) -> str:
        field_values = []
        for name in self.__type_metadata__.property_metadatas:
            value = getattr(self, name, None)
            if value is not None:
                field_values.append(f"{name}={value!r}")
        return f"{self.__class__.__name__}({', '.join(field_values)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        if self is other:
            return True
        # Pairs already being compared further up the stack are assumed equal
        # so that cyclic graphs terminate.
        pair = (id(self), id(other))
        in_progress = getattr(_comparing, "pairs", None)
        if in_progress is None:
            in_progress = _comparing.pairs = set()
        if pair in in_progress:
            return True
        in_progress.add(pair)
        try:
            for name in self.__type_metadata__.property_metadatas:
                if getattr(self, name, None) != getattr(other, name, None):
                    return False
            return True
        finally:
            in_progress.discard(pair)
