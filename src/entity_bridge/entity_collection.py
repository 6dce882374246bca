from __future__ import annotations

import builtins
import reprlib
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Generic, TypeVar, overload

T = TypeVar("T")


class EntityCollection(Generic[T]):
    """Ordered collection of entities used everywhere instead of lists.

    The list handed to the constructor is wrapped, not copied. Derived
    collections (``slice``, ``filter``) always own a fresh list. ``push`` is
    the only way to grow a collection; there is no index assignment.
    """

    __slots__ = ("_entities", "__weakref__")

    def __init__(self, entities: Iterable[T] | None = None) -> None:
        if entities is None:
            entities = []
        elif not isinstance(entities, list):
            entities = list(entities)
        self._entities: list[T] = entities

    def __iter__(self) -> Iterator[T]:
        return iter(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: builtins.slice) -> EntityCollection[T]: ...

    def __getitem__(self, index: int | builtins.slice) -> T | EntityCollection[T]:
        if isinstance(index, slice):
            return EntityCollection(self._entities[index])
        return self._entities[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EntityCollection):
            return NotImplemented
        return self._entities == other._entities

    __hash__ = None  # type: ignore[assignment]

    @reprlib.recursive_repr()
    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._entities!r})"

    @property
    def length(self) -> int:
        return len(self._entities)

    def count(self) -> int:
        return len(self._entities)

    def is_empty(self) -> bool:
        return len(self._entities) == 0

    def first(self) -> T | None:
        """First entity or None if the collection is empty."""
        return self._entities[0] if self._entities else None

    def last(self) -> T | None:
        """Last entity or None if the collection is empty."""
        return self._entities[-1] if self._entities else None

    def some(self, predicate: Callable[[T], Any]) -> bool:
        return any(predicate(entity) for entity in self._entities)

    def find(self, predicate: Callable[[T], Any]) -> T | None:
        for entity in self._entities:
            if predicate(entity):
                return entity
        return None

    def push(self, *entities: T) -> int:
        """Append entities and return the new length."""
        self._entities.extend(entities)
        return len(self._entities)

    def slice(self, start: int | None = None, end: int | None = None) -> EntityCollection[T]:
        return EntityCollection(self._entities[start:end])

    def filter(self, predicate: Callable[[T], Any]) -> EntityCollection[T]:
        return EntityCollection([entity for entity in self._entities if predicate(entity)])

    def to_list(self) -> list[T]:
        """Return a shallow copy of the entities as a list."""
        return list(self._entities)
