from __future__ import annotations

import types
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING,
    Any,
    ClassVar,
    Generic,
    Self,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
    overload,
)

from .errors import ConfigurationError

if TYPE_CHECKING:
    from .serialization.serializers import Serializer

T = TypeVar("T")


class Field(Generic[T]):
    """Optional per-property configuration for entity declarations.

    Plain annotations are enough for most properties; ``Field`` adds defaults,
    a serialized alias or explicit type/generic metadata::

        class Author(Entity):
            name: str
            books: EntityCollection = Field(generic=[Book])
    """

    def __init__(
        self,
        default: T | None = None,
        *,
        default_factory: Callable[[], T] | None = None,
        alias: str | None = None,
        type: Any = None,
        generic: Sequence[Any] | None = None,
    ) -> None:
        if default is not None and default_factory is not None:
            raise ValueError("Cannot specify both default and default_factory")

        self.default = default
        self.default_factory = default_factory
        self.alias = alias
        self.type = type
        self.generic = tuple(generic) if generic is not None else None
        self.name: str | None = None  # Set by __set_name__

    def __set_name__(self, owner: type[Any], name: str) -> None:
        self.name = name

    @overload
    def __get__(self, obj: None, objtype: type[Any]) -> Self: ...

    @overload
    def __get__(self, obj: Any, objtype: type[Any]) -> T | None: ...

    def __get__(self, obj: Any | None, objtype: type[Any]) -> Self | T | None:
        if obj is None:
            return self
        return self.make_default()

    def make_default(self) -> T | None:
        if self.default_factory is not None:
            return self.default_factory()
        return self.default


@dataclass(slots=True, frozen=True)
class PropertyMetadata:
    """Declared property of an entity type."""

    declaring_type_metadata: TypeMetadata = field(repr=False)
    name: str
    type_metadata: TypeMetadata
    generic_metadatas: tuple[TypeMetadata, ...] = ()
    alias: str | None = None
    default_factory: Callable[[], Any] | None = field(default=None, repr=False, compare=False)

    @property
    def serialized_name(self) -> str:
        return self.alias or self.name

    def make_default(self) -> Any:
        return self.default_factory() if self.default_factory is not None else None


@dataclass(slots=True, eq=False)
class TypeMetadata:
    """Type descriptor shared by the proxy and serialization layers.

    Entity types carry ``fields`` (possibly empty) and resolve their property
    metadata lazily from type hints, so that entities may reference each other
    before both are defined.
    """

    type_fn: type
    serializer: Serializer | None = None
    default_value: Callable[[], Any] | None = None
    name: str | None = None
    fields: dict[str, Field[Any]] | None = None
    _property_metadatas: dict[str, PropertyMetadata] | None = field(default=None, repr=False)

    @property
    def type_name(self) -> str:
        return getattr(self.type_fn, "__name__", repr(self.type_fn))

    @property
    def property_metadatas(self) -> dict[str, PropertyMetadata]:
        if self._property_metadatas is None:
            self._property_metadatas = self._resolve_property_metadatas()
        return self._property_metadatas

    def property_metadata(self, name: str) -> PropertyMetadata | None:
        return self.property_metadatas.get(name)

    def _resolve_property_metadatas(self) -> dict[str, PropertyMetadata]:
        if self.fields is None:
            return {}

        try:
            hints = get_type_hints(self.type_fn)
        except (NameError, AttributeError) as exc:
            raise ConfigurationError(
                f"Cannot resolve type hints of {self.type_name}: {exc}", self.type_name
            ) from exc

        property_metadatas: dict[str, PropertyMetadata] = {}
        for name, hint in hints.items():
            if name.startswith("_") or get_origin(hint) is ClassVar:
                continue

            declared = self.fields.get(name)
            annotation = declared.type if declared is not None and declared.type is not None else hint
            path = f"{self.type_name}.{name}"
            type_metadata, generic_metadatas = resolve_annotation(annotation, path)

            if declared is not None and declared.generic is not None:
                generic_metadatas = tuple(resolve_annotation(g, path)[0] for g in declared.generic)

            if declared is not None:
                default_factory = declared.make_default
            else:
                default_factory = _constant_factory(getattr(self.type_fn, name, None))

            property_metadatas[name] = PropertyMetadata(
                declaring_type_metadata=self,
                name=name,
                type_metadata=type_metadata,
                generic_metadatas=generic_metadatas,
                alias=declared.alias if declared is not None else None,
                default_factory=default_factory,
            )

        return property_metadatas


def _constant_factory(value: Any) -> Callable[[], Any]:
    return lambda: value


_type_metadatas: dict[type, TypeMetadata] = {}


def define_type(
    type_fn: type,
    *,
    serializer: Serializer | None = None,
    default_value: Callable[[], Any] | None = None,
    name: str | None = None,
    fields: dict[str, Field[Any]] | None = None,
) -> TypeMetadata:
    """Register (or reconfigure) the type metadata of ``type_fn``."""
    type_metadata = TypeMetadata(
        type_fn=type_fn,
        serializer=serializer,
        default_value=default_value,
        name=name,
        fields=fields,
    )
    _type_metadatas[type_fn] = type_metadata
    return type_metadata


def get_type_metadata(type_fn: type) -> TypeMetadata:
    """Return registered metadata, creating a descriptor for unknown types.

    An unknown subclass of a registered type inherits its serializer.
    """
    type_metadata = _type_metadatas.get(type_fn)
    if type_metadata is None:
        serializer = None
        for base in getattr(type_fn, "__mro__", ())[1:]:
            if base is object:
                break
            base_metadata = _type_metadatas.get(base)
            if base_metadata is not None and base_metadata.serializer is not None:
                serializer = base_metadata.serializer
                break
        type_metadata = TypeMetadata(type_fn=type_fn, serializer=serializer)
        _type_metadatas[type_fn] = type_metadata
    return type_metadata


def resolve_annotation(
    annotation: Any, path: str | None = None
) -> tuple[TypeMetadata, tuple[TypeMetadata, ...]]:
    """Map a type annotation to its metadata and first-level generic metadatas."""
    if annotation is Any:
        return get_type_metadata(object), ()

    origin = get_origin(annotation)

    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) != 1:
            raise ConfigurationError(f"Cannot map union type {annotation!r} to a single type", path)
        return resolve_annotation(members[0], path)

    if origin is not None:
        generic_metadatas = tuple(
            resolve_annotation(arg, path)[0] for arg in get_args(annotation) if arg is not Ellipsis
        )
        return get_type_metadata(origin), generic_metadatas

    if isinstance(annotation, type):
        return get_type_metadata(annotation), ()

    raise ConfigurationError(f"Cannot resolve type annotation {annotation!r}", path)
