from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, MutableMapping, MutableSequence
from datetime import date, datetime
from typing import Any, Generic, TypeVar

from .context import MISSING, DeferredReference, SerializerContext

T = TypeVar("T")


class Serializer(Generic[T], ABC):
    """Converts values of one type to and from their generic serialized form.

    Returning ``MISSING`` means no representation could be produced.
    """

    @abstractmethod
    def serialize(self, x: Any, serializer_context: SerializerContext[T]) -> Any: ...

    @abstractmethod
    def deserialize(self, x: Any, serializer_context: SerializerContext[T]) -> Any: ...


def fill_slot(
    target: MutableSequence[Any] | MutableMapping[Any, Any], key: Any, deferred: DeferredReference
) -> Callable[[], None]:
    """Reference callback that writes a deferred value into ``target[key]``."""

    def callback() -> None:
        target[key] = deferred()

    return callback


def fill_attribute(target: Any, name: str, deferred: DeferredReference) -> Callable[[], None]:
    def callback() -> None:
        setattr(target, name, deferred())

    return callback


class PrimitiveSerializer(Serializer[Any]):
    """Passes scalars through after checking them against the declared type."""

    def _accepts(self, x: Any, serializer_context: SerializerContext[Any]) -> bool:
        type_fn = serializer_context.type_metadata.type_fn
        if isinstance(x, bool) and type_fn not in (bool, object):
            return False
        if type_fn is float and isinstance(x, int):
            return True
        return isinstance(x, type_fn)

    def serialize(self, x: Any, serializer_context: SerializerContext[Any]) -> Any:
        if x is MISSING:
            return serializer_context.serialized_default_value

        if x is None:
            return x

        if self._accepts(x, serializer_context):
            return x

        if serializer_context.log.error_enabled:
            serializer_context.log.error(
                f"{serializer_context.path}: cannot serialize value as "
                f"{serializer_context.type_metadata.type_name}.",
                x,
            )

        return MISSING

    def deserialize(self, x: Any, serializer_context: SerializerContext[Any]) -> Any:
        if x is MISSING:
            return serializer_context.deserialized_default_value

        if x is None:
            return x

        if self._accepts(x, serializer_context):
            return x

        if serializer_context.log.error_enabled:
            serializer_context.log.error(
                f"{serializer_context.path}: cannot deserialize value as "
                f"{serializer_context.type_metadata.type_name}.",
                x,
            )

        return MISSING


class EntitySerializer(Serializer[Any]):
    """Entity to dict keyed by serialized property name, and back."""

    def serialize(self, x: Any, serializer_context: SerializerContext[Any]) -> Any:
        if x is MISSING:
            return serializer_context.serialized_default_value

        if x is None:
            return x

        if isinstance(x, serializer_context.type_metadata.type_fn):
            return serializer_context.define_reference(x, lambda: self._serialize_entity(x, serializer_context))

        if serializer_context.log.error_enabled:
            serializer_context.log.error(f"{serializer_context.path}: cannot serialize value as entity.", x)

        return MISSING

    def _serialize_entity(self, x: Any, serializer_context: SerializerContext[Any]) -> dict[str, Any]:
        output: dict[str, Any] = {}

        for property_metadata in serializer_context.type_metadata.property_metadatas.values():
            value_serializer_context = serializer_context.define_child_serializer_context(
                path=f"{serializer_context.path}.{property_metadata.name}",
                type_metadata=property_metadata.type_metadata,
                generic_metadatas=property_metadata.generic_metadatas,
            )

            value = getattr(x, property_metadata.name, MISSING)
            serialized = value_serializer_context.serialize(value)
            key = property_metadata.serialized_name

            if isinstance(serialized, DeferredReference):
                output[key] = None
                value_serializer_context.push_reference_callback(value, fill_slot(output, key, serialized))
                continue

            if serialized is not MISSING:
                output[key] = serialized

        return output

    def deserialize(self, x: Any, serializer_context: SerializerContext[Any]) -> Any:
        if x is MISSING:
            return serializer_context.deserialized_default_value

        if x is None:
            return x

        if isinstance(x, dict):
            return serializer_context.restore_reference(x, lambda: self._deserialize_entity(x, serializer_context))

        if serializer_context.log.error_enabled:
            serializer_context.log.error(f"{serializer_context.path}: cannot deserialize value as entity.", x)

        return MISSING

    def _deserialize_entity(self, x: dict[str, Any], serializer_context: SerializerContext[Any]) -> Any:
        entity = serializer_context.type_metadata.type_fn()

        for property_metadata in serializer_context.type_metadata.property_metadatas.values():
            value_serializer_context = serializer_context.define_child_serializer_context(
                path=f"{serializer_context.path}.{property_metadata.name}",
                type_metadata=property_metadata.type_metadata,
                generic_metadatas=property_metadata.generic_metadatas,
            )

            serialized = x.get(property_metadata.serialized_name, MISSING)
            value = value_serializer_context.deserialize(serialized)

            if isinstance(value, DeferredReference):
                value_serializer_context.push_reference_callback(
                    serialized, fill_attribute(entity, property_metadata.name, value)
                )
                continue

            if value is not MISSING:
                setattr(entity, property_metadata.name, value)

        return entity


class TemporalSerializer(Serializer[Any]):
    """Serializer for ``datetime`` and ``date`` values as ISO 8601 strings."""

    def _accepts(self, x: Any, serializer_context: SerializerContext[Any]) -> bool:
        type_fn = serializer_context.type_metadata.type_fn
        if type_fn is date and isinstance(x, datetime):
            return False
        return isinstance(x, type_fn)

    def serialize(self, x: Any, serializer_context: SerializerContext[Any]) -> Any:
        if x is MISSING:
            return serializer_context.serialized_default_value

        if x is None:
            return x

        if self._accepts(x, serializer_context):
            return x.isoformat()

        if serializer_context.log.error_enabled:
            serializer_context.log.error(
                f"{serializer_context.path}: cannot serialize value as "
                f"{serializer_context.type_metadata.type_name}.",
                x,
            )

        return MISSING

    def deserialize(self, x: Any, serializer_context: SerializerContext[Any]) -> Any:
        if x is MISSING:
            return serializer_context.deserialized_default_value

        if x is None:
            return x

        # Drivers that already return datetime objects pass straight through.
        if self._accepts(x, serializer_context):
            return x

        if isinstance(x, str):
            try:
                return serializer_context.type_metadata.type_fn.fromisoformat(x)
            except ValueError:
                pass

        if serializer_context.log.error_enabled:
            serializer_context.log.error(
                f"{serializer_context.path}: cannot deserialize value as "
                f"{serializer_context.type_metadata.type_name}.",
                x,
            )

        return MISSING
