from __future__ import annotations

from typing import Any

from ..entity_collection import EntityCollection
from ..errors import ConfigurationError
from ..metadata import get_type_metadata
from .context import MISSING, DeferredReference, SerializerContext
from .serializers import Serializer, fill_slot


class EntityCollectionSerializer(Serializer[EntityCollection[Any]]):
    """Serializer for entity collections.

    Elements are (de)serialized through the first generic metadata of the
    collection type. Collections go through the reference table, so a
    collection reachable twice serializes to one list, and an element that is
    still being built is filled in by a reference callback once it completes.
    """

    def serialize(self, x: Any, serializer_context: SerializerContext[EntityCollection[Any]]) -> Any:
        """Serialize a collection to a list.

        Args:
            x: Some value.
            serializer_context: Serializer context.

        Returns:
            Serialized list, ``None`` for ``None``, or ``MISSING`` when ``x`` is
            not an entity collection.
        """
        if x is MISSING:
            return serializer_context.serialized_default_value

        if x is None:
            return x

        if isinstance(x, EntityCollection):
            return serializer_context.define_reference(x, lambda: self._serialize_entities(x, serializer_context))

        if serializer_context.log.error_enabled:
            serializer_context.log.error(f"{serializer_context.path}: cannot serialize value as entity collection.", x)

        return MISSING

    def _serialize_entities(
        self, x: EntityCollection[Any], serializer_context: SerializerContext[EntityCollection[Any]]
    ) -> list[Any]:
        array_input = x.to_list()
        array_output: list[Any] = [None] * len(array_input)
        generic_serializer_context = serializer_context.define_generic_serializer_context(0)

        for i, entity in enumerate(array_input):
            value_serializer_context = generic_serializer_context.define_child_serializer_context(
                path=f"{generic_serializer_context.path}[{i}]"
            )

            value = value_serializer_context.serialize(entity)

            if isinstance(value, DeferredReference):
                generic_serializer_context.push_reference_callback(entity, fill_slot(array_output, i, value))
                continue

            array_output[i] = None if value is MISSING else value

        return array_output

    def deserialize(self, x: Any, serializer_context: SerializerContext[EntityCollection[Any]]) -> Any:
        """Deserialize a list into a new collection of the context's collection type.

        Args:
            x: Some value.
            serializer_context: Serializer context.

        Returns:
            Entity collection, ``None`` for ``None``, or ``MISSING`` when ``x``
            is not a list.
        """
        if x is MISSING:
            return serializer_context.deserialized_default_value

        if x is None:
            return x

        if isinstance(x, list):
            return serializer_context.restore_reference(x, lambda: self._deserialize_entities(x, serializer_context))

        if serializer_context.log.error_enabled:
            serializer_context.log.error(f"{serializer_context.path}: cannot deserialize value as entity collection.", x)

        return MISSING

    def _deserialize_entities(
        self, x: list[Any], serializer_context: SerializerContext[EntityCollection[Any]]
    ) -> EntityCollection[Any]:
        array_output: list[Any] = [None] * len(x)
        generic_serializer_context = serializer_context.define_generic_serializer_context(0)
        entity_collection_type = serializer_context.type_metadata.type_fn

        for i, serialized in enumerate(x):
            value_serializer_context = generic_serializer_context.define_child_serializer_context(
                path=f"{generic_serializer_context.path}[{i}]"
            )

            value = value_serializer_context.deserialize(serialized)

            if isinstance(value, DeferredReference):
                generic_serializer_context.push_reference_callback(serialized, fill_slot(array_output, i, value))
                continue

            array_output[i] = None if value is MISSING else value

        # The collection wraps array_output, so slots filled by reference
        # callbacks after this point are visible through it.
        return entity_collection_type(array_output)


def _element_serializer_context(
    serializer_context: SerializerContext[Any], index: int, length: int
) -> SerializerContext[Any]:
    """Context for element ``index``; untyped containers pass elements through as ``object``."""
    generic_metadatas = serializer_context.generic_metadatas
    if not generic_metadatas:
        return serializer_context.define_child_serializer_context(
            type_metadata=get_type_metadata(object), generic_metadatas=()
        )
    # tuple[int, str] types each position, list[int] and tuple[int, ...] type every element.
    if len(generic_metadatas) > 1 and len(generic_metadatas) == length:
        return serializer_context.define_generic_serializer_context(index)
    return serializer_context.define_generic_serializer_context(0)


class ListSerializer(Serializer[Any]):
    """Serializer for lists and tuples of any element type.

    Both serialize to a list. Deserialization builds the declared sequence
    type, so a ``tuple`` property gets a tuple back.
    """

    def serialize(self, x: Any, serializer_context: SerializerContext[Any]) -> Any:
        if x is MISSING:
            return serializer_context.serialized_default_value

        if x is None:
            return x

        if isinstance(x, (list, tuple)):
            return serializer_context.define_reference(x, lambda: self._serialize_items(x, serializer_context))

        if serializer_context.log.error_enabled:
            serializer_context.log.error(
                f"{serializer_context.path}: cannot serialize value as {serializer_context.type_metadata.type_name}.",
                x,
            )

        return MISSING

    def _serialize_items(self, x: list[Any] | tuple[Any, ...], serializer_context: SerializerContext[Any]) -> list[Any]:
        array_output: list[Any] = [None] * len(x)

        for i, item in enumerate(x):
            element_serializer_context = _element_serializer_context(serializer_context, i, len(x))
            value = element_serializer_context.define_child_serializer_context(
                path=f"{serializer_context.path}[{i}]"
            ).serialize(item)

            if isinstance(value, DeferredReference):
                serializer_context.push_reference_callback(item, fill_slot(array_output, i, value))
                continue

            array_output[i] = None if value is MISSING else value

        return array_output

    def deserialize(self, x: Any, serializer_context: SerializerContext[Any]) -> Any:
        if x is MISSING:
            return serializer_context.deserialized_default_value

        if x is None:
            return x

        if isinstance(x, list):
            return serializer_context.restore_reference(x, lambda: self._deserialize_items(x, serializer_context))

        if serializer_context.log.error_enabled:
            serializer_context.log.error(
                f"{serializer_context.path}: cannot deserialize value as {serializer_context.type_metadata.type_name}.",
                x,
            )

        return MISSING

    def _deserialize_items(self, x: list[Any], serializer_context: SerializerContext[Any]) -> Any:
        array_output: list[Any] = [None] * len(x)
        sequence_type = serializer_context.type_metadata.type_fn

        if sequence_type is tuple:
            # A tuple cannot be filled in later, so its elements are built eagerly
            # and a deferred element resolves to whatever is finished by then.
            for i, serialized in enumerate(x):
                element_serializer_context = _element_serializer_context(serializer_context, i, len(x))
                value = element_serializer_context.define_child_serializer_context(
                    path=f"{serializer_context.path}[{i}]"
                ).deserialize(serialized)
                if isinstance(value, DeferredReference):
                    raise ConfigurationError(
                        "Cannot restore a cyclic reference inside a tuple",
                        f"{serializer_context.path}[{i}]",
                    )
                array_output[i] = None if value is MISSING else value
            return tuple(array_output)

        for i, serialized in enumerate(x):
            element_serializer_context = _element_serializer_context(serializer_context, i, len(x))
            value = element_serializer_context.define_child_serializer_context(
                path=f"{serializer_context.path}[{i}]"
            ).deserialize(serialized)

            if isinstance(value, DeferredReference):
                serializer_context.push_reference_callback(serialized, fill_slot(array_output, i, value))
                continue

            array_output[i] = None if value is MISSING else value

        return array_output


class DictSerializer(Serializer[dict[Any, Any]]):
    """Serializer for plain dicts.

    Keys are kept as they are. Values are typed by the second generic
    metadata (``dict[str, Book]``) and pass through untyped otherwise.
    """

    def serialize(self, x: Any, serializer_context: SerializerContext[dict[Any, Any]]) -> Any:
        if x is MISSING:
            return serializer_context.serialized_default_value

        if x is None:
            return x

        if isinstance(x, dict):
            return serializer_context.define_reference(x, lambda: self._convert(x, serializer_context, serialize=True))

        if serializer_context.log.error_enabled:
            serializer_context.log.error(f"{serializer_context.path}: cannot serialize value as dict.", x)

        return MISSING

    def deserialize(self, x: Any, serializer_context: SerializerContext[dict[Any, Any]]) -> Any:
        if x is MISSING:
            return serializer_context.deserialized_default_value

        if x is None:
            return x

        if isinstance(x, dict):
            return serializer_context.restore_reference(
                x, lambda: self._convert(x, serializer_context, serialize=False)
            )

        if serializer_context.log.error_enabled:
            serializer_context.log.error(f"{serializer_context.path}: cannot deserialize value as dict.", x)

        return MISSING

    def _convert(
        self, x: dict[Any, Any], serializer_context: SerializerContext[dict[Any, Any]], *, serialize: bool
    ) -> dict[Any, Any]:
        if len(serializer_context.generic_metadatas) == 2:
            value_serializer_context = serializer_context.define_generic_serializer_context(1)
        else:
            value_serializer_context = serializer_context.define_child_serializer_context(
                type_metadata=get_type_metadata(object), generic_metadatas=()
            )

        dict_output: dict[Any, Any] = {}

        for key, item in x.items():
            item_serializer_context = value_serializer_context.define_child_serializer_context(
                path=f"{serializer_context.path}[{key!r}]"
            )
            value = item_serializer_context.serialize(item) if serialize else item_serializer_context.deserialize(item)

            if isinstance(value, DeferredReference):
                dict_output[key] = None
                serializer_context.push_reference_callback(item, fill_slot(dict_output, key, value))
                continue

            if value is not MISSING:
                dict_output[key] = value

        return dict_output
