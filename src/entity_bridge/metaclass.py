from __future__ import annotations

from typing import Any

from .metadata import Field, define_type
from .serialization.serializers import EntitySerializer


class EntityMetaclass(type):
    """Metaclass for entities that registers their type metadata."""

    def __new__(
        mcs,
        name: str,
        bases: tuple[type[Any], ...],
        namespace: dict[str, Any],
        /,
        **kwargs: Any,
    ) -> EntityMetaclass:
        cls = super().__new__(mcs, name, bases, namespace)

        # Collect field configuration from class and its bases
        fields: dict[str, Field[Any]] = {}

        for base in bases:
            base_metadata = getattr(base, "__type_metadata__", None)
            if base_metadata is not None and base_metadata.fields:
                fields.update(base_metadata.fields)

        for attr_name, attr_value in namespace.items():
            if isinstance(attr_value, Field):
                fields[attr_name] = attr_value

        # Property metadata is resolved from type hints on first use, once
        # every entity referenced by an annotation exists.
        cls.__type_metadata__ = define_type(  # type: ignore[attr-defined]
            cls,
            serializer=EntitySerializer(),
            name=kwargs.get("name") or name.lower() + "s",
            fields=fields,
        )

        return cls  # type: ignore[return-value]
