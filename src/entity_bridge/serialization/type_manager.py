from __future__ import annotations

import logging
from typing import Any

from ..metadata import resolve_annotation
from .context import ReferenceTable, SerializerContext, SerializerLog, SerializerOptions


class TypeManager:
    """Entry point for serialization.

    Accepts a class or a generic alias such as ``EntityCollection[Book]``.
    Each call gets its own reference table.

    Example:
        >>> manager = TypeManager()
        >>> data = manager.serialize(EntityCollection[Book], books)
        >>> restored = manager.deserialize(EntityCollection[Book], data)
    """

    def __init__(self, options: SerializerOptions | None = None) -> None:
        self.options = options or SerializerOptions()
        self._log = SerializerLog(logging.getLogger(self.options.logger_name), self.options.log_errors)

    def define_serializer_context(self, type_or_annotation: Any) -> SerializerContext[Any]:
        type_metadata, generic_metadatas = resolve_annotation(type_or_annotation, "$")
        return SerializerContext(
            type_metadata,
            reference_table=ReferenceTable(),
            options=self.options,
            log=self._log,
            generic_metadatas=generic_metadatas,
        )

    def serialize(self, type_or_annotation: Any, value: Any) -> Any:
        return self.define_serializer_context(type_or_annotation).serialize(value)

    def deserialize(self, type_or_annotation: Any, data: Any) -> Any:
        return self.define_serializer_context(type_or_annotation).deserialize(data)
