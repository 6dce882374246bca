from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ..errors import ConfigurationError
from ..metadata import TypeMetadata

T = TypeVar("T")


class _Missing:
    """Sentinel for an absent value, distinct from ``None``."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


class DeferredReference:
    """Producer returned for a reference whose value is still being built.

    The caller stores a placeholder and registers a reference callback; calling
    the producer once the callback fires yields the finished value.
    """

    __slots__ = ("_producer",)

    def __init__(self, producer: Callable[[], Any]) -> None:
        self._producer = producer

    def __call__(self) -> Any:
        return self._producer()


class ReferenceTable:
    """Identity-keyed table of values produced during one top-level call."""

    def __init__(self) -> None:
        self._values: dict[int, Any] = {}
        self._pending: set[int] = set()
        self._callbacks: defaultdict[int, list[Callable[[], None]]] = defaultdict(list)
        # Keeps referenced objects alive so their ids are not reused mid-call.
        self._referenced: list[Any] = []

    def resolve(self, reference: Any, build: Callable[[], Any]) -> Any:
        key = id(reference)

        if key in self._values:
            return self._values[key]

        if key in self._pending:
            return DeferredReference(lambda: self._values[key])

        self._pending.add(key)
        self._referenced.append(reference)

        try:
            value = build()
        finally:
            self._pending.discard(key)

        self._values[key] = value

        for callback in self._callbacks.pop(key, []):
            callback()

        return value

    def push_callback(self, reference: Any, callback: Callable[[], None]) -> None:
        key = id(reference)
        if key in self._values:
            callback()
            return
        self._callbacks[key].append(callback)


@dataclass(slots=True, frozen=True)
class SerializerOptions:
    """Serialization settings shared by every context of a type manager."""

    use_default_value: bool = False
    log_errors: bool = True
    logger_name: str = "entity_bridge.serialization"


class SerializerLog:
    def __init__(self, logger: logging.Logger, enabled: bool = True) -> None:
        self._logger = logger
        self._enabled = enabled

    @property
    def error_enabled(self) -> bool:
        return self._enabled and self._logger.isEnabledFor(logging.ERROR)

    def error(self, message: str, value: Any = None) -> None:
        self._logger.error("%s %r", message, value)


class SerializerContext(Generic[T]):
    """State of one (de)serialization step: declared type, path and shared table."""

    def __init__(
        self,
        type_metadata: TypeMetadata,
        *,
        reference_table: ReferenceTable,
        options: SerializerOptions,
        log: SerializerLog,
        generic_metadatas: tuple[TypeMetadata, ...] = (),
        path: str = "$",
    ) -> None:
        self.type_metadata = type_metadata
        self.generic_metadatas = generic_metadatas
        self.path = path
        self.reference_table = reference_table
        self.options = options
        self.log = log

    @property
    def serialized_default_value(self) -> Any:
        if self.options.use_default_value and self.type_metadata.default_value is not None:
            return self.serialize(self.type_metadata.default_value())
        return MISSING

    @property
    def deserialized_default_value(self) -> Any:
        if self.options.use_default_value and self.type_metadata.default_value is not None:
            return self.type_metadata.default_value()
        return MISSING

    def serialize(self, x: Any) -> Any:
        return self._serializer().serialize(x, self)

    def deserialize(self, x: Any) -> Any:
        return self._serializer().deserialize(x, self)

    def _serializer(self) -> Any:
        serializer = self.type_metadata.serializer
        if serializer is None:
            raise ConfigurationError(
                f"No serializer defined for type {self.type_metadata.type_name}", self.path
            )
        return serializer

    def define_reference(self, reference: Any, build: Callable[[], Any]) -> Any:
        """Serialize ``reference`` once; later sightings reuse the same output."""
        return self.reference_table.resolve(reference, build)

    def restore_reference(self, reference: Any, build: Callable[[], Any]) -> Any:
        """Deserialize ``reference`` once; later sightings reuse the same object."""
        return self.reference_table.resolve(reference, build)

    def push_reference_callback(self, reference: Any, callback: Callable[[], None]) -> None:
        self.reference_table.push_callback(reference, callback)

    def define_generic_serializer_context(self, index: int) -> SerializerContext[Any]:
        if index >= len(self.generic_metadatas):
            raise ConfigurationError(
                f"Cannot define generic metadata {index} of {self.type_metadata.type_name}! "
                "This is usually caused by invalid configuration!",
                self.path,
            )
        return self.define_child_serializer_context(
            type_metadata=self.generic_metadatas[index], generic_metadatas=()
        )

    def define_child_serializer_context(
        self,
        *,
        path: str | None = None,
        type_metadata: TypeMetadata | None = None,
        generic_metadatas: tuple[TypeMetadata, ...] | None = None,
    ) -> SerializerContext[Any]:
        return SerializerContext(
            type_metadata if type_metadata is not None else self.type_metadata,
            reference_table=self.reference_table,
            options=self.options,
            log=self.log,
            generic_metadatas=generic_metadatas if generic_metadatas is not None else self.generic_metadatas,
            path=path if path is not None else self.path,
        )
