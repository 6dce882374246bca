"""Exception hierarchy for entity-bridge."""

from __future__ import annotations


class EntityBridgeError(Exception):
    """Base exception class for all entity-bridge errors."""


class ConfigurationError(EntityBridgeError):
    """Declared type metadata is missing or malformed for a path that needs it.

    Raised synchronously while a query or serializer context is being built.
    The offending property path, when known, is kept in ``path`` and leads the
    message.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path
