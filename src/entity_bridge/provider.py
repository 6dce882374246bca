from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from .commands import (
        AddCommand,
        BatchRemoveCommand,
        BatchUpdateCommand,
        BulkAddCommand,
        BulkQueryCommand,
        BulkRemoveCommand,
        BulkUpdateCommand,
        QueryCommand,
        RemoveCommand,
        UpdateCommand,
    )
    from .entity_collection import EntityCollection

T = TypeVar("T", bound=Any)


class EntityProvider(ABC):
    """Abstract base class for storage backends executing commands.

    Errors raised by a provider reach the caller of the builder or entity set
    unchanged.
    """

    @abstractmethod
    async def execute_add_command(self, command: AddCommand[T]) -> T:
        """Add an entity."""
        pass

    @abstractmethod
    async def execute_bulk_add_command(self, command: BulkAddCommand[T]) -> EntityCollection[T]:
        """Add a collection of entities."""
        pass

    @abstractmethod
    async def execute_update_command(self, command: UpdateCommand[T]) -> T:
        """Update an entity."""
        pass

    @abstractmethod
    async def execute_bulk_update_command(self, command: BulkUpdateCommand[T]) -> EntityCollection[T]:
        """Update a collection of entities."""
        pass

    @abstractmethod
    async def execute_batch_update_command(self, command: BatchUpdateCommand[T]) -> None:
        """Update entities matching the command expressions."""
        pass

    @abstractmethod
    async def execute_remove_command(self, command: RemoveCommand[T]) -> T:
        """Remove an entity."""
        pass

    @abstractmethod
    async def execute_bulk_remove_command(self, command: BulkRemoveCommand[T]) -> EntityCollection[T]:
        """Remove a collection of entities."""
        pass

    @abstractmethod
    async def execute_batch_remove_command(self, command: BatchRemoveCommand[T]) -> None:
        """Remove entities matching the command expressions."""
        pass

    @abstractmethod
    async def execute_query_command(self, command: QueryCommand[T]) -> T | None:
        """Return the first entity matching the command expressions."""
        pass

    @abstractmethod
    async def execute_bulk_query_command(self, command: BulkQueryCommand[T]) -> EntityCollection[T]:
        """Return all entities matching the command expressions."""
        pass
