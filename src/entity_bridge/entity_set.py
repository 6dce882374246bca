from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .builders import (
    IncludeQueryCommandBuilder,
    OrderQueryCommandBuilder,
    PropertyClause,
    QueryCommandBuilder,
    WhereClause,
)
from .commands import (
    AddCommand,
    BulkAddCommand,
    BulkRemoveCommand,
    BulkUpdateCommand,
    RemoveCommand,
    UpdateCommand,
    execute_command,
)
from .entity_collection import EntityCollection
from .property_info import EntityInfo

if TYPE_CHECKING:
    from .provider import EntityProvider

T = TypeVar("T")


class EntitySet(Generic[T]):
    """Entry point for commands on one entity type.

    Query methods start a :class:`QueryCommandBuilder`; the remaining methods
    build and execute entity-scoped commands directly.
    """

    def __init__(self, entity_type: type[T], entity_provider: EntityProvider) -> None:
        self.entity_type = entity_type
        self.entity_provider = entity_provider
        self.entity_info = EntityInfo.of(entity_type)

    def query(self) -> QueryCommandBuilder[T]:
        return QueryCommandBuilder(self)

    def where(self, where_clause: WhereClause) -> QueryCommandBuilder[T]:
        return self.query().where(where_clause)

    def order_by(self, order_clause: PropertyClause) -> OrderQueryCommandBuilder[T]:
        return self.query().order_by(order_clause)

    def order_by_descending(self, order_clause: PropertyClause) -> OrderQueryCommandBuilder[T]:
        return self.query().order_by_descending(order_clause)

    def include(self, include_clause: PropertyClause) -> IncludeQueryCommandBuilder[T]:
        return self.query().include(include_clause)

    def include_collection(self, include_collection_clause: PropertyClause) -> IncludeQueryCommandBuilder[T]:
        return self.query().include_collection(include_collection_clause)

    def skip(self, offset: int) -> QueryCommandBuilder[T]:
        return self.query().skip(offset)

    def take(self, limit: int) -> QueryCommandBuilder[T]:
        return self.query().take(limit)

    def paginate(self, page_size: int, page_number: int = 1) -> QueryCommandBuilder[T]:
        return self.query().paginate(page_size, page_number)

    async def add(self, entity: T) -> T:
        return await execute_command(AddCommand(self.entity_info, entity), self.entity_provider)

    async def bulk_add(self, entities: Iterable[T]) -> EntityCollection[T]:
        """Add several entities with one provider call."""
        command = BulkAddCommand(self.entity_info, self._collection(entities))
        return await execute_command(command, self.entity_provider)

    async def update(self, entity: T) -> T:
        return await execute_command(UpdateCommand(self.entity_info, entity), self.entity_provider)

    async def bulk_update(self, entities: Iterable[T]) -> EntityCollection[T]:
        command = BulkUpdateCommand(self.entity_info, self._collection(entities))
        return await execute_command(command, self.entity_provider)

    async def remove(self, entity: T) -> T:
        return await execute_command(RemoveCommand(self.entity_info, entity), self.entity_provider)

    async def bulk_remove(self, entities: Iterable[T]) -> EntityCollection[T]:
        command = BulkRemoveCommand(self.entity_info, self._collection(entities))
        return await execute_command(command, self.entity_provider)

    async def batch_update(self, entity_partial: Mapping[str, Any]) -> None:
        """Update every entity of the set with ``entity_partial``."""
        await self.query().update(entity_partial)

    async def batch_remove(self) -> None:
        """Remove every entity of the set."""
        await self.query().remove()

    async def find_one(self) -> T | None:
        return await self.query().find_one()

    async def find_all(self) -> EntityCollection[T]:
        return await self.query().find_all()

    def _collection(self, entities: Iterable[T]) -> EntityCollection[T]:
        if isinstance(entities, EntityCollection):
            return entities
        return EntityCollection(entities)

    def __repr__(self) -> str:
        return f"EntitySet({self.entity_type.__name__})"
