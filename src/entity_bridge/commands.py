from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .expressions.formatter import ExpressionFormatter

if TYPE_CHECKING:
    from .entity_collection import EntityCollection
    from .expressions import FilterExpression, IncludeExpression, PaginateExpression, SortExpression
    from .property_info import EntityInfo
    from .provider import EntityProvider

log = logging.getLogger(__name__)

T = TypeVar("T")
TResult = TypeVar("TResult")


@dataclass(slots=True, frozen=True)
class Command(Generic[T, TResult], ABC):
    """Unit of work handed to an entity provider."""

    entity_info: EntityInfo[T]

    @abstractmethod
    def delegate(self, entity_provider: EntityProvider) -> Awaitable[TResult]:
        """Hand this command to the provider method matching its kind."""


@dataclass(slots=True, frozen=True)
class BrowseCommand(Command[T, TResult]):
    """Command scoped by expressions."""

    filter_expression: FilterExpression | None = field(default=None, kw_only=True)
    sort_expression: SortExpression | None = field(default=None, kw_only=True)
    include_expression: IncludeExpression | None = field(default=None, kw_only=True)
    paginate_expression: PaginateExpression | None = field(default=None, kw_only=True)


@dataclass(slots=True, frozen=True)
class AddCommand(Command[T, T]):
    entity: T

    def delegate(self, entity_provider: EntityProvider) -> Awaitable[T]:
        return entity_provider.execute_add_command(self)


@dataclass(slots=True, frozen=True)
class BulkAddCommand(Command[T, "EntityCollection[T]"]):
    entity_collection: EntityCollection[T]

    def delegate(self, entity_provider: EntityProvider) -> Awaitable[EntityCollection[T]]:
        return entity_provider.execute_bulk_add_command(self)


@dataclass(slots=True, frozen=True)
class UpdateCommand(Command[T, T]):
    entity: T

    def delegate(self, entity_provider: EntityProvider) -> Awaitable[T]:
        return entity_provider.execute_update_command(self)


@dataclass(slots=True, frozen=True)
class BulkUpdateCommand(Command[T, "EntityCollection[T]"]):
    entity_collection: EntityCollection[T]

    def delegate(self, entity_provider: EntityProvider) -> Awaitable[EntityCollection[T]]:
        return entity_provider.execute_bulk_update_command(self)


@dataclass(slots=True, frozen=True)
class BatchUpdateCommand(BrowseCommand[T, None]):
    """Update every entity matched by the expressions with a partial entity."""

    entity_partial: Mapping[str, Any]

    def delegate(self, entity_provider: EntityProvider) -> Awaitable[None]:
        return entity_provider.execute_batch_update_command(self)


@dataclass(slots=True, frozen=True)
class RemoveCommand(Command[T, T]):
    entity: T

    def delegate(self, entity_provider: EntityProvider) -> Awaitable[T]:
        return entity_provider.execute_remove_command(self)


@dataclass(slots=True, frozen=True)
class BulkRemoveCommand(Command[T, "EntityCollection[T]"]):
    entity_collection: EntityCollection[T]

    def delegate(self, entity_provider: EntityProvider) -> Awaitable[EntityCollection[T]]:
        return entity_provider.execute_bulk_remove_command(self)


@dataclass(slots=True, frozen=True)
class BatchRemoveCommand(BrowseCommand[T, None]):
    """Remove every entity matched by the expressions."""

    def delegate(self, entity_provider: EntityProvider) -> Awaitable[None]:
        return entity_provider.execute_batch_remove_command(self)


@dataclass(slots=True, frozen=True)
class QueryCommand(BrowseCommand[T, "T | None"]):
    """Query for the first matching entity."""

    def delegate(self, entity_provider: EntityProvider) -> Awaitable[T | None]:
        return entity_provider.execute_query_command(self)


@dataclass(slots=True, frozen=True)
class BulkQueryCommand(BrowseCommand[T, "EntityCollection[T]"]):
    """Query for every matching entity."""

    def delegate(self, entity_provider: EntityProvider) -> Awaitable[EntityCollection[T]]:
        return entity_provider.execute_bulk_query_command(self)


async def execute_command(command: Command[Any, TResult], entity_provider: EntityProvider) -> TResult:
    """Delegate ``command`` to ``entity_provider`` and await its result."""
    if log.isEnabledFor(logging.DEBUG):
        formatter = ExpressionFormatter()
        details = ""
        if isinstance(command, BrowseCommand):
            details = (
                f" where=[{formatter.format(command.filter_expression)}]"
                f" order_by=[{formatter.format(command.sort_expression)}]"
                f" include=[{formatter.format(command.include_expression)}]"
                f" paginate=[{formatter.format(command.paginate_expression)}]"
            )
        log.debug(
            "Delegating %s for %s to %s%s",
            type(command).__name__,
            command.entity_info.type_metadata.name,
            type(entity_provider).__name__,
            details,
        )
    return await command.delegate(entity_provider)
