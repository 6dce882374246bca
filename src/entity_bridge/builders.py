from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .commands import (
    BatchRemoveCommand,
    BatchUpdateCommand,
    BulkQueryCommand,
    QueryCommand,
    execute_command,
)
from .errors import ConfigurationError
from .expressions import (
    AndFilterExpression,
    AscSortExpression,
    DescSortExpression,
    EagerLoadingExpression,
    ExpressionFormatter,
    FilterExpression,
    FilterExpressionBuilder,
    IncludeExpression,
    OffsetPaginateExpression,
    PaginateExpression,
    SizePaginateExpression,
    SortExpression,
)
from .property_info import PropertyInfo
from .proxy import EntityInfoProxy, PropertyInfoProxy, proxy_target

if TYPE_CHECKING:
    from .entity_collection import EntityCollection
    from .entity_set import EntitySet

T = TypeVar("T")

WhereClause = Callable[[Any, FilterExpressionBuilder], FilterExpression]
PropertyClause = Callable[[Any], PropertyInfoProxy]

_filter_expression_builder = FilterExpressionBuilder()


def collection_element_property_info(collection_property_info: PropertyInfo) -> PropertyInfo:
    """Retype a collection property step as its element type.

    The element type is the first generic metadata declared for the
    collection property; its absence is a configuration error.
    """
    generic_metadatas = collection_property_info.property_metadata.generic_metadatas

    if not generic_metadatas:
        raise ConfigurationError(
            "Cannot define generic metadata of an entity collection! "
            "This is usually caused by invalid configuration!",
            collection_property_info.path,
        )

    return PropertyInfo(
        collection_property_info.path,
        collection_property_info.property_metadata,
        generic_metadatas[0],
        collection_property_info.parent_property_info,
    )


class QueryCommandBuilder(Generic[T]):
    """Fluent builder accumulating expressions for commands on an entity set.

    ``where``, ``order_by``, ``include``, ``skip``, ``take`` and ``paginate``
    return a new builder and leave this one untouched, so queries can branch
    from a common prefix. Expression nodes are shared between branches.
    """

    def __init__(
        self,
        entity_set: EntitySet[T],
        *,
        filter_expression: FilterExpression | None = None,
        sort_expression: SortExpression | None = None,
        include_expression: IncludeExpression | None = None,
        paginate_expression: PaginateExpression | None = None,
    ) -> None:
        self.entity_set = entity_set
        self.filter_expression = filter_expression
        self.sort_expression = sort_expression
        self.include_expression = include_expression
        self.paginate_expression = paginate_expression
        self.entity_info_proxy = EntityInfoProxy(entity_set.entity_info.type_metadata)

    def _expressions(self, **changes: Any) -> dict[str, Any]:
        expressions = {
            "filter_expression": self.filter_expression,
            "sort_expression": self.sort_expression,
            "include_expression": self.include_expression,
            "paginate_expression": self.paginate_expression,
        }
        expressions.update(changes)
        return expressions

    def _derive(self, **changes: Any) -> QueryCommandBuilder[T]:
        return QueryCommandBuilder(self.entity_set, **self._expressions(**changes))

    def where(self, where_clause: WhereClause) -> QueryCommandBuilder[T]:
        """Add a filter; successive filters are combined with ``and``."""
        filter_expression = where_clause(self.entity_info_proxy, _filter_expression_builder)

        if not isinstance(filter_expression, FilterExpression):
            raise TypeError(
                f"Where clause must return a filter expression, got {type(filter_expression).__name__}"
            )

        if self.filter_expression is not None:
            filter_expression = AndFilterExpression(self.filter_expression, filter_expression)

        return self._derive(filter_expression=filter_expression)

    def order_by(self, order_clause: PropertyClause) -> OrderQueryCommandBuilder[T]:
        property_info = proxy_target(order_clause(self.entity_info_proxy))
        sort_expression = AscSortExpression(property_info)
        return OrderQueryCommandBuilder(self.entity_set, **self._expressions(sort_expression=sort_expression))

    def order_by_descending(self, order_clause: PropertyClause) -> OrderQueryCommandBuilder[T]:
        property_info = proxy_target(order_clause(self.entity_info_proxy))
        sort_expression = DescSortExpression(property_info)
        return OrderQueryCommandBuilder(self.entity_set, **self._expressions(sort_expression=sort_expression))

    def include(self, include_clause: PropertyClause) -> IncludeQueryCommandBuilder[T]:
        """Eager load a property of the entity."""
        property_info = proxy_target(include_clause(self.entity_info_proxy))
        include_expression = EagerLoadingExpression(property_info, self.include_expression)
        return IncludeQueryCommandBuilder(
            self.entity_set, property_info, **self._expressions(include_expression=include_expression)
        )

    def include_collection(self, include_collection_clause: PropertyClause) -> IncludeQueryCommandBuilder[T]:
        """Eager load a collection property; later ``then_include`` calls target its elements."""
        collection_property_info = proxy_target(include_collection_clause(self.entity_info_proxy))
        property_info = collection_element_property_info(collection_property_info)
        include_expression = EagerLoadingExpression(collection_property_info, self.include_expression)
        return IncludeQueryCommandBuilder(
            self.entity_set, property_info, **self._expressions(include_expression=include_expression)
        )

    def skip(self, offset: int) -> QueryCommandBuilder[T]:
        limit = None
        if isinstance(self.paginate_expression, OffsetPaginateExpression):
            limit = self.paginate_expression.limit
        return self._derive(paginate_expression=OffsetPaginateExpression(offset, limit))

    def take(self, limit: int) -> QueryCommandBuilder[T]:
        offset = None
        if isinstance(self.paginate_expression, OffsetPaginateExpression):
            offset = self.paginate_expression.offset
        return self._derive(paginate_expression=OffsetPaginateExpression(offset, limit))

    def paginate(self, page_size: int, page_number: int = 1) -> QueryCommandBuilder[T]:
        return self._derive(paginate_expression=SizePaginateExpression(page_size, page_number))

    def build_query_command(self) -> QueryCommand[T]:
        return QueryCommand(self.entity_set.entity_info, **self._expressions())

    def build_bulk_query_command(self) -> BulkQueryCommand[T]:
        return BulkQueryCommand(self.entity_set.entity_info, **self._expressions())

    def build_batch_update_command(self, entity_partial: Mapping[str, Any]) -> BatchUpdateCommand[T]:
        return BatchUpdateCommand(self.entity_set.entity_info, dict(entity_partial), **self._expressions())

    def build_batch_remove_command(self) -> BatchRemoveCommand[T]:
        return BatchRemoveCommand(self.entity_set.entity_info, **self._expressions())

    async def find_one(self) -> T | None:
        return await execute_command(self.build_query_command(), self.entity_set.entity_provider)

    async def find_all(self) -> EntityCollection[T]:
        return await execute_command(self.build_bulk_query_command(), self.entity_set.entity_provider)

    async def update(self, entity_partial: Mapping[str, Any]) -> None:
        """Batch update every matching entity with ``entity_partial``."""
        await execute_command(self.build_batch_update_command(entity_partial), self.entity_set.entity_provider)

    async def remove(self) -> None:
        """Batch remove every matching entity."""
        await execute_command(self.build_batch_remove_command(), self.entity_set.entity_provider)

    def __repr__(self) -> str:
        formatter = ExpressionFormatter()
        parts = [self.entity_set.entity_info.type_metadata.name or ""]
        for label, expression in (
            ("where", self.filter_expression),
            ("order_by", self.sort_expression),
            ("include", self.include_expression),
            ("paginate", self.paginate_expression),
        ):
            if expression is not None:
                parts.append(f"{label}=[{formatter.format(expression)}]")
        return f"{self.__class__.__name__}({', '.join(parts)})"


class OrderQueryCommandBuilder(QueryCommandBuilder[T]):
    """Builder returned by ``order_by``.

    ``then_by`` and ``then_by_descending`` extend the sort chain of this
    builder in place and return it.
    """

    def then_by(self, order_clause: PropertyClause) -> OrderQueryCommandBuilder[T]:
        property_info = proxy_target(order_clause(self.entity_info_proxy))
        self.sort_expression = AscSortExpression(property_info, self.sort_expression)
        return self

    def then_by_descending(self, order_clause: PropertyClause) -> OrderQueryCommandBuilder[T]:
        property_info = proxy_target(order_clause(self.entity_info_proxy))
        self.sort_expression = DescSortExpression(property_info, self.sort_expression)
        return self


class IncludeQueryCommandBuilder(QueryCommandBuilder[T]):
    """Builder returned by ``include``, attached to the included property.

    ``then_include`` resolves its clause relative to that property, attaches
    the new eager-loading node to this builder's include tree and returns a
    builder attached to the new property.
    """

    def __init__(self, entity_set: EntitySet[T], property_info: PropertyInfo, **expressions: Any) -> None:
        super().__init__(entity_set, **expressions)
        self.property_info = property_info
        self.property_info_proxy = PropertyInfoProxy(property_info)

    def then_include(self, then_include_clause: PropertyClause) -> IncludeQueryCommandBuilder[T]:
        property_info = proxy_target(then_include_clause(self.property_info_proxy))
        self.include_expression = EagerLoadingExpression(property_info, self.include_expression)
        return IncludeQueryCommandBuilder(self.entity_set, property_info, **self._expressions())

    def then_include_collection(self, then_include_collection_clause: PropertyClause) -> IncludeQueryCommandBuilder[T]:
        collection_property_info = proxy_target(then_include_collection_clause(self.property_info_proxy))
        property_info = collection_element_property_info(collection_property_info)
        self.include_expression = EagerLoadingExpression(collection_property_info, self.include_expression)
        return IncludeQueryCommandBuilder(self.entity_set, property_info, **self._expressions())
