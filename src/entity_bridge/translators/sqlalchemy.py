"""SQLAlchemy Core translation of expression trees.

Translators target a single flat :class:`sqlalchemy.Table`: every property
path must be one segment long and name a column by its serialized name.
Nothing here touches a connection.

Example:
    >>> command = books.where(lambda b, f: f.gt(b.year, 1990)).order_by(lambda b: b.title).build_bulk_query_command()
    >>> stmt = build_select(books_table, command)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import Select, and_, not_, or_, select

from ..errors import ConfigurationError
from ..expressions.visitors import FilterExpressionVisitor, PaginateExpressionVisitor, SortExpressionVisitor

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, Table

    from ..commands import BrowseCommand
    from ..expressions import (
        AndFilterExpression,
        AscSortExpression,
        ContainsFilterExpression,
        DescSortExpression,
        EndsWithFilterExpression,
        EqFilterExpression,
        GteFilterExpression,
        GtFilterExpression,
        InFilterExpression,
        LteFilterExpression,
        LtFilterExpression,
        NotContainsFilterExpression,
        NotEndsWithFilterExpression,
        NotEqFilterExpression,
        NotFilterExpression,
        NotInFilterExpression,
        NotStartsWithFilterExpression,
        OffsetPaginateExpression,
        OrFilterExpression,
        SizePaginateExpression,
        SortExpression,
        StartsWithFilterExpression,
    )
    from ..property_info import PropertyInfo

log = logging.getLogger(__name__)


def table_column(table: Table, property_info: PropertyInfo) -> ColumnElement[Any]:
    """Column of ``table`` holding the property at ``property_info``."""
    if property_info.parent_property_info is not None:
        raise ConfigurationError(
            f"Nested property paths cannot be translated against table {table.name}", property_info.path
        )

    column_name = property_info.property_metadata.serialized_name
    if column_name not in table.c:
        raise ConfigurationError(f"Table {table.name} has no column {column_name}", property_info.path)

    return table.c[column_name]


class SqlAlchemyFilterTranslator(FilterExpressionVisitor["ColumnElement[bool]"]):
    """Builds a ``WHERE`` clause from a filter expression."""

    def __init__(self, table: Table) -> None:
        self.table = table

    def translate(self, expression: Any) -> ColumnElement[bool]:
        return expression.accept(self)

    def _column(self, expression: Any) -> ColumnElement[Any]:
        return table_column(self.table, expression.property_info)

    def visit_eq_filter_expression(self, expression: EqFilterExpression) -> ColumnElement[bool]:
        return self._column(expression) == expression.value

    def visit_not_eq_filter_expression(self, expression: NotEqFilterExpression) -> ColumnElement[bool]:
        return self._column(expression) != expression.value

    def visit_gt_filter_expression(self, expression: GtFilterExpression) -> ColumnElement[bool]:
        return self._column(expression) > expression.value

    def visit_gte_filter_expression(self, expression: GteFilterExpression) -> ColumnElement[bool]:
        return self._column(expression) >= expression.value

    def visit_lt_filter_expression(self, expression: LtFilterExpression) -> ColumnElement[bool]:
        return self._column(expression) < expression.value

    def visit_lte_filter_expression(self, expression: LteFilterExpression) -> ColumnElement[bool]:
        return self._column(expression) <= expression.value

    def visit_in_filter_expression(self, expression: InFilterExpression) -> ColumnElement[bool]:
        return self._column(expression).in_(expression.values)

    def visit_not_in_filter_expression(self, expression: NotInFilterExpression) -> ColumnElement[bool]:
        return self._column(expression).not_in(expression.values)

    def visit_contains_filter_expression(self, expression: ContainsFilterExpression) -> ColumnElement[bool]:
        return self._column(expression).contains(expression.value)

    def visit_not_contains_filter_expression(self, expression: NotContainsFilterExpression) -> ColumnElement[bool]:
        return not_(self._column(expression).contains(expression.value))

    def visit_starts_with_filter_expression(self, expression: StartsWithFilterExpression) -> ColumnElement[bool]:
        return self._column(expression).startswith(expression.value)

    def visit_not_starts_with_filter_expression(
        self, expression: NotStartsWithFilterExpression
    ) -> ColumnElement[bool]:
        return not_(self._column(expression).startswith(expression.value))

    def visit_ends_with_filter_expression(self, expression: EndsWithFilterExpression) -> ColumnElement[bool]:
        return self._column(expression).endswith(expression.value)

    def visit_not_ends_with_filter_expression(self, expression: NotEndsWithFilterExpression) -> ColumnElement[bool]:
        return not_(self._column(expression).endswith(expression.value))

    def visit_and_filter_expression(self, expression: AndFilterExpression) -> ColumnElement[bool]:
        return and_(expression.left.accept(self), expression.right.accept(self))

    def visit_or_filter_expression(self, expression: OrFilterExpression) -> ColumnElement[bool]:
        return or_(expression.left.accept(self), expression.right.accept(self))

    def visit_not_filter_expression(self, expression: NotFilterExpression) -> ColumnElement[bool]:
        return not_(expression.filter_expression.accept(self))


class SqlAlchemySortTranslator(SortExpressionVisitor["ColumnElement[Any]"]):
    """Builds ``ORDER BY`` clauses; the key that takes precedence comes first."""

    def __init__(self, table: Table) -> None:
        self.table = table

    def translate(self, expression: SortExpression) -> list[ColumnElement[Any]]:
        return [key.accept(self) for key in expression.chain()]

    def visit_asc_sort_expression(self, expression: AscSortExpression) -> ColumnElement[Any]:
        return table_column(self.table, expression.property_info).asc()

    def visit_desc_sort_expression(self, expression: DescSortExpression) -> ColumnElement[Any]:
        return table_column(self.table, expression.property_info).desc()


class SqlAlchemyPaginateTranslator(PaginateExpressionVisitor[tuple[int | None, int | None]]):
    """Maps pagination to an ``(offset, limit)`` pair."""

    def translate(self, expression: Any) -> tuple[int | None, int | None]:
        return expression.accept(self)

    def visit_offset_paginate_expression(self, expression: OffsetPaginateExpression) -> tuple[int | None, int | None]:
        return expression.offset, expression.limit

    def visit_size_paginate_expression(self, expression: SizePaginateExpression) -> tuple[int | None, int | None]:
        return (expression.page_number - 1) * expression.page_size, expression.page_size


def build_select(table: Table, command: BrowseCommand[Any, Any]) -> Select[Any]:
    """Assemble a ``SELECT`` over ``table`` from the expressions of ``command``."""
    stmt = select(table)

    if command.filter_expression is not None:
        stmt = stmt.where(SqlAlchemyFilterTranslator(table).translate(command.filter_expression))

    if command.sort_expression is not None:
        stmt = stmt.order_by(*SqlAlchemySortTranslator(table).translate(command.sort_expression))

    if command.paginate_expression is not None:
        offset, limit = SqlAlchemyPaginateTranslator().translate(command.paginate_expression)
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

    if command.include_expression is not None:
        log.debug("Include expressions are not translated for table %s", table.name)

    return stmt
