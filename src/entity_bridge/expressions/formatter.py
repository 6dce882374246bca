from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .visitors import (
    FilterExpressionVisitor,
    IncludeExpressionVisitor,
    PaginateExpressionVisitor,
    SortExpressionVisitor,
)

if TYPE_CHECKING:
    from .base import Expression
    from .filter import (
        AndFilterExpression,
        ContainsFilterExpression,
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
        OrFilterExpression,
        PropertyFilterExpression,
        StartsWithFilterExpression,
    )
    from .include import EagerLoadingExpression
    from .paginate import OffsetPaginateExpression, SizePaginateExpression
    from .sort import AscSortExpression, DescSortExpression, SortExpression


class ExpressionFormatter(
    FilterExpressionVisitor[str],
    SortExpressionVisitor[str],
    IncludeExpressionVisitor[str],
    PaginateExpressionVisitor[str],
):
    """Renders expression trees as readable text for logs and reprs.

    Example:
        >>> ExpressionFormatter().format(f.gt(b.year, 1990) & f.ends_with(b.title, "Ring"))
        "(year > 1990 and title ends with 'Ring')"
    """

    def format(self, expression: Expression | None) -> str:
        if expression is None:
            return ""
        return expression.accept(self)

    def _binary(self, expression: PropertyFilterExpression, operator: str, value: Any) -> str:
        return f"{expression.property_info.path} {operator} {value!r}"

    def visit_eq_filter_expression(self, expression: EqFilterExpression) -> str:
        return self._binary(expression, "==", expression.value)

    def visit_not_eq_filter_expression(self, expression: NotEqFilterExpression) -> str:
        return self._binary(expression, "!=", expression.value)

    def visit_gt_filter_expression(self, expression: GtFilterExpression) -> str:
        return self._binary(expression, ">", expression.value)

    def visit_gte_filter_expression(self, expression: GteFilterExpression) -> str:
        return self._binary(expression, ">=", expression.value)

    def visit_lt_filter_expression(self, expression: LtFilterExpression) -> str:
        return self._binary(expression, "<", expression.value)

    def visit_lte_filter_expression(self, expression: LteFilterExpression) -> str:
        return self._binary(expression, "<=", expression.value)

    def visit_in_filter_expression(self, expression: InFilterExpression) -> str:
        return self._binary(expression, "in", list(expression.values))

    def visit_not_in_filter_expression(self, expression: NotInFilterExpression) -> str:
        return self._binary(expression, "not in", list(expression.values))

    def visit_contains_filter_expression(self, expression: ContainsFilterExpression) -> str:
        return self._binary(expression, "contains", expression.value)

    def visit_not_contains_filter_expression(self, expression: NotContainsFilterExpression) -> str:
        return self._binary(expression, "not contains", expression.value)

    def visit_starts_with_filter_expression(self, expression: StartsWithFilterExpression) -> str:
        return self._binary(expression, "starts with", expression.value)

    def visit_not_starts_with_filter_expression(self, expression: NotStartsWithFilterExpression) -> str:
        return self._binary(expression, "not starts with", expression.value)

    def visit_ends_with_filter_expression(self, expression: EndsWithFilterExpression) -> str:
        return self._binary(expression, "ends with", expression.value)

    def visit_not_ends_with_filter_expression(self, expression: NotEndsWithFilterExpression) -> str:
        return self._binary(expression, "not ends with", expression.value)

    def visit_and_filter_expression(self, expression: AndFilterExpression) -> str:
        return f"({expression.left.accept(self)} and {expression.right.accept(self)})"

    def visit_or_filter_expression(self, expression: OrFilterExpression) -> str:
        return f"({expression.left.accept(self)} or {expression.right.accept(self)})"

    def visit_not_filter_expression(self, expression: NotFilterExpression) -> str:
        return f"not {expression.filter_expression.accept(self)}"

    def _sort_key(self, expression: SortExpression, direction: str) -> str:
        key = f"{expression.property_info.path} {direction}"
        if expression.parent_sort_expression is None:
            return key
        return f"{expression.parent_sort_expression.accept(self)}, {key}"

    def visit_asc_sort_expression(self, expression: AscSortExpression) -> str:
        return self._sort_key(expression, "asc")

    def visit_desc_sort_expression(self, expression: DescSortExpression) -> str:
        return self._sort_key(expression, "desc")

    def visit_eager_loading_expression(self, expression: EagerLoadingExpression) -> str:
        path = expression.property_info.path
        if expression.parent_include_expression is None:
            return path
        return f"{expression.parent_include_expression.accept(self)}, {path}"

    def visit_offset_paginate_expression(self, expression: OffsetPaginateExpression) -> str:
        parts = []
        if expression.offset is not None:
            parts.append(f"offset {expression.offset}")
        if expression.limit is not None:
            parts.append(f"limit {expression.limit}")
        return " ".join(parts)

    def visit_size_paginate_expression(self, expression: SizePaginateExpression) -> str:
        return f"page {expression.page_number} of size {expression.page_size}"
