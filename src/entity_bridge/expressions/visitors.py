"""Visitor contracts, one per expression family.

Every concrete node's ``accept`` calls exactly one method below. Adding a
node kind means adding its method here and its ``accept``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
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
        StartsWithFilterExpression,
    )
    from .include import EagerLoadingExpression
    from .paginate import OffsetPaginateExpression, SizePaginateExpression
    from .sort import AscSortExpression, DescSortExpression

TResult = TypeVar("TResult")


class FilterExpressionVisitor(Generic[TResult], ABC):
    @abstractmethod
    def visit_eq_filter_expression(self, expression: EqFilterExpression) -> TResult: ...

    @abstractmethod
    def visit_not_eq_filter_expression(self, expression: NotEqFilterExpression) -> TResult: ...

    @abstractmethod
    def visit_gt_filter_expression(self, expression: GtFilterExpression) -> TResult: ...

    @abstractmethod
    def visit_gte_filter_expression(self, expression: GteFilterExpression) -> TResult: ...

    @abstractmethod
    def visit_lt_filter_expression(self, expression: LtFilterExpression) -> TResult: ...

    @abstractmethod
    def visit_lte_filter_expression(self, expression: LteFilterExpression) -> TResult: ...

    @abstractmethod
    def visit_in_filter_expression(self, expression: InFilterExpression) -> TResult: ...

    @abstractmethod
    def visit_not_in_filter_expression(self, expression: NotInFilterExpression) -> TResult: ...

    @abstractmethod
    def visit_contains_filter_expression(self, expression: ContainsFilterExpression) -> TResult: ...

    @abstractmethod
    def visit_not_contains_filter_expression(self, expression: NotContainsFilterExpression) -> TResult: ...

    @abstractmethod
    def visit_starts_with_filter_expression(self, expression: StartsWithFilterExpression) -> TResult: ...

    @abstractmethod
    def visit_not_starts_with_filter_expression(
        self, expression: NotStartsWithFilterExpression
    ) -> TResult: ...

    @abstractmethod
    def visit_ends_with_filter_expression(self, expression: EndsWithFilterExpression) -> TResult: ...

    @abstractmethod
    def visit_not_ends_with_filter_expression(self, expression: NotEndsWithFilterExpression) -> TResult: ...

    @abstractmethod
    def visit_and_filter_expression(self, expression: AndFilterExpression) -> TResult: ...

    @abstractmethod
    def visit_or_filter_expression(self, expression: OrFilterExpression) -> TResult: ...

    @abstractmethod
    def visit_not_filter_expression(self, expression: NotFilterExpression) -> TResult: ...


class SortExpressionVisitor(Generic[TResult], ABC):
    @abstractmethod
    def visit_asc_sort_expression(self, expression: AscSortExpression) -> TResult: ...

    @abstractmethod
    def visit_desc_sort_expression(self, expression: DescSortExpression) -> TResult: ...


class IncludeExpressionVisitor(Generic[TResult], ABC):
    @abstractmethod
    def visit_eager_loading_expression(self, expression: EagerLoadingExpression) -> TResult: ...


class PaginateExpressionVisitor(Generic[TResult], ABC):
    @abstractmethod
    def visit_offset_paginate_expression(self, expression: OffsetPaginateExpression) -> TResult: ...

    @abstractmethod
    def visit_size_paginate_expression(self, expression: SizePaginateExpression) -> TResult: ...
