from __future__ import annotations

from collections.abc import Iterable
from functools import reduce
from typing import Any

from ..proxy import PropertyInfoProxy, proxy_target
from .filter import (
    AndFilterExpression,
    ContainsFilterExpression,
    EndsWithFilterExpression,
    EqFilterExpression,
    FilterExpression,
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


class FilterExpressionBuilder:
    """Second argument of ``where`` clauses.

    Example:
        >>> books.where(lambda b, f: f.and_(f.gt(b.year, 1990), f.ends_with(b.title, "Ring")))
    """

    def eq(self, proxy: PropertyInfoProxy, value: Any) -> EqFilterExpression:
        return EqFilterExpression(proxy_target(proxy), value)

    def not_eq(self, proxy: PropertyInfoProxy, value: Any) -> NotEqFilterExpression:
        return NotEqFilterExpression(proxy_target(proxy), value)

    def gt(self, proxy: PropertyInfoProxy, value: Any) -> GtFilterExpression:
        return GtFilterExpression(proxy_target(proxy), value)

    def gte(self, proxy: PropertyInfoProxy, value: Any) -> GteFilterExpression:
        return GteFilterExpression(proxy_target(proxy), value)

    def lt(self, proxy: PropertyInfoProxy, value: Any) -> LtFilterExpression:
        return LtFilterExpression(proxy_target(proxy), value)

    def lte(self, proxy: PropertyInfoProxy, value: Any) -> LteFilterExpression:
        return LteFilterExpression(proxy_target(proxy), value)

    def in_(self, proxy: PropertyInfoProxy, values: Iterable[Any]) -> InFilterExpression:
        return InFilterExpression(proxy_target(proxy), tuple(values))

    def not_in(self, proxy: PropertyInfoProxy, values: Iterable[Any]) -> NotInFilterExpression:
        return NotInFilterExpression(proxy_target(proxy), tuple(values))

    def contains(self, proxy: PropertyInfoProxy, value: str) -> ContainsFilterExpression:
        return ContainsFilterExpression(proxy_target(proxy), value)

    def not_contains(self, proxy: PropertyInfoProxy, value: str) -> NotContainsFilterExpression:
        return NotContainsFilterExpression(proxy_target(proxy), value)

    def starts_with(self, proxy: PropertyInfoProxy, value: str) -> StartsWithFilterExpression:
        return StartsWithFilterExpression(proxy_target(proxy), value)

    def not_starts_with(self, proxy: PropertyInfoProxy, value: str) -> NotStartsWithFilterExpression:
        return NotStartsWithFilterExpression(proxy_target(proxy), value)

    def ends_with(self, proxy: PropertyInfoProxy, value: str) -> EndsWithFilterExpression:
        return EndsWithFilterExpression(proxy_target(proxy), value)

    def not_ends_with(self, proxy: PropertyInfoProxy, value: str) -> NotEndsWithFilterExpression:
        return NotEndsWithFilterExpression(proxy_target(proxy), value)

    def and_(self, *filter_expressions: FilterExpression) -> FilterExpression:
        """Fold two or more filters left to right into nested ``and`` nodes."""
        if not filter_expressions:
            raise ValueError("and_() requires at least one filter expression")
        return reduce(AndFilterExpression, filter_expressions)

    def or_(self, *filter_expressions: FilterExpression) -> FilterExpression:
        """Fold two or more filters left to right into nested ``or`` nodes."""
        if not filter_expressions:
            raise ValueError("or_() requires at least one filter expression")
        return reduce(OrFilterExpression, filter_expressions)

    def not_(self, filter_expression: FilterExpression) -> NotFilterExpression:
        return NotFilterExpression(filter_expression)
