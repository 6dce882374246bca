from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

from .base import Expression

if TYPE_CHECKING:
    from ..property_info import PropertyInfo
    from .visitors import FilterExpressionVisitor

TResult = TypeVar("TResult")


class FilterExpression(Expression):
    """Base class for predicate nodes."""

    __slots__ = ()

    @abstractmethod
    def accept(self, visitor: FilterExpressionVisitor[TResult]) -> TResult: ...

    def __and__(self, other: FilterExpression) -> AndFilterExpression:
        return AndFilterExpression(self, other)

    def __or__(self, other: FilterExpression) -> OrFilterExpression:
        return OrFilterExpression(self, other)

    def __invert__(self) -> NotFilterExpression:
        return NotFilterExpression(self)


@dataclass(slots=True, frozen=True)
class PropertyFilterExpression(FilterExpression):
    """Predicate scoped to a single property."""

    property_info: PropertyInfo


@dataclass(slots=True, frozen=True)
class EqFilterExpression(PropertyFilterExpression):
    value: Any

    def accept(self, visitor: FilterExpressionVisitor[TResult]) -> TResult:
        return visitor.visit_eq_filter_expression(self)


@dataclass(slots=True, frozen=True)
class NotEqFilterExpression(PropertyFilterExpression):
    value: Any

    def accept(self, visitor: FilterExpressionVisitor[TResult]) -> TResult:
        return visitor.visit_not_eq_filter_expression(self)


@dataclass(slots=True, frozen=True)
class GtFilterExpression(PropertyFilterExpression):
    value: Any

    def accept(self, visitor: FilterExpressionVisitor[TResult]) -> TResult:
        return visitor.visit_gt_filter_expression(self)


@dataclass(slots=True, frozen=True)
class GteFilterExpression(PropertyFilterExpression):
    value: Any

    def accept(self, visitor: FilterExpressionVisitor[TResult]) -> TResult:
        return visitor.visit_gte_filter_expression(self)


@dataclass(slots=True, frozen=True)
class LtFilterExpression(PropertyFilterExpression):
    value: Any

    def accept(self, visitor: FilterExpressionVisitor[TResult]) -> TResult:
        return visitor.visit_lt_filter_expression(self)


@dataclass(slots=True, frozen=True)
class LteFilterExpression(PropertyFilterExpression):
    value: Any

    def accept(self, visitor: FilterExpressionVisitor[TResult]) -> TResult:
        return visitor.visit_lte_filter_expression(self)


@dataclass(slots=True, frozen=True)
class InFilterExpression(PropertyFilterExpression):
    values: tuple[Any, ...]

    def accept(self, visitor: FilterExpressionVisitor[TResult]) -> TResult:
        return visitor.visit_in_filter_expression(self)


@dataclass(slots=True, frozen=True)
class NotInFilterExpression(PropertyFilterExpression):
    values: tuple[Any, ...]

    def accept(self, visitor: FilterExpressionVisitor[TResult]) -> TResult:
        return visitor.visit_not_in_filter_expression(self)


@dataclass(slots=True, frozen=True)
class ContainsFilterExpression(PropertyFilterExpression):
    value: str

    def accept(self, visitor: FilterExpressionVisitor[TResult]) -> TResult:
        return visitor.visit_contains_filter_expression(self)


@dataclass(slots=True, frozen=True)
class NotContainsFilterExpression(PropertyFilterExpression):
    value: str

    def accept(self, visitor: FilterExpressionVisitor[TResult]) -> TResult:
        return visitor.visit_not_contains_filter_expression(self)


@dataclass(slots=True, frozen=True)
class StartsWithFilterExpression(PropertyFilterExpression):
    value: str

    def accept(self, visitor: FilterExpressionVisitor[TResult]) -> TResult:
        return visitor.visit_starts_with_filter_expression(self)


@dataclass(slots=True, frozen=True)
class NotStartsWithFilterExpression(PropertyFilterExpression):
    value: str

    def accept(self, visitor: FilterExpressionVisitor[TResult]) -> TResult:
        return visitor.visit_not_starts_with_filter_expression(self)


@dataclass(slots=True, frozen=True)
class EndsWithFilterExpression(PropertyFilterExpression):
    value: str

    def accept(self, visitor: FilterExpressionVisitor[TResult]) -> TResult:
        return visitor.visit_ends_with_filter_expression(self)


@dataclass(slots=True, frozen=True)
class NotEndsWithFilterExpression(PropertyFilterExpression):
    value: str

    def accept(self, visitor: FilterExpressionVisitor[TResult]) -> TResult:
        return visitor.visit_not_ends_with_filter_expression(self)


@dataclass(slots=True, frozen=True)
class AndFilterExpression(FilterExpression):
    left: FilterExpression
    right: FilterExpression

    def accept(self, visitor: FilterExpressionVisitor[TResult]) -> TResult:
        return visitor.visit_and_filter_expression(self)


@dataclass(slots=True, frozen=True)
class OrFilterExpression(FilterExpression):
    left: FilterExpression
    right: FilterExpression

    def accept(self, visitor: FilterExpressionVisitor[TResult]) -> TResult:
        return visitor.visit_or_filter_expression(self)


@dataclass(slots=True, frozen=True)
class NotFilterExpression(FilterExpression):
    filter_expression: FilterExpression

    def accept(self, visitor: FilterExpressionVisitor[TResult]) -> TResult:
        return visitor.visit_not_filter_expression(self)
