from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from .base import Expression

if TYPE_CHECKING:
    from ..property_info import PropertyInfo
    from .visitors import SortExpressionVisitor

TResult = TypeVar("TResult")


@dataclass(slots=True, frozen=True)
class SortExpression(Expression):
    """Sort key on a property.

    Keys form a chain through ``parent_sort_expression``; the parent is the
    key that takes precedence.
    """

    property_info: PropertyInfo
    parent_sort_expression: SortExpression | None = None

    @abstractmethod
    def accept(self, visitor: SortExpressionVisitor[TResult]) -> TResult: ...

    def chain(self) -> list[SortExpression]:
        """Sort keys in precedence order, this key last."""
        keys: list[SortExpression] = []
        node: SortExpression | None = self
        while node is not None:
            keys.append(node)
            node = node.parent_sort_expression
        keys.reverse()
        return keys


@dataclass(slots=True, frozen=True)
class AscSortExpression(SortExpression):
    def accept(self, visitor: SortExpressionVisitor[TResult]) -> TResult:
        return visitor.visit_asc_sort_expression(self)


@dataclass(slots=True, frozen=True)
class DescSortExpression(SortExpression):
    def accept(self, visitor: SortExpressionVisitor[TResult]) -> TResult:
        return visitor.visit_desc_sort_expression(self)
