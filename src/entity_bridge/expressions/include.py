from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from .base import Expression

if TYPE_CHECKING:
    from ..property_info import PropertyInfo
    from .visitors import IncludeExpressionVisitor

TResult = TypeVar("TResult")


class IncludeExpression(Expression):
    """Base class for eager-loading nodes."""

    __slots__ = ()

    @abstractmethod
    def accept(self, visitor: IncludeExpressionVisitor[TResult]) -> TResult: ...


@dataclass(slots=True, frozen=True)
class EagerLoadingExpression(IncludeExpression):
    """Eager load of one property path.

    ``parent_include_expression`` points at the include tree as it was before
    this node was attached, so earlier branches stay reachable.
    """

    property_info: PropertyInfo
    parent_include_expression: IncludeExpression | None = None

    def accept(self, visitor: IncludeExpressionVisitor[TResult]) -> TResult:
        return visitor.visit_eager_loading_expression(self)

    def chain(self) -> list[EagerLoadingExpression]:
        """Attached nodes in the order they were included."""
        nodes: list[EagerLoadingExpression] = []
        node: IncludeExpression | None = self
        while isinstance(node, EagerLoadingExpression):
            nodes.append(node)
            node = node.parent_include_expression
        nodes.reverse()
        return nodes
