from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from .base import Expression

if TYPE_CHECKING:
    from .visitors import PaginateExpressionVisitor

TResult = TypeVar("TResult")


class PaginateExpression(Expression):
    """Base class for pagination nodes."""

    __slots__ = ()

    @abstractmethod
    def accept(self, visitor: PaginateExpressionVisitor[TResult]) -> TResult: ...


@dataclass(slots=True, frozen=True)
class OffsetPaginateExpression(PaginateExpression):
    offset: int | None = None
    limit: int | None = None

    def accept(self, visitor: PaginateExpressionVisitor[TResult]) -> TResult:
        return visitor.visit_offset_paginate_expression(self)


@dataclass(slots=True, frozen=True)
class SizePaginateExpression(PaginateExpression):
    page_size: int
    page_number: int = 1

    def accept(self, visitor: PaginateExpressionVisitor[TResult]) -> TResult:
        return visitor.visit_size_paginate_expression(self)
