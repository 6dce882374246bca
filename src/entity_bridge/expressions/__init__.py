"""
Expression trees for entity queries.

Nodes are immutable; composing a query wraps existing nodes in new parents.
Four families exist, each with its own visitor contract:

  - filter: property predicates plus ``and``/``or``/``not``
  - sort: ascending/descending keys chained through their parent key
  - include: eager-loading nodes chained through the previous include tree
  - paginate: offset/limit or page size/number
"""

from .base import Expression
from .builder import FilterExpressionBuilder
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
    PropertyFilterExpression,
    StartsWithFilterExpression,
)
from .formatter import ExpressionFormatter
from .include import EagerLoadingExpression, IncludeExpression
from .paginate import OffsetPaginateExpression, PaginateExpression, SizePaginateExpression
from .sort import AscSortExpression, DescSortExpression, SortExpression
from .visitors import (
    FilterExpressionVisitor,
    IncludeExpressionVisitor,
    PaginateExpressionVisitor,
    SortExpressionVisitor,
)

__all__ = [
    "AndFilterExpression",
    "AscSortExpression",
    "ContainsFilterExpression",
    "DescSortExpression",
    "EagerLoadingExpression",
    "EndsWithFilterExpression",
    "EqFilterExpression",
    "Expression",
    "ExpressionFormatter",
    "FilterExpression",
    "FilterExpressionBuilder",
    "FilterExpressionVisitor",
    "GteFilterExpression",
    "GtFilterExpression",
    "InFilterExpression",
    "IncludeExpression",
    "IncludeExpressionVisitor",
    "LteFilterExpression",
    "LtFilterExpression",
    "NotContainsFilterExpression",
    "NotEndsWithFilterExpression",
    "NotEqFilterExpression",
    "NotFilterExpression",
    "NotInFilterExpression",
    "NotStartsWithFilterExpression",
    "OffsetPaginateExpression",
    "OrFilterExpression",
    "PaginateExpression",
    "PaginateExpressionVisitor",
    "PropertyFilterExpression",
    "SizePaginateExpression",
    "SortExpression",
    "SortExpressionVisitor",
    "StartsWithFilterExpression",
]
