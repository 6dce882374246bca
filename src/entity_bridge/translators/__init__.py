"""Translation of expression trees into backend query representations."""

from .sqlalchemy import (
    SqlAlchemyFilterTranslator,
    SqlAlchemyPaginateTranslator,
    SqlAlchemySortTranslator,
    build_select,
    table_column,
)

__all__ = [
    "SqlAlchemyFilterTranslator",
    "SqlAlchemyPaginateTranslator",
    "SqlAlchemySortTranslator",
    "build_select",
    "table_column",
]
