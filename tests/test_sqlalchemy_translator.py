"""Tests for translating expression trees to SQLAlchemy Core."""

import pytest
from sqlalchemy import Column, Integer, MetaData, String, Table

from entity_bridge import ConfigurationError
from entity_bridge.expressions import (
    AscSortExpression,
    DescSortExpression,
    FilterExpressionBuilder,
    OffsetPaginateExpression,
    SizePaginateExpression,
)
from entity_bridge.proxy import EntityInfoProxy, proxy_target
from entity_bridge.translators import (
    SqlAlchemyFilterTranslator,
    SqlAlchemyPaginateTranslator,
    SqlAlchemySortTranslator,
    build_select,
)

from .models import Book

metadata = MetaData()

books_table = Table(
    "books",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("title", String),
    Column("published_year", Integer),
)

f = FilterExpressionBuilder()
b = EntityInfoProxy(Book.type_metadata())


def render(clause) -> str:
    return str(clause.compile(compile_kwargs={"literal_binds": True}))


class TestFilterTranslator:
    """Tests for WHERE clause translation."""

    @pytest.mark.parametrize(
        ("expression", "expected"),
        [
            (f.eq(b.id, 1), "books.id = 1"),
            (f.not_eq(b.id, 1), "books.id != 1"),
            (f.gt(b.id, 1), "books.id > 1"),
            (f.gte(b.id, 1), "books.id >= 1"),
            (f.lt(b.id, 1), "books.id < 1"),
            (f.lte(b.id, 1), "books.id <= 1"),
        ],
    )
    def test_comparisons(self, expression, expected):
        assert render(SqlAlchemyFilterTranslator(books_table).translate(expression)) == expected

    def test_alias_column(self):
        """Test properties map to columns by serialized name."""
        clause = SqlAlchemyFilterTranslator(books_table).translate(f.gt(b.year, 1990))

        assert render(clause) == "books.published_year > 1990"

    def test_in(self):
        translator = SqlAlchemyFilterTranslator(books_table)

        assert "books.id IN (1, 2)" in render(translator.translate(f.in_(b.id, [1, 2])))
        assert "books.id NOT IN (1, 2)" in render(translator.translate(f.not_in(b.id, [1, 2])))

    @pytest.mark.parametrize(
        ("expression", "operator"),
        [
            (f.contains(b.title, "Ring"), "LIKE"),
            (f.starts_with(b.title, "Ring"), "LIKE"),
            (f.ends_with(b.title, "Ring"), "LIKE"),
            (f.not_contains(b.title, "Ring"), "NOT LIKE"),
            (f.not_starts_with(b.title, "Ring"), "NOT LIKE"),
            (f.not_ends_with(b.title, "Ring"), "NOT LIKE"),
        ],
    )
    def test_string_matching(self, expression, operator):
        sql = render(SqlAlchemyFilterTranslator(books_table).translate(expression))

        assert sql.startswith(f"books.title {operator} ")
        assert "'Ring'" in sql

    def test_boolean_composition(self):
        translator = SqlAlchemyFilterTranslator(books_table)

        assert render(translator.translate(f.gt(b.id, 1) & f.eq(b.title, "x"))) == (
            "books.id > 1 AND books.title = 'x'"
        )
        assert render(translator.translate(f.eq(b.id, 1) | f.eq(b.id, 2))) == "books.id = 1 OR books.id = 2"
        assert render(translator.translate(~f.eq(b.id, 1))) == "books.id != 1"

    def test_nested_path(self):
        """Test paths through related entities cannot be translated."""
        with pytest.raises(ConfigurationError, match=r"^author\.name: Nested property paths"):
            SqlAlchemyFilterTranslator(books_table).translate(f.eq(b.author.name, "x"))

    def test_missing_column(self):
        narrow = Table("narrow_books", MetaData(), Column("id", Integer))

        with pytest.raises(ConfigurationError, match="has no column title"):
            SqlAlchemyFilterTranslator(narrow).translate(f.eq(b.title, "x"))


class TestSortTranslator:
    def test_chain_order(self):
        """Test the key that takes precedence is emitted first."""
        expression = DescSortExpression(proxy_target(b.id), AscSortExpression(proxy_target(b.title)))

        clauses = SqlAlchemySortTranslator(books_table).translate(expression)

        assert [render(clause) for clause in clauses] == ["books.title ASC", "books.id DESC"]


class TestPaginateTranslator:
    def test_offset(self):
        translator = SqlAlchemyPaginateTranslator()

        assert translator.translate(OffsetPaginateExpression(10, 5)) == (10, 5)
        assert translator.translate(OffsetPaginateExpression(limit=5)) == (None, 5)

    def test_size(self):
        translator = SqlAlchemyPaginateTranslator()

        assert translator.translate(SizePaginateExpression(20, 3)) == (40, 20)
        assert translator.translate(SizePaginateExpression(20)) == (0, 20)


class TestBuildSelect:
    """Tests for assembling a SELECT from a query command."""

    def test_full_query(self, books):
        command = (
            books.where(lambda b, f: f.gt(b.year, 1990))
            .order_by(lambda b: b.title)
            .then_by_descending(lambda b: b.id)
            .include(lambda b: b.author)
            .paginate(5, 3)
            .build_bulk_query_command()
        )

        sql = render(build_select(books_table, command))

        assert "FROM books" in sql
        assert "WHERE books.published_year > 1990" in sql
        assert "ORDER BY books.title ASC, books.id DESC" in sql
        assert "LIMIT 5" in sql
        assert "OFFSET 10" in sql

    def test_plain_query(self, books):
        sql = render(build_select(books_table, books.query().build_bulk_query_command()))

        assert "WHERE" not in sql
        assert "ORDER BY" not in sql
        assert "LIMIT" not in sql

    def test_first_page_has_no_offset(self, books):
        sql = render(build_select(books_table, books.paginate(5).build_query_command()))

        assert "LIMIT 5" in sql
        assert "OFFSET" not in sql
