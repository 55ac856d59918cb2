"""
Unit tests for INSERT statements built with SqlBuilder.
"""

import pytest

from sqlite_builder.sql.builder import SqlBuilder
from sqlite_builder.sql.core.escape import Raw
from sqlite_builder.sql.exceptions import (
    ConfigError,
    FieldValueMismatchError,
    MissingFieldsError,
    RenderError,
)


class TestInsertValues:
    """INSERT ... VALUES rendering."""

    def test_multi_row_insert(self):
        sql = (
            SqlBuilder.insert_into("t")
            .fields(["id", "name"])
            .values([1, "a"])
            .values([2, "b"])
            .sql()
        )
        assert sql == "INSERT INTO t (id, name) VALUES (1, 'a'), (2, 'b');"

    def test_literals_and_raw_expressions(self):
        sql = (
            SqlBuilder.insert_into("books")
            .field("title")
            .field("price")
            .values(["In Search of Lost Time", 150])
            .values([Raw("'Don Quixote'"), 200])
            .sql()
        )
        assert sql == (
            "INSERT INTO books (title, price) "
            "VALUES ('In Search of Lost Time', 150), ('Don Quixote', 200);"
        )

    def test_quotes_are_escaped(self):
        sql = SqlBuilder.insert_into("people").field("name").values(["O'Brien"]).sql()
        assert sql == "INSERT INTO people (name) VALUES ('O''Brien');"

    def test_null_and_function_values(self):
        sql = (
            SqlBuilder.insert_into("log")
            .fields(["note", "created_at"])
            .values([None, Raw("CURRENT_TIMESTAMP")])
            .sql()
        )
        assert sql == "INSERT INTO log (note, created_at) VALUES (NULL, CURRENT_TIMESTAMP);"

    def test_subquery_value(self):
        top = SqlBuilder.select_from("prices").field("MAX(price)")
        sql = (
            SqlBuilder.insert_into("stats")
            .fields(["name", "value"])
            .values(["max_price", top])
            .sql()
        )
        assert sql == (
            "INSERT INTO stats (name, value) "
            "VALUES ('max_price', (SELECT MAX(price) FROM prices));"
        )

    def test_set_fields_replaces(self):
        sql = (
            SqlBuilder.insert_into("t")
            .field("x")
            .set_fields(["a", "b"])
            .values([1, 2])
            .sql()
        )
        assert sql == "INSERT INTO t (a, b) VALUES (1, 2);"


class TestInsertValidation:
    """Render-time and configuration-time INSERT errors."""

    def test_short_row_fails(self):
        builder = SqlBuilder.insert_into("t").fields(["id", "name"]).values([1])
        with pytest.raises(FieldValueMismatchError) as exc_info:
            builder.sql()

        assert exc_info.value.row_index == 0
        assert exc_info.value.expected == 2
        assert exc_info.value.actual == 1

    def test_mismatch_reports_row_index(self):
        builder = (
            SqlBuilder.insert_into("t")
            .fields(["id", "name"])
            .values([1, "a"])
            .values([2, "b", "extra"])
        )
        with pytest.raises(FieldValueMismatchError) as exc_info:
            builder.sql()
        assert exc_info.value.row_index == 1
        assert isinstance(exc_info.value, RenderError)

    def test_rows_checked_at_render_time(self):
        """Fields may be declared after rows are added."""
        sql = SqlBuilder.insert_into("t").values([1, 2]).field("a").field("b").sql()
        assert sql == "INSERT INTO t (a, b) VALUES (1, 2);"

    def test_missing_fields(self):
        with pytest.raises(MissingFieldsError):
            SqlBuilder.insert_into("t").values([1]).sql()

    def test_missing_values(self):
        with pytest.raises(MissingFieldsError):
            SqlBuilder.insert_into("t").field("a").sql()

    def test_unsupported_value_leaves_rows_unchanged(self):
        builder = SqlBuilder.insert_into("t").field("a")
        with pytest.raises(ConfigError):
            builder.values([object()])
        assert builder.values([1]).sql() == "INSERT INTO t (a) VALUES (1);"

    def test_row_must_be_sequence(self):
        with pytest.raises(ConfigError):
            SqlBuilder.insert_into("t").field("a").values("abc")

    @pytest.mark.parametrize(
        "configure",
        [
            lambda b: b.and_where("a = 1"),
            lambda b: b.set("a", "1"),
            lambda b: b.order_by("a"),
            lambda b: b.limit(1),
        ],
    )
    def test_clauses_not_valid_for_insert(self, configure):
        with pytest.raises(ConfigError):
            configure(SqlBuilder.insert_into("t"))


class TestInsertSelect:
    """INSERT ... SELECT rendering."""

    def test_insert_from_builder(self):
        query = (
            SqlBuilder.select_from("warehouse")
            .field("title")
            .field("preliminary_price * 2")
        )
        assert query.query() == "SELECT title, preliminary_price * 2 FROM warehouse"

        sql = (
            SqlBuilder.insert_into("books")
            .field("title")
            .field("price")
            .select(query)
            .sql()
        )
        assert sql == (
            "INSERT INTO books (title, price) "
            "SELECT title, preliminary_price * 2 FROM warehouse;"
        )

    def test_insert_from_query_string(self):
        sql = (
            SqlBuilder.insert_into("books")
            .field("title")
            .select("SELECT title FROM warehouse")
            .sql()
        )
        assert sql == "INSERT INTO books (title) SELECT title FROM warehouse;"

    def test_select_requires_fields(self):
        with pytest.raises(MissingFieldsError):
            SqlBuilder.insert_into("books").select("SELECT 1").sql()

    def test_values_then_select_conflict(self):
        builder = SqlBuilder.insert_into("t").field("a").values([1])
        with pytest.raises(ConfigError):
            builder.select("SELECT a FROM s")
        assert builder.sql() == "INSERT INTO t (a) VALUES (1);"

    def test_select_then_values_conflict(self):
        builder = SqlBuilder.insert_into("t").field("a").select("SELECT a FROM s")
        with pytest.raises(ConfigError):
            builder.values([1])
        assert builder.sql() == "INSERT INTO t (a) SELECT a FROM s;"
