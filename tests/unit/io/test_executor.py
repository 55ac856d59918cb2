"""
Unit tests for SqlExecutor against an in-memory SQLite database.
"""

import json
import logging

import pytest

from sqlite_builder.io.executor import SqlExecutor, create_engine_from_settings
from sqlite_builder.sql.builder import SqlBuilder
from sqlite_builder.sql.exceptions import ExecutorError, NoValueError


@pytest.fixture
def executor(conn):
    executor = SqlExecutor(conn)
    executor.exec(
        SqlBuilder.insert_into("books")
        .fields(["title", "price"])
        .values(["Dune", 120])
        .values(["Emma", 80])
        .values(["O'Brien's Tale", 95])
    )
    return executor


class TestSqlExecutor:
    """Tests for SqlExecutor."""

    def test_exec_returns_rowcount(self, conn):
        rowcount = SqlExecutor(conn).exec(
            SqlBuilder.insert_into("books").field("title").values(["A"]).values(["B"])
        )
        assert rowcount == 2

    def test_get_all_rows(self, executor):
        rows = executor.get(
            SqlBuilder.select_from("books").fields(["title", "price"]).order_asc("price")
        )
        assert rows == [["Emma", 80], ["O'Brien's Tale", 95], ["Dune", 120]]

    def test_get_accepts_rendered_string(self, executor):
        rows = executor.get("SELECT title FROM books WHERE price > 100;")
        assert rows == [["Dune"]]

    def test_get_row(self, executor):
        row = executor.get_row(
            SqlBuilder.select_from("books").fields(["title", "price"]).order_desc("price")
        )
        assert row == ["Dune", 120]

    def test_get_row_empty(self, executor):
        assert executor.get_row(SqlBuilder.select_from("books").and_where("price < 0")) == []

    def test_get_value_round_trips_quotes(self, executor):
        query = SqlBuilder.select_from("books").field("price").and_where_eq(
            "title", "O'Brien's Tale"
        )
        assert executor.get_value(query) == 95

    def test_get_value_no_rows(self, executor):
        with pytest.raises(NoValueError):
            executor.get_value(SqlBuilder.select_from("books").field("id").and_where("0"))

    def test_get_int(self, executor):
        assert executor.get_int(SqlBuilder.select_from("books").field("COUNT(*)")) == 3

    def test_get_int_type_mismatch(self, executor):
        with pytest.raises(ExecutorError, match="integer"):
            executor.get_int(SqlBuilder.select_from("books").field("title").limit(1))

    def test_get_str(self, executor):
        query = SqlBuilder.select_from("books").field("title").order_asc("title").limit(1)
        assert executor.get_str(query) == "Dune"

    def test_get_str_type_mismatch(self, executor):
        with pytest.raises(ExecutorError, match="string"):
            executor.get_str(SqlBuilder.select_from("books").field("price").limit(1))

    def test_get_cursor(self, executor):
        result = executor.get_cursor(SqlBuilder.select_from("books").field("title").order_asc("id"))
        assert [row[0] for row in result.fetchall()] == ["Dune", "Emma", "O'Brien's Tale"]

    def test_colons_in_literals_are_not_bind_params(self, conn):
        executor = SqlExecutor(conn)
        executor.exec(SqlBuilder.insert_into("books").field("title").values(["Meet at 10:30"]))
        value = executor.get_str(
            SqlBuilder.select_from("books").field("title").and_where_eq("title", "Meet at 10:30")
        )
        assert value == "Meet at 10:30"

    def test_update_and_delete(self, executor):
        updated = executor.exec(
            SqlBuilder.update_table("books").set("price", "price + 1").and_where("price < 100")
        )
        deleted = executor.exec(SqlBuilder.delete_from("books").and_where("price > 100"))
        assert updated == 2
        assert deleted == 1
        assert executor.get_int(SqlBuilder.select_from("books").field("SUM(price)")) == 81 + 96

    def test_database_error_wrapped(self, executor, caplog, json_logging):
        caplog.set_level(logging.ERROR)
        with pytest.raises(ExecutorError):
            executor.get(SqlBuilder.select_from("missing_table"))

        events = [
            json.loads(record.message)["event"]
            for record in caplog.records
            if record.name.startswith("sqlite_builder")
        ]
        assert "sql.executor.failed" in events

    def test_offset_without_limit_runs(self, executor):
        rows = executor.get(
            SqlBuilder.select_from("books").field("title").order_asc("price").offset(1)
        )
        assert rows == [["O'Brien's Tale"], ["Dune"]]


class TestCreateEngine:
    """Tests for create_engine_from_settings."""

    def test_engine_uses_configured_url(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite://")
        engine = create_engine_from_settings()
        try:
            with engine.connect() as conn:
                assert SqlExecutor(conn).get_int("SELECT 1;") == 1
        finally:
            engine.dispose()
