"""
Execution of rendered statements.

The builder only produces SQL text. This module is the thin collaborator
that runs it through a SQLAlchemy connection and maps rows back to plain
Python values. Transactions and connection lifetime belong to the caller.

Usage:
    engine = create_engine_from_settings()
    with engine.begin() as conn:
        executor = SqlExecutor(conn)
        executor.exec(SqlBuilder.insert_into("books").field("title").values(["Dune"]))
        count = executor.get_int(SqlBuilder.select_from("books").field("COUNT(*)"))
"""

from typing import Any, List, Optional, Protocol, Union

import sqlalchemy as sa
from sqlalchemy.engine import Connection, CursorResult, Engine
from sqlalchemy.exc import SQLAlchemyError

from sqlite_builder.config import Settings, get_settings
from sqlite_builder.sql.builder import SqlBuilder
from sqlite_builder.sql.exceptions import ExecutorError, NoValueError
from sqlite_builder.utils.logging import get_logger

logger = get_logger(__name__)

Statement = Union[str, SqlBuilder]


class Executor(Protocol):
    """Protocol for anything that can run a rendered statement."""

    def execute(self, sql: str) -> Any: ...


def create_engine_from_settings(settings: Optional[Settings] = None) -> Engine:
    """
    Create a SQLAlchemy engine for the configured database.

    Args:
        settings: Settings to use (defaults to ``get_settings()``)

    Returns:
        SQLAlchemy Engine
    """
    settings = settings or get_settings()
    return sa.create_engine(settings.DATABASE_URL, echo=settings.sql_echo)


class SqlExecutor:
    """
    Runs builders or rendered SQL on a SQLAlchemy connection.

    Statements are sent with ``exec_driver_sql`` so literal text such as
    ``'10:30'`` is never mistaken for a bind parameter.
    """

    def __init__(self, conn: Connection):
        """
        Initialize the executor with a database connection.

        Args:
            conn: SQLAlchemy connection object
        """
        self.conn = conn

    def execute(self, sql: str) -> CursorResult:
        """
        Execute SQL text and return the driver result.

        Raises:
            ExecutorError: If the database rejects the statement
        """
        logger.debug("sql.executor.execute", sql=sql)
        try:
            return self.conn.exec_driver_sql(sql)
        except SQLAlchemyError as exc:
            logger.error("sql.executor.failed", sql=sql, error=str(exc))
            raise ExecutorError(f"Statement failed: {exc}") from exc

    def exec(self, statement: Statement) -> int:
        """Execute a statement and return the affected row count."""
        return self.execute(_render(statement)).rowcount

    def get(self, statement: Statement) -> List[List[Any]]:
        """Return all rows as lists of column values."""
        result = self.execute(_render(statement))
        return [list(row) for row in result]

    def get_row(self, statement: Statement) -> List[Any]:
        """Return the first row, or an empty list when there are no rows."""
        row = self.execute(_render(statement)).first()
        if row is None:
            return []
        return list(row)

    def get_value(self, statement: Statement) -> Any:
        """
        Return the first column of the first row.

        Raises:
            NoValueError: If the query returns no rows
        """
        sql = _render(statement)
        row = self.execute(sql).first()
        if row is None:
            raise NoValueError(f"Query returned no rows: {sql}")
        return row[0]

    def get_int(self, statement: Statement) -> int:
        """Return the first value, which must be an integer."""
        value = self.get_value(statement)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ExecutorError(f"Expected an integer value, got {type(value).__name__}")
        return value

    def get_str(self, statement: Statement) -> str:
        """Return the first value, which must be a string."""
        value = self.get_value(statement)
        if not isinstance(value, str):
            raise ExecutorError(f"Expected a string value, got {type(value).__name__}")
        return value

    def get_cursor(self, statement: Statement) -> CursorResult:
        """Return the open driver result for incremental fetching."""
        return self.execute(_render(statement))


def _render(statement: Statement) -> str:
    if isinstance(statement, SqlBuilder):
        return statement.sql()
    return statement
