"""
SQLite-specific statement rendering.

Turns a ``StatementState`` into SQL text following a fixed clause order per
statement kind. Rendering is a pure function of the state: no I/O and no
mutation. Nested statements are rendered recursively as parenthesised
subqueries.
"""

from typing import List

from ..core.types import (
    JoinClause,
    Operand,
    OrderTerm,
    StatementKind,
    StatementState,
    TableRef,
    WhereFragment,
)
from ..exceptions import FieldValueMismatchError, MissingFieldsError


class SQLiteDialect:
    """SQLite SQL dialect implementation."""

    name = "sqlite"
    terminator = ";"

    def render(self, state: StatementState) -> str:
        """Render a complete statement terminated with a semicolon."""
        return f"{self.render_query(state)}{self.terminator}"

    def render_query(self, state: StatementState) -> str:
        """
        Render a statement without the trailing semicolon.

        Raises:
            MissingFieldsError: If INSERT/UPDATE lacks fields, rows or SET entries
            FieldValueMismatchError: If an INSERT row's arity differs from the fields
        """
        if state.kind is StatementKind.SELECT:
            return self.build_select(state)
        if state.kind is StatementKind.INSERT:
            return self.build_insert(state)
        if state.kind is StatementKind.UPDATE:
            return self.build_update(state)
        return self.build_delete(state)

    def subquery(self, state: StatementState) -> str:
        """Render a nested statement wrapped in parentheses."""
        return f"({self.render_query(state)})"

    def operand(self, value: Operand) -> str:
        """Render a text fragment verbatim, or a nested statement as a subquery."""
        if isinstance(value, StatementState):
            return self.subquery(value)
        return value

    def table(self, ref: TableRef) -> str:
        rendered = self.operand(ref.source)
        if ref.alias:
            return f"{rendered} AS {ref.alias}"
        return rendered

    def build_select(self, state: StatementState) -> str:
        """
        Build a SELECT statement.

        Clause order: DISTINCT, fields (``*`` when empty), FROM, joins, WHERE,
        GROUP BY, HAVING, ORDER BY, LIMIT, OFFSET.
        """
        parts = ["SELECT"]
        if state.distinct:
            parts.append("DISTINCT")
        parts.append(self.join_list(state.fields) if state.fields else "*")
        parts.append(f"FROM {self.table(state.table)}")
        parts.extend(self.build_join(join) for join in state.joins)
        if state.wheres:
            parts.append(f"WHERE {self.build_where(state.wheres)}")
        if state.group_by:
            parts.append(f"GROUP BY {self.join_list(state.group_by)}")
        if state.having:
            parts.append(f"HAVING {' AND '.join(state.having)}")
        if state.order_by:
            parts.append(f"ORDER BY {self.build_order_by(state.order_by)}")
        if state.limit is not None:
            parts.append(f"LIMIT {state.limit}")
        elif state.offset is not None:
            # SQLite only accepts OFFSET after LIMIT; -1 means no limit
            parts.append("LIMIT -1")
        if state.offset is not None:
            parts.append(f"OFFSET {state.offset}")
        return " ".join(parts)

    def build_insert(self, state: StatementState) -> str:
        """
        Build an INSERT statement from VALUES rows or a SELECT source.

        Returns:
            ``INSERT INTO <table> (<fields>) VALUES (...), (...)`` or
            ``INSERT INTO <table> (<fields>) <query>``
        """
        if not state.fields:
            raise MissingFieldsError("INSERT requires at least one field")

        target = f"INSERT INTO {self.table(state.table)} ({self.join_list(state.fields)})"

        if state.insert_query is not None:
            source = state.insert_query
            if isinstance(source, StatementState):
                # INSERT ... SELECT takes the query bare, not parenthesised
                return f"{target} {self.render_query(source)}"
            return f"{target} {source}"

        if not state.rows:
            raise MissingFieldsError("INSERT requires at least one row of values")

        expected = len(state.fields)
        for index, row in enumerate(state.rows):
            if len(row) != expected:
                raise FieldValueMismatchError(index, expected, len(row))

        values = ", ".join(f"({self.join_list(row)})" for row in state.rows)
        return f"{target} VALUES {values}"

    def build_update(self, state: StatementState) -> str:
        """Build an UPDATE statement; SET entries render in insertion order."""
        if not state.set_clauses:
            raise MissingFieldsError("UPDATE requires at least one SET entry")

        assignments = ", ".join(
            f"{column} = {self.operand(expr)}"
            for column, expr in state.set_clauses.items()
        )
        sql = f"UPDATE {self.table(state.table)} SET {assignments}"
        if state.wheres:
            sql = f"{sql} WHERE {self.build_where(state.wheres)}"
        return sql

    def build_delete(self, state: StatementState) -> str:
        """Build a DELETE statement."""
        sql = f"DELETE FROM {self.table(state.table)}"
        if state.wheres:
            sql = f"{sql} WHERE {self.build_where(state.wheres)}"
        return sql

    def build_join(self, join: JoinClause) -> str:
        sql = f"{join.kind.value} JOIN {self.table(join.target)}"
        if join.on:
            sql = f"{sql} ON {join.on}"
        return sql

    def build_where(self, wheres: List[WhereFragment]) -> str:
        """
        Join WHERE fragments with their recorded connectors.

        The first fragment's connector is dropped. Fragments are not
        parenthesised; precedence is up to the caller.
        """
        first, *rest = wheres
        parts = [first.predicate]
        for fragment in rest:
            parts.append(f"{fragment.connector.value} {fragment.predicate}")
        return " ".join(parts)

    def build_order_by(self, terms: List[OrderTerm]) -> str:
        return ", ".join(
            f"{self.operand(term.expr)} {term.direction.value}" for term in terms
        )

    def join_list(self, items: List[Operand]) -> str:
        return ", ".join(self.operand(item) for item in items)
