"""
Chainable SQL statement builder.

``SqlBuilder`` accumulates statement state through chainable configuration
calls and renders it on demand. Every configuration call validates its
input before touching state, so a ``ConfigError`` leaves the builder as it
was. Rendering never mutates state and may be repeated.

Example:
    >>> from sqlite_builder import SqlBuilder
    >>> SqlBuilder.select_from("books").field("title").order_desc("price").limit(3).sql()
    'SELECT title FROM books ORDER BY price DESC LIMIT 3;'
"""

import copy
from typing import Any, Iterable, List, Optional, Sequence, Union

from sqlite_builder.utils.logging import get_logger

from .core.escape import literal
from .core.types import (
    Connector,
    Direction,
    JoinClause,
    JoinKind,
    Operand,
    OrderTerm,
    StatementKind,
    StatementState,
    TableRef,
    WhereFragment,
)
from .dialects.sqlite import SQLiteDialect
from .exceptions import ConfigError

logger = get_logger(__name__)

# Accepted wherever a table, field or value may be a nested statement
Source = Union[str, "SqlBuilder"]

_SELECT_ONLY = (StatementKind.SELECT,)
_FILTERABLE = (StatementKind.SELECT, StatementKind.UPDATE, StatementKind.DELETE)
_WITH_FIELDS = (StatementKind.SELECT, StatementKind.INSERT)


class SqlBuilder:
    """
    Mutable accumulator for one SQL statement.

    The statement kind is fixed at construction. Configuration methods
    return the builder itself for chaining; list-like clauses append,
    flags and limits overwrite.

    Args:
        kind: Statement kind
        table: Target table name, or a builder rendered as a subquery
        alias: Optional table alias, rendered as ``<table> AS <alias>``

    Raises:
        ConfigError: If ``table`` or ``alias`` is empty
    """

    def __init__(
        self,
        kind: Union[StatementKind, str],
        table: Source,
        alias: Optional[str] = None,
    ):
        try:
            kind = StatementKind(kind.upper() if isinstance(kind, str) else kind)
        except ValueError as exc:
            raise ConfigError(f"Unknown statement kind: {kind!r}") from exc
        self._state = StatementState(kind=kind, table=_table_ref(table, alias, "table"))
        self._dialect = SQLiteDialect()

    @classmethod
    def select_from(cls, table: Source, alias: Optional[str] = None) -> "SqlBuilder":
        """Create a SELECT builder."""
        return cls(StatementKind.SELECT, table, alias)

    @classmethod
    def insert_into(cls, table: str) -> "SqlBuilder":
        """Create an INSERT builder."""
        return cls(StatementKind.INSERT, table)

    @classmethod
    def update_table(cls, table: str) -> "SqlBuilder":
        """Create an UPDATE builder."""
        return cls(StatementKind.UPDATE, table)

    @classmethod
    def delete_from(cls, table: str) -> "SqlBuilder":
        """Create a DELETE builder."""
        return cls(StatementKind.DELETE, table)

    @property
    def kind(self) -> StatementKind:
        return self._state.kind

    @property
    def state(self) -> StatementState:
        """Deep copy of the accumulated state."""
        return copy.deepcopy(self._state)

    def clone(self) -> "SqlBuilder":
        """Return an independent builder with a copy of this builder's state."""
        return copy.deepcopy(self)

    # -- projection / columns ---------------------------------------------

    def distinct(self) -> "SqlBuilder":
        self._require(_SELECT_ONLY, "distinct")
        self._state.distinct = True
        return self

    def field(self, name: Source) -> "SqlBuilder":
        """Append one projection expression (SELECT) or column (INSERT)."""
        self._require(_WITH_FIELDS, "field")
        self._state.fields.append(_operand(name, "field"))
        return self

    def fields(self, names: Iterable[Source]) -> "SqlBuilder":
        """Append several projection expressions or columns, in order."""
        self._require(_WITH_FIELDS, "fields")
        self._state.fields.extend(_operands(names, "fields"))
        return self

    def set_field(self, name: Source) -> "SqlBuilder":
        """Replace the field list with a single entry."""
        self._require(_WITH_FIELDS, "set_field")
        self._state.fields = [_operand(name, "set_field")]
        return self

    def set_fields(self, names: Iterable[Source]) -> "SqlBuilder":
        """Replace the field list."""
        self._require(_WITH_FIELDS, "set_fields")
        self._state.fields = _operands(names, "set_fields")
        return self

    # -- INSERT / UPDATE payload --------------------------------------------

    def set(self, column: str, expr: Any) -> "SqlBuilder":
        """
        Add ``column = expr`` to an UPDATE; the last write for a column wins.

        ``expr`` is an SQL expression embedded verbatim (``"price + 10"``).
        Pass a builder to assign a scalar subquery, or use ``literal`` /
        ``quote`` to embed a value.
        """
        self._require((StatementKind.UPDATE,), "set")
        column = _name(column, "set")
        if isinstance(expr, SqlBuilder):
            value: Operand = expr.state
        elif isinstance(expr, str):
            value = _name(expr, "set")
        else:
            value = literal(expr)
        self._state.set_clauses[column] = value
        return self

    def values(self, row: Sequence[Any]) -> "SqlBuilder":
        """
        Append one row of values to an INSERT.

        Each item is converted with ``literal``: strings become quoted
        literals, ``Raw`` items are embedded as-is, builders become
        subqueries. Row length is checked against the fields at render time.
        """
        self._require((StatementKind.INSERT,), "values")
        if self._state.insert_query is not None:
            raise ConfigError("INSERT already takes its rows from a query", "values")
        if isinstance(row, (str, bytes)):
            raise ConfigError("A row must be a sequence of values", "values")
        rendered = [
            item.state if isinstance(item, SqlBuilder) else literal(item)
            for item in row
        ]
        self._state.rows.append(rendered)
        return self

    def select(self, query: Source) -> "SqlBuilder":
        """Use a query instead of VALUES rows: ``INSERT INTO t (...) SELECT ...``."""
        self._require((StatementKind.INSERT,), "select")
        if self._state.rows:
            raise ConfigError("INSERT already has VALUES rows", "select")
        self._state.insert_query = _operand(query, "select")
        return self

    # -- joins / filters ------------------------------------------------------

    def join(
        self,
        kind: Union[JoinKind, str],
        table: Source,
        on: Optional[str] = None,
        alias: Optional[str] = None,
    ) -> "SqlBuilder":
        """
        Append a join.

        Args:
            kind: INNER, LEFT, LEFT OUTER, RIGHT or CROSS
            table: Joined table, or a builder rendered as a subquery
            on: Opaque join predicate, rendered after ``ON``
            alias: Optional alias for the joined table
        """
        self._require(_SELECT_ONLY, "join")
        join_kind = _enum(JoinKind, kind, "join")
        target = _table_ref(table, alias, "join")
        if on is not None:
            on = _name(on, "join")
        self._state.joins.append(JoinClause(kind=join_kind, target=target, on=on))
        return self

    def and_where(self, predicate: str) -> "SqlBuilder":
        return self._where(predicate, Connector.AND, "and_where")

    def or_where(self, predicate: str) -> "SqlBuilder":
        return self._where(predicate, Connector.OR, "or_where")

    def and_where_eq(self, field: str, value: Any) -> "SqlBuilder":
        """Append ``field = <value>`` with AND; ``value`` goes through ``literal``."""
        return self._where_compare(field, "=", value, Connector.AND, "and_where_eq")

    def and_where_ne(self, field: str, value: Any) -> "SqlBuilder":
        """Append ``field <> <value>`` with AND; ``value`` goes through ``literal``."""
        return self._where_compare(field, "<>", value, Connector.AND, "and_where_ne")

    def or_where_eq(self, field: str, value: Any) -> "SqlBuilder":
        return self._where_compare(field, "=", value, Connector.OR, "or_where_eq")

    def or_where_ne(self, field: str, value: Any) -> "SqlBuilder":
        return self._where_compare(field, "<>", value, Connector.OR, "or_where_ne")

    # -- grouping / ordering / paging --------------------------------------

    def group_by(self, expr: Source) -> "SqlBuilder":
        self._require(_SELECT_ONLY, "group_by")
        self._state.group_by.append(_operand(expr, "group_by"))
        return self

    def having(self, predicate: str) -> "SqlBuilder":
        """Append a HAVING fragment; multiple fragments are joined with AND."""
        self._require(_SELECT_ONLY, "having")
        self._state.having.append(_name(predicate, "having"))
        return self

    def order_by(
        self, expr: Source, direction: Union[Direction, str] = Direction.ASC
    ) -> "SqlBuilder":
        self._require(_SELECT_ONLY, "order_by")
        order = _enum(Direction, direction, "order_by")
        self._state.order_by.append(OrderTerm(expr=_operand(expr, "order_by"), direction=order))
        return self

    def order_asc(self, expr: Source) -> "SqlBuilder":
        return self.order_by(expr, Direction.ASC)

    def order_desc(self, expr: Source) -> "SqlBuilder":
        return self.order_by(expr, Direction.DESC)

    def limit(self, n: int) -> "SqlBuilder":
        self._require(_SELECT_ONLY, "limit")
        self._state.limit = _non_negative(n, "limit")
        return self

    def offset(self, n: int) -> "SqlBuilder":
        """Skip ``n`` rows. Without ``limit`` this renders ``LIMIT -1 OFFSET n``."""
        self._require(_SELECT_ONLY, "offset")
        self._state.offset = _non_negative(n, "offset")
        return self

    # -- rendering ---------------------------------------------------------------

    def sql(self) -> str:
        """
        Render the statement, terminated with a semicolon.

        Returns:
            SQL text

        Raises:
            MissingFieldsError: If a required clause is empty
            FieldValueMismatchError: If an INSERT row does not match the fields
        """
        rendered = self._dialect.render(self._state)
        logger.debug("sql.rendered", kind=self._state.kind.value, length=len(rendered))
        return rendered

    def query(self) -> str:
        """Render the statement without the trailing semicolon."""
        return self._dialect.render_query(self._state)

    def subquery(self) -> str:
        """Render the statement as ``(<query>)``."""
        return self._dialect.subquery(self._state)

    def subquery_as(self, name: str) -> str:
        """Render the statement as ``(<query>) AS <name>``."""
        name = _name(name, "subquery_as")
        return f"{self.subquery()} AS {name}"

    def __repr__(self) -> str:
        return f"SqlBuilder(kind={self._state.kind.value!r}, table={self._state.table.source!r})"

    # -- helpers -----------------------------------------------------------------

    def _require(self, kinds: Sequence[StatementKind], clause: str) -> None:
        if self._state.kind not in kinds:
            allowed = ", ".join(kind.value for kind in kinds)
            raise ConfigError(
                f"{self._state.kind.value} statements do not accept this clause "
                f"(allowed for: {allowed})",
                clause,
            )

    def _where(self, predicate: str, connector: Connector, clause: str) -> "SqlBuilder":
        self._require(_FILTERABLE, clause)
        fragment = WhereFragment(predicate=_name(predicate, clause), connector=connector)
        self._state.wheres.append(fragment)
        return self

    def _where_compare(
        self, field: str, operator: str, value: Any, connector: Connector, clause: str
    ) -> "SqlBuilder":
        self._require(_FILTERABLE, clause)
        return self._where(_comparison(field, operator, value, clause), connector, clause)


def _name(value: Any, clause: str) -> str:
    """Validate a non-empty text argument."""
    if not isinstance(value, str) or not value.strip():
        raise ConfigError("Value must be a non-empty string", clause)
    return value


def _operand(value: Source, clause: str) -> Operand:
    """Own a nested builder's state, or validate a text fragment."""
    if isinstance(value, SqlBuilder):
        return value.state
    return _name(value, clause)


def _operands(values: Iterable[Source], clause: str) -> List[Operand]:
    if isinstance(values, (str, SqlBuilder)):
        raise ConfigError("Expected a list of fields, got a single value", clause)
    return [_operand(value, clause) for value in values]


def _table_ref(table: Source, alias: Optional[str], clause: str) -> TableRef:
    if isinstance(table, SqlBuilder):
        source: Operand = table.state
    elif not isinstance(table, str) or not table:
        raise ConfigError("Table must be a non-empty string or a builder", clause)
    else:
        source = table
    if alias is not None:
        alias = _name(alias, clause)
    return TableRef(source=source, alias=alias)


def _comparison(field: str, operator: str, value: Any, clause: str) -> str:
    field = _name(field, clause)
    if isinstance(value, SqlBuilder):
        rendered = value.subquery()
    else:
        rendered = literal(value)
    return f"{field} {operator} {rendered}"


def _enum(enum_cls, value, clause: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().upper())
    except ValueError as exc:
        raise ConfigError(f"Unknown {enum_cls.__name__} value: {value!r}", clause) from exc


def _non_negative(n: Any, clause: str) -> int:
    if isinstance(n, bool) or not isinstance(n, int):
        raise ConfigError(f"Expected an integer, got {type(n).__name__}", clause)
    if n < 0:
        raise ConfigError(f"Value must be non-negative, got {n}", clause)
    return n
