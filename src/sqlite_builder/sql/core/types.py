"""
Statement state model.

``StatementState`` is the plain data the builder accumulates and the
dialect renders. Nested subqueries are stored as owned ``StatementState``
values, so a statement is a tree without shared references.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union


class StatementKind(str, Enum):
    """Kind of SQL statement, fixed when the builder is created."""

    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class JoinKind(str, Enum):
    """Supported join operators."""

    INNER = "INNER"
    LEFT = "LEFT"
    LEFT_OUTER = "LEFT OUTER"
    RIGHT = "RIGHT"
    CROSS = "CROSS"


class Connector(str, Enum):
    """Boolean connector recorded with each WHERE fragment."""

    AND = "AND"
    OR = "OR"


class Direction(str, Enum):
    """Sort direction for ORDER BY entries."""

    ASC = "ASC"
    DESC = "DESC"


# A rendered SQL fragment, or a nested statement rendered as a subquery
Operand = Union[str, "StatementState"]


@dataclass
class TableRef:
    """Table position: a name or nested statement, with optional alias."""

    source: Operand
    alias: Optional[str] = None


@dataclass
class JoinClause:
    """One JOIN entry; ``on`` is an opaque predicate."""

    kind: JoinKind
    target: TableRef
    on: Optional[str] = None


@dataclass
class WhereFragment:
    """Opaque predicate plus the connector that precedes it."""

    predicate: str
    connector: Connector = Connector.AND


@dataclass
class OrderTerm:
    """ORDER BY entry."""

    expr: Operand
    direction: Direction = Direction.ASC


@dataclass
class StatementState:
    """Everything a statement needs to be rendered."""

    kind: StatementKind
    table: TableRef
    distinct: bool = False
    fields: List[Operand] = field(default_factory=list)
    rows: List[List[Operand]] = field(default_factory=list)
    insert_query: Optional[Operand] = None
    set_clauses: Dict[str, Operand] = field(default_factory=dict)
    joins: List[JoinClause] = field(default_factory=list)
    wheres: List[WhereFragment] = field(default_factory=list)
    group_by: List[Operand] = field(default_factory=list)
    having: List[str] = field(default_factory=list)
    order_by: List[OrderTerm] = field(default_factory=list)
    limit: Optional[int] = None
    offset: Optional[int] = None
