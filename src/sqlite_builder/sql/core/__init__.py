"""Core SQL utilities package."""

from .escape import Raw, esc, escape, literal, quote
from .types import (
    Connector,
    Direction,
    JoinClause,
    JoinKind,
    OrderTerm,
    StatementKind,
    StatementState,
    TableRef,
    WhereFragment,
)

__all__ = [
    "Raw",
    "esc",
    "escape",
    "quote",
    "literal",
    "StatementKind",
    "JoinKind",
    "Connector",
    "Direction",
    "TableRef",
    "JoinClause",
    "WhereFragment",
    "OrderTerm",
    "StatementState",
]
