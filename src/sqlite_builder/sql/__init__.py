"""
SQL module for statement generation.

This module provides the chainable statement builder, the literal escaping
utilities it relies on, and the SQLite rendering dialect.
"""

from .builder import SqlBuilder
from .core.escape import Raw, esc, escape, literal, quote
from .core.types import Connector, Direction, JoinKind, StatementKind, StatementState
from .dialects.sqlite import SQLiteDialect
from .exceptions import (
    ConfigError,
    ExecutorError,
    FieldValueMismatchError,
    MissingFieldsError,
    NoValueError,
    RenderError,
    SqlBuilderError,
)

__all__ = [
    "SqlBuilder",
    "SQLiteDialect",
    "StatementKind",
    "StatementState",
    "JoinKind",
    "Connector",
    "Direction",
    "Raw",
    "esc",
    "escape",
    "quote",
    "literal",
    "SqlBuilderError",
    "ConfigError",
    "RenderError",
    "MissingFieldsError",
    "FieldValueMismatchError",
    "ExecutorError",
    "NoValueError",
]
