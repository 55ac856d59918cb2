"""
sqlite-builder - Chainable SQL statement builder.

Assembles SELECT, INSERT, UPDATE and DELETE statements as plain SQL text
for SQLite-compatible dialects. Nothing is executed here; callers run the
rendered string themselves or hand it to ``sqlite_builder.io.SqlExecutor``.

Example:
    >>> from sqlite_builder import SqlBuilder
    >>> SqlBuilder.select_from("company").field("id").field("name").and_where(
    ...     "salary > 25000"
    ... ).sql()
    'SELECT id, name FROM company WHERE salary > 25000;'
"""

from sqlite_builder.sql import (
    ConfigError,
    FieldValueMismatchError,
    MissingFieldsError,
    Raw,
    RenderError,
    SqlBuilder,
    SqlBuilderError,
    StatementKind,
    esc,
    escape,
    literal,
    quote,
)

__version__ = "0.1.0"

__all__ = [
    "SqlBuilder",
    "StatementKind",
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
]
