"""
Exception hierarchy for statement building and execution.

Configuration errors are raised by the builder call that received the bad
input; render errors are raised by ``sql()`` and friends. No error leaves
the builder in a partially modified state.
"""

from typing import Optional


class SqlBuilderError(Exception):
    """Base exception for all sqlite_builder errors."""

    pass


class ConfigError(SqlBuilderError):
    """
    Raised when a configuration call receives invalid input.

    Args:
        message: Error description
        clause: Name of the clause being configured (optional)
    """

    def __init__(self, message: str, clause: Optional[str] = None):
        self.clause = clause

        if clause:
            full_message = f"{message} (clause='{clause}')"
        else:
            full_message = message

        super().__init__(full_message)


class RenderError(SqlBuilderError):
    """Base exception for failures while rendering accumulated state."""

    pass


class MissingFieldsError(RenderError):
    """Raised when a clause required by the statement kind is empty."""

    pass


class FieldValueMismatchError(RenderError):
    """
    Raised when an INSERT row does not line up with the field list.

    Args:
        row_index: Position of the offending row (0-based)
        expected: Number of declared fields
        actual: Number of values in the row
    """

    def __init__(self, row_index: int, expected: int, actual: int):
        self.row_index = row_index
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Row {row_index} has {actual} values but {expected} fields are declared"
        )


class ExecutorError(SqlBuilderError):
    """Raised when executing a rendered statement fails."""

    pass


class NoValueError(ExecutorError):
    """Raised when a scalar was requested but the query returned no rows."""

    pass
