"""
SQL literal escaping utilities.

Provides functions for embedding values as SQL string literals. Escaping
only doubles single quotes, which keeps a value from breaking out of its
literal; it is not a general injection filter. Identifiers are never
quoted here, they are emitted exactly as supplied by the caller.
"""

import math
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from ..exceptions import ConfigError


class Raw(str):
    """
    A SQL expression that must be embedded verbatim.

    Use it for column references, function calls or placeholders passed
    where a literal value is otherwise expected.

    Examples:
        >>> literal(Raw("price * 2"))
        'price * 2'
        >>> literal("price * 2")
        "'price * 2'"
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Raw({str.__repr__(self)})"


def esc(value: str) -> str:
    """
    Escape single quotes by doubling them, without adding surrounding quotes.

    Examples:
        >>> esc("Hello, 'World'")
        "Hello, ''World''"
    """
    return str(value).replace("'", "''")


def quote(value: str) -> str:
    """
    Wrap a value in single quotes, escaping embedded quotes.

    Examples:
        >>> quote("O'Brien")
        "'O''Brien'"
        >>> quote("plain")
        "'plain'"
    """
    return f"'{esc(value)}'"


def escape(value: str) -> str:
    """
    Turn a caller value into SQL text.

    ``Raw`` values are returned unchanged; everything else becomes a quoted
    string literal. Never fails.

    Args:
        value: Literal text, or a ``Raw`` expression

    Returns:
        SQL text safe to embed at a value position
    """
    if isinstance(value, Raw):
        return str(value)
    return quote(value)


def literal(value: Any) -> str:
    """
    Convert a Python value to a SQLite literal.

    Args:
        value: None, bool, int, float, Decimal, str, bytes, date/datetime/time
            or ``Raw``

    Returns:
        SQL literal text

    Raises:
        ConfigError: If the value type has no literal form

    Examples:
        >>> literal(None)
        'NULL'
        >>> literal(True)
        '1'
        >>> literal(2.5)
        '2.5'
        >>> literal(b"\\x01\\xff")
        "X'01ff'"
    """
    if value is None:
        return "NULL"
    if isinstance(value, Raw):
        return str(value)
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ConfigError(f"Non-finite float has no SQL literal: {value!r}")
        return repr(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ConfigError(f"Non-finite decimal has no SQL literal: {value!r}")
        return str(value)
    if isinstance(value, str):
        return quote(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return f"X'{bytes(value).hex()}'"
    if isinstance(value, (datetime, date, time)):
        return quote(value.isoformat())
    raise ConfigError(f"Unsupported literal type: {type(value).__name__}")
