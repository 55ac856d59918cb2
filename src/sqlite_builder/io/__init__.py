"""Execution of rendered statements through SQLAlchemy."""

from .executor import Executor, SqlExecutor, create_engine_from_settings

__all__ = [
    "Executor",
    "SqlExecutor",
    "create_engine_from_settings",
]
