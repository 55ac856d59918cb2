"""Pytest configuration shared by all suites."""

from __future__ import annotations

import logging
import os

# Rendered SQL targets SQLite; keep settings hermetic regardless of the host env.
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
import sqlalchemy as sa
import structlog

from sqlite_builder.config import Settings, get_settings
from sqlite_builder.utils.logging import (
    FILE_HANDLER_NAME,
    PACKAGE_LOGGER,
    STREAM_HANDLER_NAME,
    configure_logging,
)


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Clear cached settings around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def engine():
    """In-memory SQLite engine."""
    engine = sa.create_engine("sqlite://")
    yield engine
    engine.dispose()


@pytest.fixture
def conn(engine):
    """Connection with a ``books`` table inside a transaction."""
    with engine.begin() as connection:
        connection.exec_driver_sql(
            "CREATE TABLE books (id INTEGER PRIMARY KEY, title TEXT, price INTEGER)"
        )
        yield connection


@pytest.fixture
def json_logging():
    """Opt into JSON logging at DEBUG and undo it afterwards."""
    configure_logging(Settings(LOG_LEVEL="DEBUG"))
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() in (STREAM_HANDLER_NAME, FILE_HANDLER_NAME):
            root.removeHandler(handler)
            handler.close()
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.NOTSET)
