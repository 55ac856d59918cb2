"""Structured logging for sqlite-builder.

Importing the library never touches the host's logging. Package modules get
their loggers from :func:`get_logger`, which wraps the standard library
logger of the same name, so events follow whatever the application has set
up and debug events stay silent under the default WARNING level.

Applications that want JSON output call :func:`configure_logging` once:

    >>> from sqlite_builder.utils.logging import configure_logging
    >>> configure_logging()

It reads ``LOG_LEVEL``, ``SQLB_LOG_TO_FILE`` and ``SQLB_LOG_FILE_DIR`` from
:class:`~sqlite_builder.config.Settings`.
"""

import logging
import re
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, MutableMapping, Optional

import structlog
from structlog.types import EventDict, Processor

from sqlite_builder.config import Settings, get_settings

PACKAGE_LOGGER = "sqlite_builder"
STREAM_HANDLER_NAME = "sqlite_builder.stream"
FILE_HANDLER_NAME = "sqlite_builder.file"

SENSITIVE_KEYS = [
    re.compile(r".*password.*", re.IGNORECASE),
    re.compile(r".*token.*", re.IGNORECASE),
    re.compile(r".*api_key.*", re.IGNORECASE),
    re.compile(r".*secret.*", re.IGNORECASE),
    re.compile(r"^DATABASE_URL$", re.IGNORECASE),
]

REDACTED_VALUE = "[REDACTED]"


def sanitize_for_logging(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``data`` with sensitive values redacted.

    Nested dictionaries are walked too.

        >>> sanitize_for_logging({"password": "secret123", "table": "books"})
        {'password': '[REDACTED]', 'table': 'books'}
    """
    sanitized: Dict[str, Any] = {}
    for key, value in data.items():
        if any(pattern.match(key) for pattern in SENSITIVE_KEYS):
            sanitized[key] = REDACTED_VALUE
        elif isinstance(value, dict):
            sanitized[key] = sanitize_for_logging(value)
        else:
            sanitized[key] = value
    return sanitized


def sanitization_processor(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> MutableMapping[str, Any]:
    return sanitize_for_logging(dict(event_dict))


def get_logger(name: str) -> Any:
    """Return a structlog logger bound to the stdlib logger ``name``.

    No configuration happens here. Processors are resolved lazily, so a
    later :func:`configure_logging` call applies to loggers created earlier.
    """
    return structlog.wrap_logger(
        logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger
    )


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Set up JSON logging for the package.

    Safe to call more than once: a handler is attached to the root logger
    only if the one this function created earlier is not already there.

    Args:
        settings: Settings to read levels and file options from
            (defaults to ``get_settings()``)
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.getLogger(PACKAGE_LOGGER).setLevel(level)

    root = logging.getLogger()
    _ensure_handler(root, STREAM_HANDLER_NAME, logging.StreamHandler, level)
    if settings.log_to_file:
        path = _log_file_path(Path(settings.log_file_dir))
        _ensure_handler(
            root,
            FILE_HANDLER_NAME,
            lambda: TimedRotatingFileHandler(
                filename=str(path),
                when="midnight",
                backupCount=30,
                encoding="utf-8",
            ),
            level,
        )

    structlog.configure(
        processors=_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def _processors() -> List[Processor]:
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        sanitization_processor,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def _ensure_handler(root: logging.Logger, name: str, factory: Any, level: int) -> None:
    for handler in root.handlers:
        if handler.get_name() == name:
            handler.setLevel(level)
            return
    handler = factory()
    handler.set_name(name)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(level)
    root.addHandler(handler)


def _log_file_path(log_dir: Path) -> Path:
    log_dir.mkdir(parents=True, exist_ok=True)
    # one file per day: sqlite-builder-YYYYMMDD.log
    return log_dir / f"sqlite-builder-{datetime.now():%Y%m%d}.log"
