"""Configuration management for sqlite-builder.

Usage:
    >>> from sqlite_builder.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.LOG_LEVEL)
"""

from sqlite_builder.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
