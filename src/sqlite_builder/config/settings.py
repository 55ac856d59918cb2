"""
Configuration management for sqlite-builder.

Environment-based configuration using Pydantic BaseSettings. Settings only
affect logging and the executor's engine; rendered SQL never depends on
configuration.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENV_FILE = Path.cwd() / ".env"
ENV_FILE_OVERRIDE = os.getenv("SQLB_ENV_FILE")
if ENV_FILE_OVERRIDE:
    SETTINGS_ENV_FILE = Path(ENV_FILE_OVERRIDE).expanduser()
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Uppercase fields are read from unprefixed variables (``LOG_LEVEL``,
    ``DATABASE_URL``, ``ENVIRONMENT``); the rest use the ``SQLB_`` prefix,
    e.g. ``SQLB_LOG_TO_FILE=1``.
    """

    ENVIRONMENT: Literal["dev", "staging", "prod"] = Field(
        default="dev",
        validation_alias="ENVIRONMENT",
        description="Deployment environment",
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (uppercase)",
    )
    DATABASE_URL: str = Field(
        default="sqlite://",
        validation_alias="DATABASE_URL",
        description="SQLAlchemy URL used by the executor",
    )

    log_to_file: bool = Field(default=False, description="Also write logs to a file")
    log_file_dir: str = Field(default="logs", description="Directory for log files")
    sql_echo: bool = Field(
        default=False, description="Pass echo=True to SQLAlchemy create_engine"
    )

    @model_validator(mode="after")
    def validate_sqlite_database_url(self) -> "Settings":
        """Validate that the executor targets a SQLite database.

        Rendered statements follow SQLite syntax, so other backends are
        rejected instead of failing later at execution time.

        Raises:
            ValueError: If DATABASE_URL does not use a sqlite scheme
        """
        scheme = self.DATABASE_URL.split(":", 1)[0].lower()
        if not scheme.startswith("sqlite"):
            raise ValueError(
                "DATABASE_URL must use a sqlite scheme, "
                f"got: {self.DATABASE_URL[:20]}..."
            )
        return self

    model_config = SettingsConfigDict(
        env_prefix="SQLB_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance with loaded configuration
    """
    return Settings()
