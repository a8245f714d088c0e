"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (WINDEX__SECTION__KEY)
3. YAML (~/.windex/config.yaml)
4. Built-in defaults (this file)

Environment Variable Format:
    WINDEX__<SECTION>__<KEY>=<VALUE>

Examples:
    WINDEX__LOGGING__LEVEL=DEBUG
    WINDEX__INDEX__ROOT=/data
    WINDEX__INDEX__FOLLOW_SYMLINKS=false
    WINDEX__LIMITS__SEARCH_DEFAULT=20
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from windex.config.constants import SEARCH_MAX_LIMIT

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        WINDEX__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every skipped entry.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class IndexConfig(BaseModel):
    """Indexing configuration.

    Env vars:
        WINDEX__INDEX__ROOT: Directory to index when none is given on the command line
        WINDEX__INDEX__DB_PATH: Override database file location
        WINDEX__INDEX__FOLLOW_SYMLINKS: Stat through symlinks (default: true)
    """

    root: str | None = Field(
        default=None,
        description="Index root. Default: /mnt/ when present, else C:\\.",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Extra exclusion substrings, appended after the built-in set.",
    )
    follow_symlinks: bool = Field(
        default=True,
        description="Stat through symlinks. Cycles are expanded once per run.",
    )
    db_path: str | None = Field(
        default=None,
        description="Override database location. Default: ~/.windex/.winindex.db.",
    )

    @field_validator("exclude")
    @classmethod
    def validate_exclude(cls, v: list[str]) -> list[str]:
        if any(not item for item in v):
            raise ValueError("Exclusion substrings must be non-empty")
        return v


class LimitsConfig(BaseModel):
    """Query limit defaults.

    See constants.py for the hard maximum that cannot be exceeded.

    Env vars:
        WINDEX__LIMITS__SEARCH_DEFAULT: Default number of search results
    """

    search_default: int = Field(
        default=SEARCH_MAX_LIMIT,
        description="Default search results, newest first.",
    )

    @field_validator("search_default")
    @classmethod
    def validate_search_default(cls, v: int) -> int:
        if not (1 <= v <= SEARCH_MAX_LIMIT):
            raise ValueError(f"search_default must be 1-{SEARCH_MAX_LIMIT}, got {v}")
        return v


class DatabaseConfig(BaseModel):
    """Database connection configuration.

    Env vars:
        WINDEX__DATABASE__BUSY_TIMEOUT_MS: SQLite busy timeout
        WINDEX__DATABASE__MAX_RETRIES: Max retry attempts for a locked DB
    """

    busy_timeout_ms: int = Field(
        default=30000,
        description="SQLite busy timeout (ms). How long to wait for locks.",
    )
    max_retries: int = Field(
        default=3,
        description="Max retry attempts when opening a locked database.",
    )
    retry_base_delay_sec: float = Field(
        default=0.1,
        description="Base delay between retries (exponential backoff).",
    )


class WindexConfig(BaseModel):
    """Root configuration for windex."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    index: IndexConfig = Field(default_factory=IndexConfig)
    limits: LimitsConfig = Field(default_factory=LimitsConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
