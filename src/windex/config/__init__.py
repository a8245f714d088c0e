"""Config module exports."""

from windex.config.loader import get_db_path, get_root, load_config
from windex.config.models import (
    DatabaseConfig,
    IndexConfig,
    LimitsConfig,
    LoggingConfig,
    LogOutputConfig,
    WindexConfig,
)

__all__ = [
    "load_config",
    "get_db_path",
    "get_root",
    "WindexConfig",
    "DatabaseConfig",
    "IndexConfig",
    "LimitsConfig",
    "LoggingConfig",
    "LogOutputConfig",
]
