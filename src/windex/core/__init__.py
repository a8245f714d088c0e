"""Core module exports."""

from windex.core.errors import (
    ConfigError,
    ErrorCategory,
    ErrorCode,
    StoreError,
    TraversalError,
    WindexError,
)
from windex.core.logging import configure_logging, get_logger, new_run_id
from windex.core.progress import spinner, status

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCategory",
    "ErrorCode",
    "StoreError",
    "TraversalError",
    "WindexError",
    # Logging
    "configure_logging",
    "get_logger",
    "new_run_id",
    # Progress
    "spinner",
    "status",
]
