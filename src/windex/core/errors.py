"""windex error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Store
- 4xxx: Traversal

Every code is either transient (absorbed by the indexing run, logged and
recorded as an issue) or fatal (propagated to the caller after rollback).
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2003

    # Store (3xxx)
    STORE_OPEN_FAILED = 3001
    STORE_SCHEMA_FAILED = 3002
    STORE_COMMIT_FAILED = 3003
    STORE_WRITE_FAILED = 3010

    # Traversal (4xxx)
    TRAVERSAL_RESOURCE_EXHAUSTED = 4001
    TRAVERSAL_ROOT_UNAVAILABLE = 4002
    DIR_OPEN_FAILED = 4010
    ENTRY_STAT_FAILED = 4011
    PRUNE_DELETE_FAILED = 4012


class ErrorCategory(str, Enum):
    """Whether an error aborts the current run."""

    TRANSIENT = "transient"
    FATAL = "fatal"


TRANSIENT_CODES: frozenset[ErrorCode] = frozenset(
    {
        ErrorCode.STORE_WRITE_FAILED,
        ErrorCode.DIR_OPEN_FAILED,
        ErrorCode.ENTRY_STAT_FAILED,
        ErrorCode.PRUNE_DELETE_FAILED,
    }
)


def category_of(code: ErrorCode) -> ErrorCategory:
    return ErrorCategory.TRANSIENT if code in TRANSIENT_CODES else ErrorCategory.FATAL


@dataclass(frozen=True, slots=True)
class WindexError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'STORE_OPEN_FAILED')."""
        return self.code.name

    @property
    def category(self) -> ErrorCategory:
        return category_of(self.code)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "category": self.category.value,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(WindexError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class StoreError(WindexError):
    """Persistent store could not be opened, initialized or committed."""

    @classmethod
    def open_failed(cls, path: str, reason: str) -> "StoreError":
        return cls(
            code=ErrorCode.STORE_OPEN_FAILED,
            message=f"Cannot open database at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def schema_failed(cls, path: str, reason: str) -> "StoreError":
        return cls(
            code=ErrorCode.STORE_SCHEMA_FAILED,
            message=f"Cannot create schema in {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def commit_failed(cls, reason: str) -> "StoreError":
        return cls(
            code=ErrorCode.STORE_COMMIT_FAILED,
            message=f"Index transaction could not be committed: {reason}",
            details={"reason": reason},
        )


class TraversalError(WindexError):
    """Indexing run aborted during the tree walk."""

    @classmethod
    def resource_exhausted(cls, root: str, pending: int) -> "TraversalError":
        return cls(
            code=ErrorCode.TRAVERSAL_RESOURCE_EXHAUSTED,
            message=f"Out of memory while walking {root}",
            details={"root": root, "pending_dirs": pending},
        )

    @classmethod
    def root_unavailable(cls, root: str, reason: str) -> "TraversalError":
        return cls(
            code=ErrorCode.TRAVERSAL_ROOT_UNAVAILABLE,
            message=f"Index root is not an accessible directory: {root} ({reason})",
            details={"root": root, "reason": reason},
        )

