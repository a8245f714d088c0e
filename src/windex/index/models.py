"""SQLModel definitions and run result types for the metadata index.

Single source of truth for the entry table. Files and directories share one
table keyed by their absolute path and distinguished by ``kind``.
"""

import os
import stat
from dataclasses import dataclass, field
from enum import Enum

from sqlalchemy import Index
from sqlmodel import Field, SQLModel

from windex.core.errors import ErrorCode

# ============================================================================
# ENUMS
# ============================================================================


class EntryKind(str, Enum):
    """Filesystem object kind."""

    FILE = "file"
    DIR = "dir"

    @classmethod
    def from_mode(cls, mode: int) -> "EntryKind":
        return cls.DIR if stat.S_ISDIR(mode) else cls.FILE


class ChangeAction(str, Enum):
    """Write decision for one observed entry."""

    INSERT = "insert"
    UPDATE = "update"
    SKIP = "skip"


# ============================================================================
# TABLES
# ============================================================================


class Entry(SQLModel, table=True):
    """One indexed filesystem object and its metadata snapshot."""

    __tablename__ = "files"
    __table_args__ = (
        Index("idx_name", "name"),
        Index("idx_path", "full_path"),
    )

    id: int | None = Field(default=None, primary_key=True)
    full_path: str = Field(unique=True)
    name: str
    kind: str  # EntryKind value
    size: int = 0
    mtime: int


# ============================================================================
# DATACLASSES (non-table)
# ============================================================================


def base_name(full_path: str) -> str:
    """Substring after the last separator; a bare root keeps its full path."""
    return os.path.basename(full_path.rstrip("/\\")) or full_path


@dataclass(frozen=True, slots=True)
class ObservedEntry:
    """Metadata for one path as just seen on disk."""

    full_path: str
    name: str
    kind: EntryKind
    size: int
    mtime: int

    @classmethod
    def from_stat(cls, full_path: str, st: os.stat_result) -> "ObservedEntry":
        return cls(
            full_path=full_path,
            name=base_name(full_path),
            kind=EntryKind.from_mode(st.st_mode),
            size=int(st.st_size),
            mtime=int(st.st_mtime),
        )

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIR

    def to_row(self) -> dict[str, str | int]:
        """Column values for the files table."""
        return {
            "full_path": self.full_path,
            "name": self.name,
            "kind": self.kind.value,
            "size": self.size,
            "mtime": self.mtime,
        }


@dataclass(frozen=True, slots=True)
class IndexIssue:
    """A transient failure absorbed during an indexing run."""

    code: ErrorCode
    path: str
    reason: str


@dataclass
class IndexStats:
    """Outcome of one indexing run (traversal + pruning)."""

    root: str = ""
    inserted: int = 0
    updated: int = 0
    unchanged: int = 0
    excluded: int = 0
    pruned: int = 0
    dirs_scanned: int = 0
    duration_ms: float = 0.0
    issues: list[IndexIssue] = field(default_factory=list)

    @property
    def written(self) -> int:
        """New or modified entries written this run."""
        return self.inserted + self.updated

    def record_issue(self, code: ErrorCode, path: str, reason: str) -> None:
        self.issues.append(IndexIssue(code=code, path=path, reason=reason))
