"""Index module - incremental filesystem metadata index.

Public API is in `windex.index.ops`:
- IndexCoordinator: runs index passes and searches

Internal implementations are in `windex.index._internal/`.
"""

from windex.index._internal.db import Database, EntryWriter
from windex.index._internal.ignore import DEFAULT_EXCLUDES, ExcludeFilter
from windex.index.models import (
    ChangeAction,
    Entry,
    EntryKind,
    IndexIssue,
    IndexStats,
    ObservedEntry,
)
from windex.index.ops import IndexCoordinator

__all__ = [
    "ChangeAction",
    "Database",
    "DEFAULT_EXCLUDES",
    "Entry",
    "EntryKind",
    "EntryWriter",
    "ExcludeFilter",
    "IndexCoordinator",
    "IndexIssue",
    "IndexStats",
    "ObservedEntry",
]
