"""Database layer for the index."""

from windex.index._internal.db.database import Database
from windex.index._internal.db.writer import EntryWriter

__all__ = [
    "Database",
    "EntryWriter",
]
