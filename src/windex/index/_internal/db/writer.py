"""Single-row entry statements bound to one run transaction.

Bypasses the ORM: the traversal issues one lookup per visited path and at
most one write, so Core statements on a held connection keep a full re-index
of an unchanged tree down to a stream of indexed point SELECTs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from windex.index.models import ChangeAction, Entry, ObservedEntry

if TYPE_CHECKING:
    from sqlalchemy import Engine

# Sorts after every other character under SQLite's BINARY collation, so
# [prefix, prefix + _PREFIX_SENTINEL) is exactly "starts with prefix".
_PREFIX_SENTINEL = "\U0010ffff"

_MUTABLE_COLUMNS = ("name", "kind", "size", "mtime")


class EntryWriter:
    """Point lookups and single-row writes inside one transaction."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self.table = Entry.__table__  # type: ignore[attr-defined]
        self.conn = engine.connect()
        self.transaction = self.conn.begin()

    def get_mtime(self, full_path: str) -> int | None:
        """Stored mtime for a path, or None if the path has no row."""
        stmt = select(self.table.c.mtime).where(self.table.c.full_path == full_path)
        value = self.conn.execute(stmt).scalar_one_or_none()
        return int(value) if value is not None else None

    def upsert(self, entry: ObservedEntry) -> None:
        """Insert, or update all mutable columns on a full_path conflict."""
        stmt = sqlite_insert(self.table).values(**entry.to_row())
        stmt = stmt.on_conflict_do_update(
            index_elements=["full_path"],
            set_={col: stmt.excluded[col] for col in _MUTABLE_COLUMNS},
        )
        self.conn.execute(stmt)

    def apply(self, action: ChangeAction, entry: ObservedEntry) -> bool:
        """Execute a change decision. Returns True if a row was written.

        INSERT and UPDATE both go through upsert: the decision only says
        whether to write, and full_path stays untouched either way.
        """
        if action is ChangeAction.SKIP:
            return False
        self.upsert(entry)
        return True

    def delete_by_path(self, full_path: str) -> int:
        stmt = delete(self.table).where(self.table.c.full_path == full_path)
        return int(self.conn.execute(stmt).rowcount)

    def entries_under(self, root: str) -> list[Entry]:
        """All entries whose full_path starts with root (case-sensitive)."""
        stmt = select(self.table).where(
            self.table.c.full_path >= root,
            self.table.c.full_path < root + _PREFIX_SENTINEL,
        )
        return [Entry(**dict(row._mapping)) for row in self.conn.execute(stmt)]

    def commit(self) -> None:
        """Commit the current transaction."""
        self.transaction.commit()

    def rollback(self) -> None:
        """Rollback the current transaction."""
        if self.transaction.is_active:
            self.transaction.rollback()

    def close(self) -> None:
        """Close the connection."""
        self.conn.close()
