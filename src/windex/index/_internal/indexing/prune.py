"""Stale entry removal.

Traversal only ever inserts or updates: a deleted object is simply absent
from its parent's listing, so it is never visited. After the walk, every
stored entry under the root is stat-ed again and rows whose path no longer
exists are deleted.

Entries that became excluded since they were indexed are kept for as long as
they exist on disk.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import structlog
from sqlalchemy.exc import SQLAlchemyError

from windex.core.errors import ErrorCode

if TYPE_CHECKING:
    from windex.index._internal.db import EntryWriter
    from windex.index.models import IndexStats

logger = structlog.get_logger()


class StalePruner:
    """Deletes rows under a root whose paths fail to stat."""

    def __init__(
        self,
        writer: EntryWriter,
        stats: IndexStats,
        *,
        follow_symlinks: bool = True,
    ) -> None:
        self._writer = writer
        self._stats = stats
        self._follow_symlinks = follow_symlinks

    def prune(self, root: str) -> int:
        """Remove stale rows under root. Returns the number deleted."""
        deleted = 0
        for entry in self._writer.entries_under(root):
            try:
                os.stat(entry.full_path, follow_symlinks=self._follow_symlinks)
                continue
            except OSError:
                pass

            try:
                count = self._writer.delete_by_path(entry.full_path)
            except SQLAlchemyError as e:
                # Row stays; the next run will try again
                logger.warning("prune_delete_failed", path=entry.full_path, error=str(e))
                self._stats.record_issue(ErrorCode.PRUNE_DELETE_FAILED, entry.full_path, str(e))
                continue

            if count:
                logger.debug("entry_pruned", path=entry.full_path, kind=entry.kind)
            deleted += count

        self._stats.pruned += deleted
        return deleted
