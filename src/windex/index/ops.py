"""High-level orchestration of the indexing engine.

This module implements the IndexCoordinator - the entry point for all index
operations. One index() call is one run:

    TreeWalker (ExcludeFilter + decide + EntryWriter)
        -> StalePruner
        -> commit

all inside a single write transaction, so a fatal failure leaves the store
exactly as it was before the run. search() reads through its own session.
"""

from __future__ import annotations

import os
import time
from typing import TYPE_CHECKING

import structlog

from windex.config.constants import SEARCH_MAX_LIMIT
from windex.core.logging import new_run_id
from windex.index._internal.ignore import ExcludeFilter
from windex.index._internal.indexing import StalePruner, TreeWalker, normalize_root
from windex.index._internal.search import EntrySearcher
from windex.index.models import IndexStats

if TYPE_CHECKING:
    from windex.index._internal.db import Database
    from windex.index.models import Entry

logger = structlog.get_logger()


class IndexCoordinator:
    """Runs index passes and searches against one open Database.

    The caller owns the Database: it must already have had ensure_schema()
    called, and close() disposes its engine.
    """

    def __init__(
        self,
        db: Database,
        excludes: ExcludeFilter | None = None,
        *,
        follow_symlinks: bool = True,
    ) -> None:
        self.db = db
        self.excludes = excludes if excludes is not None else ExcludeFilter()
        self.follow_symlinks = follow_symlinks
        self._searcher = EntrySearcher(db)

    def index(self, root: str | os.PathLike[str], *, prune: bool = True) -> IndexStats:
        """Walk root, write new or modified entries, then prune stale rows.

        Args:
            root: Directory to index.
            prune: Run the stale pruner after the walk. Only tests and
                diagnostics turn this off.

        Returns:
            Counters and the transient issues absorbed during the run.

        Raises:
            TraversalError: Root unavailable, or memory exhausted mid-walk.
            StoreError: The run transaction could not be committed.
        """
        root_path = normalize_root(root)
        stats = IndexStats(root=root_path)
        start = time.perf_counter()

        with structlog.contextvars.bound_contextvars(run_id=new_run_id(), root=root_path):
            logger.info(
                "index_start",
                excludes=len(self.excludes),
                extra_excludes=list(self.excludes.user_additions),
                follow_symlinks=self.follow_symlinks,
            )
            try:
                with self.db.writer() as writer:
                    TreeWalker(
                        writer, self.excludes, stats, follow_symlinks=self.follow_symlinks
                    ).walk(root_path)
                    if prune:
                        StalePruner(writer, stats, follow_symlinks=self.follow_symlinks).prune(root_path)
            finally:
                stats.duration_ms = (time.perf_counter() - start) * 1000

            logger.info(
                "index_complete",
                inserted=stats.inserted,
                updated=stats.updated,
                unchanged=stats.unchanged,
                excluded=stats.excluded,
                pruned=stats.pruned,
                dirs_scanned=stats.dirs_scanned,
                issues=len(stats.issues),
                duration_ms=round(stats.duration_ms, 1),
            )
        return stats

    def search(self, pattern: str, limit: int = SEARCH_MAX_LIMIT) -> list[Entry]:
        """Entries whose name or path contains pattern, newest first."""
        results = self._searcher.search(pattern, limit)
        logger.debug("search_complete", pattern=pattern, results=len(results))
        return results

    def count_entries(self) -> int:
        return self.db.count()

    def close(self) -> None:
        self.db.dispose()
