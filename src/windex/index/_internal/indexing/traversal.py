"""Iterative directory tree walk feeding the change detector.

The walk keeps pending directories on an explicit list used as a LIFO
stack instead of recursing, so depth is bounded by memory rather than by the
interpreter's recursion limit. Sibling and expansion order are unspecified,
and the resulting row set does not depend on it.

Failure handling:
- Directory cannot be listed: logged, recorded, subtree skipped
- Child cannot be stat-ed: logged, recorded, that child skipped
- Store write fails: logged, recorded, entry left unindexed this pass
- MemoryError while queueing: pending stack released, TraversalError raised
- Root missing or not a directory: TraversalError raised before any write

Symlinked directories are expanded like any other directory, under the
link's own path. Only a directory that is its own ancestor (same
``(st_dev, st_ino)`` earlier on the chain from the root) is recorded without
being expanded, which cuts symlink cycles and nothing else.
"""

from __future__ import annotations

import os
import stat
from typing import TYPE_CHECKING, NamedTuple

import structlog
from sqlalchemy.exc import SQLAlchemyError

from windex.core.errors import ErrorCode, TraversalError
from windex.index._internal.indexing.change import decide
from windex.index.models import ChangeAction, IndexStats, ObservedEntry

if TYPE_CHECKING:
    from windex.index._internal.db import EntryWriter
    from windex.index._internal.ignore import ExcludeFilter

logger = structlog.get_logger()

DirKey = tuple[int, int]


class PendingDir(NamedTuple):
    """A directory waiting to be listed.

    ``ancestors`` holds the keys of every directory above it on its branch.
    Siblings share one tuple.
    """

    path: str
    key: DirKey
    ancestors: tuple[DirKey, ...]

    def child_ancestors(self) -> tuple[DirKey, ...]:
        return (*self.ancestors, self.key)


def normalize_root(root: str | os.PathLike[str]) -> str:
    """Absolute root path without a trailing separator (except for "/")."""
    return os.path.abspath(os.fspath(root))


def _dir_key(st: os.stat_result) -> DirKey:
    return (st.st_dev, st.st_ino)


class TreeWalker:
    """Walks one root, upserting every non-excluded object it can stat."""

    def __init__(
        self,
        writer: EntryWriter,
        excludes: ExcludeFilter,
        stats: IndexStats,
        *,
        follow_symlinks: bool = True,
    ) -> None:
        self._writer = writer
        self._excludes = excludes
        self._stats = stats
        self._follow_symlinks = follow_symlinks

    def walk(self, root: str) -> None:
        if self._excludes.should_exclude(root):
            self._stats.excluded += 1
            logger.info("root_excluded", root=root, matched=self._excludes.matching(root))
            return

        try:
            st = os.stat(root)
        except OSError as e:
            raise TraversalError.root_unavailable(root, e.strerror or str(e)) from e
        if not stat.S_ISDIR(st.st_mode):
            raise TraversalError.root_unavailable(root, "not a directory")

        self._record(ObservedEntry.from_stat(root, st))

        pending: list[PendingDir] = []
        try:
            self._push(pending, PendingDir(root, _dir_key(st), ()))
            while pending:
                self._expand(pending.pop(), pending)
        except MemoryError as e:
            outstanding = len(pending)
            pending.clear()
            logger.error("traversal_resource_exhausted", root=root, pending_dirs=outstanding)
            raise TraversalError.resource_exhausted(root, outstanding) from e

    def _push(self, pending: list[PendingDir], directory: PendingDir) -> None:
        pending.append(directory)

    def _expand(self, directory: PendingDir, pending: list[PendingDir]) -> None:
        try:
            with os.scandir(directory.path) as it:
                names = [dirent.name for dirent in it]
        except OSError as e:
            self._issue(ErrorCode.DIR_OPEN_FAILED, directory.path, e)
            return

        self._stats.dirs_scanned += 1
        ancestors = directory.child_ancestors()

        for name in names:
            child = os.path.join(directory.path, name)
            if self._excludes.should_exclude(child):
                self._stats.excluded += 1
                logger.debug("entry_excluded", path=child)
                continue

            try:
                st = os.stat(child, follow_symlinks=self._follow_symlinks)
            except OSError as e:
                self._issue(ErrorCode.ENTRY_STAT_FAILED, child, e)
                continue

            observed = ObservedEntry.from_stat(child, st)
            self._record(observed)
            if not observed.is_dir:
                continue

            key = _dir_key(st)
            # st_ino 0 means the filesystem has no stable identity to compare
            if st.st_ino and key in ancestors:
                logger.debug("dir_cycle_skipped", path=child)
                continue
            self._push(pending, PendingDir(child, key, ancestors))

    def _record(self, observed: ObservedEntry) -> None:
        try:
            action = decide(observed, self._writer.get_mtime(observed.full_path))
            self._writer.apply(action, observed)
        except (SQLAlchemyError, UnicodeError) as e:
            self._issue(ErrorCode.STORE_WRITE_FAILED, observed.full_path, e)
            return

        if action is ChangeAction.INSERT:
            self._stats.inserted += 1
        elif action is ChangeAction.UPDATE:
            self._stats.updated += 1
        else:
            self._stats.unchanged += 1

    def _issue(self, code: ErrorCode, path: str, error: Exception) -> None:
        reason = getattr(error, "strerror", None) or str(error)
        logger.warning(code.name.lower(), path=path, error=reason)
        self._stats.record_issue(code, path, reason)
