"""Change detection against the stored snapshot.

mtime is the only signal: a re-run over an unchanged tree resolves almost
every entry to SKIP and writes nothing.
"""

from __future__ import annotations

from windex.index.models import ChangeAction, ObservedEntry


def decide(observed: ObservedEntry, stored_mtime: int | None) -> ChangeAction:
    """Choose the write for an observed entry.

    Args:
        observed: Metadata just read from disk.
        stored_mtime: mtime from the store, or None if the path has no row.

    Returns:
        INSERT for an unknown path, SKIP when the mtime is unchanged,
        UPDATE otherwise (all mutable columns are rewritten together).
    """
    if stored_mtime is None:
        return ChangeAction.INSERT
    if stored_mtime == observed.mtime:
        return ChangeAction.SKIP
    return ChangeAction.UPDATE
