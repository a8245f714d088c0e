"""Result formatting for terminal and JSON output.

Design principles:
- One block per entry, blank line between blocks
- Modification times in local time
- Grammatically correct counts (1 entry vs 2 entries)
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

from windex.config.constants import MTIME_FORMAT

if TYPE_CHECKING:
    from windex.index.models import Entry, IndexStats


def format_mtime(mtime: int) -> str:
    """Render epoch seconds as local time, e.g. 2025-03-01 14:02:11."""
    return time.strftime(MTIME_FORMAT, time.localtime(mtime))


def format_entry(entry: Entry) -> str:
    """Multi-line block for one search result.

    Example:
        Path: /mnt/c/Users/mm/report.pdf
        Type: file
        Size: 48213 bytes
        Modified: 2025-03-01 14:02:11
    """
    return (
        f"Path: {entry.full_path}\n"
        f"Type: {entry.kind}\n"
        f"Size: {entry.size} bytes\n"
        f"Modified: {format_mtime(entry.mtime)}"
    )


def entry_to_dict(entry: Entry) -> dict[str, Any]:
    return {
        "path": entry.full_path,
        "name": entry.name,
        "type": entry.kind,
        "size": entry.size,
        "mtime": entry.mtime,
        "modified": format_mtime(entry.mtime),
    }


def format_index_summary(stats: IndexStats) -> str:
    """One-line breakdown, e.g. "3 new, 1 modified, 2 pruned, 0 unchanged"."""
    parts = [
        f"{stats.inserted} new",
        f"{stats.updated} modified",
        f"{stats.pruned} pruned",
        f"{stats.unchanged} unchanged",
    ]
    if stats.excluded:
        parts.append(f"{stats.excluded} excluded")
    return ", ".join(parts)
