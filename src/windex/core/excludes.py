"""Baseline exclusion substrings.

Any path containing one of these substrings is neither indexed nor descended
into. Matching is literal and case-sensitive: no globbing, no anchoring, so
"Windows" also excludes ".../MyWindowsBackup/...". User additions from config
or the command line are appended after the baseline; nothing here can be
removed for a run.
"""

from __future__ import annotations

DEFAULT_EXCLUDES: tuple[str, ...] = (
    # Windows system areas reachable from C:\ or /mnt/c
    "System Volume Information",
    "$RECYCLE.BIN",
    "Windows",
    "Program Files",
    "Program Files (x86)",
)


def is_default_exclude(substring: str) -> bool:
    """True if substring is part of the baseline set."""
    return substring in DEFAULT_EXCLUDES
