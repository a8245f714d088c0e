"""Substring-based path exclusion.

Used by the TreeWalker before any stat() call: an excluded path is neither
indexed nor, if it is a directory, descended into.

Matching rules:
- A path is excluded iff it contains any member as a literal substring
- Case-sensitive, no globbing, no anchoring
- Members keep insertion order: the built-in set first, then user additions
- Members can be added for the lifetime of a filter, never removed
"""

from __future__ import annotations

from collections.abc import Iterable

from windex.core.excludes import DEFAULT_EXCLUDES, is_default_exclude

__all__ = [
    "DEFAULT_EXCLUDES",
    "ExcludeFilter",
]


class ExcludeFilter:
    """Ordered, grow-only set of exclusion substrings.

    The filter is a plain value owned by the caller and passed to the
    traversal; nothing about it is process-wide.

    Example:
        excludes = ExcludeFilter(["node_modules"])
        excludes.should_exclude("/mnt/c/Windows/System32")   # True (built-in)
        excludes.should_exclude("/srv/app/node_modules/x")   # True (added)
        excludes.should_exclude("/srv/app/src/main.py")      # False
    """

    def __init__(
        self,
        extra: Iterable[str] | None = None,
        *,
        include_defaults: bool = True,
    ) -> None:
        self._substrings: list[str] = []
        if include_defaults:
            self._substrings.extend(DEFAULT_EXCLUDES)
        for substring in extra or ():
            self.add(substring)

    def add(self, substring: str) -> bool:
        """Append a substring. Returns False if it was already present.

        Raises:
            ValueError: On an empty substring, which would exclude every path.
        """
        if not substring:
            raise ValueError("Exclusion substring must be non-empty")
        if substring in self._substrings:
            return False
        self._substrings.append(substring)
        return True

    def should_exclude(self, path: str) -> bool:
        return any(substring in path for substring in self._substrings)

    def matching(self, path: str) -> str | None:
        """First member contained in path, for diagnostics."""
        return next((s for s in self._substrings if s in path), None)

    @property
    def substrings(self) -> tuple[str, ...]:
        return tuple(self._substrings)

    @property
    def user_additions(self) -> tuple[str, ...]:
        """Members that are not part of the built-in set."""
        return tuple(s for s in self._substrings if not is_default_exclude(s))

    def __len__(self) -> int:
        return len(self._substrings)

    def __repr__(self) -> str:
        return f"ExcludeFilter({self._substrings!r})"
