"""Indexing pipeline: change detection, tree walk, stale pruning."""

from windex.index._internal.indexing.change import decide
from windex.index._internal.indexing.prune import StalePruner
from windex.index._internal.indexing.traversal import TreeWalker, normalize_root

__all__ = [
    "decide",
    "normalize_root",
    "StalePruner",
    "TreeWalker",
]
