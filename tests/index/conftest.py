"""Shared fixtures for index tests."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from windex.index._internal.db import Database


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory(ignore_cleanup_errors=True) as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_db(temp_dir: Path) -> Generator[Database, None, None]:
    """Create a temporary database with schema."""
    from windex.index._internal.db import Database

    db = Database(temp_dir / "test.db")
    db.ensure_schema()
    yield db
    db.dispose()


@pytest.fixture
def tree_root(temp_dir: Path) -> Path:
    """Empty directory to build test trees in, separate from the database."""
    root = temp_dir / "tree"
    root.mkdir()
    return root


@pytest.fixture
def make_tree() -> Callable[[Path, dict[str, str | None], int], None]:
    """Build files and directories from a {relative_path: content} mapping.

    A None value creates a directory. Every created path gets the given mtime.
    """

    def _make(root: Path, layout: dict[str, str | None], mtime: int = 1_700_000_000) -> None:
        for rel, content in layout.items():
            path = root / rel
            if content is None:
                path.mkdir(parents=True, exist_ok=True)
            else:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(content)
        # Children first so setting a file's mtime doesn't bump its parent afterwards
        for rel in sorted(layout, key=lambda r: r.count("/"), reverse=True):
            os.utime(root / rel, (mtime, mtime))

    return _make
