"""Case-insensitive substring search over indexed entries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, or_
from sqlmodel import col, select

from windex.config.constants import SEARCH_MAX_LIMIT
from windex.index._internal.db.database import PY_LOWER_FUNC
from windex.index.models import Entry

if TYPE_CHECKING:
    from windex.index._internal.db import Database


class EntrySearcher:
    """Matches a pattern against lowered names and full paths.

    The pattern is a literal substring: ``%`` and ``_`` carry no wildcard
    meaning. Results are newest first by mtime and never exceed
    SEARCH_MAX_LIMIT rows. An empty pattern matches every entry.
    """

    def __init__(self, db: Database) -> None:
        self._db = db

    def search(self, pattern: str, limit: int = SEARCH_MAX_LIMIT) -> list[Entry]:
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")
        needle = pattern.lower()
        lowered = getattr(func, PY_LOWER_FUNC)

        stmt = (
            select(Entry)
            .where(
                or_(
                    func.instr(lowered(col(Entry.name)), needle) > 0,
                    func.instr(lowered(col(Entry.full_path)), needle) > 0,
                )
            )
            .order_by(col(Entry.mtime).desc())
            .limit(min(limit, SEARCH_MAX_LIMIT))
        )

        with self._db.session() as session:
            return list(session.exec(stmt).all())
