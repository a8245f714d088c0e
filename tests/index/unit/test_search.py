"""Tests for substring search over indexed entries."""

from __future__ import annotations

import pytest

from windex.index._internal.db import Database
from windex.index._internal.search import EntrySearcher
from windex.index.models import EntryKind, ObservedEntry


def _seed(db: Database, rows: list[tuple[str, int]]) -> None:
    with db.writer() as writer:
        for full_path, mtime in rows:
            writer.upsert(
                ObservedEntry(
                    full_path=full_path,
                    name=full_path.rsplit("/", 1)[-1],
                    kind=EntryKind.FILE,
                    size=1,
                    mtime=mtime,
                )
            )


class TestEntrySearcher:
    """Case-insensitive literal substring matching."""

    def test_given_mixed_case_when_searched_then_matches_any_case(self, temp_db: Database) -> None:
        # Given
        _seed(temp_db, [("/docs/Report.PDF", 1), ("/docs/notes.txt", 2)])

        # When
        results = EntrySearcher(temp_db).search("report")

        # Then
        assert [e.full_path for e in results] == ["/docs/Report.PDF"]

    def test_given_directory_component_when_searched_then_path_matches(self, temp_db: Database) -> None:
        """The full path is searched, not only the name."""
        _seed(temp_db, [("/Projects/alpha/main.c", 1)])

        results = EntrySearcher(temp_db).search("projects/alp")

        assert len(results) == 1

    def test_given_non_ascii_when_searched_then_case_folded(self, temp_db: Database) -> None:
        _seed(temp_db, [("/Bücher/ÜBERSICHT.md", 1)])

        assert len(EntrySearcher(temp_db).search("übersicht")) == 1

    @pytest.mark.parametrize("pattern", ["100%", "a_b"])
    def test_given_like_wildcards_when_searched_then_literal(self, temp_db: Database, pattern: str) -> None:
        """% and _ are matched literally."""
        # Given
        _seed(temp_db, [("/x/100%", 1), ("/x/a_b", 2), ("/x/1000", 3), ("/x/axb", 4)])

        # When
        results = EntrySearcher(temp_db).search(pattern)

        # Then
        assert [e.name for e in results] == [pattern]

    def test_results_ordered_newest_first(self, temp_db: Database) -> None:
        _seed(temp_db, [("/f/old.log", 10), ("/f/new.log", 30), ("/f/mid.log", 20)])

        results = EntrySearcher(temp_db).search(".log")

        assert [e.name for e in results] == ["new.log", "mid.log", "old.log"]

    def test_results_capped_at_one_hundred(self, temp_db: Database) -> None:
        """Limit never exceeds 100, whatever the caller asks for."""
        # Given
        _seed(temp_db, [(f"/many/file{i:03}.txt", i) for i in range(150)])

        # When
        results = EntrySearcher(temp_db).search("file", limit=1000)

        # Then
        assert len(results) == 100
        assert results[0].name == "file149.txt"

    def test_limit_respected(self, temp_db: Database) -> None:
        _seed(temp_db, [(f"/few/f{i}", i) for i in range(5)])

        assert len(EntrySearcher(temp_db).search("/few/", limit=2)) == 2

    def test_empty_pattern_matches_everything(self, temp_db: Database) -> None:
        _seed(temp_db, [("/a", 1), ("/b", 2)])

        assert len(EntrySearcher(temp_db).search("")) == 2

    def test_no_match_returns_empty(self, temp_db: Database) -> None:
        _seed(temp_db, [("/a", 1)])

        assert EntrySearcher(temp_db).search("zzz") == []

    @pytest.mark.parametrize("limit", [0, -5])
    def test_non_positive_limit_rejected(self, temp_db: Database, limit: int) -> None:
        with pytest.raises(ValueError):
            EntrySearcher(temp_db).search("a", limit=limit)
