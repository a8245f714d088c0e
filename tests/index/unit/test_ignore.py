"""Tests for substring exclusion."""

import pytest

from windex.index._internal.ignore import DEFAULT_EXCLUDES, ExcludeFilter


class TestDefaults:
    def test_given_new_filter_when_created_then_holds_builtins_in_order(self) -> None:
        """Built-in substrings come first, in declaration order."""
        assert ExcludeFilter().substrings == DEFAULT_EXCLUDES

    @pytest.mark.parametrize(
        "path",
        [
            "/mnt/c/Windows/System32",
            "C:\\$RECYCLE.BIN\\S-1-5",
            "/mnt/c/System Volume Information",
            "/mnt/c/Program Files (x86)/Steam",
            "/mnt/d/MyWindowsBackup/notes.txt",
        ],
    )
    def test_given_builtin_match_when_checked_then_excluded(self, path: str) -> None:
        assert ExcludeFilter().should_exclude(path)

    def test_given_lowercase_variant_when_checked_then_not_excluded(self) -> None:
        """Matching is case-sensitive."""
        assert not ExcludeFilter().should_exclude("/mnt/c/windows/system32")

    def test_without_defaults(self) -> None:
        excludes = ExcludeFilter(include_defaults=False)

        assert len(excludes) == 0
        assert not excludes.should_exclude("/mnt/c/Windows")


class TestAdd:
    """Grow-only membership."""

    def test_given_new_substring_when_added_then_matches(self) -> None:
        # Given
        excludes = ExcludeFilter()

        # When
        added = excludes.add("node_modules")

        # Then
        assert added is True
        assert excludes.should_exclude("/srv/app/node_modules/react")
        assert excludes.substrings[-1] == "node_modules"

    def test_given_duplicate_when_added_then_ignored(self) -> None:
        excludes = ExcludeFilter(["cache"])

        assert excludes.add("cache") is False
        assert excludes.substrings.count("cache") == 1

    def test_given_empty_when_added_then_rejected(self) -> None:
        """An empty substring would match every path."""
        with pytest.raises(ValueError):
            ExcludeFilter().add("")

    def test_given_extras_when_created_then_only_extras_are_user_additions(self) -> None:
        excludes = ExcludeFilter(["a", "Windows", "b"])

        assert excludes.user_additions == ("a", "b")
        assert len(excludes) == len(DEFAULT_EXCLUDES) + 2


class TestMatching:
    def test_given_match_when_queried_then_first_member_returned(self) -> None:
        excludes = ExcludeFilter(["Files"], include_defaults=False)
        excludes.add("Program")

        assert excludes.matching("/mnt/c/Program Files") == "Files"

    def test_given_no_match_when_queried_then_none(self) -> None:
        assert ExcludeFilter().matching("/home/u/docs") is None

    def test_members_listed_in_insertion_order(self) -> None:
        excludes = ExcludeFilter(["tmp"], include_defaults=False)
        excludes.add("cache")

        assert excludes.substrings == ("tmp", "cache")
        assert len(excludes) == 2
