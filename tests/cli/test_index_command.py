"""Tests for windex index command."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from windex.cli.main import cli

runner = CliRunner()


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """Small directory tree to index."""
    root = tmp_path / "tree"
    (root / "docs").mkdir(parents=True)
    (root / "docs" / "notes.txt").write_text("hello")
    (root / "photo.jpg").write_text("jpeg")
    return root


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Empty config file; tests that need settings write into it."""
    path = tmp_path / "config.yaml"
    path.write_text("")
    return path


class TestIndexCommand:
    """windex index command tests."""

    def test_given_tree_when_index_then_reports_written_count(
        self, tree: Path, tmp_path: Path, config_file: Path
    ) -> None:
        """First run writes every object under the root, root included."""
        # Given
        db = tmp_path / "idx.db"

        # When
        result = runner.invoke(cli, ["--config", str(config_file), "index", str(tree), "--db", str(db)])

        # Then
        assert result.exit_code == 0, result.output
        assert "Indexed 4 new or modified entries." in result.output
        assert db.exists()

    def test_given_indexed_tree_when_index_again_then_nothing_written(
        self, tree: Path, tmp_path: Path, config_file: Path
    ) -> None:
        db = tmp_path / "idx.db"
        args = ["--config", str(config_file), "index", str(tree), "--db", str(db)]
        runner.invoke(cli, args)

        result = runner.invoke(cli, args)

        assert result.exit_code == 0, result.output
        assert "Indexed 0 new or modified entries." in result.output

    def test_given_exclude_option_when_index_then_subtree_skipped(
        self, tree: Path, tmp_path: Path, config_file: Path
    ) -> None:
        db = tmp_path / "idx.db"

        result = runner.invoke(
            cli,
            ["--config", str(config_file), "index", str(tree), "--db", str(db), "-e", "docs"],
        )

        assert result.exit_code == 0, result.output
        assert "Indexed 2 new or modified entries." in result.output

    def test_given_config_root_when_index_without_argument_then_config_root_used(
        self, tree: Path, tmp_path: Path, config_file: Path
    ) -> None:
        """index.root from config is the default root."""
        # Given
        config_file.write_text(f"index:\n  root: {tree}\n  db_path: {tmp_path / 'cfg.db'}\n")

        # When
        result = runner.invoke(cli, ["--config", str(config_file), "index"])

        # Then
        assert result.exit_code == 0, result.output
        assert "Indexed 4 new or modified entries." in result.output
        assert (tmp_path / "cfg.db").exists()

    def test_given_missing_root_when_index_then_fails(
        self, tmp_path: Path, config_file: Path
    ) -> None:
        """An unavailable root is fatal."""
        result = runner.invoke(
            cli,
            ["--config", str(config_file), "index", str(tmp_path / "nope"), "--db", str(tmp_path / "idx.db")],
        )

        assert result.exit_code == 1
        assert "TRAVERSAL_ROOT_UNAVAILABLE" in result.output
        assert "command_failed" in result.output

    def test_given_db_is_directory_when_index_then_fails(
        self, tree: Path, tmp_path: Path, config_file: Path
    ) -> None:
        """A store that cannot be opened aborts before the walk."""
        db_dir = tmp_path / "dbdir"
        db_dir.mkdir()

        result = runner.invoke(cli, ["--config", str(config_file), "index", str(tree), "--db", str(db_dir)])

        assert result.exit_code != 0

    def test_given_empty_exclude_when_index_then_usage_error(
        self, tree: Path, tmp_path: Path, config_file: Path
    ) -> None:
        result = runner.invoke(
            cli,
            ["--config", str(config_file), "index", str(tree), "--db", str(tmp_path / "idx.db"), "-e", ""],
        )

        assert result.exit_code == 2

    def test_given_invalid_config_when_index_then_fails(self, tree: Path, tmp_path: Path) -> None:
        bad = tmp_path / "bad.yaml"
        bad.write_text("limits:\n  search_default: 0\n")

        result = runner.invoke(cli, ["--config", str(bad), "index", str(tree)])

        assert result.exit_code == 1
        assert "CONFIG_INVALID_VALUE" in result.output

    def test_given_missing_config_file_when_index_then_fails(self, tree: Path, tmp_path: Path) -> None:
        """An explicit --config that does not exist is an error, not an empty config."""
        result = runner.invoke(cli, ["--config", str(tmp_path / "absent.yaml"), "index", str(tree)])

        assert result.exit_code == 1
        assert "CONFIG_FILE_NOT_FOUND" in result.output
        assert "absent.yaml" in result.output

    def test_given_no_config_option_when_index_then_defaults_under_home(
        self, tree: Path, isolated_home: Path
    ) -> None:
        """Without --config or --db the store lands in ~/.windex."""
        result = runner.invoke(cli, ["index", str(tree)])

        assert result.exit_code == 0, result.output
        assert (isolated_home / ".windex" / ".winindex.db").exists()


class TestVersion:
    def test_version_option(self) -> None:
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "windex, version 0.1.0" in result.output
