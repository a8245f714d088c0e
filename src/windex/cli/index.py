"""windex index command - walk a root and update the index."""

from pathlib import Path

import click

from windex.cli.utils import as_click_error, open_coordinator
from windex.config import WindexConfig, get_root
from windex.core.errors import WindexError
from windex.core.formatting import format_index_summary
from windex.core.progress import pluralize, spinner, status
from windex.index import ExcludeFilter


@click.command()
@click.argument("root", required=False, type=click.Path(file_okay=False, path_type=Path))
@click.option(
    "-e",
    "--exclude",
    "excludes",
    multiple=True,
    metavar="SUBSTRING",
    help="Skip paths containing SUBSTRING (repeatable, adds to the built-in set)",
)
@click.option(
    "--db",
    "db_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Database file (default: ~/.windex/.winindex.db)",
)
@click.option(
    "--follow-symlinks/--no-follow-symlinks",
    default=None,
    help="Stat through symlinks (default from config: follow)",
)
@click.pass_context
def index_command(
    ctx: click.Context,
    root: Path | None,
    excludes: tuple[str, ...],
    db_path: Path | None,
    follow_symlinks: bool | None,
) -> None:
    """Index files and directories under ROOT.

    ROOT defaults to index.root from config, else /mnt/ when present, else C:\\.
    Only new or modified entries are written; entries whose paths no longer
    exist are removed.
    """
    config: WindexConfig = ctx.obj["config"]
    root_str = str(root) if root is not None else get_root(config)

    try:
        exclude_filter = ExcludeFilter([*config.index.exclude, *excludes])
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--exclude") from e

    coordinator = open_coordinator(
        config,
        db_override=db_path,
        excludes=exclude_filter,
        follow_symlinks=follow_symlinks,
    )
    try:
        with spinner(f"Indexing {root_str}"):
            stats = coordinator.index(root_str)
    except WindexError as e:
        raise as_click_error(e) from e
    finally:
        coordinator.close()

    click.echo(f"Indexed {stats.written} new or modified entries.")
    status(format_index_summary(stats), style="success")
    if stats.issues:
        status(
            f"{pluralize(len(stats.issues), 'path')} skipped due to errors (see log)",
            style="warning",
        )
