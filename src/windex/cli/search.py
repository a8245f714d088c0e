"""windex search command - substring search over the index."""

import json
from pathlib import Path

import click

from windex.cli.utils import open_coordinator
from windex.config import WindexConfig
from windex.config.constants import SEARCH_MAX_LIMIT
from windex.core.formatting import entry_to_dict, format_entry
from windex.core.progress import status


@click.command()
@click.argument("pattern")
@click.option(
    "-n",
    "--limit",
    type=click.IntRange(1, SEARCH_MAX_LIMIT),
    default=None,
    help=f"Maximum results (default from config, at most {SEARCH_MAX_LIMIT})",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option(
    "--db",
    "db_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Database file (default: ~/.windex/.winindex.db)",
)
@click.pass_context
def search_command(
    ctx: click.Context,
    pattern: str,
    limit: int | None,
    as_json: bool,
    db_path: Path | None,
) -> None:
    """Find indexed entries whose name or path contains PATTERN.

    Matching is case-insensitive; results are newest first.
    """
    config: WindexConfig = ctx.obj["config"]
    coordinator = open_coordinator(config, db_override=db_path)
    try:
        results = coordinator.search(pattern, limit or config.limits.search_default)
        indexed = coordinator.count_entries() if not results else len(results)
    finally:
        coordinator.close()

    if as_json:
        click.echo(json.dumps([entry_to_dict(entry) for entry in results], indent=2))
        return

    if not results:
        if indexed == 0:
            status("The index is empty. Run `windex index` first.", style="warning")
        else:
            status(f"No matches for '{pattern}'", style="info")
        return

    for entry in results:
        click.echo(format_entry(entry))
        click.echo()
