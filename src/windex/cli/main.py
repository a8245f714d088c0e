"""windex CLI - windex command."""

from pathlib import Path

import click

from windex import __version__
from windex.cli.index import index_command
from windex.cli.search import search_command
from windex.cli.utils import as_click_error
from windex.config import load_config
from windex.config.models import LoggingConfig
from windex.core.errors import ConfigError
from windex.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="windex")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML config file (default: ~/.windex/config.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """windex - incremental file index with fast substring search."""
    ctx.ensure_object(dict)
    try:
        config = load_config(config_path)
    except ConfigError as e:
        # Built-in logging defaults, so the failure is logged to stderr
        configure_logging(LoggingConfig())
        raise as_click_error(e) from e

    if verbose:
        config.logging.level = "DEBUG"
    configure_logging(config=config.logging)

    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = config


cli.add_command(index_command, name="index")
cli.add_command(search_command, name="search")


if __name__ == "__main__":
    cli()
