"""CLI utilities."""

from pathlib import Path

import click

from windex.config import WindexConfig, get_db_path
from windex.core.errors import WindexError
from windex.core.logging import get_log_file_path, get_logger
from windex.index import Database, ExcludeFilter, IndexCoordinator


def open_coordinator(
    config: WindexConfig,
    *,
    db_override: Path | None = None,
    excludes: ExcludeFilter | None = None,
    follow_symlinks: bool | None = None,
) -> IndexCoordinator:
    """Open the database, ensure its schema and wrap it in a coordinator.

    Raises:
        click.ClickException: If the store cannot be opened or initialized.
    """
    try:
        db_path = get_db_path(config, override=db_override)
    except WindexError as e:
        raise as_click_error(e) from e

    db = Database(
        db_path,
        busy_timeout_ms=config.database.busy_timeout_ms,
        max_retries=config.database.max_retries,
        retry_base_delay=config.database.retry_base_delay_sec,
    )
    try:
        db.ensure_schema()
    except WindexError as e:
        db.dispose()
        raise as_click_error(e) from e

    return IndexCoordinator(
        db,
        excludes,
        follow_symlinks=config.index.follow_symlinks if follow_symlinks is None else follow_symlinks,
    )


def as_click_error(error: WindexError) -> click.ClickException:
    """Log a fatal windex error and wrap it, pointing at the log file if any."""
    get_logger("cli").error("command_failed", **error.to_dict())
    message = str(error)
    log_path = get_log_file_path()
    if log_path is not None:
        message += f"\nDetails in {log_path}"
    return click.ClickException(message)
