"""Logging setup for windex.

structlog renders every event and stdlib logging routes it to the outputs
listed in LoggingConfig. Each output has its own ProcessorFormatter, so one
run can print readable lines on stderr and write JSON lines to a file.

An indexing run binds ``run_id`` (and its root) with
``structlog.contextvars.bound_contextvars``; merge_contextvars copies both
onto every event logged inside the run, including the walker's and the
pruner's per-entry warnings.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TextIO
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from windex.config.models import LoggingConfig, LogOutputConfig

_STREAM_DESTINATIONS = ("stderr", "stdout")
_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# First file output of the current configuration, shown after fatal errors
_log_file: Path | None = None


def new_run_id() -> str:
    """Short random id shared by every event of one indexing run."""
    return uuid4().hex[:12]


def get_log_file_path() -> Path | None:
    return _log_file


class ConsoleSuppressingFilter(logging.Filter):
    """Drops console records while a spinner owns the terminal."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: ARG002
        # progress imports rich at module level; keep logging importable without it
        from windex.core.progress import is_console_suppressed

        return not is_console_suppressed()


def _stream(destination: str) -> TextIO:
    return sys.stdout if destination == "stdout" else sys.stderr


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt=_TIMESTAMP_FORMAT, key="timestamp"),
    ]


def _build_handler(output: LogOutputConfig, pre_chain: list[structlog.types.Processor]) -> logging.Handler:
    handler: logging.Handler
    if output.destination in _STREAM_DESTINATIONS:
        stream = _stream(output.destination)
        handler = logging.StreamHandler(stream)
        handler.addFilter(ConsoleSuppressingFilter())
        renderer: structlog.types.Processor = (
            structlog.processors.JSONRenderer()
            if output.format == "json"
            else structlog.dev.ConsoleRenderer(colors=stream.isatty(), pad_event_to=0, pad_level=False)
        )
    else:
        path = Path(output.destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a")
        renderer = (
            structlog.processors.JSONRenderer()
            if output.format == "json"
            else structlog.dev.ConsoleRenderer(colors=False, pad_event_to=0, pad_level=False)
        )

    handler.setFormatter(structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain))
    return handler


def configure_logging(config: LoggingConfig) -> None:
    """Route structlog through stdlib handlers, one per configured output.

    Safe to call more than once: previous handlers are closed and replaced.
    """
    global _log_file

    root_level = logging.getLevelNamesMapping()[config.level]
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Not cached, so a later configure_logging() call takes effect everywhere
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    for existing in root_logger.handlers:
        existing.close()
    root_logger.handlers.clear()
    root_logger.setLevel(root_level)
    # One statement per visited path would drown everything else
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    _log_file = None
    for output in config.outputs:
        handler = _build_handler(output, pre_chain)
        handler.setLevel(output.level or config.level)
        root_logger.addHandler(handler)
        if _log_file is None and isinstance(handler, logging.FileHandler):
            _log_file = Path(handler.baseFilename)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger=name)
    return logger  # type: ignore[no-any-return]
