"""Terminal feedback for CLI commands.

Everything here writes to stderr through one rich Console, so stdout only
carries command output (search blocks, JSON) and stays pipeable. While a
spinner is live, console log handlers are muted through
ConsoleSuppressingFilter; file handlers keep receiving every record.

Usage::

    with spinner(f"Indexing {root}"):
        stats = coordinator.index(root)

    status("3 new, 0 modified, 1 pruned, 40 unchanged", style="success")
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.markup import escape

_console = Console(stderr=True)

_PREFIXES = {
    "success": "[green]✓[/green] ",
    "warning": "[yellow]![/yellow] ",
    "error": "[red]✗[/red] ",
    "info": "  ",
}

_spinner_state = threading.local()


def is_console_suppressed() -> bool:
    return getattr(_spinner_state, "active", False)


@contextmanager
def suppress_console_logs() -> Iterator[None]:
    previous = is_console_suppressed()
    _spinner_state.active = True
    try:
        yield
    finally:
        _spinner_state.active = previous


def status(message: str, *, style: str = "info") -> None:
    """One styled line on stderr. Paths are printed literally, never as markup."""
    _console.print(f"{_PREFIXES.get(style, '')}{escape(message)}", highlight=False)


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return "1 path" / "3 paths" style strings."""
    word = singular if count == 1 else (plural or singular + "s")
    return f"{count} {word}"


@contextmanager
def spinner(message: str) -> Iterator[None]:
    """Spinner for a long step, or a single "message..." line off a terminal."""
    if not _console.is_terminal:
        _console.print(f"{escape(message)}...", highlight=False)
        yield
        return

    with suppress_console_logs(), _console.status(f"[cyan]{escape(message)}[/cyan]", spinner="dots"):
        yield
