"""CLI console helpers built on Rich.

A fresh :class:`rich.console.Console` is created per call so output
always goes to the *current* ``sys.stdout`` / ``sys.stderr`` (which
test capture swaps out).
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from rvn.exceptions import RavenError


def get_rich_console(*, stderr: bool = False) -> Console:
    """Create a Rich console; long help lines are never re-wrapped."""
    return Console(stderr=stderr, highlight=False, soft_wrap=True, emoji=False)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy bound to one output stream."""

    def __init__(self, *, stderr: bool) -> None:
        self._stderr = stderr

    def print(self, *objects: object, markup: bool = True) -> None:
        get_rich_console(stderr=self._stderr).print(*objects, markup=markup)

    def write_line(self, text: str) -> None:
        """Write *text* as-is; Rich would expand tabs and wrap it."""
        stream = get_rich_console(stderr=self._stderr).file
        stream.write(f"{text}\n")
        stream.flush()


out = _ConsoleProxy(stderr=False)
"""Regular output (help listings)."""

console = _ConsoleProxy(stderr=True)
"""Diagnostics: errors, hints and notices."""


def print_error(exc: RavenError) -> None:
    """Render *exc* as a one-line error plus its optional hint."""
    console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
