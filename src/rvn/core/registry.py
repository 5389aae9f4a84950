"""Command registry — public command names mapped to bindings and help.

The registry is filled by the overlay loader and then frozen; the
dispatcher only ever reads a frozen registry.  Re-registering a name
replaces its binding and help wholesale while keeping the position at
which the name was first introduced.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

from rvn.core.models import Command, HelpEntry, is_public_name, normalize_name

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Ordered mapping of canonical command name to :class:`Command`."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}
        self._frozen: bool = False

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def register(
        self,
        raw_name: str,
        func: Callable[..., Any],
        help_lines: tuple[str, ...] = (),
        *,
        source: Path | None = None,
    ) -> Command:
        """Bind *raw_name* to *func*, replacing any earlier definition."""
        if self._frozen:
            raise RuntimeError("command registry is frozen")
        if not is_public_name(raw_name):
            raise ValueError(f"not a public command name: {raw_name!r}")

        name = normalize_name(raw_name)
        command = Command(name=name, func=func, help=HelpEntry(help_lines), source=source)
        if name in self._commands:
            logger.debug("overriding command %s from %s", name, source)
        else:
            logger.debug("registering command %s from %s", name, source)
        self._commands[name] = command
        return command

    def freeze(self) -> None:
        """Disallow further registration."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_public_commands(self) -> list[str]:
        """Command names in the order they were first introduced."""
        return list(self._commands)

    def get(self, raw_name: str) -> Command | None:
        return self._commands.get(normalize_name(raw_name))

    def summary(self, raw_name: str) -> str:
        """One-line summary; raises ``KeyError`` for unknown names."""
        return self._commands[normalize_name(raw_name)].help.summary()

    def full_help(self, raw_name: str) -> tuple[str, ...]:
        """Full help lines; raises ``KeyError`` for unknown names."""
        return self._commands[normalize_name(raw_name)].help.full()

    def __contains__(self, raw_name: object) -> bool:
        return isinstance(raw_name, str) and normalize_name(raw_name) in self._commands

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)
