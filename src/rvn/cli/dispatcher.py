"""Routing of ``rvn <command> [args...]`` against a loaded registry.

The dispatcher owns the ``help`` and ``init`` keywords, renders the
help views, and otherwise calls the resolved command with the
remaining arguments, returning its exit status untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from rvn.cli import exit_codes
from rvn.cli.console import console, out, print_error
from rvn.core.models import Command, is_private_name, normalize_name
from rvn.core.registry import CommandRegistry
from rvn.exceptions import (
    CommandResultError,
    PrivateCommandError,
    UnrecognizedCommandError,
    UsageError,
)
from rvn.infra.scaffold import init_ravenfile

logger = logging.getLogger(__name__)

HELP_KEYWORD: str = "help"
INIT_KEYWORD: str = "init"


def run_command(command: Command, args: Sequence[str]) -> int:
    """Call *command* with *args* and return its exit status.

    ``None`` means success; an ``int`` (or ``SystemExit`` code) is
    passed through unchanged.

    Raises
    ------
    CommandResultError
        If the command returns anything else.
    """
    logger.debug("invoking %s(%s) from %s", command.name, ", ".join(args), command.source)
    try:
        result = command.func(*args)
    except SystemExit as exc:
        return _system_exit_status(exc.code)

    if result is None:
        return exit_codes.SUCCESS
    if isinstance(result, int):
        return int(result)
    raise CommandResultError(
        f"command {command.name} returned {type(result).__name__}; "
        "expected an int exit status or None",
    )


def _system_exit_status(code: object) -> int:
    """Mirror the interpreter's handling of ``SystemExit.code``."""
    if code is None:
        return exit_codes.SUCCESS
    if isinstance(code, int):
        return code
    console.print(str(code), markup=False)
    return exit_codes.GENERAL_ERROR


class Dispatcher:
    """Validates a request against the registry and serves it.

    Parameters
    ----------
    registry:
        A fully loaded (frozen) command registry.
    working_dir:
        Where ``rvn init`` writes its starter Ravenfile.
    """

    def __init__(self, registry: CommandRegistry, *, working_dir: Path | None = None) -> None:
        self._registry: CommandRegistry = registry
        self._working_dir: Path = working_dir if working_dir is not None else Path.cwd()

    # ------------------------------------------------------------------
    # Help views
    # ------------------------------------------------------------------

    def general_help(self) -> None:
        out.write_line("Available commands:")
        for name in self._registry.list_public_commands():
            out.write_line(f"{name} -{self._registry.summary(name)}")

    def command_help(self, raw_name: str) -> int:
        command = self._registry.get(raw_name)
        if command is None:
            print_error(UnrecognizedCommandError(raw_name))
            return exit_codes.USAGE_ERROR

        out.write_line(f"{command.name}:")
        for line in command.help.full():
            out.write_line(line)
        return exit_codes.SUCCESS

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, args: Sequence[str]) -> int:
        """Serve ``help``, ``init`` or a registered command.

        Raises
        ------
        UsageError
            If *args* is empty.
        PrivateCommandError
            If the command name carries the private marker.
        """
        if not args:
            raise UsageError(
                "missing command",
                hint="Run 'rvn help' to list the available commands.",
            )

        first, rest = args[0], list(args[1:])

        if first == HELP_KEYWORD:
            if not rest:
                self.general_help()
                return exit_codes.SUCCESS
            return self.command_help(rest[0])

        if normalize_name(first) == INIT_KEYWORD and first not in self._registry:
            return self._init()

        return self.invoke(first, rest)

    def invoke(self, raw_name: str, args: Sequence[str]) -> int:
        if is_private_name(raw_name):
            raise PrivateCommandError(raw_name)

        command = self._registry.get(raw_name)
        if command is None:
            print_error(UnrecognizedCommandError(raw_name))
            self.general_help()
            return exit_codes.USAGE_ERROR

        return run_command(command, args)

    def _init(self) -> int:
        created = init_ravenfile(self._working_dir)
        if created is None:
            out.print("already initialized", markup=False)
        else:
            out.print(f"created {created}", markup=False)
        return exit_codes.SUCCESS
