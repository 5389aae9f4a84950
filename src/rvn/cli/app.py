"""CLI application entry point and command routing for rvn.

This module is the **sole error boundary** for the entire application.
It catches :class:`~rvn.exceptions.RavenError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via
Rich and returning well-defined exit codes.

Architecture notes
------------------
* Loading and routing are delegated to the infra loader and the
  :class:`~rvn.cli.dispatcher.Dispatcher`.
* The working directory is checked against the root boundary before
  any Ravenfile is executed.
* A dispatched command's exit status is returned unchanged.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from dataclasses import replace

from rich.markup import escape

from rvn.cli import exit_codes
from rvn.cli.advice import PathAdvisor
from rvn.cli.console import console, print_error
from rvn.cli.dispatcher import INIT_KEYWORD, Dispatcher
from rvn.core.models import normalize_name
from rvn.core.protocols import NoticeStore
from rvn.exceptions import RavenError, UsageError
from rvn.infra.notice_store import MarkerFileNoticeStore
from rvn.infra.ravenfile_loader import directory_chain, load_registry
from rvn.settings import Settings, load_settings
from rvn.utils.log import configure_logging
from rvn.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Only the options in front of the command are parsed here; see
    :func:`_split_argv`.  The positionals exist for the usage line.
    """
    parser = argparse.ArgumentParser(
        prog="rvn",
        description="Run commands defined in Ravenfiles between your root "
        "directory and the current directory.",
        add_help=False,
    )
    parser.add_argument(
        "-h",
        "--help",
        action="store_true",
        help="Show usage and the available commands.",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Log discovery and dispatch details to stderr.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default=None,
        help="Command to run, or 'help [command]'.",
    )
    parser.add_argument(
        "args",
        nargs=argparse.REMAINDER,
        help="Arguments passed to the command.",
    )
    return parser


def _split_argv(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    """Split *argv* at the first token that is not an rvn option.

    The tail (command name plus its arguments) is returned verbatim,
    so a ``--`` after the command reaches the command.  A ``--`` before
    the command only ends rvn's own options.
    """
    for index, token in enumerate(argv):
        if token == "--":
            return list(argv[:index]), list(argv[index + 1:])
        if not token.startswith("-") or token == "-":
            return list(argv[:index]), list(argv[index:])
    return list(argv), []


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: list[str] | None = None,
    *,
    settings: Settings | None = None,
    notice_store: NoticeStore | None = None,
) -> int:
    """Run the rvn CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.
    settings:
        Pre-built settings; loaded from the environment when ``None``.
    notice_store:
        Store for the one-time PATH notice; defaults to the marker file
        under the config directory.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    options, request = _split_argv(sys.argv[1:] if argv is None else argv)
    args = parser.parse_args(options)

    if settings is None:
        settings = load_settings(trace=args.trace)
    elif args.trace:
        settings = replace(settings, trace=True)
    configure_logging(settings.trace)

    if not request and not args.help:
        parser.print_usage(sys.stderr)
        raise UsageError(
            "missing command",
            hint="Run 'rvn help' to list the available commands.",
        )

    chain = directory_chain(settings.root_dir, settings.working_dir)
    logger.debug("directory chain: %s", " -> ".join(str(d) for d in chain))

    registry = load_registry(settings.root_dir, settings.working_dir, trace=settings.trace)
    dispatcher = Dispatcher(registry, working_dir=settings.working_dir)

    if args.help:
        parser.print_usage()
        dispatcher.general_help()
        return exit_codes.SUCCESS

    code = dispatcher.dispatch(request)

    if code == exit_codes.SUCCESS and normalize_name(request[0]) != INIT_KEYWORD:
        store = notice_store or MarkerFileNoticeStore(settings.marker_path)
        PathAdvisor(store, entry_point=settings.entry_point).maybe_advise()

    return code


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage; ``--trace`` logs
    the traceback.
    """
    try:
        code = main()
    except RavenError as exc:
        print_error(exc)
        logger.debug("error details", exc_info=True)
        code = exc.exit_code
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        code = exit_codes.KEYBOARD_INTERRUPT
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            f"{type(exc).__name__}: {escape(str(exc))}"
        )
        logger.debug("unexpected error", exc_info=True)
        code = exit_codes.GENERAL_ERROR
    sys.exit(code)
