"""Custom exception hierarchy for rvn.

All exceptions that cross layer boundaries must inherit from
:class:`RavenError`.  Each subclass carries the process exit code the
CLI error boundary reports for it, so the mapping lives next to the
error rather than in scattered ``except`` clauses.

Hierarchy
---------
RavenError
├── BoundaryError
├── UsageError
├── UnrecognizedCommandError
├── PrivateCommandError
├── RavenfileError
└── CommandResultError
"""

from __future__ import annotations


class RavenError(Exception):
    """Base exception for all rvn errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean
    one-line message without leaking internal stack traces.
    """

    exit_code: int = 1
    """Process exit status reported when this error reaches the CLI."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Invocation context ----------------------------------------------------

class BoundaryError(RavenError):
    """Raised when the working directory is outside the root directory."""


class UsageError(RavenError):
    """Raised when the command line is missing a required command."""

    exit_code = 2


# --- Command lookup --------------------------------------------------------

class UnrecognizedCommandError(RavenError):
    """Raised when a requested command is not a known public command."""

    exit_code = 2

    def __init__(self, name: str, *, hint: str | None = None) -> None:
        super().__init__(f"unrecognized command: {name}", hint=hint)
        self.name: str = name


class PrivateCommandError(RavenError):
    """Raised when a private (underscore-prefixed) name is dispatched."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"cannot invoke private command: {name}",
            hint="Names starting with '_' are helpers, not commands.",
        )
        self.name: str = name


# --- Definitions files -----------------------------------------------------

class RavenfileError(RavenError):
    """Raised when a definitions file fails to compile or execute."""


class CommandResultError(RavenError):
    """Raised when a command returns something other than an exit status."""
