"""Domain models for rvn.

Value objects are **frozen** dataclasses.  Command names are plain
strings in their canonical form; :func:`normalize_name` is the only
way raw spellings become lookup keys.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

NO_HELP: str = "no help available"
"""Fallback rendered when a command carries no usable help text."""

PRIVATE_PREFIX: str = "_"

_PUBLIC_NAME_RE = re.compile(r"^[a-z0-9][a-z0-9-]*$")


# ---------------------------------------------------------------------------
# Command names
# ---------------------------------------------------------------------------

def normalize_name(raw: str) -> str:
    """Return the canonical lookup key for *raw*.

    Case-folds and maps underscores to hyphens, so ``run_tests``,
    ``Run-Tests`` and ``RUN_TESTS`` all name ``run-tests``.
    """
    return raw.casefold().replace("_", "-")


def is_private_name(raw: str) -> bool:
    """Return ``True`` when *raw* carries the private marker."""
    return raw.startswith(PRIVATE_PREFIX)


def is_public_name(raw: str) -> bool:
    """Return ``True`` when *raw* may be exposed as a command.

    The raw spelling must not carry the private marker and its
    canonical form must use only letters, digits and hyphens.
    """
    if not raw or is_private_name(raw):
        return False
    return _PUBLIC_NAME_RE.match(normalize_name(raw)) is not None


# ---------------------------------------------------------------------------
# Help text
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class HelpEntry:
    """Ordered help lines taken from the comments above a command."""

    lines: tuple[str, ...] = ()

    def summary(self) -> str:
        """First line, or :data:`NO_HELP` when missing or blank."""
        if self.lines and self.lines[0]:
            return self.lines[0]
        return NO_HELP

    def full(self) -> tuple[str, ...]:
        """Every line, or a single :data:`NO_HELP` line when empty."""
        return self.lines if self.lines else (NO_HELP,)


# ---------------------------------------------------------------------------
# Registered command
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Command:
    """A public command bound to the callable that implements it."""

    name: str
    """Canonical command name (see :func:`normalize_name`)."""

    func: Callable[..., Any]
    """The merged definition invoked with the remaining arguments."""

    help: HelpEntry = field(default_factory=HelpEntry)

    source: Path | None = None
    """Definitions file that last (re)defined the command."""


# ---------------------------------------------------------------------------
# Context shared with definitions files
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class RavenContext:
    """Invocation context exposed to Ravenfiles as the ``raven`` global."""

    root: Path
    cwd: Path
    trace: bool = False
    files: list[Path] = field(default_factory=list)
    """Definitions files loaded so far, in load order."""
