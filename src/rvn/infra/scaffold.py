"""Starter Ravenfile written by ``rvn init``."""

from __future__ import annotations

from pathlib import Path

from rvn.infra.ravenfile_loader import RAVENFILE_NAME, find_ravenfiles

STARTER_RAVENFILE = '''\
# Commands for this directory and everything below it.
#
# Every top-level function is a command: ``rvn hello world`` calls
# ``hello("world")``.  The comment block directly above a function is
# its help text; the first line is the summary shown by ``rvn help``.
# Functions starting with "_" are private helpers.


def _greeting(name):
    return f"hello, {name}"


# - prints a greeting
# Usage: rvn hello [name]
def hello(name="world", *rest):
    print(_greeting(name))
    return 0
'''


def init_ravenfile(directory: Path) -> Path | None:
    """Write a starter Ravenfile into *directory*.

    Returns the new file, or ``None`` when the directory already has
    a Ravenfile.
    """
    if find_ravenfiles(directory):
        return None
    target = directory / RAVENFILE_NAME
    target.write_text(STARTER_RAVENFILE, encoding="utf-8")
    return target
