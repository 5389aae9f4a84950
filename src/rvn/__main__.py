"""Allow ``python -m rvn`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m rvn`` behaves identically to the ``rvn`` console
script.
"""

from __future__ import annotations

from rvn.cli.app import cli

if __name__ == "__main__":
    cli()
