"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
A dispatched command's own status is returned as-is and never mapped
through these constants.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit — help was shown or the command reported success."""

GENERAL_ERROR: int = 1
"""Structural failure: outside the root, private command, bad Ravenfile."""

USAGE_ERROR: int = 2
"""Bad option, missing command, or unrecognized command."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
