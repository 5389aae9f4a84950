"""Help extraction from the comments that sit directly above a ``def``.

Only a *contiguous* block of column-0 ``#`` lines immediately preceding a
column-0 ``def <name>(`` header is captured.  Decorator lines between
the block and the header keep it attached; a blank or code line
breaks it, leaving the command with an empty help entry.

Guarantees
----------
* Pure text processing; the source is never executed here.
* Output order follows header order in the file.
"""

from __future__ import annotations

import re

COMMENT_MARKER: str = "#"

_HEADER_RE = re.compile(r"^def\s+([A-Za-z0-9_]+)\s*\(")


def strip_comment(line: str) -> str:
    """Drop the comment marker and exactly one following space."""
    body = line[len(COMMENT_MARKER):]
    return body[1:] if body.startswith(" ") else body


def extract_help(source: str) -> list[tuple[str, tuple[str, ...]]]:
    """Return ``(raw_name, help_lines)`` for every header in *source*.

    Names are returned exactly as spelled in the header; callers
    normalize them.  A header without an adjacent comment block yields
    an empty tuple.
    """
    entries: list[tuple[str, tuple[str, ...]]] = []
    pending: list[str] = []

    for raw_line in source.splitlines():
        line = raw_line.rstrip()
        header = _HEADER_RE.match(line)
        if header:
            entries.append((header.group(1), tuple(pending)))
            pending = []
        elif line.startswith(COMMENT_MARKER):
            pending.append(strip_comment(line))
        elif line.startswith("@") and pending:
            # decorators keep the block attached to the def below
            continue
        else:
            pending = []

    return entries
