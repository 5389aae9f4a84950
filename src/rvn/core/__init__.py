"""Core layer — command names, help extraction and the command registry.

Rules
-----
* No ``print()`` calls.
* No filesystem I/O; callers hand in file contents.
* No imports from ``cli`` or ``infra``.
"""

from rvn.core.comments import extract_help, strip_comment
from rvn.core.models import (
    NO_HELP,
    Command,
    HelpEntry,
    RavenContext,
    is_private_name,
    is_public_name,
    normalize_name,
)
from rvn.core.protocols import NoticeStore
from rvn.core.registry import CommandRegistry

__all__: list[str] = [
    "NO_HELP",
    "Command",
    "CommandRegistry",
    "HelpEntry",
    "NoticeStore",
    "RavenContext",
    "extract_help",
    "is_private_name",
    "is_public_name",
    "normalize_name",
    "strip_comment",
]
