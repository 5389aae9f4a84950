"""Infrastructure layer — filesystem and operating-system integration.

This layer reads and executes Ravenfiles, writes the first-run marker,
and probes PATH.  Errors meant for the user are raised as
:class:`~rvn.exceptions.RavenError` subclasses.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from rvn.infra.entrypoint_detector import EntryPointStatus, detect_entry_point
from rvn.infra.notice_store import MarkerFileNoticeStore
from rvn.infra.ravenfile_loader import (
    RAVENFILE_NAME,
    RavenfileLoader,
    directory_chain,
    discover_ravenfiles,
    find_ravenfiles,
    load_registry,
)
from rvn.infra.scaffold import init_ravenfile

__all__: list[str] = [
    "RAVENFILE_NAME",
    "EntryPointStatus",
    "MarkerFileNoticeStore",
    "RavenfileLoader",
    "detect_entry_point",
    "directory_chain",
    "discover_ravenfiles",
    "find_ravenfiles",
    "init_ravenfile",
    "load_registry",
]
