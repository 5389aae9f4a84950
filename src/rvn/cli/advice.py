"""One-time notice telling the user how to put ``rvn`` on PATH.

Shown at most once per user: the notice store remembers that it was
printed.  Purely best-effort; nothing here may change the exit code
of the command that just ran.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from rich.markup import escape

from rvn.cli.console import console
from rvn.core.protocols import NoticeStore
from rvn.infra.entrypoint_detector import EntryPointStatus, detect_entry_point

logger = logging.getLogger(__name__)


class PathAdvisor:
    """Prints the PATH notice once, when the entry point is unreachable.

    Parameters
    ----------
    store:
        Remembers whether the notice was already shown.
    entry_point:
        Console-script name looked up on PATH.
    probe:
        Returns an :class:`EntryPointStatus` for a script name; defaults
        to :func:`~rvn.infra.entrypoint_detector.detect_entry_point`.
    """

    def __init__(
        self,
        store: NoticeStore,
        *,
        entry_point: str = "rvn",
        probe: Callable[[str], EntryPointStatus] | None = None,
    ) -> None:
        self._store = store
        self._entry_point = entry_point
        self._probe = probe

    def maybe_advise(self) -> bool:
        """Show the notice if due; return whether it was shown."""
        try:
            if self._store.has_been_notified():
                return False
            probe = self._probe or detect_entry_point
            status = probe(self._entry_point)
            if status.found:
                return False
            self._print_notice(status)
            self._store.mark_notified()
        except OSError as exc:
            logger.debug("PATH advice skipped: %s", exc)
            return False
        return True

    def _print_notice(self, status: EntryPointStatus) -> None:
        console.print(
            f"[yellow]Note:[/yellow] '{self._entry_point}' is not on your PATH "
            f"(it is installed in {escape(str(status.scripts_dir))})."
        )
        console.print("Add it with one of:")
        for line in status.path_commands:
            console.print(f"  {line}", markup=False)
        console.print("[dim]This notice is shown only once.[/dim]")
