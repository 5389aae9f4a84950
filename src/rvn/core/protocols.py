"""Protocols (interfaces) consumed by the core and CLI layers.

These define the contracts that infrastructure adapters must satisfy.
Callers depend ONLY on these protocols, never on concrete
implementations, so the filesystem-backed adapters can be replaced
by in-memory fakes in tests.
"""

from __future__ import annotations

from typing import Protocol


class NoticeStore(Protocol):
    """Contract for remembering that a one-time notice was shown.

    Any object that implements both methods satisfies this protocol
    structurally (no explicit inheritance required).
    """

    def has_been_notified(self) -> bool:
        """Return ``True`` once :meth:`mark_notified` has succeeded."""
        ...  # pragma: no cover

    def mark_notified(self) -> None:
        """Record that the notice was shown.

        Must be idempotent: marking an already-marked store is not an
        error.

        Raises
        ------
        OSError
            When the underlying storage cannot be written.
        """
        ...  # pragma: no cover
