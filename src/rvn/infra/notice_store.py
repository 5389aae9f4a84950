"""Filesystem-backed :class:`~rvn.core.protocols.NoticeStore`.

The marker is an empty file; only its existence matters.
"""

from __future__ import annotations

from pathlib import Path


class MarkerFileNoticeStore:
    """Concrete :class:`NoticeStore` backed by a marker file."""

    def __init__(self, path: Path) -> None:
        self._path: Path = path

    @property
    def path(self) -> Path:
        return self._path

    def has_been_notified(self) -> bool:
        return self._path.exists()

    def mark_notified(self) -> None:
        """Create the marker, tolerating one that already exists."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.touch(exist_ok=True)
