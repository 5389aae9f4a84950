"""Shared pytest fixtures and configuration for the rvn test suite.

Guidelines
----------
* Ravenfile trees are built under ``tmp_path``, never the real home.
* The first-run notice uses the in-memory :class:`FakeNoticeStore`.
* PATH probing is always mocked.
"""

from __future__ import annotations

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from rvn.infra.entrypoint_detector import EntryPointStatus
from rvn.settings import Settings


class FakeNoticeStore:
    """In-memory :class:`~rvn.core.protocols.NoticeStore`."""

    def __init__(self, notified: bool = False) -> None:
        self.notified = notified
        self.mark_calls = 0

    def has_been_notified(self) -> bool:
        return self.notified

    def mark_notified(self) -> None:
        self.mark_calls += 1
        self.notified = True


WriteRavenfile = Callable[..., Path]


@pytest.fixture
def write_ravenfile() -> WriteRavenfile:
    """Write dedented Python source to ``<directory>/<name>``."""

    def _write(directory: Path, source: str, name: str = "Ravenfile") -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_text(textwrap.dedent(source).lstrip("\n"), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def home(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def project(home: Path) -> Path:
    path = home / "proj"
    path.mkdir()
    return path


@pytest.fixture
def notice_store() -> FakeNoticeStore:
    return FakeNoticeStore(notified=True)


@pytest.fixture
def fresh_notice_store() -> FakeNoticeStore:
    return FakeNoticeStore()


@pytest.fixture
def make_settings(tmp_path: Path) -> Callable[..., Settings]:
    def _make(root: Path, cwd: Path, *, trace: bool = False) -> Settings:
        return Settings(
            root_dir=root,
            working_dir=cwd,
            config_dir=tmp_path / "config",
            trace=trace,
        )

    return _make


@pytest.fixture
def entry_point_status() -> Callable[[bool], EntryPointStatus]:
    """Build a probe result with or without the entry point on PATH."""

    def _status(found: bool) -> EntryPointStatus:
        if found:
            return EntryPointStatus(
                found=True,
                path=Path("/usr/local/bin/rvn"),
                scripts_dir=Path("/usr/local/bin"),
                path_commands=(),
            )
        return EntryPointStatus(
            found=False,
            path=None,
            scripts_dir=Path("/opt/venv/bin"),
            path_commands=('export PATH="/opt/venv/bin:$PATH"',),
        )

    return _status
