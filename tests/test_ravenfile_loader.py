"""Tests for Ravenfile discovery and overlay loading (infra/ravenfile_loader.py).

All Ravenfiles live under ``tmp_path``.

Coverage:
* Directory chain and the root boundary.
* Per-directory discovery: exact and dotted names, lexical order,
  missing directories.
* Overlay: deeper and later files override bindings and help.
* Only public, newly defined functions become commands.
* Broken Ravenfiles abort the load.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from rvn.core.models import NO_HELP, RavenContext
from rvn.exceptions import BoundaryError, RavenfileError
from rvn.infra.ravenfile_loader import (
    RavenfileLoader,
    directory_chain,
    discover_ravenfiles,
    find_ravenfiles,
    is_ravenfile_name,
    load_registry,
)

WriteRavenfile = Callable[..., Path]


# ---------------------------------------------------------------------------
# directory_chain
# ---------------------------------------------------------------------------

class TestDirectoryChain:
    def test_same_directory(self, home: Path) -> None:
        assert directory_chain(home, home) == [home.resolve()]

    def test_descendant(self, home: Path) -> None:
        deep = home / "a" / "b"
        deep.mkdir(parents=True)
        assert directory_chain(home, deep) == [
            home.resolve(),
            (home / "a").resolve(),
            deep.resolve(),
        ]

    def test_outside_root_raises(self, home: Path, tmp_path: Path) -> None:
        outside = tmp_path / "elsewhere"
        outside.mkdir()
        with pytest.raises(BoundaryError, match="outside the root"):
            directory_chain(home, outside)

    def test_sibling_with_common_prefix_is_outside(self, home: Path, tmp_path: Path) -> None:
        sibling = tmp_path / "home2"
        sibling.mkdir()
        with pytest.raises(BoundaryError):
            directory_chain(home, sibling)

    def test_boundary_error_has_hint(self, home: Path, tmp_path: Path) -> None:
        with pytest.raises(BoundaryError) as exc_info:
            directory_chain(home, tmp_path)
        assert exc_info.value.hint is not None
        assert exc_info.value.exit_code == 1


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------

class TestFindRavenfiles:
    def test_name_matching(self) -> None:
        assert is_ravenfile_name("Ravenfile")
        assert is_ravenfile_name("Ravenfile.local")
        assert is_ravenfile_name("Ravenfile.d.extra")
        assert not is_ravenfile_name("Ravenfiles")
        assert not is_ravenfile_name("ravenfile")
        assert not is_ravenfile_name("my.Ravenfile")

    def test_sorted_by_name(self, home: Path) -> None:
        for name in ("Ravenfile.zz", "Ravenfile", "Ravenfile.aa", "notes.txt"):
            (home / name).write_text("")
        assert [p.name for p in find_ravenfiles(home)] == [
            "Ravenfile",
            "Ravenfile.aa",
            "Ravenfile.zz",
        ]

    def test_missing_directory_is_empty(self, tmp_path: Path) -> None:
        assert find_ravenfiles(tmp_path / "missing") == []

    def test_no_matches_is_empty(self, home: Path) -> None:
        (home / "README").write_text("")
        assert find_ravenfiles(home) == []

    def test_directories_are_ignored(self, home: Path) -> None:
        (home / "Ravenfile.d").mkdir()
        assert find_ravenfiles(home) == []

    def test_discovery_is_root_first(
        self, home: Path, project: Path, write_ravenfile: WriteRavenfile,
    ) -> None:
        write_ravenfile(project, "", name="Ravenfile")
        write_ravenfile(home, "", name="Ravenfile.b")
        write_ravenfile(home, "", name="Ravenfile.a")

        files = discover_ravenfiles(home, project)
        assert [(p.parent.name, p.name) for p in files] == [
            ("home", "Ravenfile.a"),
            ("home", "Ravenfile.b"),
            ("proj", "Ravenfile"),
        ]


# ---------------------------------------------------------------------------
# Overlay loading
# ---------------------------------------------------------------------------

class TestOverlay:
    def test_leaf_overrides_root(
        self, home: Path, project: Path, write_ravenfile: WriteRavenfile,
    ) -> None:
        write_ravenfile(
            home,
            """
            # - builds the thing
            def BUILD(*args):
                return 1
            """,
        )
        write_ravenfile(
            project,
            """
            # - builds it faster
            def BUILD(*args):
                return 0
            """,
            name="Ravenfile.local",
        )

        registry = load_registry(home, project)
        assert registry.summary("build") == "- builds it faster"
        command = registry.get("build")
        assert command is not None
        assert command.func() == 0
        assert command.source == (project / "Ravenfile.local").resolve()

    def test_root_only_definition_visible_from_leaf(
        self, home: Path, project: Path, write_ravenfile: WriteRavenfile,
    ) -> None:
        write_ravenfile(home, "def backup():\n    pass\n")
        registry = load_registry(home, project)
        assert "backup" in registry

    def test_leaf_definitions_invisible_from_root(
        self, home: Path, project: Path, write_ravenfile: WriteRavenfile,
    ) -> None:
        write_ravenfile(project, "def deploy():\n    pass\n")
        registry = load_registry(home, home)
        assert "deploy" not in registry

    def test_help_replaced_not_merged(
        self, home: Path, project: Path, write_ravenfile: WriteRavenfile,
    ) -> None:
        write_ravenfile(
            home,
            """
            # - tests everything
            # slow
            def test():
                pass
            """,
        )
        write_ravenfile(project, "def test():\n    pass\n")

        registry = load_registry(home, project)
        assert registry.summary("test") == NO_HELP
        assert registry.full_help("test") == (NO_HELP,)

    def test_lexical_order_within_directory(
        self, home: Path, write_ravenfile: WriteRavenfile,
    ) -> None:
        write_ravenfile(home, "# - second\ndef fmt():\n    pass\n", name="Ravenfile.b")
        write_ravenfile(home, "# - first\ndef fmt():\n    pass\n", name="Ravenfile.a")

        registry = load_registry(home, home)
        assert registry.summary("fmt") == "- second"

    def test_listing_order_is_first_introduction(
        self, home: Path, project: Path, write_ravenfile: WriteRavenfile,
    ) -> None:
        write_ravenfile(home, "def zeta():\n    pass\n\ndef alpha():\n    pass\n")
        write_ravenfile(project, "def mid():\n    pass\n\ndef zeta():\n    pass\n")

        registry = load_registry(home, project)
        assert registry.list_public_commands() == ["zeta", "alpha", "mid"]

    def test_same_filesystem_state_same_registry(
        self, home: Path, project: Path, write_ravenfile: WriteRavenfile,
    ) -> None:
        write_ravenfile(home, "# - a\ndef a():\n    pass\n")
        write_ravenfile(project, "# - b\ndef b():\n    pass\n", name="Ravenfile.x")

        first = load_registry(home, project)
        second = load_registry(home, project)
        assert first.list_public_commands() == second.list_public_commands()
        assert [first.full_help(n) for n in first.list_public_commands()] == [
            second.full_help(n) for n in second.list_public_commands()
        ]

    def test_registry_is_frozen(self, home: Path) -> None:
        assert load_registry(home, home).frozen


# ---------------------------------------------------------------------------
# Shared namespace and registration
# ---------------------------------------------------------------------------

class TestRegistration:
    def test_private_functions_not_registered(
        self, home: Path, write_ravenfile: WriteRavenfile,
    ) -> None:
        write_ravenfile(
            home,
            """
            # - internal
            def _helper():
                return 5

            def build():
                return _helper()
            """,
        )
        registry = load_registry(home, home)
        assert registry.list_public_commands() == ["build"]
        command = registry.get("build")
        assert command is not None
        assert command.func() == 5

    def test_later_file_sees_earlier_helpers(
        self, home: Path, project: Path, write_ravenfile: WriteRavenfile,
    ) -> None:
        write_ravenfile(home, "def _shared():\n    return 7\n")
        write_ravenfile(project, "def use():\n    return _shared()\n")

        command = load_registry(home, project).get("use")
        assert command is not None
        assert command.func() == 7

    def test_overridden_helper_affects_earlier_commands(
        self, home: Path, project: Path, write_ravenfile: WriteRavenfile,
    ) -> None:
        write_ravenfile(home, "def _code():\n    return 1\n\ndef run():\n    return _code()\n")
        write_ravenfile(project, "def _code():\n    return 9\n")

        command = load_registry(home, project).get("run")
        assert command is not None
        assert command.func() == 9

    def test_imported_names_are_not_commands(
        self, home: Path, write_ravenfile: WriteRavenfile,
    ) -> None:
        write_ravenfile(
            home,
            """
            from os.path import join
            import shutil

            class Builder:
                pass

            target = "dist"

            def build():
                pass
            """,
        )
        assert load_registry(home, home).list_public_commands() == ["build"]

    def test_baseline_names_are_not_commands(
        self, home: Path, write_ravenfile: WriteRavenfile,
    ) -> None:
        write_ravenfile(home, "def raven():\n    pass\n\ndef ok():\n    pass\n")
        assert load_registry(home, home).list_public_commands() == ["ok"]

    def test_rebound_name_is_skipped(
        self, home: Path, write_ravenfile: WriteRavenfile,
    ) -> None:
        write_ravenfile(home, "def build():\n    pass\n\nbuild = 'not callable'\n")
        assert "build" not in load_registry(home, home)

    def test_top_level_statements_run(
        self, home: Path, write_ravenfile: WriteRavenfile,
    ) -> None:
        marker = home / "ran.txt"
        write_ravenfile(home, f"open({str(marker)!r}, 'w').close()\n")
        load_registry(home, home)
        assert marker.exists()

    def test_context_is_exposed(
        self, home: Path, project: Path, write_ravenfile: WriteRavenfile,
    ) -> None:
        write_ravenfile(
            project,
            """
            def where():
                return (raven.root, raven.cwd, len(raven.files))
            """,
        )
        command = load_registry(home, project).get("where")
        assert command is not None
        assert command.func() == (home.resolve(), project.resolve(), 1)

    def test_loader_records_loaded_files(
        self, home: Path, write_ravenfile: WriteRavenfile,
    ) -> None:
        path = write_ravenfile(home, "def a():\n    pass\n")
        context = RavenContext(root=home, cwd=home)
        loader = RavenfileLoader(context)
        loader.load([path])
        assert context.files == [path]
        assert loader.namespace["__name__"] == "ravenfile"


# ---------------------------------------------------------------------------
# Broken Ravenfiles
# ---------------------------------------------------------------------------

class TestLoadErrors:
    def test_syntax_error_aborts(
        self, home: Path, write_ravenfile: WriteRavenfile,
    ) -> None:
        write_ravenfile(home, "def build(:\n    pass\n")
        with pytest.raises(RavenfileError, match="syntax error"):
            load_registry(home, home)

    def test_runtime_error_aborts(
        self, home: Path, project: Path, write_ravenfile: WriteRavenfile,
    ) -> None:
        write_ravenfile(home, "raise ValueError('boom')\n")
        write_ravenfile(project, "def never():\n    pass\n")

        with pytest.raises(RavenfileError, match="boom") as exc_info:
            load_registry(home, project)
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_boundary_checked_before_loading(
        self, home: Path, tmp_path: Path, write_ravenfile: WriteRavenfile,
    ) -> None:
        outside = tmp_path / "outside"
        marker = tmp_path / "ran.txt"
        write_ravenfile(home, f"open({str(marker)!r}, 'w').close()\n")
        outside.mkdir()

        with pytest.raises(BoundaryError):
            load_registry(home, outside)
        assert not marker.exists()

    def test_undecodable_file_aborts(self, home: Path) -> None:
        (home / "Ravenfile").write_bytes(b"# \xff\xfe\ndef build():\n    pass\n")

        with pytest.raises(RavenfileError, match="cannot read") as exc_info:
            load_registry(home, home)
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)
        assert exc_info.value.hint is not None
