"""Infrastructure: Ravenfile discovery and overlay loading.

Walks the directory chain from the root directory down to the working
directory, executes every ``Ravenfile`` / ``Ravenfile.*`` it finds in a
single shared namespace, and registers the public functions each file
defines together with the help text extracted from that file.

Rules
-----
* Root-first, then lexical by file name within a directory, so the
  deepest, last-sorted definition wins.
* A missing directory or a directory without Ravenfiles is skipped.
* A file that fails to compile or raises at top level aborts the whole
  load with :class:`~rvn.exceptions.RavenfileError`.
"""

from __future__ import annotations

import ast
import builtins
import logging
from pathlib import Path
from typing import Any

from rvn.core.comments import extract_help
from rvn.core.models import RavenContext, is_public_name
from rvn.core.registry import CommandRegistry
from rvn.exceptions import BoundaryError, RavenfileError

logger = logging.getLogger(__name__)

RAVENFILE_NAME: str = "Ravenfile"
NAMESPACE_NAME: str = "ravenfile"


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------

def directory_chain(root: Path, cwd: Path) -> list[Path]:
    """Return every directory from *root* down to *cwd*, both inclusive.

    Raises
    ------
    BoundaryError
        If *cwd* is neither *root* nor one of its descendants.
    """
    root = root.resolve()
    cwd = cwd.resolve()
    if cwd != root and root not in cwd.parents:
        raise BoundaryError(
            f"{cwd} is outside the root directory {root}",
            hint="Run rvn from the root directory or one of its subdirectories.",
        )

    chain = [root]
    current = root
    for part in cwd.relative_to(root).parts:
        current = current / part
        chain.append(current)
    return chain


def is_ravenfile_name(name: str) -> bool:
    return name == RAVENFILE_NAME or name.startswith(f"{RAVENFILE_NAME}.")


def find_ravenfiles(directory: Path) -> list[Path]:
    """Return the Ravenfiles directly inside *directory*, sorted by name."""
    if not directory.is_dir():
        return []
    matches = [
        entry
        for entry in directory.iterdir()
        if is_ravenfile_name(entry.name) and entry.is_file()
    ]
    return sorted(matches, key=lambda entry: entry.name)


def discover_ravenfiles(root: Path, cwd: Path) -> list[Path]:
    """Return every Ravenfile between *root* and *cwd* in load order."""
    files: list[Path] = []
    for directory in directory_chain(root, cwd):
        found = find_ravenfiles(directory)
        logger.debug("%s: %d Ravenfile(s)", directory, len(found))
        files.extend(found)
    return files


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

class RavenfileLoader:
    """Executes Ravenfiles in one namespace and records their commands.

    Parameters
    ----------
    context:
        Exposed to every Ravenfile as the ``raven`` global.
    """

    def __init__(self, context: RavenContext) -> None:
        self._context: RavenContext = context
        self._namespace: dict[str, Any] = {
            "__name__": NAMESPACE_NAME,
            "__builtins__": builtins,
            "raven": context,
        }
        self._baseline: frozenset[str] = frozenset(self._namespace)
        self._registry: CommandRegistry = CommandRegistry()

    @property
    def namespace(self) -> dict[str, Any]:
        return self._namespace

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def load(self, files: list[Path]) -> CommandRegistry:
        """Load *files* in order and return the frozen registry."""
        for path in files:
            self.load_file(path)
        self._registry.freeze()
        return self._registry

    def load_file(self, path: Path) -> None:
        """Execute one Ravenfile and register the commands it defines."""
        logger.debug("loading %s", path)
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise RavenfileError(
                f"cannot read {path}: {exc}",
                hint="Ravenfiles must be readable UTF-8 Python source.",
            ) from exc

        try:
            tree = ast.parse(source, filename=str(path))
            code = compile(tree, str(path), "exec")
        except SyntaxError as exc:
            raise RavenfileError(
                f"syntax error in {path}, line {exc.lineno}: {exc.msg}",
            ) from exc

        self._namespace["__file__"] = str(path)
        try:
            exec(code, self._namespace)
        except Exception as exc:
            raise RavenfileError(
                f"failed to load {path}: {type(exc).__name__}: {exc}",
                hint="Run with --trace for the full traceback.",
            ) from exc
        self._context.files.append(path)

        self._register_definitions(path, tree, source)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def _register_definitions(self, path: Path, tree: ast.Module, source: str) -> None:
        """Register each public top-level ``def`` with this file's help."""
        help_by_name = dict(extract_help(source))

        for name in _defined_functions(tree):
            if name in self._baseline:
                logger.debug("%s: not shadowing built-in name %s", path, name)
                continue
            if not is_public_name(name):
                continue
            func = self._namespace.get(name)
            if not callable(func):
                logger.debug("%s: %s is no longer callable after load", path, name)
                continue
            self._registry.register(name, func, help_by_name.get(name, ()), source=path)


def _defined_functions(tree: ast.Module) -> list[str]:
    """Names of top-level function definitions, first occurrence order."""
    names: list[str] = []
    for node in tree.body:
        if isinstance(node, ast.FunctionDef) and node.name not in names:
            names.append(node.name)
    return names


def load_registry(root: Path, cwd: Path, *, trace: bool = False) -> CommandRegistry:
    """Discover and load every Ravenfile between *root* and *cwd*.

    Raises
    ------
    BoundaryError
        If *cwd* is outside *root*; nothing is loaded.
    RavenfileError
        If any Ravenfile fails to compile or execute.
    """
    files = discover_ravenfiles(root, cwd)
    context = RavenContext(root=root.resolve(), cwd=cwd.resolve(), trace=trace)
    return RavenfileLoader(context).load(files)
