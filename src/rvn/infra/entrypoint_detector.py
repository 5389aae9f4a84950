"""Infrastructure: locating the ``rvn`` entry point on PATH.

Used by the first-run advice to decide whether the user needs to be
told how to put the console script on their search path.

Rules
-----
* Detection via :func:`shutil.which` only, no subprocess.
* No permanent PATH modification.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import platform
import shutil
import sysconfig
from dataclasses import dataclass
from pathlib import Path


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class EntryPointStatus:
    """Result of an entry-point probe.

    Attributes
    ----------
    found : bool
        Whether the entry point was located on PATH.
    path : Path | None
        Absolute path to the resolved script, or ``None``.
    scripts_dir : Path
        Directory the installer places console scripts in.
    path_commands : tuple[str, ...]
        Suggested shell lines that add *scripts_dir* to PATH.  Empty
        when the entry point is already reachable.
    """

    found: bool
    path: Path | None
    scripts_dir: Path
    path_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_entry_point(name: str = "rvn") -> EntryPointStatus:
    """Probe PATH for *name*."""
    scripts_dir = Path(sysconfig.get_path("scripts"))
    result = shutil.which(name)

    if result is not None:
        return EntryPointStatus(
            found=True,
            path=Path(result).resolve(),
            scripts_dir=scripts_dir,
            path_commands=(),
        )

    return EntryPointStatus(
        found=False,
        path=None,
        scripts_dir=scripts_dir,
        path_commands=_platform_path_commands(scripts_dir),
    )


# ---------------------------------------------------------------------------
# Platform-specific guidance
# ---------------------------------------------------------------------------

def _platform_path_commands(scripts_dir: Path) -> tuple[str, ...]:
    """Return PATH setup lines appropriate for the current OS."""
    system = platform.system().lower()
    if system == "windows":
        return (f'setx PATH "%PATH%;{scripts_dir}"',)
    return (
        f'echo \'export PATH="{scripts_dir}:$PATH"\' >> ~/.bashrc',
        f'echo \'export PATH="{scripts_dir}:$PATH"\' >> ~/.zshrc',
    )
