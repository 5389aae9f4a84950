"""Runtime settings: the root boundary, working directory and config paths.

This is the only module that reads environment variables; everything
else receives paths explicitly.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

ENTRY_POINT: str = "rvn"
MARKER_NAME: str = "path-advised"


@dataclass
class Settings:
    root_dir: Path = field(default_factory=Path.home)
    working_dir: Path = field(default_factory=Path.cwd)
    config_dir: Path = field(default_factory=lambda: Path.home() / ".config" / "rvn")
    entry_point: str = ENTRY_POINT
    trace: bool = False

    @property
    def marker_path(self) -> Path:
        """Existence-only marker written after the PATH advice is shown."""
        return self.config_dir / MARKER_NAME


def _config_dir(environ: Mapping[str, str], home: Path) -> Path:
    if explicit := environ.get("RVN_CONFIG_DIR"):
        return Path(explicit).expanduser()
    if xdg := environ.get("XDG_CONFIG_HOME"):
        return Path(xdg).expanduser() / "rvn"
    return home / ".config" / "rvn"


def load_settings(
    environ: Mapping[str, str] | None = None,
    *,
    trace: bool = False,
    cwd: Path | None = None,
) -> Settings:
    """Build settings with priority: explicit args > env > defaults.

    ``RVN_ROOT`` overrides the root boundary (default: home directory);
    ``RVN_CONFIG_DIR`` or ``XDG_CONFIG_HOME`` relocate the config dir.
    """
    env = os.environ if environ is None else environ
    home = Path.home()

    root = Path(env["RVN_ROOT"]).expanduser() if env.get("RVN_ROOT") else home
    return Settings(
        root_dir=root,
        working_dir=cwd if cwd is not None else Path.cwd(),
        config_dir=_config_dir(env, home),
        trace=trace,
    )
