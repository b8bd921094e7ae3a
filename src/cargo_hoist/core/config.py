"""Hoist configuration resolved once at the CLI entry point.

All filesystem locations the core touches are carried by ``HoistConfig`` and
passed explicitly into every operation, so nothing below the CLI reads the
process environment.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

HOIST_DIR_NAME = ".hoist"
REGISTRY_FILE_NAME = "registry.toml"
HOOK_MARKER_NAME = "hook"
DEFAULT_BUILD_DIR_NAME = "target"


@dataclass(frozen=True)
class HoistConfig:
    """Immutable hoist configuration.

    Attributes:
        home_dir: The user's home directory (shell profiles live here)
        hoist_dir: Directory holding the registry and hook marker (~/.hoist)
        build_dir_name: Name of the build-output directory inside a project
    """

    home_dir: Path
    hoist_dir: Path
    build_dir_name: str = DEFAULT_BUILD_DIR_NAME

    @property
    def registry_path(self) -> Path:
        return self.hoist_dir / REGISTRY_FILE_NAME

    @property
    def hook_marker_path(self) -> Path:
        return self.hoist_dir / HOOK_MARKER_NAME

    @staticmethod
    def for_home(home_dir: Path) -> "HoistConfig":
        """Create a config rooted at ``home_dir`` with default locations."""
        return HoistConfig(home_dir=home_dir, hoist_dir=home_dir / HOIST_DIR_NAME)


def load_hoist_config(environ: Mapping[str, str] | None = None) -> HoistConfig:
    """Build a HoistConfig from environment variables.

    Resolution order for the hoist directory:
    1. HOIST_DIR environment variable
    2. $HOME/.hoist
    3. Path.home() / ".hoist"

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        HoistConfig for this process
    """
    env = environ if environ is not None else os.environ

    if home := env.get("HOME"):
        home_dir = Path(home)
    else:
        home_dir = Path.home()

    if hoist_dir := env.get("HOIST_DIR"):
        return HoistConfig(home_dir=home_dir, hoist_dir=Path(hoist_dir).expanduser())

    return HoistConfig.for_home(home_dir)
