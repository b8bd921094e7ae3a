"""Shell detection and one-time hook installation.

The hook is a ``cargo`` wrapper function appended to the user's shell profile.
It registers freshly built binaries by running ``cargo-hoist install`` before
every cargo invocation. A zero-byte marker file in the hoist directory records
that the hook was installed so the user is asked only once.
"""

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path

from cargo_hoist.core.config import HoistConfig
from cargo_hoist.core.errors import HookInstallError

logger = logging.getLogger(__name__)

INSTALL_BASH_FUNCTION = """
function cargo() {
    if command -v cargo-hoist &>/dev/null; then
      cargo-hoist install --quiet
    fi
    command cargo "$@"
}
"""


def detect_shell_from_env(shell_env: str | None, home: Path) -> tuple[str, Path]:
    """Map a $SHELL value to a shell name and its profile file.

    zsh users get ~/.zshrc; everything else, including an unset $SHELL,
    falls back to bash and ~/.bashrc.
    """
    if shell_env and "zsh" in Path(shell_env).name:
        return ("zsh", home / ".zshrc")
    return ("bash", home / ".bashrc")


class Shell(ABC):
    """Abstract interface for shell environment detection."""

    @abstractmethod
    def detect_shell(self) -> tuple[str, Path]:
        """Detect the user's shell.

        Returns:
            Tuple of (shell_name, rc_file_path)
        """
        ...


class RealShell(Shell):
    """Production implementation reading $SHELL from the process environment."""

    def __init__(self, home: Path) -> None:
        self._home = home

    def detect_shell(self) -> tuple[str, Path]:
        return detect_shell_from_env(os.environ.get("SHELL"), self._home)


def is_hook_installed(config: HoistConfig) -> bool:
    return config.hook_marker_path.exists()


def install_hook(config: HoistConfig, shell: Shell) -> Path:
    """Append the cargo hook to the user's shell profile.

    Does nothing when the hook marker already exists.

    Returns:
        Path of the shell profile holding the hook

    Raises:
        HookInstallError: If the detected shell profile does not exist
    """
    shell_name, rc_file = shell.detect_shell()
    if is_hook_installed(config):
        return rc_file

    if not rc_file.exists():
        raise HookInstallError(f"{shell_name} profile {rc_file} does not exist")

    with rc_file.open("a", encoding="utf-8") as f:
        f.write(INSTALL_BASH_FUNCTION)
    logger.info("Installed cargo hook in %s", rc_file)

    config.hoist_dir.mkdir(parents=True, exist_ok=True)
    config.hook_marker_path.touch()
    return rc_file
