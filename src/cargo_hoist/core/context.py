"""Application context with dependency injection."""

from dataclasses import dataclass
from pathlib import Path

from cargo_hoist.core.config import HoistConfig, load_hoist_config
from cargo_hoist.core.shell import RealShell, Shell


@dataclass(frozen=True)
class HoistContext:
    """Immutable context holding all dependencies for hoist operations.

    Created at CLI entry point and threaded through the commands.
    """

    config: HoistConfig
    shell: Shell
    cwd: Path  # Current working directory at CLI invocation
    interactive: bool  # Whether prompts may be shown

    @staticmethod
    def for_test(
        config: HoistConfig,
        *,
        cwd: Path,
        shell: Shell | None = None,
        interactive: bool = False,
    ) -> "HoistContext":
        """Create a test context; defaults to a FakeShell and no prompts."""
        if shell is None:
            from tests.fakes.shell import FakeShell

            shell = FakeShell(detected_shell=("bash", config.home_dir / ".bashrc"))

        return HoistContext(config=config, shell=shell, cwd=cwd, interactive=interactive)


def create_context(*, interactive: bool) -> HoistContext:
    """Create production context with real implementations.

    Args:
        interactive: Whether the session is attached to a terminal
    """
    config = load_hoist_config()
    return HoistContext(
        config=config,
        shell=RealShell(config.home_dir),
        cwd=Path.cwd(),
        interactive=interactive,
    )
