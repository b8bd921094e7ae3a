"""Exception taxonomy for hoist operations.

Filesystem failures are not wrapped: they surface as the builtin ``OSError``
family. Everything below is a domain error that the CLI renders as a styled
``Error:`` line and exit code 1.
"""

from pathlib import Path


class HoistError(Exception):
    """Base class for all cargo-hoist domain errors."""


class NotExecutableError(HoistError):
    """Raised when a path is not a regular file with an executable bit set."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"{path} is not executable")
        self.path = path


class BinaryNotFoundError(HoistError):
    """Raised when a requested binary name has no matching binary."""

    def __init__(self, name: str, where: str = "hoist registry") -> None:
        super().__init__(f"Failed to find binary '{name}' in {where}")
        self.name = name


class InvalidNameError(HoistError):
    """Raised when a binary's name or location cannot be represented as text."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Binary path is not valid UTF-8 text: {path!r}")
        self.path = path


class CorruptRegistryError(HoistError):
    """Raised when the registry file exists but cannot be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(
            f"Hoist registry at {path} is corrupt: {reason}\n"
            f"Inspect the file, or delete it and run 'cargo-hoist install' to recreate it."
        )
        self.path = path
        self.reason = reason


class HookInstallError(HoistError):
    """Raised when the shell hook cannot be installed."""
