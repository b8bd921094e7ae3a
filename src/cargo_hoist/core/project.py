"""Cargo project discovery.

A ``Project`` wraps a project root and the executables found in its
build-output directory (``target/<profile>/``). Discovered binaries are
transient and never persisted; the registry is built from them.
"""

import logging
import os
from pathlib import Path

from cargo_hoist.core.binaries import BinaryRecord
from cargo_hoist.core.config import DEFAULT_BUILD_DIR_NAME
from cargo_hoist.core.errors import BinaryNotFoundError, InvalidNameError, NotExecutableError
from cargo_hoist.core.executables import probe

logger = logging.getLogger(__name__)


class Project:
    """A project root and the binaries discovered under its build output."""

    def __init__(self, root: Path, build_dir_name: str = DEFAULT_BUILD_DIR_NAME) -> None:
        self.root = root
        self.build_dir_name = build_dir_name
        self.binaries: list[Path] = []

    @staticmethod
    def at(
        root: Path | None, cwd: Path, build_dir_name: str = DEFAULT_BUILD_DIR_NAME
    ) -> "Project":
        """Create a project rooted at ``root``, defaulting to ``cwd``.

        Relative roots are interpreted against ``cwd``.
        """
        if root is None:
            return Project(cwd, build_dir_name)
        return Project(cwd / root, build_dir_name)

    @property
    def build_dir(self) -> Path:
        return self.root / self.build_dir_name

    def list_targets(self) -> list[str]:
        """Return the names of the profile directories under the build output.

        A project without a build-output directory (or with a file in its place)
        has no targets.
        """
        targets: list[str] = []
        if not self.build_dir.is_dir():
            return targets

        with os.scandir(self.build_dir) as entries:
            for entry in entries:
                try:
                    is_dir = entry.is_dir()
                except OSError as e:
                    logger.warning("Failed to read entry %s: %s", entry.path, e)
                    continue
                if not is_dir:
                    continue
                logger.debug("Found target: %s", entry.name)
                targets.append(entry.name)

        logger.debug("Returning %d targets", len(targets))
        return targets

    @staticmethod
    def extract_binaries(target: Path) -> list[Path]:
        """Return canonical paths of the executables directly inside ``target``.

        Entries that are not executable, or that cannot be inspected, are
        skipped. Order follows the filesystem and is not stable.
        """
        binaries: list[Path] = []
        if not target.is_dir():
            return binaries

        with os.scandir(target) as entries:
            for entry in entries:
                path = Path(entry.path)
                try:
                    probe(path)
                    canonical = path.resolve(strict=True)
                except NotExecutableError:
                    logger.debug("Skipping non-executable entry: %s", path)
                    continue
                except OSError as e:
                    logger.warning("Failed to get exec path for %s: %s", path, e)
                    continue
                logger.debug("Found binary: %s", canonical)
                binaries.append(canonical)

        logger.debug("Returning %d binaries", len(binaries))
        return binaries

    def load(self) -> None:
        """Discover binaries in every target, replacing any previous result."""
        binaries: list[Path] = []
        for target in self.list_targets():
            binaries.extend(Project.extract_binaries(self.build_dir / target))
        logger.debug("Loaded %d binaries from %s", len(binaries), self.root)
        self.binaries = binaries

    def set_binaries(self, names: list[str]) -> None:
        """Restrict the project's binaries to the requested names.

        Each name takes the first discovered binary with that file name.

        Raises:
            BinaryNotFoundError: If any name has no discovered binary. The
                project's binaries are left as loaded in that case.
        """
        self.load()
        selected: list[Path] = []
        for name in names:
            match = next((b for b in self.binaries if b.name == name), None)
            if match is None:
                raise BinaryNotFoundError(name, where=f"{self.build_dir}")
            selected.append(match)
        self.binaries = selected

    def to_binary_records(self) -> list[BinaryRecord]:
        """Build a BinaryRecord for each discovered binary.

        Raises:
            InvalidNameError: If a file name or its location holds bytes that
                are not valid UTF-8
        """
        records: list[BinaryRecord] = []
        for binary in self.binaries:
            name = binary.name
            try:
                str(binary).encode("utf-8")
            except UnicodeEncodeError:
                raise InvalidNameError(binary) from None
            records.append(BinaryRecord(name=name, location=binary))
        return records
