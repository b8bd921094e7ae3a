"""Hoisted binary records."""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class BinaryRecord:
    """A named binary and the canonical path it was built at.

    Identity is the full (name, location) pair, so two records with the same
    name but different locations are distinct and can both live in a registry.
    """

    name: str
    location: Path

    def copy_to_dir(self, directory: Path) -> Path:
        """Copy the binary into ``directory`` under its name.

        Permission bits are preserved so the copy stays executable.

        Returns:
            Path of the copied file

        Raises:
            OSError: If the source is missing or the destination is not writable
        """
        dest = directory / self.name
        logger.debug("Copying binary %s to %s", self.location, dest)
        shutil.copy(self.location, dest)
        return dest
