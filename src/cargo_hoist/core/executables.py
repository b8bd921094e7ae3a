"""Utilities for working with executables."""

import logging
import stat
from pathlib import Path

from cargo_hoist.core.errors import NotExecutableError

logger = logging.getLogger(__name__)

EXECUTABLE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def probe(path: Path) -> str:
    """Return the file name of ``path`` if it is an executable regular file.

    Symlinks are followed, so a link pointing at an executable passes.

    Args:
        path: Filesystem entry to check

    Returns:
        The base name of the entry

    Raises:
        NotExecutableError: If the entry is a directory, a special file, or
            has no executable permission bit for owner, group or other
        OSError: If the entry's metadata cannot be read
    """
    st = path.stat()
    if not stat.S_ISREG(st.st_mode) or not st.st_mode & EXECUTABLE_BITS:
        raise NotExecutableError(path)

    logger.debug("retrieved binary name: %s", path.name)
    return path.name
