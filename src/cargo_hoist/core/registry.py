"""Hoist registry storage.

The registry is the durable set of known binaries, stored at
``~/.hoist/registry.toml``:

    [[binaries]]
    name = "binary1"
    location = "/home/user/project/target/release/binary1"

The ``binaries`` array is omitted when the registry is empty. Every save is a
full truncate-and-rewrite of the file; there is no incremental append.
"""

import logging
import os
import tomllib
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomlkit

from cargo_hoist.core.binaries import BinaryRecord
from cargo_hoist.core.config import HoistConfig
from cargo_hoist.core.errors import BinaryNotFoundError, CorruptRegistryError

logger = logging.getLogger(__name__)


@dataclass
class Registry:
    """In-memory set of registered binaries, unique by (name, location)."""

    binaries: set[BinaryRecord] = field(default_factory=set)

    def insert(self, record: BinaryRecord) -> bool:
        """Add ``record`` unless an identical record is already registered.

        Returns:
            True if the record was added, False if it was already present
        """
        if record in self.binaries:
            return False
        self.binaries.add(record)
        return True

    def find(self, name: str) -> BinaryRecord:
        """Find a registered binary by exact name.

        When several records share the name, the first in sorted order is
        returned; lookups never disambiguate.

        Raises:
            BinaryNotFoundError: If no record has this name
        """
        for record in self.sorted():
            if record.name == name:
                return record
        raise BinaryNotFoundError(name)

    def by_name(self) -> dict[str, list[BinaryRecord]]:
        """Group records by name; lists hold more than one entry on conflicts."""
        grouped: dict[str, list[BinaryRecord]] = defaultdict(list)
        for record in self.sorted():
            grouped[record.name].append(record)
        return dict(grouped)

    def sorted(self) -> list[BinaryRecord]:
        return sorted(self.binaries)


def registry_to_toml(registry: Registry) -> str:
    """Serialize a registry to TOML, with records in sorted order."""
    doc = tomlkit.document()
    if registry.binaries:
        binaries = tomlkit.aot()
        for record in registry.sorted():
            entry = tomlkit.table()
            entry["name"] = record.name
            entry["location"] = str(record.location)
            binaries.append(entry)
        doc["binaries"] = binaries
    return tomlkit.dumps(doc)


def registry_from_toml(content: str, path: Path) -> Registry:
    """Parse registry TOML.

    Args:
        content: TOML document text
        path: Registry file path (for error messages)

    Raises:
        CorruptRegistryError: If the document is not valid TOML or does not
            have the registry's shape
    """
    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise CorruptRegistryError(path, str(e)) from e

    entries: Any = data.get("binaries", [])
    if not isinstance(entries, list):
        raise CorruptRegistryError(path, "'binaries' must be an array of tables")

    registry = Registry()
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise CorruptRegistryError(path, f"binaries[{i}] is not a table")
        name = entry.get("name")
        location = entry.get("location")
        if not isinstance(name, str) or not isinstance(location, str):
            raise CorruptRegistryError(
                path, f"binaries[{i}] must have string 'name' and 'location' fields"
            )
        registry.insert(BinaryRecord(name=name, location=Path(location)))
    return registry


class RegistryStore:
    """Reads and writes the registry file described by a HoistConfig."""

    def __init__(self, config: HoistConfig) -> None:
        self._config = config

    @property
    def path(self) -> Path:
        return self._config.registry_path

    def exists(self) -> bool:
        return self.path.exists()

    def setup(self) -> None:
        """Create the hoist directory and an empty registry file if missing."""
        hoist_dir = self._config.hoist_dir
        if not hoist_dir.exists():
            logger.info("Creating %s directory", hoist_dir)
            hoist_dir.mkdir(parents=True)
        if not self.exists():
            logger.info("Creating empty registry at %s", self.path)
            self.save(Registry())

    def load(self) -> Registry:
        """Load the registry file.

        Raises:
            FileNotFoundError: If setup() has not created the file yet
            CorruptRegistryError: If the file is not UTF-8 or cannot be parsed
        """
        try:
            content = self.path.read_bytes().decode("utf-8")
        except UnicodeDecodeError as e:
            raise CorruptRegistryError(self.path, str(e)) from e
        registry = registry_from_toml(content, self.path)
        logger.debug("Loaded %d binaries from %s", len(registry.binaries), self.path)
        return registry

    def save(self, registry: Registry) -> None:
        """Rewrite the registry file with the full contents of ``registry``.

        The document is encoded before the file is opened, so an unencodable
        record leaves the existing file untouched.
        """
        content = registry_to_toml(registry).encode("utf-8")
        with self.path.open("wb") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        logger.debug("Wrote %d binaries to %s", len(registry.binaries), self.path)

    def reset(self) -> None:
        """Replace the registry with an empty one."""
        self.save(Registry())
