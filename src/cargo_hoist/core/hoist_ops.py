"""Hoist operations: install, hoist, find, list and nuke.

Each operation makes storage exist, loads the registry fully, and (for
mutating operations) rewrites it in one go. The core never prompts: when a
choice is needed, ``hoist`` returns ``NeedsSelection`` or ``ConflictDetected``
and the caller finishes with ``hoist_records`` once it has chosen.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from cargo_hoist.core.binaries import BinaryRecord
from cargo_hoist.core.config import HoistConfig
from cargo_hoist.core.errors import BinaryNotFoundError
from cargo_hoist.core.project import Project
from cargo_hoist.core.registry import Registry, RegistryStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstallResult:
    """Outcome of an install.

    Attributes:
        discovered: Records found in the project
        added: Records that were not yet registered
        saved: Whether the registry file was rewritten
    """

    discovered: list[BinaryRecord]
    added: list[BinaryRecord]
    saved: bool


@dataclass(frozen=True)
class HoistCompleted:
    """Every requested binary was copied."""

    copied: list[BinaryRecord]


@dataclass(frozen=True)
class NeedsSelection:
    """No names were requested; the caller must pick from the candidates."""

    candidates: list[BinaryRecord]


@dataclass(frozen=True)
class ConflictDetected:
    """Some requested names match more than one registered binary.

    Attributes:
        resolved: Records for names with exactly one candidate
        conflicts: Candidates for each ambiguous name
    """

    resolved: list[BinaryRecord]
    conflicts: dict[str, list[BinaryRecord]]


HoistOutcome = HoistCompleted | NeedsSelection | ConflictDetected


def _open_registry(config: HoistConfig) -> tuple[RegistryStore, Registry]:
    store = RegistryStore(config)
    store.setup()
    return store, store.load()


def install(
    config: HoistConfig,
    *,
    project_root: Path | None,
    names: list[str],
    cwd: Path,
) -> InstallResult:
    """Register a project's binaries in the hoist registry.

    With no names, every executable in the project's build output is
    registered; otherwise only the named ones, failing if any is missing.
    Discovering nothing leaves the registry file untouched.

    Args:
        config: Hoist configuration
        project_root: Project directory (defaults to ``cwd``)
        names: Binary names to register, or empty for all
        cwd: Directory the command was invoked from

    Raises:
        BinaryNotFoundError: If a requested name was not built by the project
    """
    store, registry = _open_registry(config)

    project = Project.at(project_root, cwd, config.build_dir_name)
    if names:
        project.set_binaries(names)
    else:
        project.load()
    discovered = project.to_binary_records()

    added = [record for record in discovered if registry.insert(record)]

    if not discovered:
        logger.warning("No binaries found in %s, leaving registry untouched", project.build_dir)
        return InstallResult(discovered=discovered, added=added, saved=False)

    store.save(registry)
    logger.info("Registered %d binaries (%d new)", len(discovered), len(added))
    return InstallResult(discovered=discovered, added=added, saved=True)


def _gather_candidates(config: HoistConfig, names: list[str], cwd: Path) -> set[BinaryRecord]:
    _, registry = _open_registry(config)
    candidates = set(registry.binaries)

    # Fall back to the local build output so a freshly built binary can be
    # hoisted without installing it first.
    if not any(record.name in names for record in candidates):
        project = Project.at(None, cwd, config.build_dir_name)
        project.load()
        local = project.to_binary_records()
        logger.debug("Adding %d local binaries from %s", len(local), project.build_dir)
        candidates.update(local)

    return candidates


def hoist(
    config: HoistConfig,
    names: list[str],
    *,
    cwd: Path,
    select_all: bool = False,
) -> HoistOutcome:
    """Copy registered binaries into ``cwd``.

    Args:
        config: Hoist configuration
        names: Binary names to hoist; empty means the caller has not chosen
        cwd: Destination directory, also scanned for local binaries
        select_all: With no names, hoist every candidate instead of asking.
            Names shared by several candidates are still reported as conflicts

    Returns:
        HoistCompleted when copies were made, NeedsSelection when no names
        were given, ConflictDetected when a name is ambiguous. Nothing is
        copied unless HoistCompleted is returned.

    Raises:
        BinaryNotFoundError: If a requested name has no candidate
        OSError: If a copy fails
    """
    candidates = sorted(_gather_candidates(config, names, cwd))

    by_name: dict[str, list[BinaryRecord]] = {}
    if not names:
        if not select_all:
            return NeedsSelection(candidates=candidates)
        for record in candidates:
            by_name.setdefault(record.name, []).append(record)

    for name in dict.fromkeys(names):
        matches = [record for record in candidates if record.name == name]
        if not matches:
            raise BinaryNotFoundError(name)
        by_name[name] = matches

    resolved = [matches[0] for matches in by_name.values() if len(matches) == 1]
    conflicts = {name: matches for name, matches in by_name.items() if len(matches) > 1}
    if conflicts:
        logger.debug("Conflicting binaries: %s", sorted(conflicts))
        return ConflictDetected(resolved=resolved, conflicts=conflicts)

    return HoistCompleted(copied=hoist_records(resolved, cwd))


def hoist_records(records: list[BinaryRecord], dest_dir: Path) -> list[BinaryRecord]:
    """Copy each record into ``dest_dir``, stopping at the first failure."""
    for record in records:
        record.copy_to_dir(dest_dir)
        logger.info("Hoisted %s from %s", record.name, record.location)
    return list(records)


def find(config: HoistConfig, name: str) -> BinaryRecord:
    """Look up a registered binary by name.

    Raises:
        BinaryNotFoundError: If the registry has no binary with this name
    """
    _, registry = _open_registry(config)
    return registry.find(name)


def list_binaries(config: HoistConfig) -> list[BinaryRecord]:
    """Return every registered binary in sorted order."""
    _, registry = _open_registry(config)
    return registry.sorted()


def nuke(config: HoistConfig) -> None:
    """Empty the hoist registry."""
    store = RegistryStore(config)
    store.setup()
    store.reset()
    logger.info("Reset hoist registry at %s", store.path)
