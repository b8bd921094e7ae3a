"""Tests for install, hoist, find, list and nuke."""

import logging
import os
from pathlib import Path

import pytest

from cargo_hoist.core import hoist_ops
from cargo_hoist.core.binaries import BinaryRecord
from cargo_hoist.core.config import HoistConfig
from cargo_hoist.core.errors import BinaryNotFoundError, InvalidNameError
from cargo_hoist.core.hoist_ops import ConflictDetected, HoistCompleted, NeedsSelection
from cargo_hoist.core.registry import Registry, RegistryStore
from tests.test_utils.binaries import create_binaries, make_config


@pytest.fixture
def config(tmp_path: Path) -> HoistConfig:
    return make_config(tmp_path)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    root = tmp_path / "work"
    root.mkdir()
    return root


def test_install_registers_all_binaries(config: HoistConfig, project: Path) -> None:
    binary1, binary2 = create_binaries(project)

    result = hoist_ops.install(config, project_root=None, names=[], cwd=project)

    assert result.saved is True
    assert RegistryStore(config).load() == Registry(
        binaries={
            BinaryRecord(name="binary1", location=binary1),
            BinaryRecord(name="binary2", location=binary2),
        }
    )


def test_install_with_explicit_project_root(
    config: HoistConfig, project: Path, workdir: Path
) -> None:
    create_binaries(project)

    hoist_ops.install(config, project_root=project, names=[], cwd=workdir)

    assert {r.name for r in hoist_ops.list_binaries(config)} == {"binary1", "binary2"}


def test_install_named_binaries_only(config: HoistConfig, project: Path) -> None:
    binary1, _ = create_binaries(project)

    hoist_ops.install(config, project_root=None, names=["binary1"], cwd=project)

    assert hoist_ops.list_binaries(config) == [BinaryRecord(name="binary1", location=binary1)]


def test_install_unknown_name_fails_without_writing(config: HoistConfig, project: Path) -> None:
    create_binaries(project)

    with pytest.raises(BinaryNotFoundError):
        hoist_ops.install(config, project_root=None, names=["binary1", "nope"], cwd=project)

    assert hoist_ops.list_binaries(config) == []


def test_install_is_idempotent(config: HoistConfig, project: Path) -> None:
    create_binaries(project)
    registry_path = config.registry_path

    first = hoist_ops.install(config, project_root=None, names=[], cwd=project)
    content = registry_path.read_bytes()
    for _ in range(3):
        again = hoist_ops.install(config, project_root=None, names=[], cwd=project)
        assert again.added == []

    assert len(first.added) == 2
    assert registry_path.read_bytes() == content


def test_install_merges_with_existing_records(
    config: HoistConfig, project: Path, tmp_path: Path
) -> None:
    other = tmp_path / "other"
    (other_bin,) = create_binaries(other, names=("tool",))
    hoist_ops.install(config, project_root=other, names=[], cwd=tmp_path)
    create_binaries(project)

    hoist_ops.install(config, project_root=None, names=[], cwd=project)

    names = [r.name for r in hoist_ops.list_binaries(config)]
    assert names == ["binary1", "binary2", "tool"]
    assert hoist_ops.find(config, "tool").location == other_bin


def test_install_with_nothing_found_keeps_registry(
    config: HoistConfig, project: Path, tmp_path: Path
) -> None:
    other = tmp_path / "other"
    create_binaries(other)
    hoist_ops.install(config, project_root=other, names=[], cwd=tmp_path)
    before = config.registry_path.read_bytes()

    result = hoist_ops.install(config, project_root=None, names=[], cwd=project)

    assert result.saved is False
    assert result.discovered == []
    assert config.registry_path.read_bytes() == before


def test_install_then_hoist_scenario(config: HoistConfig, project: Path, workdir: Path) -> None:
    binary1, binary2 = create_binaries(project)
    hoist_ops.install(config, project_root=None, names=[], cwd=project)

    outcome = hoist_ops.hoist(config, ["binary1"], cwd=workdir)

    assert outcome == HoistCompleted(copied=[BinaryRecord(name="binary1", location=binary1)])
    hoisted = workdir / "binary1"
    assert hoisted.is_file()
    assert os.access(hoisted, os.X_OK)
    assert hoisted.stat().st_mode & 0o777 == binary1.stat().st_mode & 0o777
    assert not (workdir / "binary2").exists()


def test_hoist_falls_back_to_local_build_output(config: HoistConfig, project: Path) -> None:
    create_binaries(project)

    outcome = hoist_ops.hoist(config, ["binary2"], cwd=project)

    assert isinstance(outcome, HoistCompleted)
    assert (project / "binary2").is_file()
    # Falling back does not register anything.
    assert hoist_ops.list_binaries(config) == []


def test_hoist_unknown_name_raises(config: HoistConfig, workdir: Path) -> None:
    with pytest.raises(BinaryNotFoundError):
        hoist_ops.hoist(config, ["missing"], cwd=workdir)


def test_hoist_partially_unknown_names_copy_nothing(
    config: HoistConfig, project: Path, workdir: Path
) -> None:
    create_binaries(project)
    hoist_ops.install(config, project_root=None, names=[], cwd=project)

    with pytest.raises(BinaryNotFoundError):
        hoist_ops.hoist(config, ["binary1", "missing"], cwd=workdir)

    assert list(workdir.iterdir()) == []


def test_hoist_without_names_needs_selection(
    config: HoistConfig, project: Path, workdir: Path
) -> None:
    create_binaries(project)
    hoist_ops.install(config, project_root=None, names=[], cwd=project)

    outcome = hoist_ops.hoist(config, [], cwd=workdir)

    assert isinstance(outcome, NeedsSelection)
    assert [r.name for r in outcome.candidates] == ["binary1", "binary2"]
    assert list(workdir.iterdir()) == []


def test_hoist_without_names_select_all(config: HoistConfig, project: Path, workdir: Path) -> None:
    create_binaries(project)
    hoist_ops.install(config, project_root=None, names=[], cwd=project)

    outcome = hoist_ops.hoist(config, [], cwd=workdir, select_all=True)

    assert isinstance(outcome, HoistCompleted)
    assert sorted(p.name for p in workdir.iterdir()) == ["binary1", "binary2"]


def test_hoist_conflict_is_reported_not_resolved(
    config: HoistConfig, tmp_path: Path, workdir: Path
) -> None:
    (foo_a, bar) = create_binaries(tmp_path / "a", names=("foo", "bar"))
    (foo_b,) = create_binaries(tmp_path / "b", names=("foo",))
    hoist_ops.install(config, project_root=tmp_path / "a", names=[], cwd=tmp_path)
    hoist_ops.install(config, project_root=tmp_path / "b", names=[], cwd=tmp_path)

    outcome = hoist_ops.hoist(config, ["foo", "bar"], cwd=workdir)

    assert isinstance(outcome, ConflictDetected)
    assert outcome.resolved == [BinaryRecord(name="bar", location=bar)]
    assert sorted(r.location for r in outcome.conflicts["foo"]) == sorted([foo_a, foo_b])
    assert list(workdir.iterdir()) == []


def test_hoist_records_copies_caller_selection(
    config: HoistConfig, tmp_path: Path, workdir: Path
) -> None:
    create_binaries(tmp_path / "a", names=("foo",))
    (foo_b,) = create_binaries(tmp_path / "b", names=("foo",))
    foo_b.write_text("#!/bin/sh\necho b\n", encoding="utf-8")
    hoist_ops.install(config, project_root=tmp_path / "a", names=[], cwd=tmp_path)
    hoist_ops.install(config, project_root=tmp_path / "b", names=[], cwd=tmp_path)
    outcome = hoist_ops.hoist(config, ["foo"], cwd=workdir)
    assert isinstance(outcome, ConflictDetected)

    chosen = next(r for r in outcome.conflicts["foo"] if r.location == foo_b)
    copied = hoist_ops.hoist_records(outcome.resolved + [chosen], workdir)

    assert copied == [chosen]
    assert (workdir / "foo").read_text(encoding="utf-8") == "#!/bin/sh\necho b\n"


def test_hoist_copy_failure_propagates(config: HoistConfig, project: Path, workdir: Path) -> None:
    binary1, _ = create_binaries(project)
    hoist_ops.install(config, project_root=None, names=[], cwd=project)
    binary1.unlink()

    with pytest.raises(FileNotFoundError):
        hoist_ops.hoist(config, ["binary1"], cwd=workdir)


def test_find_returns_registered_binary(config: HoistConfig, project: Path) -> None:
    binary1, _ = create_binaries(project)
    hoist_ops.install(config, project_root=None, names=[], cwd=project)

    assert hoist_ops.find(config, "binary1") == BinaryRecord(name="binary1", location=binary1)


def test_find_missing_binary(config: HoistConfig) -> None:
    with pytest.raises(BinaryNotFoundError):
        hoist_ops.find(config, "binary1")


def test_list_on_fresh_home_creates_storage(config: HoistConfig) -> None:
    assert hoist_ops.list_binaries(config) == []
    assert config.registry_path.exists()


def test_nuke_resets_registry(config: HoistConfig, project: Path, tmp_path: Path) -> None:
    create_binaries(project)
    create_binaries(tmp_path / "other", names=("tool",))
    hoist_ops.install(config, project_root=None, names=[], cwd=project)
    hoist_ops.install(config, project_root=tmp_path / "other", names=[], cwd=tmp_path)

    hoist_ops.nuke(config)

    assert hoist_ops.list_binaries(config) == []


def test_install_undecodable_location_keeps_registry(
    config: HoistConfig, project: Path, tmp_path: Path
) -> None:
    create_binaries(project, names=("tool",))
    hoist_ops.install(config, project_root=None, names=[], cwd=project)
    before = config.registry_path.read_bytes()
    # Undecodable directory bytes surface as lone surrogates.
    bad_root = tmp_path / "proj\udcff"
    create_binaries(bad_root, names=("app",))

    with pytest.raises(InvalidNameError):
        hoist_ops.install(config, project_root=bad_root, names=[], cwd=tmp_path)

    assert config.registry_path.read_bytes() == before


def test_hoist_select_all_reports_conflicts(
    config: HoistConfig, tmp_path: Path, workdir: Path
) -> None:
    (foo_a, bar) = create_binaries(tmp_path / "a", names=("foo", "bar"))
    (foo_b,) = create_binaries(tmp_path / "b", names=("foo",))
    hoist_ops.install(config, project_root=tmp_path / "a", names=[], cwd=tmp_path)
    hoist_ops.install(config, project_root=tmp_path / "b", names=[], cwd=tmp_path)

    outcome = hoist_ops.hoist(config, [], cwd=workdir, select_all=True)

    assert isinstance(outcome, ConflictDetected)
    assert outcome.resolved == [BinaryRecord(name="bar", location=bar)]
    assert sorted(r.location for r in outcome.conflicts["foo"]) == sorted([foo_a, foo_b])
    assert list(workdir.iterdir()) == []


def test_install_with_nothing_found_logs_warning(
    config: HoistConfig, project: Path, caplog: pytest.LogCaptureFixture
) -> None:
    hoist_ops.install(config, project_root=None, names=[], cwd=project)

    assert any(
        r.levelno == logging.WARNING and "No binaries found" in r.getMessage()
        for r in caplog.records
    )
