import logging

import pytest

from buildcounter import (
    BuildCounter,
    BuildCounterConfigurationError,
    MemoryVersionStore,
    Phase,
    PropertiesFileVersionStore,
    VersionRecord,
)


@pytest.fixture(name="build_dir")
def fixture_build_dir(tmp_path):
    resources = tmp_path / "src" / "main" / "resources"
    resources.mkdir(parents=True)
    (resources / "plugin.yml").write_text("name: Plugin\nversion: ${version}\n")
    (tmp_path / "version.properties").write_text("major=1\nminor=0\nbuild=9\n")
    return tmp_path


def test_store_from_config(build_dir):
    (build_dir / "buildcounter.yaml").write_text("lock: true\nlock-timeout-seconds: 3\n")
    build_counter = BuildCounter(build_dir=str(build_dir))
    assert isinstance(build_counter.store, PropertiesFileVersionStore)
    assert build_counter.store.path == str((build_dir / "version.properties").resolve())
    assert build_counter.store.lock
    assert build_counter.store.lock_timeout_seconds == 3


def test_version_and_finalize(build_dir):
    build_counter = BuildCounter(build_dir=str(build_dir))
    assert build_counter.version() == VersionRecord(major=1, minor=0, build=9)

    assert build_counter.finalize(Phase.PACKAGE, full_build_requested=True) is None
    assert build_counter.finalize(Phase.BUILD) == VersionRecord(major=1, minor=1, build=0)
    assert "build=0" in (build_dir / "version.properties").read_text()
    assert build_counter.advance() == VersionRecord(major=1, minor=1, build=1)


def test_dry_run(build_dir):
    build_counter = BuildCounter(build_dir=str(build_dir), dry_run=True)
    assert isinstance(build_counter.store, MemoryVersionStore)
    assert build_counter.advance() == VersionRecord(major=1, minor=1, build=0)
    assert build_counter.version() == VersionRecord(major=1, minor=1, build=0)
    assert (build_dir / "version.properties").read_text() == "major=1\nminor=0\nbuild=9\n"


def test_dry_run_finalize(build_dir, caplog):
    caplog.set_level(logging.INFO)
    build_counter = BuildCounter(build_dir=str(build_dir), dry_run=True)
    assert build_counter.finalize("build") == VersionRecord(major=1, minor=1, build=0)
    assert (
        "Dry run, version file would be updated for next build: 1.1.0" in caplog.messages
    )
    assert "Version file updated for next build: 1.1.0" not in caplog.messages
    assert (build_dir / "version.properties").read_text() == "major=1\nminor=0\nbuild=9\n"


def test_injected_store(build_dir):
    store = MemoryVersionStore({"major": "3", "minor": "1", "build": "4"})
    build_counter = BuildCounter(build_dir=str(build_dir), store=store)
    assert str(build_counter.version()) == "3.1.4"


def test_process_resources(build_dir):
    build_counter = BuildCounter(build_dir=str(build_dir))
    assert build_counter.process_resources() == ["plugin.yml"]
    assert (
        build_dir / "build" / "resources" / "main" / "plugin.yml"
    ).read_text() == "name: Plugin\nversion: 1.0.9\n"


def test_process_resources_directories(build_dir):
    (build_dir / "buildcounter.yaml").write_text(
        "resources:\n  properties:\n    name: Configured\n"
    )
    (build_dir / "res").mkdir()
    (build_dir / "res" / "plugin.yml").write_text("name: ${name}\n")
    build_counter = BuildCounter(build_dir=str(build_dir))
    build_counter.process_resources("res", "out")
    assert (build_dir / "out" / "plugin.yml").read_text() == "name: Configured\n"


def test_invalid_config(build_dir):
    (build_dir / "buildcounter.yaml").write_text("bogus: true\n")
    with pytest.raises(BuildCounterConfigurationError):
        BuildCounter(build_dir=str(build_dir))
