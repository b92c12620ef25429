import os

import pytest

from buildcounter.config import BuildCounterConfig
from buildcounter.config.loader import _deep_merge_dicts
from buildcounter.config.models import generate_and_validate_config
from buildcounter.errors import BuildCounterConfigurationError


def test_defaults(tmp_path):
    buildcounter_config = BuildCounterConfig(build_dir=str(tmp_path))
    assert buildcounter_config.config_file is None
    config = buildcounter_config.config
    assert config.version_file == "version.properties"
    assert not config.lock
    assert config.lock_timeout_seconds == 60.0
    assert config.resources.source == "src/main/resources"
    assert config.resources.destination == "build/resources/main"
    assert config.resources.patterns == ["plugin.yml"]
    assert config.resources.properties == {}
    assert buildcounter_config.version_file == os.path.realpath(
        str(tmp_path / "version.properties")
    )


def test_default_config_file(tmp_path):
    (tmp_path / "buildcounter.yaml").write_text(
        """
version-file: build-info/version.properties
lock: true
lock-timeout-seconds: 5
resources:
  patterns:
    - plugin.yml
    - paper-plugin.yml
  properties:
    author: someone
"""
    )
    buildcounter_config = BuildCounterConfig(build_dir=str(tmp_path))
    config = buildcounter_config.config
    assert buildcounter_config.config_file == os.path.realpath(
        str(tmp_path / "buildcounter.yaml")
    )
    assert config.lock
    assert config.lock_timeout_seconds == 5
    assert config.resources.patterns == ["plugin.yml", "paper-plugin.yml"]
    assert config.resources.properties == {"author": "someone"}
    assert buildcounter_config.version_file == os.path.realpath(
        str(tmp_path / "build-info" / "version.properties")
    )


def test_empty_config_file(tmp_path):
    (tmp_path / "buildcounter.yaml").write_text("")
    config = BuildCounterConfig(build_dir=str(tmp_path)).config
    assert config.version_file == "version.properties"


def test_explicit_config_file(tmp_path):
    (tmp_path / "other.yaml").write_text("version-file: /opt/version.properties\n")
    buildcounter_config = BuildCounterConfig(
        build_dir=str(tmp_path), config_file="other.yaml"
    )
    assert buildcounter_config.version_file == os.path.realpath(
        "/opt/version.properties"
    )


def test_missing_explicit_config_file(tmp_path):
    with pytest.raises(BuildCounterConfigurationError) as exc_info:
        BuildCounterConfig(build_dir=str(tmp_path), config_file="missing.yaml")
    assert "Cannot find configuration file" in str(exc_info.value)


def test_config_overrides(tmp_path):
    (tmp_path / "buildcounter.yaml").write_text(
        "version-file: a.properties\nresources:\n  source: res\n"
    )
    config = BuildCounterConfig(
        build_dir=str(tmp_path),
        config_overrides={"lock": True, "resources": {"destination": "out"}},
    ).config
    assert config.version_file == "a.properties"
    assert config.lock
    assert config.resources.source == "res"
    assert config.resources.destination == "out"


@pytest.mark.parametrize(
    "contents, error_message",
    [
        ("this is totally bogus\nyaml: bad: here", "contains malformed yaml"),
        ("- one\n- two\n", "must contain a dictionary"),
        ("versionfile: a.properties\n", "versionfile:  not a valid field"),
        ("lock-timeout-seconds: 0\n", "lock-timeout-seconds must be greater than 0"),
        ("version-file: ''\n", "version-file must not be empty"),
        ("resources:\n  patterns: plugin.yml\n", "resources.patterns"),
    ],
)
def test_invalid_config_file(tmp_path, contents, error_message):
    (tmp_path / "buildcounter.yaml").write_text(contents)
    with pytest.raises(BuildCounterConfigurationError) as exc_info:
        BuildCounterConfig(build_dir=str(tmp_path))
    assert error_message in str(exc_info.value)


def test_generate_and_validate_config_errors():
    config, errors = generate_and_validate_config(
        **{"bogus": 1, "lock-timeout-seconds": -1}
    )
    assert config is None
    assert len(errors) == 2


def test_deep_merge_dicts():
    assert _deep_merge_dicts(
        {"a": 1, "b": {"c": 2, "d": 3}}, {"b": {"d": 4, "e": 5}, "f": 6}
    ) == {"a": 1, "b": {"c": 2, "d": 4, "e": 5}, "f": 6}
