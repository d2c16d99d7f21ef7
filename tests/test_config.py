"""Tests for antigravity_healer/config.py."""

import dataclasses
import json

import pytest

from antigravity_healer.config import (
    DEFAULT_TARGET_PROCESSES,
    ConfigError,
    RunConfiguration,
    find_config_file,
    load_run_configuration,
)


def test_defaults():
    config = load_run_configuration()
    assert config.target_process_names == DEFAULT_TARGET_PROCESSES
    assert config.dry_run is False


def test_configuration_is_immutable():
    config = RunConfiguration()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.dry_run = True


def test_file_values(tmp_path):
    config_file = tmp_path / "healer.json"
    config_file.write_text(json.dumps({"targets": ["a", "b", "a"], "dry_run": True}))

    config = load_run_configuration(config_file=config_file)

    assert config.target_process_names == ("a", "b", "a")
    assert config.dry_run is True


def test_partial_file_keeps_defaults(tmp_path):
    config_file = tmp_path / "healer.json"
    config_file.write_text(json.dumps({"dry_run": True}))

    config = load_run_configuration(config_file=config_file)

    assert config.target_process_names == DEFAULT_TARGET_PROCESSES
    assert config.dry_run is True


def test_overrides_win_over_file(tmp_path):
    config_file = tmp_path / "healer.json"
    config_file.write_text(json.dumps({"targets": ["a"], "dry_run": True}))

    config = load_run_configuration(config_file=config_file, targets=["x", "y"], dry_run=False)

    assert config.target_process_names == ("x", "y")
    assert config.dry_run is False


@pytest.mark.parametrize(
    "content",
    [
        "not json",
        "[1, 2]",
        json.dumps({"targets": "agent"}),
        json.dumps({"targets": ["ok", ""]}),
        json.dumps({"dry_run": "yes"}),
    ],
)
def test_bad_file_raises(tmp_path, content):
    config_file = tmp_path / "healer.json"
    config_file.write_text(content)
    with pytest.raises(ConfigError):
        load_run_configuration(config_file=config_file)


def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigError):
        load_run_configuration(config_file=tmp_path / "missing.json")


def test_find_config_file_picks_first_existing(tmp_path):
    first = tmp_path / "first.json"
    second = tmp_path / "second.json"
    second.write_text("{}")
    assert find_config_file([first, second]) == second
    first.write_text("{}")
    assert find_config_file([first, second]) == first
    assert find_config_file([tmp_path / "nope.json"]) is None


@pytest.mark.parametrize("name", ['agent"; touch pwned; "', "$HOME", "`whoami`", "a\nb"])
def test_cli_target_with_shell_metacharacters_is_rejected(name):
    with pytest.raises(ConfigError, match="shell metacharacters"):
        load_run_configuration(targets=[name])


def test_file_target_with_shell_metacharacters_is_rejected(tmp_path):
    config_file = tmp_path / "healer.json"
    config_file.write_text(json.dumps({"targets": ["ok", "$(reboot)"]}))
    with pytest.raises(ConfigError, match="shell metacharacters"):
        load_run_configuration(config_file=config_file)


def test_spaces_and_dashes_are_allowed():
    config = load_run_configuration(targets=["Antigravity Helper", "g-agent-service"])
    assert config.target_process_names == ("Antigravity Helper", "g-agent-service")
