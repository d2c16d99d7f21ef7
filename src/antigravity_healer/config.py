"""Run configuration for the healer."""

import json
from dataclasses import dataclass
from pathlib import Path

# Application identity used to build cache directory paths
VENDOR_NAME = "Google"
APP_NAME = "Antigravity"
LINUX_APP_DIR = "google-antigravity"

DEFAULT_TARGET_PROCESSES = (
    "Antigravity Helper",
    "antigravity-agent",
    "g-agent-service",
)

# Seconds to wait after killing processes so the OS releases file handles
SETTLE_DELAY_SECONDS = 2.0


def default_config_candidates() -> list[Path]:
    return [
        Path(".context/antigravity-healer.json"),  # Per-checkout override
        Path.home() / ".config" / "antigravity-healer.json",  # User default
    ]


# Characters a double-quoted sh or cmd.exe argument would still interpret
UNSAFE_NAME_CHARACTERS = frozenset('"$`\\%\n\r\0')


class ConfigError(ValueError):
    """Raised when a configuration file or option cannot be used."""


def check_process_name(name: str) -> str:
    """Return ``name`` if it can be embedded in a kill command, else raise ValueError."""
    if not isinstance(name, str) or not name:
        raise ValueError("process name must be a non-empty string")
    bad = sorted(set(name) & UNSAFE_NAME_CHARACTERS)
    if bad:
        raise ValueError(f"process name {name!r} contains shell metacharacters: {''.join(bad)!r}")
    return name


def _checked_targets(targets: list, source: str) -> tuple[str, ...]:
    try:
        return tuple(check_process_name(t) for t in targets)
    except ValueError as e:
        raise ConfigError(f"{source}: {e}") from e


@dataclass(frozen=True)
class RunConfiguration:
    """What a single healer run does. Built once, never mutated."""

    target_process_names: tuple[str, ...] = DEFAULT_TARGET_PROCESSES
    dry_run: bool = False


def find_config_file(candidates: list[Path] | None = None) -> Path | None:
    """Return the first existing config file among the default locations."""
    if candidates is None:
        candidates = default_config_candidates()
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def load_run_configuration(
    config_file: Path | None = None,
    targets: list[str] | None = None,
    dry_run: bool | None = None,
) -> RunConfiguration:
    """Build the run configuration from an optional JSON file plus overrides.

    The file may contain ``{"targets": [...], "dry_run": bool}``; missing keys
    keep the defaults. Explicit ``targets`` / ``dry_run`` arguments (from the
    command line) win over the file.
    """
    resolved_targets = DEFAULT_TARGET_PROCESSES
    resolved_dry_run = False

    if config_file is not None:
        data = _read_config_file(config_file)
        if "targets" in data:
            file_targets = data["targets"]
            if not isinstance(file_targets, list):
                raise ConfigError(f"{config_file}: 'targets' must be a list of non-empty strings")
            resolved_targets = _checked_targets(file_targets, str(config_file))
        if "dry_run" in data:
            if not isinstance(data["dry_run"], bool):
                raise ConfigError(f"{config_file}: 'dry_run' must be true or false")
            resolved_dry_run = data["dry_run"]

    if targets:
        resolved_targets = _checked_targets(targets, "--target")
    if dry_run is not None:
        resolved_dry_run = dry_run

    return RunConfiguration(
        target_process_names=resolved_targets,
        dry_run=resolved_dry_run,
    )


def _read_config_file(config_file: Path) -> dict:
    try:
        with open(config_file) as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_file}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_file}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file}: top level must be a JSON object")
    return data
