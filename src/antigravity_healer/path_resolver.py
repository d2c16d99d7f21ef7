"""Per-platform kill commands and cache directory locations.

Everything here is pure string/path construction. Nothing touches the
filesystem or spawns processes.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from antigravity_healer.config import APP_NAME, LINUX_APP_DIR, VENDOR_NAME, check_process_name
from antigravity_healer.platforms import PlatformKind


@dataclass(frozen=True)
class CachePath:
    """An absolute cache directory plus a short label for humans."""
    path: Path
    label: str

    def __str__(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class PlatformProfile:
    """How to kill processes and where caches live on one platform."""
    kind: PlatformKind
    kill_command: Callable[[str], str]
    cache_paths: Callable[[Path], list[CachePath]]
    # True when the kill command matches full command lines (and so could hit us)
    matches_command_line: bool


def _taskkill(process_name: str) -> str:
    # /T takes down the whole process tree; image names need the .exe suffix
    return f'taskkill /F /IM "{check_process_name(process_name)}.exe" /T'


def _pkill(process_name: str) -> str:
    # -f matches against the full command line, not just the process name
    return f'pkill -f "{check_process_name(process_name)}"'


def _electron_caches(app_dir: Path) -> list[CachePath]:
    return [
        CachePath(app_dir / "Cache", "Cache"),
        CachePath(app_dir / "GPUCache", "GPUCache"),
    ]


def _windows_cache_paths(home: Path) -> list[CachePath]:
    return _electron_caches(home / "AppData" / "Roaming" / VENDOR_NAME / APP_NAME)


def _macos_cache_paths(home: Path) -> list[CachePath]:
    return _electron_caches(home / "Library" / "Application Support" / VENDOR_NAME / APP_NAME)


def _linux_cache_paths(home: Path) -> list[CachePath]:
    return [CachePath(home / ".config" / LINUX_APP_DIR / "Cache", "Cache")]


PROFILES: dict[PlatformKind, PlatformProfile] = {
    PlatformKind.WINDOWS: PlatformProfile(PlatformKind.WINDOWS, _taskkill, _windows_cache_paths, False),
    PlatformKind.MACOS: PlatformProfile(PlatformKind.MACOS, _pkill, _macos_cache_paths, True),
    PlatformKind.LINUX: PlatformProfile(PlatformKind.LINUX, _pkill, _linux_cache_paths, True),
}


def profile_for(platform: PlatformKind) -> PlatformProfile:
    return PROFILES[platform]


def resolve_cache_paths(platform: PlatformKind, home_dir: Path) -> list[CachePath]:
    """Cache directories to purge, in deletion order (Cache before GPUCache)."""
    return profile_for(platform).cache_paths(Path(home_dir))


def build_kill_command(platform: PlatformKind, process_name: str) -> str:
    """Shell command that force-kills processes matching ``process_name``."""
    return profile_for(platform).kill_command(process_name)


def build_pid_kill_command(pids: list[int]) -> str:
    """``kill`` for explicit PIDs, used when a pattern would also match the healer."""
    return "kill " + " ".join(str(int(pid)) for pid in pids)
