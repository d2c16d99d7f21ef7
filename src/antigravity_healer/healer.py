"""Healer orchestration: kill processes, let the OS settle, clear caches."""

import shutil
import time
from pathlib import Path
from typing import Callable

import psutil

from antigravity_healer.command_runner import CommandRunner
from antigravity_healer.config import APP_NAME, SETTLE_DELAY_SECONDS, RunConfiguration
from antigravity_healer.logger import Logger
from antigravity_healer.path_resolver import CachePath, build_pid_kill_command, profile_for
from antigravity_healer.platforms import PlatformKind
from antigravity_healer.process_scan import ProcessScanner


class Healer:
    """Runs one maintenance pass for the configured platform.

    The phases always run in the same order with no retries:
    kill processes -> settle delay -> clear caches -> report.
    Every external effect goes through an injected collaborator so tests can
    substitute them.
    """

    def __init__(
        self,
        config: RunConfiguration,
        platform: PlatformKind,
        home_dir: Path,
        logger: Logger | None = None,
        runner: CommandRunner | None = None,
        sleep: Callable[[float], None] | None = None,
        remove_tree: Callable[[Path], None] | None = None,
        scanner: ProcessScanner | None = None,
    ):
        self.config = config
        self.platform = platform
        self.home_dir = Path(home_dir)
        self.logger = logger or Logger()
        self.runner = runner or CommandRunner(self.logger)
        self._profile = profile_for(platform)
        self._sleep = sleep or time.sleep
        self._remove_tree = remove_tree or shutil.rmtree
        self.scanner = scanner or ProcessScanner()

    def kill_target_processes(self) -> None:
        """Issue at most one kill command per configured name, in order, best-effort."""
        self.logger.info("Scanning for hung Agent processes...")

        for name in self.config.target_process_names:
            self._report_matches(name)
            command = self._kill_command_for(name)
            if command is not None:
                self.runner.run(command)

        # Reflects that every kill was attempted, not that every process died
        self.logger.success("Process cleanup routine finished.")

    def _report_matches(self, name: str) -> None:
        try:
            count = self.scanner.count(name)
        except psutil.Error as e:
            self.logger.warn(f"Could not scan for '{name}': {e}")
            return
        self.logger.info(f"Found {count} running process(es) matching '{name}'")

    def _kill_command_for(self, name: str) -> str | None:
        """Kill command for one target, or None when there is nothing safe to kill.

        A command-line pattern that also matches the healer or one of its
        ancestors is turned into a kill of the other matching PIDs only.
        """
        if not self._profile.matches_command_line:
            return self._profile.kill_command(name)

        try:
            if not self.scanner.matches_protected(name):
                return self._profile.kill_command(name)
            pids = self.scanner.matching_pids(name)
        except psutil.Error as e:
            self.logger.warn(f"Skipping '{name}': could not check it against this process: {e}")
            return None

        if not pids:
            self.logger.info(f"'{name}' only matches this healer's own command line; nothing to kill")
            return None
        self.logger.info(f"'{name}' matches this healer's own command line; killing PIDs {pids} instead")
        return build_pid_kill_command(pids)

    def settle(self) -> None:
        """Give the OS time to release file handles held by killed processes."""
        self._sleep(SETTLE_DELAY_SECONDS)

    def cache_paths(self) -> list[CachePath]:
        return self._profile.cache_paths(self.home_dir)

    def clear_caches(self) -> None:
        self.logger.info("Locating IDE cache directories...")
        for cache_path in self.cache_paths():
            self.delete_directory(cache_path.path)

    def delete_directory(self, path: Path) -> None:
        """Remove one cache directory tree and log how it went.

        Never raises for filesystem errors: a missing directory is already the
        desired end state, anything else is reported and the run moves on.
        """
        if self.config.dry_run:
            self.logger.info(f"[DRY RUN] Would delete: {path}")
            return

        try:
            self._remove_tree(path)
        except FileNotFoundError:
            self.logger.info(f"Path already clean: {path}")
        except PermissionError:
            self.logger.error(f"Permission denied for: {path}. Try running as Admin/Sudo.")
        except OSError as e:
            self.logger.error(f"Failed to delete {path}: {e}")
        else:
            self.logger.success(f"Cleared Cache: {path}")

    def execute(self) -> None:
        """Run all phases. Never raises; a fatal error becomes one ERROR line."""
        self.logger.info(f"Starting {APP_NAME} troubleshooting sequence ({self.platform.value})...")

        try:
            self.kill_target_processes()
            self.settle()
            self.clear_caches()
            self.logger.success(f"Maintenance complete. Please restart {APP_NAME} IDE.")
        except Exception as e:
            self.logger.error(f"Critical failure during execution: {e}")
