"""Read-only lookup of running processes by name pattern."""

import os
import re

import psutil

SKIPPED_ERRORS = (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess)


def pattern_matches(pattern: str, text: str) -> bool:
    """``pkill -f`` treats the pattern as a regex; fall back to a plain substring."""
    try:
        return re.search(pattern, text) is not None
    except re.error:
        return pattern in text


def identity_matches(pattern: str, name: str | None, cmdline: list[str] | None) -> bool:
    """Same rule as ``pkill -f``: name or full command line."""
    return pattern_matches(pattern, name or "") or pattern_matches(pattern, " ".join(cmdline or []))


def process_matches(proc: psutil.Process, pattern: str) -> bool:
    return identity_matches(pattern, proc.info.get("name"), proc.info.get("cmdline"))


class ProcessScanner:
    """Finds processes matching a pattern, never counting the healer itself.

    The healer's own process and every ancestor (the shell or terminal that
    launched it) carry the target names on their command line when they were
    passed with ``--target``, so they are always excluded.
    """

    def protected_pids(self) -> set[int]:
        pids = {os.getpid()}
        try:
            pids.update(parent.pid for parent in psutil.Process().parents())
        except SKIPPED_ERRORS:
            pass
        return pids

    def matches_protected(self, pattern: str) -> bool:
        """True if a kill-by-pattern would also hit the healer or an ancestor."""
        for pid in self.protected_pids():
            try:
                proc = psutil.Process(pid)
                if identity_matches(pattern, proc.name(), proc.cmdline()):
                    return True
            except SKIPPED_ERRORS:
                pass
        return False

    def matching_pids(self, pattern: str) -> list[int]:
        """PIDs of running processes matching ``pattern``, minus protected ones.

        Processes that exit or refuse inspection while we iterate are skipped.
        """
        protected = self.protected_pids()
        pids = []
        for proc in psutil.process_iter(["name", "cmdline"]):
            try:
                if proc.pid not in protected and process_matches(proc, pattern):
                    pids.append(proc.pid)
            except SKIPPED_ERRORS:
                pass
        return sorted(pids)

    def count(self, pattern: str) -> int:
        return len(self.matching_pids(pattern))

