"""Shell command execution that never raises."""

import subprocess

from antigravity_healer.logger import Logger

# stderr fragments meaning the target process was already gone
BENIGN_FAILURE_MARKERS = ("not found", "No such process")


def is_benign_failure(stderr: str) -> bool:
    """True when the captured error text says the process was already absent.

    An empty stderr also counts: ``pkill`` exits 1 silently when nothing
    matched.
    """
    if not stderr:
        return True
    return any(marker in stderr for marker in BENIGN_FAILURE_MARKERS)


class CommandRunner:
    """Runs one shell command at a time and reports success as a bool."""

    def __init__(self, logger: Logger):
        self.logger = logger

    def run(self, command: str) -> bool:
        try:
            result = subprocess.run(
                command,
                shell=True,
                capture_output=True,
                text=True,
            )
        except (OSError, ValueError) as e:
            self.logger.warn(f"Command failed: {command}. Details: {e}")
            return False

        if result.returncode == 0:
            return True

        stderr = (result.stderr or "").strip()
        if not is_benign_failure(stderr):
            self.logger.warn(
                f"Command failed: {command}. Details: exit status {result.returncode}: {stderr}"
            )
        return False
