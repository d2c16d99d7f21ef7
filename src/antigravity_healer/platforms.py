"""Host platform detection."""

import sys
from enum import Enum


class PlatformKind(Enum):
    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"


def detect_platform(platform: str | None = None) -> PlatformKind:
    """Map a ``sys.platform`` string to a PlatformKind.

    Anything that is neither Windows nor macOS is treated as Linux, so BSDs
    and other Unix-likes get the ``pkill`` / ``~/.config`` behavior.
    """
    platform = sys.platform if platform is None else platform
    if platform.startswith(("win32", "cygwin")):
        return PlatformKind.WINDOWS
    if platform == "darwin":
        return PlatformKind.MACOS
    return PlatformKind.LINUX
