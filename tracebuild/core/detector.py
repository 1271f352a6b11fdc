"""
Platform Detector
=================

Classifies the host into one of the two build strategies.

WHY A BINARY CLASSIFICATION:
---------------------------
The trace UI build toolchain (Perfetto) only builds on POSIX hosts. The only
question the dispatcher needs answered is "can this host build from source?",
so detection collapses the OS matrix into:

- WINDOWS: win32 and cygwin hosts - use the prebuilt archive
- UNIX:    macOS, Linux and every other POSIX host - build from source

Unknown platforms are treated as UNIX. An unsupported POSIX host fails inside
the source build with the builder's own diagnostics, which is more useful
than refusing to start.
"""

import sys
from enum import Enum
from typing import Optional


class PlatformClass(Enum):
    """Build strategy class of the host platform."""
    WINDOWS = "windows"
    UNIX = "unix"


WINDOWS_PLATFORMS = ("win32", "cygwin")


def detect_platform(system: Optional[str] = None) -> PlatformClass:
    """
    Detect the platform class of the host.

    Args:
        system: Platform string to classify (defaults to sys.platform)

    Returns:
        PlatformClass.WINDOWS or PlatformClass.UNIX
    """
    system = sys.platform if system is None else system

    if system in WINDOWS_PLATFORMS:
        return PlatformClass.WINDOWS
    return PlatformClass.UNIX


def get_platform_name(system: Optional[str] = None) -> str:
    """Raw platform identifier shown in the banner (e.g. "win32", "darwin", "linux")."""
    return sys.platform if system is None else system


def describe_platform(platform_class: PlatformClass) -> str:
    """Human-readable name of a platform class."""
    return {
        PlatformClass.WINDOWS: "Windows",
        PlatformClass.UNIX: "macOS/Linux",
    }[platform_class]
