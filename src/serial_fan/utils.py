"""Utility functions for the startup banner."""

import platform
from typing import Tuple


def platform_info() -> Tuple[str, str, str]:
    """
    Describe the host platform.

    On Linux this reads os-release (e.g. ("ubuntu", "debian", "22.04")),
    elsewhere it falls back to the platform module.

    Returns:
        Tuple of (platform, family, version)
    """
    system = platform.system()

    if system == "Linux":
        try:
            release = platform.freedesktop_os_release()
        except OSError:
            release = None

        if release:
            name = release.get("ID") or "linux"
            family = (release.get("ID_LIKE") or name).split()[0]
            version = release.get("VERSION_ID", platform.release())
            return (name, family, version)

    name = system.lower() or "unknown"
    return (name, name, platform.release())
