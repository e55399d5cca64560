"""
Host detection — which package manager is installed here.

Candidates are probed in a fixed order per platform; the first one
found wins.  Managers that are detected but not supported still come
back by name, so the caller can report "unknown package manager: port"
instead of guessing.
"""

from __future__ import annotations

import logging
import shutil
import sys
from collections.abc import Callable

logger = logging.getLogger(__name__)

# (name, well-known path) per platform, in priority order.
_CANDIDATES: dict[str, tuple[tuple[str, str], ...]] = {
    "win32": (
        ("scoop", ""),
        ("choco", ""),
    ),
    "darwin": (
        ("brew", "/usr/local/bin/brew"),
        ("port", "/opt/local/bin/port"),
    ),
    "linux": (
        ("apk", "/sbin/apk"),
        ("apt", "/usr/bin/apt"),
        ("emerge", "/usr/bin/emerge"),
        ("dnf", "/usr/bin/dnf"),
        ("zypper", "/usr/bin/zypper"),
    ),
}


def detect_pm_str(
    platform: str | None = None,
    which: Callable[[str], str | None] = shutil.which,
) -> str:
    """Name of the host's package manager, or ``"unknown"``.

    A candidate counts when its name resolves on PATH or its well-known
    path is an executable.

    Args:
        platform: ``sys.platform``-style identifier (default: this host).
        which: Executable lookup (``shutil.which``).
    """
    platform = platform if platform is not None else sys.platform
    for name, path in _CANDIDATES.get(platform, ()):
        if which(name) or (path and which(path)):
            logger.debug("Detected package manager: %s", name)
            return name
    logger.debug("No package manager detected on %s", platform)
    return "unknown"
