"""
Process context — the terminal handle shared by the whole process.

The CLI sets the terminal once at startup when its caller supplies one;
otherwise it is created lazily on first use.  Managers built outside
the CLI may be handed their own ``Terminal`` instead.

Design notes:
    - Module-level singleton (not a class).  There is exactly one
      controlling terminal per process.
    - Configuration is deliberately NOT stored here: it is a value
      passed to each manager at construction.
"""

from __future__ import annotations

import threading
from typing import Optional

from pacbridge.core.terminal import Terminal

_terminal: Optional[Terminal] = None
_lock = threading.Lock()


def set_terminal(terminal: Terminal) -> None:
    """Register the terminal for the current process."""
    global _terminal
    _terminal = terminal


def get_terminal() -> Terminal:
    """Return the process terminal, creating the default one on first use."""
    global _terminal
    with _lock:
        if _terminal is None:
            _terminal = Terminal()
        return _terminal
