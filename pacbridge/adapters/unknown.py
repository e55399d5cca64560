"""
Unknown manager — stands in when no supported tool was found.

Every operation raises ``OperationUnimplementedError`` naming what was
asked for, e.g. "Operation `s` is unimplemented for `unknown package
manager: yum`".
"""

from __future__ import annotations

from pacbridge.adapters.base import PackageManager
from pacbridge.core.config.loader import Config
from pacbridge.core.engine.executor import Executor
from pacbridge.core.terminal import Terminal


class Unknown(PackageManager):
    """Placeholder for an unsupported or undetected package manager."""

    def __init__(
        self,
        cfg: Config,
        executor: Executor | None = None,
        terminal: Terminal | None = None,
        requested: str = "unknown",
    ):
        super().__init__(cfg, executor, terminal)
        self.requested = requested

    @property
    def name(self) -> str:
        return f"unknown package manager: {self.requested}"
