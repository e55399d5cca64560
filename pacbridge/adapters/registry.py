"""
Manager registry — name → PackageManager factory.

The registry is the single point where a manager name becomes an
instance.  The set of supported names is closed: anything else (or an
undetected host) resolves to ``Unknown``, whose operations all report
themselves as unimplemented.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial

from pacbridge.adapters.base import PackageManager, implemented_operations
from pacbridge.adapters.languages.conda import CondaManager
from pacbridge.adapters.languages.pip import PipManager
from pacbridge.adapters.system.apk import ApkManager
from pacbridge.adapters.system.apt import AptManager
from pacbridge.adapters.system.brew import BrewManager
from pacbridge.adapters.system.dnf import DnfManager
from pacbridge.adapters.system.zypper import ZypperManager
from pacbridge.adapters.unknown import Unknown
from pacbridge.core.config.loader import Config
from pacbridge.core.engine.executor import Executor
from pacbridge.core.terminal import Terminal
from pacbridge.core.use_cases.detect import detect_pm_str

logger = logging.getLogger(__name__)

ManagerFactory = Callable[[Config, Executor | None, Terminal | None], PackageManager]

_BUILTIN: dict[str, ManagerFactory] = {
    "apk": ApkManager,
    "apt": AptManager,
    "brew": BrewManager,
    "conda": CondaManager,
    "dnf": DnfManager,
    "pip": partial(PipManager, program="pip"),
    "pip3": partial(PipManager, program="pip3"),
    "zypper": ZypperManager,
}


class ManagerRegistry:
    """Registry of package-manager factories.

    Args:
        detect: Host detection used when the config names no manager.
    """

    def __init__(self, detect: Callable[[], str] = detect_pm_str):
        self._factories: dict[str, ManagerFactory] = dict(_BUILTIN)
        self._detect = detect

    def register(self, name: str, factory: ManagerFactory) -> None:
        """Register (or replace) a factory under ``name``."""
        if name in self._factories:
            logger.warning("Overwriting existing manager: %s", name)
        self._factories[name] = factory
        logger.debug("Registered manager: %s", name)

    def unregister(self, name: str) -> None:
        """Remove a manager from the registry."""
        self._factories.pop(name, None)

    def list_managers(self) -> list[str]:
        """Registered manager names, sorted."""
        return sorted(self._factories)

    def resolve_name(self, cfg: Config) -> str:
        """The configured manager, or the detected one."""
        if cfg.default_pm:
            return cfg.default_pm
        name = self._detect()
        logger.info("Using detected package manager: %s", name)
        return name

    def create(
        self,
        cfg: Config,
        executor: Executor | None = None,
        terminal: Terminal | None = None,
    ) -> PackageManager:
        """Build the manager for ``cfg``.

        Unsupported names yield an ``Unknown`` manager rather than an
        error, so the failure surfaces only when an operation is run.
        """
        name = self.resolve_name(cfg)
        factory = self._factories.get(name)
        if factory is None:
            logger.debug("No manager registered for %r", name)
            return Unknown(cfg, executor, terminal, requested=name)
        return factory(cfg, executor, terminal)

    def compat_table(self) -> dict[str, list[str]]:
        """Implemented operations per registered manager."""
        table: dict[str, list[str]] = {}
        for name, factory in sorted(self._factories.items()):
            cls = factory.func if isinstance(factory, partial) else factory
            if isinstance(cls, type) and issubclass(cls, PackageManager):
                table[name] = implemented_operations(cls)
        return table
