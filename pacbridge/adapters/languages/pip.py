"""
Pip adapter — Python's package installer (https://pip.pypa.io/).

``pip install`` never asks for confirmation, so pacbridge asks itself
(custom prompt).  ``pip uninstall`` has its own prompt, skipped with
``-y``.  The same class serves ``pip`` and ``pip3``.
"""

from __future__ import annotations

from pacbridge.adapters.base import Args, PackageManager
from pacbridge.core.config.loader import Config
from pacbridge.core.engine.executor import Executor
from pacbridge.core.models.invocation import Invocation
from pacbridge.core.models.strategy import DryRunStrategy, ExecMode, PromptStrategy, Strategy
from pacbridge.core.terminal import Terminal

STRAT_INSTALL = Strategy(
    prompt=PromptStrategy.custom_confirm(),
    dry_run=DryRunStrategy.with_flags(["--dry-run"]),
)
STRAT_PROMPT = Strategy(prompt=PromptStrategy.custom_confirm("Proceed?"))


class PipManager(PackageManager):
    """pip / pip3."""

    def __init__(
        self,
        cfg: Config,
        executor: Executor | None = None,
        terminal: Terminal | None = None,
        program: str = "pip",
    ):
        super().__init__(cfg, executor, terminal)
        self.program = program

    @property
    def name(self) -> str:
        return self.program

    def _cmd(self, *args: str) -> Invocation:
        return Invocation.new("pip", *args).with_program(self.program)

    def _uninstall_strategy(self) -> Strategy:
        return Strategy(prompt=self.prompt_strategy(no_confirm=["-y"]))

    def q(self, kws: Args, flags: Args) -> None:
        if kws:
            self.qs(kws, flags)
            return
        self.run(self._cmd("list").with_flags(flags))

    def qi(self, kws: Args, flags: Args) -> None:
        self.run(self._cmd("show").with_keywords(kws).with_flags(flags))

    def ql(self, kws: Args, flags: Args) -> None:
        self.run(self._cmd("show", "--files").with_keywords(kws).with_flags(flags))

    def qs(self, kws: Args, flags: Args) -> None:
        # ``pip list`` starts with a two-line table header.
        self.search_regex(self._cmd("list").with_flags(flags), kws, header_lines=2)

    def qu(self, kws: Args, flags: Args) -> None:
        self.run_with(
            self._cmd("list", "--outdated").with_flags(flags),
            ExecMode.CHECK_DRY_RUN,
        )

    def r(self, kws: Args, flags: Args) -> None:
        self.run_with(
            self._cmd("uninstall").with_keywords(kws).with_flags(flags),
            None,
            self._uninstall_strategy(),
        )

    def s(self, kws: Args, flags: Args) -> None:
        cmd = self._cmd("install") if self.cfg.needed else self._cmd("install", "--force-reinstall")
        self.run_with(cmd.with_keywords(kws).with_flags(flags), None, STRAT_INSTALL)

    def sc(self, kws: Args, flags: Args) -> None:
        self.run_with(self._cmd("cache", "purge").with_flags(flags), None, STRAT_PROMPT)

    def si(self, kws: Args, flags: Args) -> None:
        self.run(self._cmd("index", "versions").with_keywords(kws).with_flags(flags))

    def su(self, kws: Args, flags: Args) -> None:
        if not kws:
            raise self.unimplemented("su")
        self.run_with(
            self._cmd("install", "--upgrade").with_keywords(kws).with_flags(flags),
            None,
            STRAT_INSTALL,
        )

    def suy(self, kws: Args, flags: Args) -> None:
        self.su(kws, flags)

    def sw(self, kws: Args, flags: Args) -> None:
        self.run_with(
            self._cmd("download").with_keywords(kws).with_flags(flags), None, STRAT_PROMPT,
        )

    def u(self, kws: Args, flags: Args) -> None:
        self.run_with(self._cmd("install").with_keywords(kws).with_flags(flags), None, STRAT_INSTALL)
