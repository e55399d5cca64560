"""
Brew adapter — Homebrew (https://brew.sh).

Homebrew refuses to run as root, so nothing here is elevated.  It has
no prompt of its own either: installs ask through pacbridge instead.
"""

from __future__ import annotations

from pacbridge.adapters.base import Args, PackageManager
from pacbridge.core.models.invocation import Invocation
from pacbridge.core.models.strategy import ExecMode, NoCacheStrategy, PromptStrategy, Strategy

STRAT_PROMPT = Strategy(prompt=PromptStrategy.custom_confirm())
STRAT_INSTALL = Strategy(
    prompt=PromptStrategy.custom_confirm(),
    no_cache=NoCacheStrategy.scc(),
)


class BrewManager(PackageManager):
    """brew."""

    @property
    def name(self) -> str:
        return "brew"

    def q(self, kws: Args, flags: Args) -> None:
        if kws:
            self.qs(kws, flags)
            return
        self.run(Invocation.new("brew", "list").with_flags(flags))

    def qc(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("brew", "log").with_keywords(kws).with_flags(flags))

    def qi(self, kws: Args, flags: Args) -> None:
        self.si(kws, flags)

    def ql(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("brew", "list").with_keywords(kws).with_flags(flags))

    def qs(self, kws: Args, flags: Args) -> None:
        self.search_regex(Invocation.new("brew", "list").with_flags(flags), kws)

    def qu(self, kws: Args, flags: Args) -> None:
        self.run_with(
            Invocation.new("brew", "outdated").with_keywords(kws).with_flags(flags),
            ExecMode.CHECK_DRY_RUN,
        )

    def r(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("brew", "uninstall").with_keywords(kws).with_flags(flags), None, STRAT_PROMPT)

    def rss(self, kws: Args, flags: Args) -> None:
        self.r(kws, flags)
        self.run_with(Invocation.new("brew", "autoremove").with_flags(flags), None, STRAT_PROMPT)

    def s(self, kws: Args, flags: Args) -> None:
        sub = "install" if self.cfg.needed else "reinstall"
        self.run_with(Invocation.new("brew", sub).with_keywords(kws).with_flags(flags), None, STRAT_INSTALL)

    def sc(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("brew", "cleanup").with_keywords(kws).with_flags(flags), None, STRAT_PROMPT)

    def scc(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("brew", "cleanup", "-s").with_keywords(kws).with_flags(flags), None, STRAT_PROMPT)

    def sccc(self, kws: Args, flags: Args) -> None:
        self.run_with(
            Invocation.new("brew", "cleanup", "--prune=all").with_keywords(kws).with_flags(flags),
            None,
            STRAT_PROMPT,
        )

    def si(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("brew", "info").with_keywords(kws).with_flags(flags))

    def sii(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("brew", "uses").with_keywords(kws).with_flags(flags))

    def ss(self, kws: Args, flags: Args) -> None:
        self.run_each(
            [Invocation.new("brew", "search").with_keywords([kw]).with_flags(flags) for kw in kws],
        )

    def su(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("brew", "upgrade").with_keywords(kws).with_flags(flags), None, STRAT_INSTALL)

    def suy(self, kws: Args, flags: Args) -> None:
        self.sy([], flags)
        self.su(kws, flags)

    def sw(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("brew", "fetch").with_keywords(kws).with_flags(flags), None, STRAT_PROMPT)

    def sy(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("brew", "update").with_flags(flags))
        if kws:
            self.s(kws, flags)
