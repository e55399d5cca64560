"""
Apk adapter — Alpine Linux (https://wiki.alpinelinux.org/wiki/Alpine_Package_Keeper).

apk never prompts by default; without ``--yes`` pacbridge turns on its
interactive mode (``-i``) so mutations still ask first.
"""

from __future__ import annotations

from pacbridge.adapters.base import NETWORK_ENV, Args, PackageManager
from pacbridge.core.models.invocation import Invocation
from pacbridge.core.models.strategy import ExecMode, NoCacheStrategy, Strategy


class ApkManager(PackageManager):
    """apk."""

    @property
    def name(self) -> str:
        return "apk"

    def _sudo(self) -> Strategy:
        return Strategy(prompt=self.prompt_strategy(confirm=["-i"])).elevated(NETWORK_ENV)

    def _install(self) -> Strategy:
        return self._sudo().model_copy(update={"no_cache": NoCacheStrategy.with_flags(["--no-cache"])})

    def q(self, kws: Args, flags: Args) -> None:
        if kws:
            self.qs(kws, flags)
            return
        self.run(Invocation.new("apk", "info").with_flags(flags))

    def qi(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("apk", "info", "-a").with_keywords(kws).with_flags(flags))

    def ql(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("apk", "info", "-L").with_keywords(kws).with_flags(flags))

    def qo(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("apk", "info", "--who-owns").with_keywords(kws).with_flags(flags))

    def qs(self, kws: Args, flags: Args) -> None:
        self.search_regex(Invocation.new("apk", "info", "-d").with_flags(flags), kws)

    def qu(self, kws: Args, flags: Args) -> None:
        self.run_with(
            Invocation.new("apk", "version", "-l", "<").with_keywords(kws).with_flags(flags),
            ExecMode.CHECK_DRY_RUN,
        )

    def r(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("apk", "del").with_keywords(kws).with_flags(flags), None, self._sudo())

    def rn(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("apk", "del", "--purge").with_keywords(kws).with_flags(flags), None, self._sudo())

    def rns(self, kws: Args, flags: Args) -> None:
        self.run_with(
            Invocation.new("apk", "del", "--purge", "-r").with_keywords(kws).with_flags(flags),
            None,
            self._sudo(),
        )

    def rs(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("apk", "del", "-r").with_keywords(kws).with_flags(flags), None, self._sudo())

    def s(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("apk", "add").with_keywords(kws).with_flags(flags), None, self._install())

    def sc(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("apk", "cache", "-v", "clean").with_flags(flags), None, self._sudo())

    def scc(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("apk", "cache", "-v", "purge").with_flags(flags), None, self._sudo())

    def si(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("apk", "info").with_keywords(kws).with_flags(flags))

    def sii(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("apk", "info", "-r").with_keywords(kws).with_flags(flags))

    def sl(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("apk", "search").with_keywords(kws).with_flags(flags))

    def ss(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("apk", "search", "-v").with_keywords(kws).with_flags(flags))

    def su(self, kws: Args, flags: Args) -> None:
        cmd = Invocation.new("apk", "upgrade") if kws else Invocation.new("apk", "upgrade", "--available")
        self.run_with(cmd.with_keywords(kws).with_flags(flags), None, self._install())

    def suy(self, kws: Args, flags: Args) -> None:
        cmd = Invocation.new("apk", "upgrade", "-U", "-a")
        self.run_with(cmd.with_keywords(kws).with_flags(flags), None, self._install())

    def sw(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("apk", "fetch").with_keywords(kws).with_flags(flags))

    def sy(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("apk", "update").with_flags(flags), None, self._sudo())
        if kws:
            self.s(kws, flags)

    def u(self, kws: Args, flags: Args) -> None:
        self.run_with(
            Invocation.new("apk", "add", "--allow-untrusted").with_keywords(kws).with_flags(flags),
            None,
            self._install(),
        )
