"""
Zypper adapter — openSUSE / SLES (https://en.opensuse.org/Portal:Zypper).

zypper accepts ``zypper install -y curl`` but not ``zypper install curl
-y``; Invocation places flags before keywords, which keeps it happy.
"""

from __future__ import annotations

from pacbridge.adapters.base import NETWORK_ENV, Args, PackageManager
from pacbridge.core.models.invocation import Invocation
from pacbridge.core.models.strategy import DryRunStrategy, ExecMode, Strategy


class ZypperManager(PackageManager):
    """zypper / rpm."""

    no_confirm_flags = ("-y",)

    @property
    def name(self) -> str:
        return "zypper"

    def _sudo(self) -> Strategy:
        return self.confirm_strategy().elevated(NETWORK_ENV)

    def _install(self) -> Strategy:
        # zypper can simulate by itself.
        return self._sudo().model_copy(update={"dry_run": DryRunStrategy.with_flags(["--dry-run"])})

    def q(self, kws: Args, flags: Args) -> None:
        if kws:
            self.qs(kws, flags)
            return
        self.run(Invocation.new("rpm", "-qa").with_flags(flags))

    def qc(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("rpm", "-q", "--changelog").with_keywords(kws).with_flags(flags))

    def qi(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("zypper", "info", "--type", "package").with_keywords(kws).with_flags(flags))

    def ql(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("rpm", "-ql").with_keywords(kws).with_flags(flags))

    def qo(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("rpm", "-qf").with_keywords(kws).with_flags(flags))

    def qs(self, kws: Args, flags: Args) -> None:
        self.search_regex(Invocation.new("rpm", "-qa").with_flags(flags), kws)

    def qu(self, kws: Args, flags: Args) -> None:
        self.run_with(
            Invocation.new("zypper", "list-updates").with_flags(flags),
            ExecMode.CHECK_DRY_RUN,
        )

    def r(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("zypper", "remove").with_keywords(kws).with_flags(flags), None, self._sudo())

    def rss(self, kws: Args, flags: Args) -> None:
        self.run_with(
            Invocation.new("zypper", "remove", "--clean-deps").with_keywords(kws).with_flags(flags),
            None,
            self._sudo(),
        )

    def s(self, kws: Args, flags: Args) -> None:
        cmd = Invocation.new("zypper", "install")
        if not self.cfg.needed:
            cmd = cmd.with_flags(["--force"])
        self.run_with(cmd.with_keywords(kws).with_flags(flags), None, self._install())

    def sc(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("zypper", "clean").with_flags(flags), None, self._sudo())

    def scc(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("zypper", "clean", "--all").with_flags(flags), None, self._sudo())

    def si(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("zypper", "info", "--requires").with_keywords(kws).with_flags(flags))

    def sl(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("zypper", "packages", "-R").with_keywords(kws).with_flags(flags))

    def ss(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("zypper", "search").with_keywords(kws).with_flags(flags))

    def su(self, kws: Args, flags: Args) -> None:
        self.run_with(
            Invocation.new("zypper", "--no-refresh", "dist-upgrade").with_keywords(kws).with_flags(flags),
            None,
            self._install(),
        )

    def suy(self, kws: Args, flags: Args) -> None:
        self.run_with(
            Invocation.new("zypper", "dist-upgrade").with_keywords(kws).with_flags(flags),
            None,
            self._install(),
        )

    def sw(self, kws: Args, flags: Args) -> None:
        self.run_with(
            Invocation.new("zypper", "install", "--download-only").with_keywords(kws).with_flags(flags),
            None,
            self._sudo(),
        )

    def sy(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("zypper", "refresh").with_flags(flags), None, self._sudo())
        if kws:
            self.s(kws, flags)

    def u(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("zypper", "install").with_keywords(kws).with_flags(flags), None, self._install())
