"""
Apt adapter — Debian/Ubuntu (https://wiki.debian.org/Apt).

Mutating operations run elevated and ``--yes`` maps to apt's own
``--yes``.  With ``--no-cache`` the archive cache is cleaned after
an install.
"""

from __future__ import annotations

from pacbridge.adapters.base import NETWORK_ENV, Args, PackageManager
from pacbridge.core.models.invocation import Invocation
from pacbridge.core.models.strategy import ExecMode, NoCacheStrategy, Strategy


class AptManager(PackageManager):
    """apt / dpkg-query."""

    no_confirm_flags = ("--yes",)

    @property
    def name(self) -> str:
        return "apt"

    def _sudo(self) -> Strategy:
        return self.confirm_strategy().elevated(NETWORK_ENV)

    def _install(self) -> Strategy:
        return self._sudo().model_copy(update={"no_cache": NoCacheStrategy.scc()})

    # ── Query ────────────────────────────────────────────────────

    def q(self, kws: Args, flags: Args) -> None:
        if kws:
            self.qs(kws, flags)
            return
        self.run(Invocation.new("apt", "list", "--installed").with_flags(flags))

    def qc(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("apt", "changelog").with_keywords(kws).with_flags(flags))

    def qe(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("apt-mark", "showmanual").with_keywords(kws).with_flags(flags))

    def qi(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("dpkg-query", "-s").with_keywords(kws).with_flags(flags))

    def qk(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("dpkg", "--verify").with_keywords(kws).with_flags(flags))

    def ql(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("dpkg-query", "-L").with_keywords(kws).with_flags(flags))

    def qo(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("dpkg-query", "-S").with_keywords(kws).with_flags(flags))

    def qp(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("dpkg-deb", "-I").with_keywords(kws).with_flags(flags))

    def qs(self, kws: Args, flags: Args) -> None:
        self.search_regex(Invocation.new("dpkg-query", "-l").with_flags(flags), kws)

    def qu(self, kws: Args, flags: Args) -> None:
        self.run_with(
            Invocation.new("apt", "list", "--upgradable").with_flags(flags),
            ExecMode.CHECK_DRY_RUN,
        )

    # ── Remove ───────────────────────────────────────────────────

    def r(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("apt", "remove").with_keywords(kws).with_flags(flags), None, self._sudo())

    def rn(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("apt", "purge").with_keywords(kws).with_flags(flags), None, self._sudo())

    def rns(self, kws: Args, flags: Args) -> None:
        self.run_with(
            Invocation.new("apt", "autoremove", "--purge").with_keywords(kws).with_flags(flags),
            None,
            self._sudo(),
        )

    def rs(self, kws: Args, flags: Args) -> None:
        self.run_with(
            Invocation.new("apt", "autoremove").with_keywords(kws).with_flags(flags),
            None,
            self._sudo(),
        )

    # ── Sync ─────────────────────────────────────────────────────

    def s(self, kws: Args, flags: Args) -> None:
        # pacman -S reinstalls unless --needed is given.
        cmd = Invocation.new("apt", "install")
        if not self.cfg.needed:
            cmd = cmd.with_flags(["--reinstall"])
        self.run_with(cmd.with_keywords(kws).with_flags(flags), None, self._install())

    def sc(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("apt", "autoclean").with_flags(flags), None, self._sudo())

    def scc(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("apt", "clean").with_flags(flags), None, self._sudo())

    def si(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("apt", "show").with_keywords(kws).with_flags(flags))

    def sii(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("apt", "rdepends").with_keywords(kws).with_flags(flags))

    def sl(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("apt", "list").with_keywords(kws).with_flags(flags))

    def ss(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("apt", "search").with_keywords(kws).with_flags(flags))

    def su(self, kws: Args, flags: Args) -> None:
        if kws:
            self.run_with(
                Invocation.new("apt", "install", "--only-upgrade").with_keywords(kws).with_flags(flags),
                None,
                self._install(),
            )
            return
        self.run_with(Invocation.new("apt", "upgrade").with_flags(flags), None, self._install())

    def suy(self, kws: Args, flags: Args) -> None:
        self.sy([], flags)
        self.su(kws, flags)

    def sw(self, kws: Args, flags: Args) -> None:
        self.run_with(
            Invocation.new("apt", "install", "--download-only").with_keywords(kws).with_flags(flags),
            None,
            self._sudo(),
        )

    def sy(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("apt", "update").with_flags(flags), None, self._sudo())
        if kws:
            self.s(kws, flags)

    # ── Upgrade ──────────────────────────────────────────────────

    def u(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("apt", "install").with_keywords(kws).with_flags(flags), None, self._install())
