"""
Dnf adapter — Fedora / RHEL (https://github.com/rpm-software-management/dnf).
"""

from __future__ import annotations

from pacbridge.adapters.base import NETWORK_ENV, Args, PackageManager
from pacbridge.core.models.invocation import Invocation
from pacbridge.core.models.strategy import ExecMode, NoCacheStrategy, Strategy


class DnfManager(PackageManager):
    """dnf / rpm."""

    no_confirm_flags = ("-y",)

    @property
    def name(self) -> str:
        return "dnf"

    def _sudo(self) -> Strategy:
        return self.confirm_strategy().elevated(NETWORK_ENV)

    def _install(self) -> Strategy:
        return self._sudo().model_copy(update={"no_cache": NoCacheStrategy.scc()})

    def q(self, kws: Args, flags: Args) -> None:
        if kws:
            self.qs(kws, flags)
            return
        self.run(Invocation.new("rpm", "-qa", "--qf", "%{NAME} %{VERSION}\\n").with_flags(flags))

    def qc(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("rpm", "-q", "--changelog").with_keywords(kws).with_flags(flags))

    def qe(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("dnf", "repoquery", "--userinstalled").with_keywords(kws).with_flags(flags))

    def qi(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("dnf", "info", "--installed").with_keywords(kws).with_flags(flags))

    def qk(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("rpm", "-V").with_keywords(kws).with_flags(flags))

    def ql(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("rpm", "-ql").with_keywords(kws).with_flags(flags))

    def qm(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("dnf", "list", "--extras").with_keywords(kws).with_flags(flags))

    def qo(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("rpm", "-qf").with_keywords(kws).with_flags(flags))

    def qp(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("rpm", "-qip").with_keywords(kws).with_flags(flags))

    def qs(self, kws: Args, flags: Args) -> None:
        self.search_regex(
            Invocation.new("rpm", "-qa", "--qf", "%{NAME} %{VERSION}\\n    %{SUMMARY}\\n").with_flags(flags),
            kws,
            record_lines=2,
        )

    def qu(self, kws: Args, flags: Args) -> None:
        self.run_with(
            Invocation.new("dnf", "list", "--upgrades").with_keywords(kws).with_flags(flags),
            ExecMode.CHECK_DRY_RUN,
        )

    def r(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("dnf", "remove").with_keywords(kws).with_flags(flags), None, self._sudo())

    def rs(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("dnf", "autoremove").with_keywords(kws).with_flags(flags), None, self._sudo())

    def s(self, kws: Args, flags: Args) -> None:
        # dnf never reinstalls a satisfied package, so --needed is implied.
        self.run_with(Invocation.new("dnf", "install").with_keywords(kws).with_flags(flags), None, self._install())

    def sc(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("dnf", "clean", "expire-cache").with_flags(flags), None, self._sudo())

    def scc(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("dnf", "clean", "packages").with_flags(flags), None, self._sudo())

    def sccc(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("dnf", "clean", "all").with_flags(flags), None, self._sudo())

    def sg(self, kws: Args, flags: Args) -> None:
        sub = "info" if kws else "list"
        self.run(Invocation.new("dnf", "group", sub).with_keywords(kws).with_flags(flags))

    def si(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("dnf", "info").with_keywords(kws).with_flags(flags))

    def sii(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("dnf", "repoquery", "--installed", "--whatrequires").with_keywords(kws).with_flags(flags))

    def sl(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("dnf", "list", "--available").with_keywords(kws).with_flags(flags))

    def ss(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("dnf", "search").with_keywords(kws).with_flags(flags))

    def su(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("dnf", "upgrade").with_keywords(kws).with_flags(flags), None, self._install())

    def suy(self, kws: Args, flags: Args) -> None:
        self.run_with(
            Invocation.new("dnf", "upgrade", "--refresh").with_keywords(kws).with_flags(flags),
            None,
            self._install(),
        )

    def sw(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("dnf", "download").with_keywords(kws).with_flags(flags))

    def sy(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("dnf", "makecache").with_flags(flags), None, self._sudo())
        if kws:
            self.s(kws, flags)

    def u(self, kws: Args, flags: Args) -> None:
        self.run_with(Invocation.new("dnf", "install").with_keywords(kws).with_flags(flags), None, self._install())
