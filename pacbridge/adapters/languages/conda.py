"""
Conda adapter — the Conda package manager (https://conda.io/).

Conda asks before changing an environment; ``--yes`` maps to ``-y``.
"""

from __future__ import annotations

from pacbridge.adapters.base import Args, PackageManager
from pacbridge.core.models.invocation import Invocation
from pacbridge.core.models.outcome import ExecutionOutcome


class CondaManager(PackageManager):
    """Conda environments: ``conda list``, ``conda install``, ..."""

    no_confirm_flags = ("-y",)

    @property
    def name(self) -> str:
        return "conda"

    def _confirmed(self, cmd: Invocation) -> ExecutionOutcome:
        return self.run_with(cmd, None, self.confirm_strategy())

    def q(self, kws: Args, flags: Args) -> None:
        if kws:
            self.qs(kws, flags)
            return
        self.run(Invocation.new("conda", "list").with_flags(flags))

    def qo(self, kws: Args, flags: Args) -> None:
        Invocation.new("conda", "package", "--which").with_keywords(kws).with_flags(flags).pipe(self.run)

    def qs(self, kws: Args, flags: Args) -> None:
        # Multiple terms: only packages matching ALL of them are shown.
        self.search_regex(Invocation.new("conda", "list").with_flags(flags), kws)

    def r(self, kws: Args, flags: Args) -> None:
        Invocation.new("conda", "remove").with_keywords(kws).with_flags(flags).pipe(self._confirmed)

    def s(self, kws: Args, flags: Args) -> None:
        Invocation.new("conda", "install").with_keywords(kws).with_flags(flags).pipe(self._confirmed)

    def sc(self, kws: Args, flags: Args) -> None:
        Invocation.new("conda", "clean", "--all").with_flags(flags).pipe(self._confirmed)

    def si(self, kws: Args, flags: Args) -> None:
        Invocation.new("conda", "search", "--info").with_keywords(kws).with_flags(flags).pipe(self.run)

    def ss(self, kws: Args, flags: Args) -> None:
        # One search per term, printed in term order.
        self.run_each([
            Invocation.new("conda", "search").with_keywords([f"*{kw}*"]).with_flags(flags)
            for kw in kws
        ])

    def su(self, kws: Args, flags: Args) -> None:
        Invocation.new("conda", "update", "--all").with_keywords(kws).with_flags(flags).pipe(self._confirmed)

    def suy(self, kws: Args, flags: Args) -> None:
        self.su(kws, flags)
