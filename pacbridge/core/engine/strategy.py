"""
Strategy engine — turns (Invocation, Strategy) into one mediated run.

Flow, in this exact order:

    resolve mode → elevate → prompt mediation → dry-run gate → execute

The order matters.  Elevation wraps the fully flag-decorated command,
and the dry-run gate sees the final command line, so what ``--dry-run``
prints is exactly what a real run would spawn.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from pacbridge.core.config.loader import Config
from pacbridge.core.engine.executor import Executor, OutputMode
from pacbridge.core.models.invocation import Invocation
from pacbridge.core.models.outcome import ExecutionOutcome
from pacbridge.core.models.strategy import ExecMode, Strategy
from pacbridge.core.terminal import Terminal

logger = logging.getLogger(__name__)


def is_root() -> bool:
    """Whether the current process already has root privileges."""
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0


class StrategyEngine:
    """Applies a Strategy to an Invocation and runs it.

    Args:
        cfg: Read-only configuration.
        executor: Where processes are spawned.
        terminal: Owner of prompts and banners.
        environ: Host environment used for ``preserve_env`` lookups.
        as_root: Override root detection (None = ask the OS).
    """

    def __init__(
        self,
        cfg: Config,
        executor: Executor,
        terminal: Terminal,
        environ: Mapping[str, str] | None = None,
        as_root: bool | None = None,
    ):
        self.cfg = cfg
        self.executor = executor
        self.terminal = terminal
        self._environ = environ if environ is not None else os.environ
        self._as_root = as_root

    # ── Decision steps ───────────────────────────────────────────

    def resolve_mode(
        self,
        strategy: Strategy,
        mode: ExecMode | None = None,
    ) -> tuple[ExecMode, tuple[str, ...]]:
        """Pick the execution mode and any dry-run flags to append."""
        if mode is not None:
            return mode, ()
        if not self.cfg.dry_run:
            return ExecMode.RUN, ()
        if strategy.dry_run.kind == "with_flags":
            return ExecMode.CHECK_DRY_RUN, strategy.dry_run.flags
        return ExecMode.DRY_RUN, ()

    def elevate(self, invocation: Invocation, strategy: Strategy) -> Invocation:
        """Prefix the elevation program when the strategy asks for it."""
        if not strategy.elevate:
            return invocation
        as_root = self._as_root if self._as_root is not None else is_root()
        if as_root:
            logger.debug("Already root, not elevating %s", invocation.program)
            return invocation
        env = [
            (name, self._environ[name])
            for name in strategy.preserve_env
            if name in self._environ
        ]
        return invocation.elevated(self.cfg.elevation_cmd, env)

    def mediate(
        self,
        invocation: Invocation,
        strategy: Strategy,
        mode: ExecMode | None = None,
        output: OutputMode = "stream",
    ) -> ExecutionOutcome:
        """Run ``invocation`` under ``strategy``.

        Returns a ``skipped`` outcome for dry runs, a ``declined`` one when
        the user refuses the custom prompt, and the Executor's outcome
        otherwise.  Executor errors propagate unchanged.
        """
        mode, dry_flags = self.resolve_mode(strategy, mode)
        cmd = invocation.with_flags(dry_flags)

        cmd = self.elevate(cmd, strategy)

        prompt = strategy.prompt
        if prompt.kind in ("native_no_confirm", "native_confirm"):
            cmd = cmd.with_flags(prompt.flags)
        if prompt.kind == "native_confirm":
            output = "inherit"

        if mode is ExecMode.DRY_RUN:
            logger.info("Dry run: %s", cmd.render())
            self.terminal.banner("pending", cmd.render())
            return ExecutionOutcome.skipped(cmd.argv)

        if (
            prompt.kind == "custom_confirm"
            and mode is ExecMode.RUN
            and not self.cfg.no_confirm
        ):
            with self.terminal.lock:
                self.terminal.banner("pending", cmd.render())
                if not self.terminal.confirm(prompt.prompt):
                    logger.info("User declined: %s", cmd.render())
                    self.terminal.banner("canceled", cmd.render())
                    return ExecutionOutcome.declined_by_user(cmd.argv)

        self.terminal.banner("running", cmd.render())
        return self.executor.execute(cmd, output=output)
