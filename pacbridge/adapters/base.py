"""
Package manager base — the operation contract every manager implements.

A concrete manager only supplies command templates: for each pacman
operation it knows, it builds an ``Invocation`` and hands it to
``run`` / ``run_with`` / ``search_regex``.  Dry-run, prompting,
elevation and execution are never hand-rolled per manager; they all go
through the same ``StrategyEngine``.

To create a new manager:
    1. Subclass PackageManager
    2. Implement ``name`` and the operations the tool supports
    3. Register it in ``pacbridge.adapters.registry``

Operations a manager does not override raise
``OperationUnimplementedError``.
"""

from __future__ import annotations

import logging
import signal
from abc import ABC, abstractmethod
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from pacbridge.core.config.loader import Config
from pacbridge.core.context import get_terminal
from pacbridge.core.engine.executor import Executor, SubprocessExecutor
from pacbridge.core.engine.search import compile_patterns, grep_with_header
from pacbridge.core.engine.strategy import StrategyEngine
from pacbridge.core.errors import (
    ArgParseError,
    CmdInterruptedError,
    OperationUnimplementedError,
    OtherError,
    PacbridgeError,
)
from pacbridge.core.models.invocation import Invocation
from pacbridge.core.models.outcome import ExecutionOutcome
from pacbridge.core.models.strategy import ExecMode, PromptStrategy, Strategy
from pacbridge.core.terminal import Terminal

logger = logging.getLogger(__name__)

# The pacman operation vocabulary, as method names.
OPERATIONS: tuple[str, ...] = (
    "q", "qc", "qe", "qi", "qk", "ql", "qm", "qo", "qp", "qs", "qu",
    "r", "rn", "rns", "rs", "rss",
    "s", "sc", "scc", "sccc", "sg", "si", "sii", "sl", "ss", "su", "suy", "sw", "sy",
    "u",
)

# Variables sudo drops by default that network-bound tools still need.
NETWORK_ENV: tuple[str, ...] = ("http_proxy", "https_proxy", "ftp_proxy", "no_proxy")

Args = Sequence[str]


class PackageManager(ABC):
    """Abstract base class for all package managers.

    Args:
        cfg: Configuration for this command invocation (held by reference).
        executor: Process executor (default: ``SubprocessExecutor``).
        terminal: Terminal handle (default: the process terminal).
    """

    # Flags that make the tool skip its own prompt (``--yes``).
    no_confirm_flags: tuple[str, ...] = ()

    def __init__(
        self,
        cfg: Config,
        executor: Executor | None = None,
        terminal: Terminal | None = None,
    ):
        self._cfg = cfg
        self.executor = executor if executor is not None else SubprocessExecutor()
        self.terminal = terminal if terminal is not None else get_terminal()
        self._engine: StrategyEngine | None = None

    @property
    @abstractmethod
    def name(self) -> str:
        """The manager identifier (e.g., 'apt', 'conda')."""

    @property
    def cfg(self) -> Config:
        return self._cfg

    @property
    def engine(self) -> StrategyEngine:
        if self._engine is None:
            self._engine = StrategyEngine(self._cfg, self.executor, self.terminal)
        return self._engine

    # ── Execution helpers ────────────────────────────────────────

    def prompt_strategy(
        self,
        no_confirm: Sequence[str] = (),
        confirm: Sequence[str] = (),
    ) -> PromptStrategy:
        """Prompt strategy matching the configuration.

        Under ``no_confirm`` the tool's assume-yes flags are appended;
        otherwise the tool keeps (or, via ``confirm``, enables) its own
        interactive prompt.
        """
        if self.cfg.no_confirm:
            if no_confirm:
                return PromptStrategy.native_no_confirm(no_confirm)
            return PromptStrategy.none()
        return PromptStrategy.native_confirm(confirm)

    def default_strategy(self) -> Strategy:
        """Configuration-only strategy: no flags, the tool keeps its prompt."""
        return Strategy(prompt=self.prompt_strategy())

    def confirm_strategy(self) -> Strategy:
        """Strategy for mutating operations: ``--yes`` maps to ``no_confirm_flags``."""
        return Strategy(prompt=self.prompt_strategy(self.no_confirm_flags))

    def run(self, invocation: Invocation) -> ExecutionOutcome:
        """Run with the strategy derived from configuration alone."""
        return self.run_with(invocation, None, self.default_strategy())

    def run_with(
        self,
        invocation: Invocation,
        mode: ExecMode | None = None,
        strategy: Strategy | None = None,
    ) -> ExecutionOutcome:
        """Run with an explicit strategy.

        ``mode`` forces an execution mode regardless of ``--dry-run``
        (``CHECK_DRY_RUN`` for read-only probes that should always run).
        When ``no_cache`` is configured, the strategy's cache cleanup
        follows a successful run.
        """
        strategy = strategy if strategy is not None else Strategy()
        no_cache = strategy.no_cache if self.cfg.no_cache else None

        if no_cache is not None and no_cache.kind == "with_flags":
            invocation = invocation.with_flags(no_cache.flags)

        outcome = self.engine.mediate(invocation, strategy, mode)

        if no_cache is not None and no_cache.kind in ("sc", "scc", "sccc") and not outcome.declined:
            logger.debug("no_cache: following up with %s", no_cache.kind)
            self.dispatch(no_cache.kind, [], [])
        return outcome

    def search_regex(
        self,
        invocation: Invocation,
        patterns: Sequence[str],
        header_lines: int = 0,
        record_lines: int = 1,
    ) -> list[str]:
        """Run ``invocation`` and print only records matching ALL patterns.

        Returns the printed lines (empty under dry run).  Invalid patterns
        raise ``ArgParseError`` before anything is spawned.
        """
        compiled = compile_patterns(patterns)
        outcome = self.engine.mediate(invocation, Strategy(), output="capture")
        if not outcome.spawned:
            return []
        try:
            text = outcome.text()
        except UnicodeDecodeError as e:
            raise OtherError(f"Cannot decode output of `{invocation.program}`: {e}") from e

        lines = grep_with_header(text, compiled, header_lines, record_lines)
        with self.terminal.lock:
            for line in lines:
                self.terminal.echo(line)
        return lines

    def run_each(
        self,
        invocations: Sequence[Invocation],
        strategy: Strategy | None = None,
        max_workers: int = 4,
    ) -> list[ExecutionOutcome]:
        """Run independent invocations concurrently.

        Completion order is not guaranteed, so output is collected and
        printed in submission order.  The first failure in that order is
        raised once every invocation has finished.  Ctrl-C terminates the
        children still running and raises ``CmdInterruptedError``.
        """
        strategy = strategy if strategy is not None else Strategy()
        if len(invocations) <= 1 or self.cfg.dry_run:
            return [self.engine.mediate(inv, strategy) for inv in invocations]

        def _one(inv: Invocation) -> ExecutionOutcome | PacbridgeError:
            try:
                return self.engine.mediate(inv, strategy, output="capture")
            except PacbridgeError as e:
                return e

        with ThreadPoolExecutor(max_workers=min(max_workers, len(invocations))) as pool:
            futures = [pool.submit(_one, inv) for inv in invocations]
            try:
                results = [f.result() for f in futures]
            except KeyboardInterrupt:
                self.executor.terminate_all()
                raise CmdInterruptedError([], int(signal.SIGINT)) from None

        outcomes: list[ExecutionOutcome] = []
        first_error: PacbridgeError | None = None
        for result in results:
            if isinstance(result, PacbridgeError):
                first_error = first_error or result
                outcome = getattr(result, "outcome", None)
                if outcome is None:
                    continue
            else:
                outcome = result
            outcomes.append(outcome)
            self._relay(outcome)
        if first_error is not None:
            raise first_error
        return outcomes

    def _relay(self, outcome: ExecutionOutcome) -> None:
        """Print captured output of a fanned-out invocation."""
        out = outcome.stdout.decode("utf-8", errors="replace").rstrip("\n")
        err = outcome.stderr.decode("utf-8", errors="replace").rstrip("\n")
        with self.terminal.lock:
            if out:
                self.terminal.echo(out)
            if err:
                self.terminal.echo(err, err=True)

    # ── Dispatch ─────────────────────────────────────────────────

    def dispatch(self, op: str, kws: Args, flags: Args) -> None:
        """Call the operation named ``op`` (e.g. ``"suy"``)."""
        if op not in OPERATIONS:
            raise ArgParseError(f"unknown operation `{op}`")
        logger.debug("%s.%s(kws=%s, flags=%s)", self.name, op, list(kws), list(flags))
        getattr(self, op)(kws, flags)

    def implemented_operations(self) -> list[str]:
        """Operations this manager overrides."""
        return implemented_operations(type(self))

    def unimplemented(self, op: str) -> OperationUnimplementedError:
        return OperationUnimplementedError(op, self.name)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"

    # ── Operations ───────────────────────────────────────────────
    # Query

    def q(self, kws: Args, flags: Args) -> None:
        """Q generates a list of installed packages."""
        raise self.unimplemented("q")

    def qc(self, kws: Args, flags: Args) -> None:
        """Qc shows the changelog of a package."""
        raise self.unimplemented("qc")

    def qe(self, kws: Args, flags: Args) -> None:
        """Qe lists packages installed explicitly (not as dependencies)."""
        raise self.unimplemented("qe")

    def qi(self, kws: Args, flags: Args) -> None:
        """Qi displays local package information."""
        raise self.unimplemented("qi")

    def qk(self, kws: Args, flags: Args) -> None:
        """Qk verifies one or more packages."""
        raise self.unimplemented("qk")

    def ql(self, kws: Args, flags: Args) -> None:
        """Ql displays files provided by a local package."""
        raise self.unimplemented("ql")

    def qm(self, kws: Args, flags: Args) -> None:
        """Qm lists packages installed outside of official sources."""
        raise self.unimplemented("qm")

    def qo(self, kws: Args, flags: Args) -> None:
        """Qo queries the package which provides FILE."""
        raise self.unimplemented("qo")

    def qp(self, kws: Args, flags: Args) -> None:
        """Qp queries a package supplied as a file rather than a name."""
        raise self.unimplemented("qp")

    def qs(self, kws: Args, flags: Args) -> None:
        """Qs searches locally installed packages for names or descriptions."""
        raise self.unimplemented("qs")

    def qu(self, kws: Args, flags: Args) -> None:
        """Qu lists packages which have an update available."""
        raise self.unimplemented("qu")

    # Remove

    def r(self, kws: Args, flags: Args) -> None:
        """R removes a single package, leaving its dependencies installed."""
        raise self.unimplemented("r")

    def rn(self, kws: Args, flags: Args) -> None:
        """Rn removes a package and skips the generation of backup files."""
        raise self.unimplemented("rn")

    def rns(self, kws: Args, flags: Args) -> None:
        """Rns removes a package and its unneeded dependencies, without backups."""
        raise self.unimplemented("rns")

    def rs(self, kws: Args, flags: Args) -> None:
        """Rs removes a package and its dependencies not required elsewhere."""
        raise self.unimplemented("rs")

    def rss(self, kws: Args, flags: Args) -> None:
        """Rss removes a package and its dependencies, recursively."""
        raise self.unimplemented("rss")

    # Sync

    def s(self, kws: Args, flags: Args) -> None:
        """S installs one or more packages by name."""
        raise self.unimplemented("s")

    def sc(self, kws: Args, flags: Args) -> None:
        """Sc removes cached packages that are not currently installed."""
        raise self.unimplemented("sc")

    def scc(self, kws: Args, flags: Args) -> None:
        """Scc removes all files from the cache."""
        raise self.unimplemented("scc")

    def sccc(self, kws: Args, flags: Args) -> None:
        """Sccc performs a deeper cleaning of the cache than Scc."""
        raise self.unimplemented("sccc")

    def sg(self, kws: Args, flags: Args) -> None:
        """Sg lists all packages in a group, or all groups."""
        raise self.unimplemented("sg")

    def si(self, kws: Args, flags: Args) -> None:
        """Si displays remote package information."""
        raise self.unimplemented("si")

    def sii(self, kws: Args, flags: Args) -> None:
        """Sii displays packages which require the given package."""
        raise self.unimplemented("sii")

    def sl(self, kws: Args, flags: Args) -> None:
        """Sl displays a list of all available packages."""
        raise self.unimplemented("sl")

    def ss(self, kws: Args, flags: Args) -> None:
        """Ss searches remote packages by name or description."""
        raise self.unimplemented("ss")

    def su(self, kws: Args, flags: Args) -> None:
        """Su updates outdated packages."""
        raise self.unimplemented("su")

    def suy(self, kws: Args, flags: Args) -> None:
        """Suy refreshes the package database, then updates outdated packages."""
        raise self.unimplemented("suy")

    def sw(self, kws: Args, flags: Args) -> None:
        """Sw retrieves packages from the server without installing them."""
        raise self.unimplemented("sw")

    def sy(self, kws: Args, flags: Args) -> None:
        """Sy refreshes the local package database."""
        raise self.unimplemented("sy")

    # Upgrade

    def u(self, kws: Args, flags: Args) -> None:
        """U upgrades or adds package(s) from local files."""
        raise self.unimplemented("u")


def implemented_operations(cls: type[PackageManager]) -> list[str]:
    """Operations ``cls`` overrides, in vocabulary order."""
    return [op for op in OPERATIONS if getattr(cls, op) is not getattr(PackageManager, op)]
