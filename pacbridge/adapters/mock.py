"""
Mock executor and manager — test doubles that never spawn a process.

``MockExecutor`` records every Invocation it is asked to run and
answers with scripted outcomes: success by default, or a configured
stdout, exit code or signal per program.  ``MockPackageManager`` is a
minimal manager that can be registered under any name.
"""

from __future__ import annotations

from pacbridge.adapters.base import Args, PackageManager
from pacbridge.core.config.loader import Config
from pacbridge.core.engine.executor import Executor, OutputMode
from pacbridge.core.errors import CmdInterruptedError, CmdStatusCodeError
from pacbridge.core.models.invocation import Invocation
from pacbridge.core.models.outcome import ExecutionOutcome
from pacbridge.core.models.strategy import PromptStrategy, Strategy
from pacbridge.core.terminal import Terminal


class MockExecutor(Executor):
    """Universal executor double for testing.

    Responses are keyed by program name (``invocation.program``), so
    ``set_response("conda", stdout=b"...")`` scripts every conda call.
    """

    def __init__(self, default_stdout: bytes = b""):
        self._default_stdout = default_stdout
        self._responses: dict[str, tuple[int, int | None, bytes, bytes]] = {}
        self._call_log: list[tuple[Invocation, OutputMode]] = []
        self.terminated = 0

    @property
    def call_log(self) -> list[tuple[Invocation, OutputMode]]:
        """All (invocation, output mode) pairs this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        """Number of times execute has been called."""
        return len(self._call_log)

    @property
    def argvs(self) -> list[list[str]]:
        """The argv of every recorded call, in call order."""
        return [inv.argv for inv, _ in self._call_log]

    def set_response(self, program: str, stdout: bytes = b"", stderr: bytes = b"") -> None:
        """Succeed with the given output for ``program``."""
        self._responses[program] = (0, None, stdout, stderr)

    def set_failure(self, program: str, code: int = 1, stderr: bytes = b"mock failure") -> None:
        """Make ``program`` exit with ``code``."""
        self._responses[program] = (code, None, b"", stderr)

    def set_signal(self, program: str, signal: int) -> None:
        """Make ``program`` die from ``signal``."""
        self._responses[program] = (0, signal, b"", b"")

    def execute(self, invocation: Invocation, *, output: OutputMode = "stream") -> ExecutionOutcome:
        self._call_log.append((invocation, output))
        argv = invocation.argv

        code, signal, stdout, stderr = self._responses.get(
            invocation.program, (0, None, self._default_stdout, b""),
        )
        if signal is not None:
            raise CmdInterruptedError(argv, signal)

        outcome = ExecutionOutcome.exited(argv, code, stdout=stdout, stderr=stderr)
        if code != 0:
            raise CmdStatusCodeError(code, outcome)
        return outcome

    def terminate_all(self) -> None:
        self.terminated += 1

    def reset(self) -> None:
        """Clear call log and scripted responses."""
        self._call_log.clear()
        self._responses.clear()


class MockPackageManager(PackageManager):
    """A manager with a handful of operations, for registry and CLI tests.

    ``-S`` asks through the custom prompt; ``-Q`` is a plain run;
    ``-Qs`` searches the output of ``mockpm list``.
    """

    no_confirm_flags = ("--yes",)

    def __init__(
        self,
        cfg: Config,
        executor: Executor | None = None,
        terminal: Terminal | None = None,
        manager_name: str = "mock",
    ):
        super().__init__(cfg, executor if executor is not None else MockExecutor(), terminal)
        self._name = manager_name

    @property
    def name(self) -> str:
        return self._name

    def q(self, kws: Args, flags: Args) -> None:
        self.run(Invocation.new("mockpm", "list").with_keywords(kws).with_flags(flags))

    def qs(self, kws: Args, flags: Args) -> None:
        self.search_regex(Invocation.new("mockpm", "list").with_flags(flags), kws)

    def r(self, kws: Args, flags: Args) -> None:
        self.run_with(
            Invocation.new("mockpm", "remove").with_keywords(kws).with_flags(flags),
            None,
            self.confirm_strategy(),
        )

    def s(self, kws: Args, flags: Args) -> None:
        self.run_with(
            Invocation.new("mockpm", "install").with_keywords(kws).with_flags(flags),
            None,
            Strategy(prompt=PromptStrategy.custom_confirm()),
        )
