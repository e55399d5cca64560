"""
Executor — the SINGLE PLACE where package-manager processes are spawned.

Every mediated invocation ends here.  One call spawns exactly one
process; there are no retries, because re-running a package-manager
mutation is not safely idempotent.

Output modes:
    inherit   child owns the terminal (interactive prompts); nothing captured
    stream    child output is tee'd to our stdout/stderr and captured
    capture   child output is captured silently (search filtering, fan-out)

OS-level outcomes map to the error taxonomy:
    Popen fails             → CmdSpawnError
    OSError while waiting   → CmdWaitError
    killed by a signal      → CmdInterruptedError
    KeyboardInterrupt       → child terminated, CmdInterruptedError
    exit code != 0          → CmdStatusCodeError (carries the outcome)
"""

from __future__ import annotations

import logging
import signal
import subprocess
import threading
import time
from abc import ABC, abstractmethod
from typing import IO, Literal

import click

from pacbridge.core.errors import (
    CmdInterruptedError,
    CmdSpawnError,
    CmdStatusCodeError,
    CmdWaitError,
)
from pacbridge.core.models.invocation import Invocation
from pacbridge.core.models.outcome import ExecutionOutcome

logger = logging.getLogger(__name__)

OutputMode = Literal["inherit", "stream", "capture"]

_CHUNK = 4096
_REAP_TIMEOUT = 5.0


class Executor(ABC):
    """Abstract process executor.

    To create a new executor (e.g. a test double):
        1. Subclass Executor
        2. Implement execute
    """

    @abstractmethod
    def execute(self, invocation: Invocation, *, output: OutputMode = "stream") -> ExecutionOutcome:
        """Spawn ``invocation.argv`` once and wait for it.

        Returns the outcome of a zero exit; raises for everything else.
        """

    def terminate_all(self) -> None:
        """Forward termination to every child still running."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"


class SubprocessExecutor(Executor):
    """Real executor built on ``subprocess.Popen``.

    Args:
        stdout: Binary sink for streamed child stdout (default: our stdout).
        stderr: Binary sink for streamed child stderr (default: our stderr).
    """

    def __init__(self, stdout: IO[bytes] | None = None, stderr: IO[bytes] | None = None):
        self._stdout = stdout
        self._stderr = stderr
        self._live: set[subprocess.Popen] = set()
        self._lock = threading.Lock()

    def execute(self, invocation: Invocation, *, output: OutputMode = "stream") -> ExecutionOutcome:
        argv = invocation.argv
        capture = output != "inherit"
        logger.debug("Spawning [%s]: %s", output, invocation.render())

        start = time.monotonic()
        try:
            proc = subprocess.Popen(
                argv,
                stdout=subprocess.PIPE if capture else None,
                stderr=subprocess.PIPE if capture else None,
            )
        except OSError as e:
            logger.debug("Spawn failed for %s: %s", argv[0], e)
            raise CmdSpawnError(argv, e) from e

        with self._lock:
            self._live.add(proc)
        try:
            stdout, stderr = self._collect(proc, output)
            code = proc.wait()
        except KeyboardInterrupt:
            logger.info("Interrupted, terminating %s (pid %d)", argv[0], proc.pid)
            _reap(proc)
            raise CmdInterruptedError(argv, int(signal.SIGINT)) from None
        except OSError as e:
            _reap(proc)
            raise CmdWaitError(argv, e) from e
        finally:
            with self._lock:
                self._live.discard(proc)

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.debug("%s exited with %d after %dms", argv[0], code, elapsed_ms)

        # POSIX: a negative return code is the number of the killing signal.
        if code < 0:
            raise CmdInterruptedError(argv, -code)

        outcome = ExecutionOutcome.exited(
            argv, code, stdout=stdout, stderr=stderr, duration_ms=elapsed_ms,
        )
        if code != 0:
            raise CmdStatusCodeError(code, outcome)
        return outcome

    def terminate_all(self) -> None:
        with self._lock:
            live = list(self._live)
        for proc in live:
            logger.info("Terminating child %d", proc.pid)
            _reap(proc)

    # ── Output handling ──────────────────────────────────────────

    def _collect(self, proc: subprocess.Popen, output: OutputMode) -> tuple[bytes, bytes]:
        if output == "inherit":
            return b"", b""
        if output == "capture":
            out, err = proc.communicate()
            return out or b"", err or b""

        out_chunks: list[bytes] = []
        err_chunks: list[bytes] = []
        errors: list[OSError] = []
        pumps = [
            threading.Thread(
                target=_pump,
                args=(proc.stdout, self._sink("stdout"), out_chunks, errors),
                daemon=True,
            ),
            threading.Thread(
                target=_pump,
                args=(proc.stderr, self._sink("stderr"), err_chunks, errors),
                daemon=True,
            ),
        ]
        for t in pumps:
            t.start()
        for t in pumps:
            t.join()
        if errors:
            raise errors[0]
        return b"".join(out_chunks), b"".join(err_chunks)

    def _sink(self, name: Literal["stdout", "stderr"]) -> IO[bytes]:
        explicit = self._stdout if name == "stdout" else self._stderr
        return explicit if explicit is not None else click.get_binary_stream(name)


def _pump(src: IO[bytes], sink: IO[bytes], chunks: list[bytes], errors: list[OSError]) -> None:
    """Copy ``src`` to ``sink`` chunk by chunk, keeping a copy."""
    try:
        for chunk in iter(lambda: src.read1(_CHUNK), b""):  # type: ignore[attr-defined]
            chunks.append(chunk)
            sink.write(chunk)
            sink.flush()
    except OSError as e:
        errors.append(e)
    finally:
        src.close()


def _reap(proc: subprocess.Popen) -> None:
    """Terminate a child and wait for it so no orphan is left behind."""
    if proc.poll() is not None:
        return
    proc.terminate()
    try:
        proc.wait(timeout=_REAP_TIMEOUT)
    except subprocess.TimeoutExpired:
        proc.kill()
        proc.wait()
