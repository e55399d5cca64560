"""
Error taxonomy — every failure the engine can report.

All errors derive from ``PacbridgeError`` and carry the process exit
code the CLI should surface.  Only ``CmdStatusCodeError`` passes the
underlying tool's code through; everything else maps to 1.

    ArgParseError                malformed operation / flags
    ConfigError                  invalid or contradictory configuration
    CmdSpawnError                program could not be started
    CmdWaitError                 process could not be waited on
    CmdInterruptedError          process killed by a signal
    CmdStatusCodeError           process exited non-zero (reported)
    OperationUnimplementedError  manager has no such operation
    OtherError                   decoding / IO catch-all
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pacbridge.core.models.outcome import ExecutionOutcome


class PacbridgeError(Exception):
    """Base class for all pacbridge errors."""

    exit_code: int = 1


class ArgParseError(PacbridgeError):
    """Raised when an operation invocation is malformed."""

    def __init__(self, msg: str):
        super().__init__(f"Failed to parse arguments: {msg}")
        self.msg = msg


class ConfigError(PacbridgeError):
    """Raised when configuration is invalid or cannot be read."""

    def __init__(self, msg: str):
        super().__init__(f"Failed to handle config: {msg}")
        self.msg = msg


class CmdSpawnError(PacbridgeError):
    """The subprocess could not be spawned (missing program, no permission)."""

    def __init__(self, argv: list[str], cause: OSError):
        super().__init__(f"Failed to spawn subprocess `{argv[0]}`: {cause}")
        self.argv = argv
        self.cause = cause


class CmdWaitError(PacbridgeError):
    """The subprocess failed while we were collecting output or waiting."""

    def __init__(self, argv: list[str], cause: OSError):
        super().__init__(f"Subprocess failed while running: {cause}")
        self.argv = argv
        self.cause = cause


class CmdInterruptedError(PacbridgeError):
    """The subprocess was terminated by a signal before exiting."""

    def __init__(self, argv: list[str], signal: int | None = None):
        detail = f" {signal}" if signal is not None else ""
        super().__init__(f"Subprocess interrupted by signal{detail}")
        self.argv = argv
        self.signal = signal


class CmdStatusCodeError(PacbridgeError):
    """The subprocess exited with a non-zero status.

    This is a reported condition, not a crash: callers decide whether it
    fails the overall command.  ``exit_code`` mirrors the tool's code.
    """

    def __init__(self, code: int, outcome: ExecutionOutcome):
        super().__init__(f"Subprocess exited with code {code}")
        self.code = code
        self.outcome = outcome

    @property
    def exit_code(self) -> int:  # type: ignore[override]
        return self.code if 0 < self.code < 256 else 1


class OperationUnimplementedError(PacbridgeError):
    """The active package manager does not implement an operation."""

    def __init__(self, op: str, pm: str):
        super().__init__(f"Operation `{op}` is unimplemented for `{pm}`")
        self.op = op
        self.pm = pm


class OtherError(PacbridgeError):
    """Miscellaneous failure (output decoding, IO)."""
