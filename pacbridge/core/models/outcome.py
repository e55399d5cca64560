"""
ExecutionOutcome — what one mediated invocation produced.

Outcomes are created once per call and never mutated.  Failures of the
process itself (non-zero exit, signal, spawn error) are raised as
``pacbridge.core.errors`` exceptions; a non-zero outcome travels inside
``CmdStatusCodeError.outcome``.
"""

from __future__ import annotations

from datetime import UTC, datetime
from collections.abc import Sequence
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class ExecutionOutcome(BaseModel):
    """Captured result of a spawned (or deliberately not spawned) command.

    ``stdout`` / ``stderr`` are empty when the child inherited the
    terminal instead of being captured.
    """

    model_config = ConfigDict(frozen=True)

    argv: tuple[str, ...]
    status: Literal["exited", "declined", "skipped"] = "exited"
    code: int | None = None
    signal: int | None = None
    stdout: bytes = b""
    stderr: bytes = b""

    finished_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        """Whether the command succeeded or was intentionally not run."""
        if self.status == "exited":
            return self.code == 0
        return True

    @property
    def spawned(self) -> bool:
        return self.status == "exited"

    @property
    def declined(self) -> bool:
        return self.status == "declined"

    def text(self, encoding: str = "utf-8") -> str:
        """Decoded stdout.  Raises ``UnicodeDecodeError`` on bad bytes."""
        return self.stdout.decode(encoding)

    @classmethod
    def exited(
        cls,
        argv: Sequence[str],
        code: int,
        stdout: bytes = b"",
        stderr: bytes = b"",
        **kwargs: Any,
    ) -> ExecutionOutcome:
        """Outcome of a process that ran to completion."""
        return cls(argv=tuple(argv), status="exited", code=code, stdout=stdout, stderr=stderr, **kwargs)

    @classmethod
    def skipped(cls, argv: Sequence[str], **kwargs: Any) -> ExecutionOutcome:
        """Dry-run outcome: rendered, nothing spawned."""
        return cls(argv=tuple(argv), status="skipped", **kwargs)

    @classmethod
    def declined_by_user(cls, argv: Sequence[str], **kwargs: Any) -> ExecutionOutcome:
        """The user answered no at the confirmation prompt."""
        return cls(argv=tuple(argv), status="declined", **kwargs)
